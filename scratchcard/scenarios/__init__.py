from .base import ScenarioSource
from .pool import ScenarioPool
from .random_draw import RandomScenarioSource

__all__ = [
    "ScenarioSource",
    "ScenarioPool",
    "RandomScenarioSource",
]
