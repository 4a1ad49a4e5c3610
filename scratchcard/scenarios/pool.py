from __future__ import annotations

import random
from typing import Optional, Sequence, Tuple

from .base import ScenarioSource


class ScenarioPool(ScenarioSource):
    """Uniform random choice from a list of authored scenarios."""

    def __init__(self, scenarios: Sequence[str], rng: Optional[random.Random] = None) -> None:
        super().__init__()
        if not scenarios:
            raise ValueError("Scenario pool must contain at least one scenario")
        self._scenarios: Tuple[str, ...] = tuple(scenarios)
        self._rng = rng or random.Random()

    @property
    def scenarios(self) -> Tuple[str, ...]:
        return self._scenarios

    def _draw(self) -> str:
        return self._rng.choice(self._scenarios)
