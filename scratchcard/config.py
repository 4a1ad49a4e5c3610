from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

SCENARIO_MODES = ("pool", "random")


def _int_from_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {key} must be an integer, got {value!r}") from exc


def _optional_int_from_env(key: str) -> Optional[int]:
    value = os.getenv(key)
    if value is None or value == "":
        return None
    return _int_from_env(key, 0)


def _float_from_env(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {key} must be a number, got {value!r}") from exc


@dataclass(frozen=True)
class RandomDrawSettings:
    number_range: int = 30
    instant_win_chance: float = 0.2
    max_instant_wins: int = 1


@dataclass(frozen=True)
class GameSettings:
    data_source: str = "data.json"
    data_timeout_seconds: int = 10
    starting_balance: int = 2000
    scenario_mode: str = "pool"
    scenario_seed: Optional[int] = None
    max_instant_wins: Optional[int] = None
    random_draw: RandomDrawSettings = RandomDrawSettings()

    def copy(self, **updates) -> "GameSettings":
        return replace(self, **updates)


def load_from_environment() -> GameSettings:
    scenario_mode = os.getenv("SCENARIO_MODE", "pool").strip().lower()
    if scenario_mode not in SCENARIO_MODES:
        raise RuntimeError(f"SCENARIO_MODE must be one of {', '.join(SCENARIO_MODES)}, got {scenario_mode!r}")

    starting_balance = _int_from_env("STARTING_BALANCE", 2000)
    if starting_balance < 0:
        raise RuntimeError("STARTING_BALANCE must not be negative")

    random_draw = RandomDrawSettings(
        number_range=_int_from_env("RANDOM_NUMBER_RANGE", 30),
        instant_win_chance=_float_from_env("RANDOM_INSTANT_WIN_CHANCE", 0.2),
        max_instant_wins=_int_from_env("RANDOM_MAX_INSTANT_WINS", 1),
    )

    return GameSettings(
        data_source=os.getenv("GAME_DATA_PATH", "data.json"),
        data_timeout_seconds=_int_from_env("GAME_DATA_TIMEOUT_SECONDS", 10),
        starting_balance=starting_balance,
        scenario_mode=scenario_mode,
        scenario_seed=_optional_int_from_env("SCENARIO_SEED"),
        max_instant_wins=_optional_int_from_env("MAX_INSTANT_WINS"),
        random_draw=random_draw,
    )


@lru_cache(maxsize=1)
def load_config(dotenv_path: Optional[str] = None) -> GameSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        default_path = pathlib.Path(".env")
        if default_path.exists():
            load_dotenv(default_path)
    return load_from_environment()
