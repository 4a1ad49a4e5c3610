from __future__ import annotations

import random
from typing import List, Optional, Sequence, Union

from ..parser import format_scenario
from .base import ScenarioSource


class RandomScenarioSource(ScenarioSource):
    """Draws fresh rows instead of picking authored scenarios.

    Each row is sampled without duplicates from ``1..number_range``. With
    probability ``instant_win_chance`` a player position is replaced by a
    random instant-win tag, repeated up to ``max_instant_wins`` times on
    distinct positions with distinct tags.
    """

    def __init__(
        self,
        instant_win_tags: Sequence[str],
        rng: Optional[random.Random] = None,
        number_range: int = 30,
        winning_count: int = 2,
        player_count: int = 6,
        instant_win_chance: float = 0.2,
        max_instant_wins: int = 1,
    ) -> None:
        super().__init__()
        if number_range < max(winning_count, player_count):
            raise ValueError("number_range is too small to draw rows without duplicates")
        if winning_count < 1 or player_count < 1:
            raise ValueError("rows must contain at least one symbol")
        if not 0.0 <= instant_win_chance <= 1.0:
            raise ValueError("instant_win_chance must be between 0 and 1")
        self._tags = tuple(instant_win_tags)
        self._rng = rng or random.Random()
        self._number_range = number_range
        self._winning_count = winning_count
        self._player_count = player_count
        self._instant_win_chance = instant_win_chance
        self._max_instant_wins = max(0, min(max_instant_wins, len(self._tags), player_count))

    def _draw(self) -> str:
        numbers = range(1, self._number_range + 1)
        winning = self._rng.sample(numbers, self._winning_count)
        player: List[Union[int, str]] = list(self._rng.sample(numbers, self._player_count))

        free_positions = list(range(self._player_count))
        unused_tags = list(self._tags)
        for _ in range(self._max_instant_wins):
            if self._rng.random() >= self._instant_win_chance:
                continue
            position = free_positions.pop(self._rng.randrange(len(free_positions)))
            player[position] = unused_tags.pop(self._rng.randrange(len(unused_tags)))

        return format_scenario(winning, player)
