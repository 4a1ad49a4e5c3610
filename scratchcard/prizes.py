from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple, Union

from .errors import UnknownPayout
from .types import Symbol

Multiplier = Union[int, float]


class PrizeTable:
    """Instant-win payouts per ticket price plus the ordinary match multiplier."""

    def __init__(self, instant_wins: Mapping[str, Mapping[int, int]], match_multiplier: Multiplier) -> None:
        if match_multiplier < 0:
            raise ValueError("match multiplier must not be negative")
        self._instant_wins = MappingProxyType(
            {str(tag): MappingProxyType({int(p): int(a) for p, a in payouts.items()})
             for tag, payouts in instant_wins.items()}
        )
        self._match_multiplier = match_multiplier

    @property
    def instant_win_tags(self) -> Tuple[str, ...]:
        return tuple(self._instant_wins)

    @property
    def instant_wins(self) -> Mapping[str, Mapping[int, int]]:
        return self._instant_wins

    @property
    def match_multiplier(self) -> Multiplier:
        return self._match_multiplier

    def is_instant_win(self, symbol: Symbol) -> bool:
        return symbol.text in self._instant_wins

    def instant_win_amount(self, symbol: Symbol, price: int) -> int:
        payouts = self._instant_wins.get(symbol.text)
        if payouts is None:
            raise UnknownPayout(f"{symbol.text} is not an instant-win symbol")
        try:
            return payouts[price]
        except KeyError as exc:
            raise UnknownPayout(f"No payout for {symbol.text} at ticket price {price}") from exc

    def match_amount(self, price: int) -> int:
        # Truncates to whole pence, using the multiplier at its written decimal value.
        return int(price * Decimal(str(self._match_multiplier)))

    def validate(self, ticket_prices: Iterable[int]) -> None:
        """Fail fast unless every instant-win tag pays out at every price."""
        missing = []
        for tag, payouts in self._instant_wins.items():
            for price in ticket_prices:
                if price not in payouts:
                    missing.append(f"{tag}@{price}")
        if missing:
            raise UnknownPayout(f"Missing instant-win payouts: {', '.join(missing)}")
