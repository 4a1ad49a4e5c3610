from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

_INTEGER = re.compile(r"^[+-]?\d+$")


class SymbolKind(str, Enum):
    NUMBER = "number"
    TAG = "tag"


class Row(str, Enum):
    WINNING = "winning"
    PLAYER = "player"


class TicketPhase(str, Enum):
    UNSTARTED = "unstarted"
    WINNING_REVEAL_PENDING = "winning_reveal_pending"
    PLAYER_REVEAL_PENDING = "player_reveal_pending"
    SETTLED = "settled"


class EnginePhase(str, Enum):
    IDLE = "idle"
    AWAITING_WINNING_REVEAL = "awaiting_winning_reveal"
    AWAITING_PLAYER_REVEAL = "awaiting_player_reveal"
    SETTLED = "settled"


@dataclass(frozen=True)
class Symbol:
    """A drawn value: either a plain number or an opaque tag such as ``IW1``."""

    kind: SymbolKind
    value: Union[int, str]

    @classmethod
    def number(cls, value: int) -> "Symbol":
        return cls(SymbolKind.NUMBER, int(value))

    @classmethod
    def tag(cls, value: str) -> "Symbol":
        return cls(SymbolKind.TAG, str(value))

    @classmethod
    def from_token(cls, token: str) -> "Symbol":
        if _INTEGER.match(token):
            return cls.number(int(token))
        return cls.tag(token)

    @property
    def is_number(self) -> bool:
        return self.kind is SymbolKind.NUMBER

    @property
    def text(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return self.text
