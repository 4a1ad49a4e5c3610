from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from .errors import MalformedScenario
from .types import Symbol

WINNING_PREFIX = "W:"
PLAYER_PREFIX = "P:"


@dataclass(frozen=True)
class Scenario:
    """Parsed scenario: the two symbol rows in descriptor order."""

    winning_symbols: Tuple[Symbol, ...]
    player_symbols: Tuple[Symbol, ...]

    def to_descriptor(self) -> str:
        winning = ",".join(s.text for s in self.winning_symbols)
        player = ",".join(s.text for s in self.player_symbols)
        return f"{WINNING_PREFIX}{winning};{PLAYER_PREFIX}{player}"


def parse_scenario(descriptor: Any) -> Scenario:
    if not isinstance(descriptor, str):
        raise MalformedScenario(f"Scenario descriptor must be a string, got {type(descriptor).__name__}")

    segments = [part.strip() for part in descriptor.split(";")]
    if segments and segments[-1] == "":
        segments = segments[:-1]
    if len(segments) != 2:
        raise MalformedScenario(f"Expected W: and P: segments in {descriptor!r}")

    rows: Dict[str, Tuple[Symbol, ...]] = {}
    for segment in segments:
        prefix = segment[:2].upper()
        if prefix not in (WINNING_PREFIX, PLAYER_PREFIX):
            raise MalformedScenario(f"Unknown segment {segment!r} in {descriptor!r}")
        if prefix in rows:
            raise MalformedScenario(f"Duplicate {prefix} segment in {descriptor!r}")
        rows[prefix] = _parse_tokens(segment[2:], prefix, descriptor)

    if WINNING_PREFIX not in rows or PLAYER_PREFIX not in rows:
        raise MalformedScenario(f"Missing W: or P: segment in {descriptor!r}")

    return Scenario(winning_symbols=rows[WINNING_PREFIX], player_symbols=rows[PLAYER_PREFIX])


def _parse_tokens(raw: str, prefix: str, descriptor: str) -> Tuple[Symbol, ...]:
    if not raw.strip():
        raise MalformedScenario(f"Empty {prefix} segment in {descriptor!r}")
    symbols = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            raise MalformedScenario(f"Empty token in {prefix} segment of {descriptor!r}")
        symbols.append(Symbol.from_token(token))
    return tuple(symbols)


def format_scenario(winning: Sequence[Any], player: Sequence[Any]) -> str:
    return parse_scenario(
        f"{WINNING_PREFIX}{','.join(str(v) for v in winning)};"
        f"{PLAYER_PREFIX}{','.join(str(v) for v in player)}"
    ).to_descriptor()
