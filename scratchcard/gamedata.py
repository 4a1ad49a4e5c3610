from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Dict, List, Mapping, Optional

import requests
from pydantic import BaseModel, Field, validator

from .errors import MalformedScenario
from .parser import parse_scenario
from .prizes import PrizeTable
from .types import Symbol

_SEPARATORS = (",", ";", ":")

logger = logging.getLogger("scratchcard.gamedata")


class PrizeMultipliers(BaseModel):
    match: float = Field(..., ge=0, description="Winnings for a match are ticket price times this value.")


class GameData(BaseModel):
    """The game data file. Field aliases are the on-disk names."""

    ticket_prices: List[int] = Field(..., alias="ticketPrices")
    scenarios: List[str] = Field(default_factory=list)
    instant_wins: Dict[str, Dict[int, int]] = Field(default_factory=dict, alias="instantWins")
    prize_multipliers: PrizeMultipliers = Field(..., alias="prizeMultipliers")

    @validator("ticket_prices")
    def validate_ticket_prices(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("ticketPrices must list at least one price.")
        if len(set(value)) != len(value):
            raise ValueError("ticketPrices must be unique.")
        for price in value:
            if price <= 0:
                raise ValueError("ticketPrices must be positive.")
        return value

    @validator("instant_wins")
    def validate_instant_wins(cls, value: Dict[str, Dict[int, int]]) -> Dict[str, Dict[int, int]]:
        for tag, payouts in value.items():
            if not tag.strip():
                raise ValueError("instantWins tags must not be blank.")
            if tag != tag.strip() or any(sep in tag for sep in _SEPARATORS) or Symbol.from_token(tag).text != tag:
                raise ValueError(f"instantWins tag {tag!r} can never appear in a scenario.")
            if any(amount < 0 for amount in payouts.values()):
                raise ValueError(f"instantWins payouts for {tag} must not be negative.")
        return value


def load_game_data(source: str, timeout_seconds: int = 10) -> GameData:
    """Read the game data file from a local path or an http(s) URL."""
    if source.startswith(("http://", "https://")):
        payload = _get_json(source, timeout_seconds)
    else:
        payload = _read_json(source)
    if not isinstance(payload, Mapping):
        raise ValueError(f"Game data in {source} must be a JSON object")
    logger.debug("Loaded game data from %s", source)
    return GameData(**payload)


def _get_json(url: str, timeout_seconds: int) -> Any:
    resp = requests.get(url, timeout=timeout_seconds)
    resp.raise_for_status()
    return resp.json()


def _read_json(path: str) -> Any:
    data_path = pathlib.Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f"Game data file not found: {data_path}")
    with data_path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def build_prize_table(game_data: GameData, max_instant_wins: Optional[int] = None) -> PrizeTable:
    """Build the prize table and reject configuration that could fail mid-ticket.

    Every instant-win tag must pay out at every ticket price, and every
    authored scenario must parse and respect ``max_instant_wins``.
    """
    prize_table = PrizeTable(game_data.instant_wins, game_data.prize_multipliers.match)
    prize_table.validate(game_data.ticket_prices)

    for position, descriptor in enumerate(game_data.scenarios):
        try:
            scenario = parse_scenario(descriptor)
        except MalformedScenario as exc:
            raise MalformedScenario(f"scenarios[{position}]: {exc}") from exc
        if max_instant_wins is not None:
            count = sum(1 for s in scenario.player_symbols if prize_table.is_instant_win(s))
            if count > max_instant_wins:
                raise MalformedScenario(
                    f"scenarios[{position}] has {count} instant-win symbols; at most {max_instant_wins} allowed"
                )
    return prize_table
