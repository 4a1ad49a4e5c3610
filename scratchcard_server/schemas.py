from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, validator


class PriceSelectionRequest(BaseModel):
    price: int = Field(..., description="Ticket price in pence; must be a configured price.")


class PriceStepRequest(BaseModel):
    step: int = Field(..., description="+1 for the next price up, -1 for the next price down.")

    @validator("step")
    def validate_step(cls, value: int) -> int:
        if value not in (-1, 1):
            raise ValueError("step must be 1 or -1.")
        return value


class RevealRequest(BaseModel):
    row: str = Field(..., description="Either 'winning' or 'player'.")
    index: int

    @validator("row")
    def validate_row(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("winning", "player"):
            raise ValueError("row must be 'winning' or 'player'.")
        return value


class ScenarioOverrideRequest(BaseModel):
    scenario: str = Field(..., description="Descriptor such as 'W:5,12;P:5,3,9,5,20,IW1'.")


class GameConfigResponse(BaseModel):
    ticket_prices: List[int]
    instant_wins: Dict[str, Dict[str, int]]
    match_multiplier: float
    starting_balance: int
    scenario_mode: str


class LedgerSummaryResponse(BaseModel):
    ticket_count: int
    settled_count: int
    winning_count: int
    total_staked: int
    total_won: int
    pending_override: Optional[str] = None
