"""Player domain model.

The public feed encodes ``form`` and ``selected_by_percent`` as decimal
strings. They are parsed here, once, so every consumer sees plain floats.
"""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Position(str, Enum):
    """FPL player positions."""

    GKP = "GKP"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"


# element_type ids used by the public feed
ELEMENT_TYPE_POSITIONS = {
    1: Position.GKP,
    2: Position.DEF,
    3: Position.MID,
    4: Position.FWD,
}

_POSITION_ALIASES = {"GK": Position.GKP, "GKP": Position.GKP, "FW": Position.FWD}


def coerce_float(value: Any, default: float = 0.0) -> float:
    """Parse a possibly string-encoded number, returning ``default`` on failure.

    Handles None, empty strings, trailing percent signs and non-finite values.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        if not value:
            return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if math.isfinite(parsed) else default


class PlayerDomain(BaseModel):
    """
    Domain model for a player in the snapshot.

    Numeric feed fields are coerced rather than rejected: an unparsable form
    becomes 0.0 so a single bad record can't take down a whole ranking.
    """

    model_config = ConfigDict(frozen=True)

    player_id: int = Field(..., gt=0, description="Unique player ID")
    web_name: str = Field(default="", max_length=50, description="Display name")
    team_id: int = Field(..., description="Owning team ID")
    position: Position = Field(..., description="Player position")
    price: float = Field(default=0.0, ge=0.0, description="Price in millions")
    total_points: int = Field(default=0, description="Season-to-date points")
    form: float = Field(default=0.0, description="Recent scoring rate")
    selected_by_percent: float = Field(
        default=0.0, ge=0.0, le=100.0, description="Ownership percentage"
    )

    @field_validator("position", mode="before")
    @classmethod
    def parse_position(cls, v: Any) -> Any:
        """Accept feed element_type ids and common short codes."""
        if isinstance(v, Position):
            return v
        if isinstance(v, int) and not isinstance(v, bool):
            if v not in ELEMENT_TYPE_POSITIONS:
                raise ValueError(f"Unknown element_type {v}")
            return ELEMENT_TYPE_POSITIONS[v]
        if isinstance(v, str):
            code = v.strip().upper()
            return _POSITION_ALIASES.get(code, code)
        return v

    @field_validator("form", mode="before")
    @classmethod
    def parse_form(cls, v: Any) -> float:
        return coerce_float(v)

    @field_validator("selected_by_percent", mode="before")
    @classmethod
    def parse_ownership(cls, v: Any) -> float:
        return min(max(coerce_float(v), 0.0), 100.0)

    @field_validator("total_points", mode="before")
    @classmethod
    def parse_total_points(cls, v: Any) -> int:
        return int(coerce_float(v))
