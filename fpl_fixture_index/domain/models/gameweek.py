"""Gameweek (event) domain model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GameweekDomain(BaseModel):
    """Domain model for a gameweek."""

    model_config = ConfigDict(frozen=True)

    gameweek_id: int = Field(..., ge=1, description="Gameweek number")
    name: str = Field(default="", description="Display name, e.g. 'Gameweek 12'")
    deadline_utc: Optional[datetime] = Field(None, description="Transfer deadline")
    is_current: bool = Field(default=False)
    is_next: bool = Field(default=False)
    finished: bool = Field(default=False)
