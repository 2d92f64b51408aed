"""Fixture difficulty tiers and classification results."""

from enum import IntEnum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class DifficultyTier(IntEnum):
    """Discrete difficulty tiers, lower is easier.

    BLANK means no fixture in the gameweek and orders after VERY_HARD.
    """

    EASY = 1
    GOOD = 2
    MODERATE = 3
    HARD = 4
    VERY_HARD = 5
    BLANK = 6


DIFFICULTY_LABELS: Dict[DifficultyTier, str] = {
    DifficultyTier.EASY: "Easy",
    DifficultyTier.GOOD: "Good",
    DifficultyTier.MODERATE: "Moderate",
    DifficultyTier.HARD: "Hard",
    DifficultyTier.VERY_HARD: "Very Hard",
    DifficultyTier.BLANK: "Blank",
}


class DifficultyBreakdown(BaseModel):
    """How a populated fixture's score was built up."""

    model_config = ConfigDict(frozen=True)

    form_average: float = Field(..., description="Opponent's average top-N form")
    form_count: int = Field(..., ge=0, description="Players behind the average")
    position: int = Field(..., ge=1, description="Opponent league position used")
    table_adjustment: float
    home_away_adjustment: float
    final_score: float


class DifficultyResult(BaseModel):
    """Difficulty of facing one opponent at one venue (or of a blank)."""

    model_config = ConfigDict(frozen=True)

    tier: DifficultyTier
    label: str
    opponent_team_id: Optional[int] = Field(
        None, description="None for a blank gameweek"
    )
    is_away: bool = Field(
        default=False, description="Observing team plays away from home"
    )
    breakdown: Optional[DifficultyBreakdown] = None

    @property
    def is_blank(self) -> bool:
        return self.tier == DifficultyTier.BLANK

    @property
    def threat(self) -> float:
        """Opponent's average top-N form, 0.0 for blanks."""
        return self.breakdown.form_average if self.breakdown else 0.0
