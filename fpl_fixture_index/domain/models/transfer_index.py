"""Transfer index domain models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .player import Position


class TransferIndexWeights(BaseModel):
    """Blend between normalized form and fixture ease.

    The two weights always sum to 1, so shifting the split only trades one
    signal against the other.
    """

    model_config = ConfigDict(frozen=True)

    form_weight: float = Field(default=0.5, ge=0.0, le=1.0)
    fixture_weight: float = Field(default=0.5, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_sum(self):
        if abs(self.form_weight + self.fixture_weight - 1.0) > 1e-9:
            raise ValueError("form_weight and fixture_weight must sum to 1")
        return self

    @classmethod
    def from_form_weight(cls, form_weight: float) -> "TransferIndexWeights":
        """Build weights from the form share, deriving the fixture complement."""
        return cls(form_weight=form_weight, fixture_weight=1.0 - form_weight)


class FixtureEntry(BaseModel):
    """One gameweek slot in a player's lookahead window."""

    model_config = ConfigDict(frozen=True)

    gameweek: int = Field(..., ge=1)
    opponent_team_id: Optional[int] = Field(
        None, description="None when the team blanks this gameweek"
    )
    difficulty: int = Field(..., ge=1, le=6)
    is_home: bool = False

    @property
    def is_blank(self) -> bool:
        return self.opponent_team_id is None


class TransferIndexResult(BaseModel):
    """Composite ranking score for one player, with its working."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    web_name: str = ""
    team_id: int
    position: Position
    price: float = 0.0
    total_points: int = 0
    form: float = 0.0
    selected_by_percent: float = 0.0

    transfer_index: float = Field(..., ge=0.0, le=1.0)
    fixture_difficulty_sum: float = Field(..., ge=0.0)
    fixture_ease: float = Field(..., ge=0.0, le=1.0)
    form_normalized: float = Field(..., ge=0.0, le=1.0)
    next_fixtures: List[FixtureEntry] = Field(default_factory=list)

    eo_form_ratio: float = Field(default=0.0, description="Ownership per form point")
    eo_points_ratio: float = Field(
        default=0.0, description="Ownership per season point"
    )

    @computed_field
    @property
    def transfer_index_pct(self) -> float:
        """Index on the 0-100 scale shown to users."""
        return round(self.transfer_index * 100, 1)

    def difficulty_for_gameweek(self, gameweek: int) -> int:
        """Hardest tier in the gameweek, blank (6) if the player has none listed."""
        tiers = [f.difficulty for f in self.next_fixtures if f.gameweek == gameweek]
        return max(tiers) if tiers else 6
