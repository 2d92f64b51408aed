"""Fixture domain model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class FixtureDomain(BaseModel):
    """Domain model for league fixtures."""

    model_config = ConfigDict(frozen=True)

    fixture_id: int = Field(..., gt=0, description="Unique fixture ID")
    event: Optional[int] = Field(
        None, ge=1, description="Gameweek number (None while unscheduled)"
    )
    home_team_id: int = Field(..., description="Home team ID")
    away_team_id: int = Field(..., description="Away team ID")
    home_score: Optional[int] = Field(None, ge=0, description="Home final score")
    away_score: Optional[int] = Field(None, ge=0, description="Away final score")
    finished: bool = Field(default=False, description="Upstream finished flag")
    kickoff_utc: Optional[datetime] = Field(None, description="Kickoff time in UTC")

    @field_serializer("kickoff_utc", when_used="json")
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        """Serialize datetime to ISO format."""
        return value.isoformat() if value else None

    @property
    def has_score(self) -> bool:
        """Both final scores are present."""
        return self.home_score is not None and self.away_score is not None

    @property
    def is_played(self) -> bool:
        """Either upstream signal is enough to count the fixture as played."""
        return self.finished or self.has_score

    @property
    def involves_team(self) -> set[int]:
        """Get set of team IDs involved in this fixture."""
        return {self.home_team_id, self.away_team_id}

    def is_home_fixture(self, team_id: int) -> bool:
        """Check if the given team is playing at home."""
        return self.home_team_id == team_id

    def get_opponent(self, team_id: int) -> int:
        """Get the opponent team ID for the given team."""
        if team_id == self.home_team_id:
            return self.away_team_id
        elif team_id == self.away_team_id:
            return self.home_team_id
        else:
            raise ValueError(f"Team {team_id} is not involved in this fixture")

    def goals_for(self, team_id: int) -> tuple[int, int]:
        """Return (scored, conceded) for the team; missing scores count as 0."""
        home = self.home_score or 0
        away = self.away_score or 0
        return (home, away) if self.is_home_fixture(team_id) else (away, home)

    def result_for(self, team_id: int) -> Optional[str]:
        """W/D/L from the team's perspective, None if not yet played."""
        if not self.is_played or team_id not in self.involves_team:
            return None
        scored, conceded = self.goals_for(team_id)
        if scored > conceded:
            return "W"
        if scored < conceded:
            return "L"
        return "D"
