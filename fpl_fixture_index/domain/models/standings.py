"""League table row derived from played fixtures."""

from typing import List

from pydantic import BaseModel, Field, computed_field


class StandingsRow(BaseModel):
    """One team's line in the league table.

    Rows are built fresh for every calculation and filled in through
    record_result, so points and goal difference always agree with the
    underlying counts.
    """

    team_id: int = Field(..., description="Team ID")
    position: int = Field(default=0, ge=0, description="1-based league position")
    played: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    goals_for: int = Field(default=0, ge=0)
    goals_against: int = Field(default=0, ge=0)
    form_guide: List[str] = Field(
        default_factory=list, description="Recent results, most recent first"
    )

    @computed_field
    @property
    def points(self) -> int:
        return 3 * self.wins + self.draws

    @computed_field
    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def record_result(self, scored: int, conceded: int) -> None:
        """Add a played fixture to the row."""
        self.played += 1
        self.goals_for += scored
        self.goals_against += conceded
        if scored > conceded:
            self.wins += 1
        elif scored < conceded:
            self.losses += 1
        else:
            self.draws += 1

    def sort_key(self) -> tuple:
        """Points, goal difference, goals scored (all desc), then team id asc."""
        return (-self.points, -self.goal_difference, -self.goals_for, self.team_id)
