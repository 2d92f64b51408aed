"""Team domain model."""

from pydantic import BaseModel, ConfigDict, Field


class TeamDomain(BaseModel):
    """Domain model for league teams."""

    model_config = ConfigDict(frozen=True)

    team_id: int = Field(..., gt=0, description="Team ID")
    name: str = Field(..., min_length=1, max_length=100, description="Full team name")
    short_name: str = Field(default="", max_length=5, description="Short team code")
