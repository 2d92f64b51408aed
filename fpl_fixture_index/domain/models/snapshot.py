"""Snapshot of league data the engine computes from."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .fixture import FixtureDomain
from .gameweek import GameweekDomain
from .player import PlayerDomain
from .team import TeamDomain


class LeagueSnapshot(BaseModel):
    """Immutable bundle of teams, players, fixtures and gameweeks."""

    model_config = ConfigDict(frozen=True)

    teams: List[TeamDomain] = Field(default_factory=list)
    players: List[PlayerDomain] = Field(default_factory=list)
    fixtures: List[FixtureDomain] = Field(default_factory=list)
    gameweeks: List[GameweekDomain] = Field(default_factory=list)

    def team_names(self) -> Dict[int, str]:
        return {t.team_id: t.name for t in self.teams}
