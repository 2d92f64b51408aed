"""Team strength from the current form of a team's leading players."""

from typing import Dict, List, Optional

from ..models.player import PlayerDomain
from ..models.team import TeamDomain
from fpl_fixture_index.config import config as global_config
from fpl_fixture_index.config.settings import TeamStrengthConfig


class TeamStrengthService:
    """Aggregates the top-N player forms of a team into a single number."""

    def __init__(self, strength_config: Optional[TeamStrengthConfig] = None):
        self.config = strength_config or global_config.team_strength

    def _top_n(self, top_n: Optional[int]) -> int:
        return self.config.top_n_players if top_n is None else top_n

    def top_player_forms(
        self, team_id: int, players: List[PlayerDomain], top_n: Optional[int] = None
    ) -> List[float]:
        """Forms of the team's best ``top_n`` players, highest first.

        sorted() is stable, so equal forms keep their input order.
        """
        forms = [p.form for p in players if p.team_id == team_id]
        return sorted(forms, reverse=True)[: self._top_n(top_n)]

    def calculate_team_strength(
        self, team_id: int, players: List[PlayerDomain], top_n: Optional[int] = None
    ) -> float:
        """Sum of the top-N forms; 0.0 for an empty or unknown roster."""
        return float(sum(self.top_player_forms(team_id, players, top_n)))

    def calculate_form_average(
        self, team_id: int, players: List[PlayerDomain], top_n: Optional[int] = None
    ) -> tuple[float, int]:
        """Mean top-N form and how many players it covers.

        The average keeps difficulty thresholds independent of roster depth.
        """
        forms = self.top_player_forms(team_id, players, top_n)
        if not forms:
            return 0.0, 0
        return sum(forms) / len(forms), len(forms)

    def calculate_all_strengths(
        self,
        teams: List[TeamDomain],
        players: List[PlayerDomain],
        top_n: Optional[int] = None,
    ) -> Dict[int, float]:
        """Team strength for every team in ``teams``."""
        return {
            team.team_id: self.calculate_team_strength(team.team_id, players, top_n)
            for team in teams
        }
