"""League standings derived from completed fixtures."""

from typing import Dict, List

from loguru import logger

from ..models.fixture import FixtureDomain
from ..models.standings import StandingsRow
from ..models.team import TeamDomain

_service_logger = logger.bind(service="standings")


class StandingsService:
    """Rebuilds the league table from scratch on every call.

    Ordering: points, goal difference, goals scored (all descending), then
    team id ascending so exact ties are reproducible.
    """

    def __init__(self, form_guide_length: int = 5):
        self.form_guide_length = form_guide_length

    def calculate_standings(
        self, teams: List[TeamDomain], fixtures: List[FixtureDomain]
    ) -> List[StandingsRow]:
        """
        Build the full league table.

        Args:
            teams: Every team in the league
            fixtures: All fixtures, played or not

        Returns:
            StandingsRow list ordered from 1st to last, positions filled in
        """
        rows: Dict[int, StandingsRow] = {
            team.team_id: StandingsRow(team_id=team.team_id) for team in teams
        }

        played = [f for f in fixtures if f.is_played]
        for fixture in played:
            home = rows.get(fixture.home_team_id)
            away = rows.get(fixture.away_team_id)
            if home is None or away is None:
                _service_logger.debug(
                    f"Skipping fixture {fixture.fixture_id}: unknown team "
                    f"{fixture.home_team_id} v {fixture.away_team_id}"
                )
                continue

            home_goals, away_goals = fixture.goals_for(fixture.home_team_id)
            home.record_result(home_goals, away_goals)
            away.record_result(away_goals, home_goals)

        ordered = sorted(rows.values(), key=StandingsRow.sort_key)
        for position, row in enumerate(ordered, start=1):
            row.position = position
            row.form_guide = self.recent_form(
                row.team_id, played, self.form_guide_length
            )

        _service_logger.debug(
            f"Standings built for {len(ordered)} teams "
            f"from {len(played)} played fixtures"
        )
        return ordered

    def calculate_league_positions(
        self, teams: List[TeamDomain], fixtures: List[FixtureDomain]
    ) -> Dict[int, int]:
        """Map team_id -> league position (1 = top)."""
        return {
            row.team_id: row.position
            for row in self.calculate_standings(teams, fixtures)
        }

    @staticmethod
    def recent_form(
        team_id: int, fixtures: List[FixtureDomain], count: int = 5
    ) -> List[str]:
        """Last ``count`` results for a team as W/D/L, most recent first.

        Fixtures without a kickoff time can't be placed in time and are left out.
        """
        team_fixtures = [
            f
            for f in fixtures
            if f.is_played and f.kickoff_utc is not None and team_id in f.involves_team
        ]
        team_fixtures.sort(key=lambda f: f.kickoff_utc, reverse=True)
        return [f.result_for(team_id) for f in team_fixtures[:count]]
