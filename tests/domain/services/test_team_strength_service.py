"""Tests for TeamStrengthService."""

import pytest

from fpl_fixture_index.config.settings import TeamStrengthConfig
from fpl_fixture_index.domain.models.player import PlayerDomain, Position
from fpl_fixture_index.domain.models.team import TeamDomain
from fpl_fixture_index.domain.services.team_strength_service import TeamStrengthService


def make_players(team_id, forms, start_id=1):
    return [
        PlayerDomain(
            player_id=start_id + i, team_id=team_id, position=Position.MID, form=form
        )
        for i, form in enumerate(forms)
    ]


@pytest.fixture
def service():
    return TeamStrengthService(TeamStrengthConfig(top_n_players=12))


class TestTeamStrength:
    def test_sums_top_twelve(self, service):
        forms = [float(f) for f in range(1, 16)]  # 1..15
        players = make_players(1, forms)

        assert service.calculate_team_strength(1, players) == sum(range(4, 16))

    def test_fewer_than_cap(self, service):
        players = make_players(1, ["2.5", "3.5", "1.0"])
        assert service.calculate_team_strength(1, players) == pytest.approx(7.0)

    def test_empty_roster(self, service):
        assert service.calculate_team_strength(1, []) == 0.0

    def test_unknown_team(self, service):
        players = make_players(1, [5.0, 6.0])
        assert service.calculate_team_strength(42, players) == 0.0

    def test_other_teams_ignored(self, service):
        players = make_players(1, [5.0]) + make_players(2, [9.0], start_id=10)
        assert service.calculate_team_strength(1, players) == 5.0

    def test_unparsable_forms_count_as_zero(self, service):
        players = make_players(1, ["abc", "4.0", None])
        assert service.calculate_team_strength(1, players) == 4.0

    def test_explicit_top_n(self, service):
        players = make_players(1, [1.0, 2.0, 3.0])
        assert service.calculate_team_strength(1, players, top_n=2) == 5.0


class TestFormAverage:
    def test_average_of_top_n(self, service):
        players = make_players(1, [float(f) for f in range(1, 16)])
        average, count = service.calculate_form_average(1, players)

        assert count == 12
        assert average == pytest.approx(sum(range(4, 16)) / 12)

    def test_average_independent_of_depth(self, service):
        shallow = make_players(1, [4.0] * 6)
        deep = make_players(1, [4.0] * 20)

        assert service.calculate_form_average(1, shallow)[0] == 4.0
        assert service.calculate_form_average(1, deep)[0] == 4.0
        shallow_strength = service.calculate_team_strength(1, shallow)
        assert shallow_strength < service.calculate_team_strength(1, deep)

    def test_empty_average(self, service):
        assert service.calculate_form_average(1, []) == (0.0, 0)

    def test_top_forms_sorted_descending(self, service):
        players = make_players(1, [2.0, 7.0, 4.0])
        assert service.top_player_forms(1, players) == [7.0, 4.0, 2.0]


class TestAllStrengths:
    def test_every_team_reported(self, service):
        teams = [TeamDomain(team_id=i, name=f"Team {i}") for i in (1, 2, 3)]
        players = make_players(1, [3.0, 3.0]) + make_players(2, [5.0], start_id=10)

        assert service.calculate_all_strengths(teams, players) == {
            1: 6.0,
            2: 5.0,
            3: 0.0,
        }
