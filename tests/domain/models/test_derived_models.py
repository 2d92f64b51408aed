"""Tests for standings, difficulty and transfer index models."""

import pytest
from pydantic import ValidationError

from fpl_fixture_index.domain.models.difficulty import (
    DIFFICULTY_LABELS,
    DifficultyResult,
    DifficultyTier,
)
from fpl_fixture_index.domain.models.player import Position
from fpl_fixture_index.domain.models.standings import StandingsRow
from fpl_fixture_index.domain.models.transfer_index import (
    FixtureEntry,
    TransferIndexResult,
    TransferIndexWeights,
)


class TestStandingsRow:
    def test_record_results(self):
        row = StandingsRow(team_id=1)
        row.record_result(2, 0)
        row.record_result(1, 1)
        row.record_result(0, 3)

        assert (row.played, row.wins, row.draws, row.losses) == (3, 1, 1, 1)
        assert row.points == 4
        assert row.goals_for == 3
        assert row.goals_against == 4
        assert row.goal_difference == -1

    def test_computed_fields_serialized(self):
        row = StandingsRow(team_id=1)
        row.record_result(1, 0)
        dumped = row.model_dump()
        assert dumped["points"] == 3
        assert dumped["goal_difference"] == 1


class TestDifficultyTier:
    def test_blank_is_worst(self):
        populated = [t for t in DifficultyTier if t != DifficultyTier.BLANK]
        assert all(DifficultyTier.BLANK > t for t in populated)
        assert max(DifficultyTier) == DifficultyTier.BLANK

    def test_every_tier_labelled(self):
        assert set(DIFFICULTY_LABELS) == set(DifficultyTier)

    def test_blank_result(self):
        result = DifficultyResult(tier=DifficultyTier.BLANK, label="Blank")
        assert result.is_blank
        assert result.threat == 0.0


class TestTransferIndexWeights:
    def test_default_equal_weighting(self):
        weights = TransferIndexWeights()
        assert weights.form_weight == weights.fixture_weight == 0.5

    def test_from_form_weight(self):
        weights = TransferIndexWeights.from_form_weight(0.7)
        assert weights.form_weight == 0.7
        assert weights.fixture_weight == pytest.approx(0.3)

    def test_sum_enforced(self):
        with pytest.raises(ValidationError, match="sum to 1"):
            TransferIndexWeights(form_weight=0.6, fixture_weight=0.6)


class TestTransferIndexResult:
    def make_result(self, **overrides) -> TransferIndexResult:
        data = {
            "player_id": 1,
            "team_id": 1,
            "position": Position.MID,
            "transfer_index": 0.86,
            "fixture_difficulty_sum": 6,
            "fixture_ease": 0.96,
            "form_normalized": 0.75,
            "next_fixtures": [
                FixtureEntry(
                    gameweek=10, opponent_team_id=2, difficulty=2, is_home=True
                ),
                FixtureEntry(gameweek=11, opponent_team_id=None, difficulty=6),
                FixtureEntry(gameweek=12, opponent_team_id=3, difficulty=1),
                FixtureEntry(gameweek=12, opponent_team_id=4, difficulty=4),
            ],
        }
        data.update(overrides)
        return TransferIndexResult(**data)

    def test_percentage_view(self):
        assert self.make_result().transfer_index_pct == 86.0

    def test_index_bounds_enforced(self):
        with pytest.raises(ValidationError):
            self.make_result(transfer_index=1.2)

    def test_difficulty_for_gameweek(self):
        result = self.make_result()
        assert result.difficulty_for_gameweek(10) == 2
        assert result.difficulty_for_gameweek(11) == 6
        assert result.difficulty_for_gameweek(12) == 4
        assert result.difficulty_for_gameweek(30) == 6
        assert result.next_fixtures[1].is_blank
