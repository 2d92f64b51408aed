"""Tests for PlayerDomain model."""

import math

import pytest
from pydantic import ValidationError

from fpl_fixture_index.domain.models.player import PlayerDomain, Position, coerce_float


class TestCoerceFloat:
    """String-encoded feed numbers parse to floats or fall back to 0."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("7.5", 7.5),
            (" 3.0 ", 3.0),
            ("12.4%", 12.4),
            (4, 4.0),
            (2.25, 2.25),
            ("", 0.0),
            (None, 0.0),
            ("n/a", 0.0),
            ("nan", 0.0),
            (math.inf, 0.0),
            (True, 0.0),
        ],
    )
    def test_coerce(self, raw, expected):
        assert coerce_float(raw) == expected


class TestPlayerDomain:
    """PlayerDomain parsing and validation."""

    def test_string_fields_parsed_once(self):
        player = PlayerDomain(
            player_id=1,
            web_name="Salah",
            team_id=12,
            position=Position.MID,
            price=13.0,
            total_points=150,
            form="7.5",
            selected_by_percent="45.2",
        )

        assert player.form == 7.5
        assert player.selected_by_percent == 45.2
        assert isinstance(player.form, float)

    def test_unparsable_form_is_zero(self):
        player = PlayerDomain(
            player_id=2, team_id=1, position=Position.DEF, form="not-a-number"
        )
        assert player.form == 0.0

    def test_ownership_clamped(self):
        player = PlayerDomain(
            player_id=3, team_id=1, position=Position.FWD, selected_by_percent="140"
        )
        assert player.selected_by_percent == 100.0

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (1, Position.GKP),
            (2, Position.DEF),
            (3, Position.MID),
            (4, Position.FWD),
            ("gk", Position.GKP),
            ("MID", Position.MID),
        ],
    )
    def test_position_aliases(self, raw, expected):
        player = PlayerDomain(player_id=4, team_id=1, position=raw)
        assert player.position == expected

    def test_unknown_element_type_rejected(self):
        with pytest.raises(ValidationError):
            PlayerDomain(player_id=5, team_id=1, position=7)

    def test_frozen(self):
        player = PlayerDomain(player_id=6, team_id=1, position=Position.MID)
        with pytest.raises(ValidationError):
            player.form = 9.0
