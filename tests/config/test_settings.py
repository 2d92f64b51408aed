"""Tests for configuration loading and validation."""

import json

import pytest
from pydantic import ValidationError

from fpl_fixture_index.config.settings import (
    FixtureDifficultyConfig,
    FPLIndexConfig,
    TransferIndexConfig,
    load_config,
)
from fpl_fixture_index.config.utils import (
    compare_configs,
    export_config_to_json,
    validate_config_file,
)


class TestDefaults:
    """Default values match the canonical difficulty model."""

    def test_default_config(self):
        config = FPLIndexConfig()

        assert config.team_strength.top_n_players == 12
        assert config.fixture_difficulty.table_weight == 0.15
        assert config.fixture_difficulty.away_adjustment == 0.15
        assert config.fixture_difficulty.home_adjustment == -0.10
        assert config.fixture_difficulty.tier_thresholds == [2.7, 3.2, 3.7, 4.2]
        assert config.transfer_index.lookahead == 5
        assert config.transfer_index.form_ceiling == 10.0

    def test_default_weights_sum_to_one(self):
        index = TransferIndexConfig()
        assert index.form_weight + index.fixture_weight == 1.0
        assert index.form_weight == 0.5


class TestValidation:
    """Invalid configurations are rejected."""

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError, match="sum to 1"):
            TransferIndexConfig(form_weight=0.7, fixture_weight=0.5)

    def test_form_biased_weights_accepted(self):
        index = TransferIndexConfig(form_weight=0.7, fixture_weight=0.3)
        assert index.form_weight == 0.7

    def test_single_weight_derives_complement(self):
        form_only = TransferIndexConfig(form_weight=0.8)
        fixture_only = TransferIndexConfig(fixture_weight=0.6)

        assert form_only.fixture_weight == pytest.approx(0.2)
        assert fixture_only.form_weight == pytest.approx(0.4)

    def test_thresholds_must_ascend(self):
        with pytest.raises(ValidationError, match="strictly ascending"):
            FixtureDifficultyConfig(tier_thresholds=[2.7, 2.7, 3.7, 4.2])

    def test_thresholds_need_four_boundaries(self):
        with pytest.raises(ValidationError, match="exactly four"):
            FixtureDifficultyConfig(tier_thresholds=[2.7, 3.2, 3.7])

    def test_default_position_within_table(self):
        with pytest.raises(ValidationError):
            FixtureDifficultyConfig(total_teams=18, default_position=19)


class TestLoadConfig:
    """load_config merges files, explicit data and environment overrides."""

    def test_config_data_override(self):
        config = load_config(
            config_data={"transfer_index": {"lookahead": 3}}, environ={}
        )
        assert config.transfer_index.lookahead == 3
        assert config.transfer_index.form_weight == 0.5

    def test_environment_override(self):
        environ = {
            "FPL_TRANSFER_INDEX_LOOKAHEAD": "4",
            "FPL_FIXTURE_DIFFICULTY_TABLE_WEIGHT": "0.1",
            "FPL_TEAM_STRENGTH_TOP_N_PLAYERS": "11",
            "UNRELATED": "x",
        }
        config = load_config(environ=environ)

        assert config.transfer_index.lookahead == 4
        assert config.fixture_difficulty.table_weight == 0.1
        assert config.team_strength.top_n_players == 11

    def test_single_weight_override_keeps_siblings(self):
        environ = {
            "FPL_TRANSFER_INDEX_FORM_WEIGHT": "0.7",
            "FPL_TRANSFER_INDEX_LOOKAHEAD": "3",
        }
        config = load_config(environ=environ)

        assert config.transfer_index.form_weight == 0.7
        assert config.transfer_index.fixture_weight == pytest.approx(0.3)
        assert config.transfer_index.lookahead == 3

    def test_environment_list_override(self):
        environ = {"FPL_FIXTURE_DIFFICULTY_TIER_THRESHOLDS": "2.5,3.0,3.5,4.0"}
        config = load_config(environ=environ)
        assert config.fixture_difficulty.tier_thresholds == [2.5, 3.0, 3.5, 4.0]

    def test_invalid_values_fall_back_to_defaults(self):
        environ = {"FPL_TRANSFER_INDEX_LOOKAHEAD": "0"}
        config = load_config(environ=environ)
        assert config == FPLIndexConfig()

    def test_load_from_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"transfer_index": {"min_total_points": 20}}))

        config = load_config(config_path=path, environ={})
        assert config.transfer_index.min_total_points == 20

    def test_unreadable_file_ignored(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("not json {")

        config = load_config(config_path=path, environ={})
        assert config == FPLIndexConfig()


class TestConfigUtils:
    """Export, validation and comparison helpers."""

    def test_export_round_trip(self, tmp_path):
        path = tmp_path / "exported.json"
        export_config_to_json(FPLIndexConfig(), path)

        data = json.loads(path.read_text())
        assert data["transfer_index"]["lookahead"] == 5
        assert validate_config_file(path) == []

    def test_validate_reports_errors(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"fixture_difficulty": {"tier_thresholds": [4, 3, 2, 1]}})
        )

        issues = validate_config_file(path)
        assert len(issues) == 1
        assert "tier_thresholds" in issues[0]

    def test_validate_missing_file(self, tmp_path):
        issues = validate_config_file(tmp_path / "missing.json")
        assert issues and "Could not read" in issues[0]

    def test_compare_configs(self):
        base = FPLIndexConfig()
        changed = load_config(
            config_data={"transfer_index": {"lookahead": 3}}, environ={}
        )

        assert compare_configs(base, changed) == {"transfer_index.lookahead": (5, 3)}

    def test_compare_identical_configs(self):
        assert compare_configs(FPLIndexConfig(), load_config(environ={})) == {}

    def test_compare_orders_by_section_and_field(self):
        changed = load_config(
            config_data={
                "transfer_index": {"lookahead": 3, "form_weight": 0.6},
                "fixture_difficulty": {"table_weight": 0.2},
            },
            environ={},
        )

        assert list(compare_configs(FPLIndexConfig(), changed)) == [
            "fixture_difficulty.table_weight",
            "transfer_index.fixture_weight",
            "transfer_index.form_weight",
            "transfer_index.lookahead",
        ]
