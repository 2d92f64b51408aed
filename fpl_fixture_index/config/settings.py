"""
Global Configuration System for the FPL Fixture Index engine

Centralized configuration for the difficulty and transfer index heuristics.
Provides type-safe configuration with validation and environment variable support.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field, field_validator, model_validator


class TeamStrengthConfig(BaseModel):
    """Team Strength Estimation Configuration"""

    top_n_players: int = Field(
        default=12,
        description="Number of in-form players counted towards team strength",
        ge=1,
        le=30,
    )


class FixtureDifficultyConfig(BaseModel):
    """Dynamic Fixture Difficulty Configuration"""

    total_teams: int = Field(
        default=20, description="Teams in the league", ge=2, le=40
    )
    default_position: int = Field(
        default=10,
        description="Position assumed for teams missing from the table (mid-table)",
        ge=1,
        le=40,
    )

    # Table swing: (table_strength - total_teams / 2) * table_weight
    table_weight: float = Field(
        default=0.15,
        description="Gentle multiplier on the centred table strength (~[-1.35, +1.50])",
        ge=0.0,
        le=0.5,
    )

    # Home/away nudge applied from the observing team's point of view
    away_adjustment: float = Field(
        default=0.15, description="Added when the observing team plays away"
    )
    home_adjustment: float = Field(
        default=-0.10, description="Added when the observing team plays at home"
    )

    # Upper bounds (inclusive) of tiers 1-4 on the average-form scale
    tier_thresholds: List[float] = Field(
        default_factory=lambda: [2.7, 3.2, 3.7, 4.2],
        description=(
            "<=2.7 Easy, <=3.2 Good, <=3.7 Moderate, <=4.2 Hard, else Very Hard"
        ),
    )

    @field_validator("tier_thresholds")
    @classmethod
    def validate_tier_thresholds(cls, v):
        if len(v) != 4:
            raise ValueError("tier_thresholds must define exactly four boundaries")
        if any(b <= a for a, b in zip(v, v[1:])):
            raise ValueError("tier_thresholds must be strictly ascending")
        return v

    @model_validator(mode="after")
    def validate_default_position(self):
        if self.default_position > self.total_teams:
            raise ValueError("default_position must be within the league table")
        return self


class TransferIndexConfig(BaseModel):
    """Transfer Index Configuration"""

    lookahead: int = Field(
        default=5,
        description="Gameweeks considered from the next gameweek",
        ge=1,
        le=38,
    )
    season_length: int = Field(
        default=38, description="Final gameweek of the season", ge=1, le=60
    )

    # Blend between player form and fixture ease (must sum to 1)
    form_weight: float = Field(
        default=0.5, description="Weight of normalized form", ge=0.0, le=1.0
    )
    fixture_weight: float = Field(
        default=0.5, description="Weight of normalized fixture ease", ge=0.0, le=1.0
    )
    form_ceiling: float = Field(
        default=10.0, description="Form treated as the plausible maximum", gt=0.0
    )

    # Recommendation filter, players at or below this total are treated as inactive
    min_total_points: int = Field(
        default=10, description="Minimum season points for ranked targets", ge=0
    )

    @model_validator(mode="before")
    @classmethod
    def complete_weights(cls, data: Any) -> Any:
        """Derive the missing weight when only one of the pair is given."""
        if not isinstance(data, dict):
            return data
        form = data.get("form_weight")
        fixture = data.get("fixture_weight")
        if isinstance(form, (int, float)) and fixture is None:
            return {**data, "fixture_weight": 1.0 - form}
        if isinstance(fixture, (int, float)) and form is None:
            return {**data, "form_weight": 1.0 - fixture}
        return data

    @model_validator(mode="after")
    def validate_weights(self):
        if abs(self.form_weight + self.fixture_weight - 1.0) > 1e-9:
            raise ValueError("form_weight and fixture_weight must sum to 1")
        return self


class FPLIndexConfig(BaseModel):
    """Master Configuration Container"""

    team_strength: TeamStrengthConfig = Field(
        default_factory=TeamStrengthConfig, description="Team Strength Configuration"
    )
    fixture_difficulty: FixtureDifficultyConfig = Field(
        default_factory=FixtureDifficultyConfig,
        description="Fixture Difficulty Configuration",
    )
    transfer_index: TransferIndexConfig = Field(
        default_factory=TransferIndexConfig,
        description="Transfer Index Configuration",
    )


def _parse_env_value(value: str) -> Any:
    """Convert an environment string to bool, int, float or list of floats."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if "," in value:
        return [float(part) for part in value.split(",") if part.strip()]
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def _env_overrides(environ: Dict[str, str]) -> Dict[str, Dict[str, Any]]:
    """Collect FPL_{SECTION}_{FIELD} overrides for known sections."""
    overrides: Dict[str, Dict[str, Any]] = {}
    sections = sorted(FPLIndexConfig.model_fields, key=len, reverse=True)

    for env_var, value in environ.items():
        if not env_var.startswith("FPL_"):
            continue
        for section in sections:
            prefix = f"FPL_{section.upper()}_"
            if env_var.startswith(prefix):
                field = env_var[len(prefix) :].lower()
                try:
                    overrides.setdefault(section, {})[field] = _parse_env_value(value)
                except ValueError:
                    overrides.setdefault(section, {})[field] = value
                break

    return overrides


def load_config(
    config_path: Optional[Path] = None,
    config_data: Optional[Dict] = None,
    environ: Optional[Dict[str, str]] = None,
) -> FPLIndexConfig:
    """
    Load configuration with environment variable overrides and optional config file

    Args:
        config_path: Optional path to JSON configuration file
        config_data: Optional dictionary of configuration data
        environ: Environment mapping to read overrides from (defaults to os.environ)

    Environment variables can override any config value using the pattern:
    FPL_{SECTION}_{FIELD} = value

    Example: FPL_TRANSFER_INDEX_LOOKAHEAD=3
    """
    config_dict: Dict[str, Any] = {}

    if config_path and config_path.exists():
        try:
            with open(config_path, "r") as f:
                if config_path.suffix.lower() == ".json":
                    config_dict = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {config_path}: {e}")

    if config_data:
        for section, fields in config_data.items():
            if isinstance(fields, dict):
                config_dict.setdefault(section, {}).update(fields)
            else:
                config_dict[section] = fields

    env = os.environ if environ is None else environ
    for section, fields in _env_overrides(env).items():
        config_dict.setdefault(section, {}).update(fields)

    try:
        return FPLIndexConfig(**config_dict)
    except ValueError as e:
        logger.warning(f"Configuration validation failed, using defaults: {e}")
        return FPLIndexConfig()


# Global configuration instance
config = load_config()
