"""
FPL Fixture Index Configuration Module

Provides centralized configuration management for the engine.
Import the global config instance to access all configuration values.

Usage:
    from fpl_fixture_index.config import config

    # Access difficulty configuration
    table_weight = config.fixture_difficulty.table_weight

    # Access transfer index configuration
    lookahead = config.transfer_index.lookahead
"""

from .settings import (
    FPLIndexConfig,
    FixtureDifficultyConfig,
    TeamStrengthConfig,
    TransferIndexConfig,
    config,
    load_config,
)

__all__ = [
    "FPLIndexConfig",
    "FixtureDifficultyConfig",
    "TeamStrengthConfig",
    "TransferIndexConfig",
    "config",
    "load_config",
]
