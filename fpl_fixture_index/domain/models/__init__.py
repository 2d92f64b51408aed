"""Domain models for the fixture difficulty and transfer index engine."""

from .difficulty import (
    DIFFICULTY_LABELS,
    DifficultyBreakdown,
    DifficultyResult,
    DifficultyTier,
)
from .fixture import FixtureDomain
from .gameweek import GameweekDomain
from .player import PlayerDomain, Position, coerce_float
from .snapshot import LeagueSnapshot
from .standings import StandingsRow
from .team import TeamDomain
from .transfer_index import FixtureEntry, TransferIndexResult, TransferIndexWeights

__all__ = [
    "DIFFICULTY_LABELS",
    "DifficultyBreakdown",
    "DifficultyResult",
    "DifficultyTier",
    "FixtureDomain",
    "FixtureEntry",
    "GameweekDomain",
    "LeagueSnapshot",
    "PlayerDomain",
    "Position",
    "StandingsRow",
    "TeamDomain",
    "TransferIndexResult",
    "TransferIndexWeights",
    "coerce_float",
]
