"""Domain services, one per stage of the difficulty and transfer index pipeline."""

from .data_ingestion_service import DataIngestionService, get_active_gameweek_id
from .fixture_analysis_service import FixtureAnalysisService
from .fixture_difficulty_service import FixtureDifficultyService
from .standings_service import StandingsService
from .team_strength_service import TeamStrengthService
from .transfer_index_service import TransferIndexService

__all__ = [
    "DataIngestionService",
    "FixtureAnalysisService",
    "FixtureDifficultyService",
    "StandingsService",
    "TeamStrengthService",
    "TransferIndexService",
    "get_active_gameweek_id",
]
