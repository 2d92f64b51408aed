"""Dynamic fixture difficulty classification.

The opponent's current strength is the average form of its top-N players.
League position nudges that number through a small table term, and a small
home/away term treats an opponent playing at home as slightly more
threatening. The total is bucketed into tiers 1-5. Tier 6 is reserved for
blank gameweeks and always sorts after tier 5.
"""

from typing import Dict, List, Optional

from loguru import logger

from fpl_fixture_index.config import config as global_config
from fpl_fixture_index.config.settings import FixtureDifficultyConfig

from ..models.difficulty import (
    DIFFICULTY_LABELS,
    DifficultyBreakdown,
    DifficultyResult,
    DifficultyTier,
)
from ..models.player import PlayerDomain
from .team_strength_service import TeamStrengthService

_service_logger = logger.bind(service="fixture_difficulty")


class FixtureDifficultyService:
    """Turns opponent form, table position and venue into a difficulty tier."""

    def __init__(
        self,
        difficulty_config: Optional[FixtureDifficultyConfig] = None,
        strength_service: Optional[TeamStrengthService] = None,
    ):
        self.config = difficulty_config or global_config.fixture_difficulty
        self.strength_service = strength_service or TeamStrengthService()

    def table_adjustment(self, position: Optional[int]) -> float:
        """
        Small adjustment from league position.

        table_strength = (total_teams - position) + 1 runs from total_teams for
        the leader down to 1 for the bottom side; centring on total_teams / 2
        and scaling by table_weight gives roughly [-1.35, +1.50] for 20 teams.
        Unknown or out-of-range positions use the mid-table default.
        """
        total = self.config.total_teams
        if position is None or not 1 <= position <= total:
            position = self.config.default_position
        table_strength = (total - position) + 1
        return (table_strength - total / 2) * self.config.table_weight

    def home_away_adjustment(self, is_away: bool) -> float:
        """Opponents at home (observer away) are slightly harder."""
        if is_away:
            return self.config.away_adjustment
        return self.config.home_adjustment

    def tier_for_score(self, final_score: float) -> DifficultyTier:
        """Bucket a final score; boundaries are inclusive upper bounds."""
        for tier, upper in zip(DifficultyTier, self.config.tier_thresholds):
            if final_score <= upper:
                return tier
        return DifficultyTier.VERY_HARD

    def classify(
        self,
        opponent_team_id: int,
        form_average: float,
        position: Optional[int],
        is_away: bool = False,
        form_count: int = 0,
    ) -> DifficultyResult:
        """
        Classify a fixture from precomputed opponent inputs.

        Args:
            opponent_team_id: Opponent team ID
            form_average: Opponent's average top-N form
            position: Opponent league position (None if unknown)
            is_away: Whether the observing team plays away
            form_count: Number of players behind the average

        Returns:
            DifficultyResult with tier 1-5 and its breakdown
        """
        if position is None or not 1 <= position <= self.config.total_teams:
            position = self.config.default_position

        table_adj = self.table_adjustment(position)
        venue_adj = self.home_away_adjustment(is_away)
        final_score = form_average + table_adj + venue_adj
        tier = self.tier_for_score(final_score)

        return DifficultyResult(
            tier=tier,
            label=DIFFICULTY_LABELS[tier],
            opponent_team_id=opponent_team_id,
            is_away=is_away,
            breakdown=DifficultyBreakdown(
                form_average=round(form_average, 2),
                form_count=form_count,
                position=position,
                table_adjustment=round(table_adj, 2),
                home_away_adjustment=round(venue_adj, 2),
                final_score=round(final_score, 2),
            ),
        )

    def get_dynamic_difficulty(
        self,
        opponent_team_id: int,
        players: List[PlayerDomain],
        positions: Dict[int, int],
        is_away: bool = False,
    ) -> DifficultyResult:
        """
        Difficulty of facing an opponent.

        Args:
            opponent_team_id: Team being faced
            players: All players in the snapshot
            positions: team_id -> league position
            is_away: Whether the observing team plays away

        Returns:
            DifficultyResult; an unknown opponent scores as zero form at the
            default position rather than raising
        """
        form_average, form_count = self.strength_service.calculate_form_average(
            opponent_team_id, players
        )
        if form_count == 0:
            _service_logger.debug(f"No players found for team {opponent_team_id}")

        return self.classify(
            opponent_team_id,
            form_average,
            positions.get(opponent_team_id),
            is_away=is_away,
            form_count=form_count,
        )

    @staticmethod
    def blank_difficulty() -> DifficultyResult:
        """The result used when a team has no fixture in a gameweek."""
        return DifficultyResult(
            tier=DifficultyTier.BLANK,
            label=DIFFICULTY_LABELS[DifficultyTier.BLANK],
        )
