"""Transfer Index: player form blended with upcoming fixture ease.

For every player the service walks a lookahead window starting at the next
gameweek, sums the difficulty of each gameweek (blanks are charged the tier-6
penalty rather than skipped), turns that sum into a 0-1 ease score and
averages it with normalized form using configurable weights.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import pandas as pd
from loguru import logger

from fpl_fixture_index.config import config as global_config
from fpl_fixture_index.config.settings import FPLIndexConfig

from ..models.difficulty import DifficultyResult, DifficultyTier
from ..models.fixture import FixtureDomain
from ..models.gameweek import GameweekDomain
from ..models.player import PlayerDomain, Position
from ..models.snapshot import LeagueSnapshot
from ..models.transfer_index import (
    FixtureEntry,
    TransferIndexResult,
    TransferIndexWeights,
)
from .fixture_difficulty_service import FixtureDifficultyService
from .standings_service import StandingsService
from .team_strength_service import TeamStrengthService

_service_logger = logger.bind(service="transfer_index")

# (team_id, gameweek) -> [(opponent_id, is_home), ...]
FixtureLookup = Dict[Tuple[int, int], List[Tuple[int, bool]]]


def _kickoff_order(fixture: FixtureDomain) -> Tuple[int, bool, float, int]:
    # unknown kickoffs go last within their gameweek
    kickoff = fixture.kickoff_utc.timestamp() if fixture.kickoff_utc else 0.0
    unknown = fixture.kickoff_utc is None
    return (fixture.event or 0, unknown, kickoff, fixture.fixture_id)


class TransferIndexService:
    """Scores every player in a snapshot for transfer recommendations."""

    def __init__(self, index_config: Optional[FPLIndexConfig] = None):
        """
        Args:
            index_config: Full engine configuration (defaults to the global config)
        """
        self.config = index_config or global_config
        self.strength_service = TeamStrengthService(self.config.team_strength)
        self.difficulty_service = FixtureDifficultyService(
            self.config.fixture_difficulty, self.strength_service
        )
        self.standings_service = StandingsService()

    def default_weights(self) -> TransferIndexWeights:
        return TransferIndexWeights(
            form_weight=self.config.transfer_index.form_weight,
            fixture_weight=self.config.transfer_index.fixture_weight,
        )

    @staticmethod
    def next_gameweek_id(gameweeks: List[GameweekDomain]) -> int:
        """
        The first gameweek of the lookahead window.

        Prefers the gameweek flagged is_next, then the one after is_current,
        then the first unfinished gameweek, then the first listed. With no
        gameweeks at all the window starts at 1.
        """
        if not gameweeks:
            return 1
        ordered = sorted(gameweeks, key=lambda gw: gw.gameweek_id)

        flagged_next = next((gw for gw in ordered if gw.is_next), None)
        if flagged_next:
            return flagged_next.gameweek_id

        current = next((gw for gw in ordered if gw.is_current), None)
        if current:
            return current.gameweek_id + 1

        unfinished = next((gw for gw in ordered if not gw.finished), None)
        return (unfinished or ordered[0]).gameweek_id

    def resolve_window(
        self, gameweeks: List[GameweekDomain], lookahead: Optional[int] = None
    ) -> List[int]:
        """
        Gameweek ids in the lookahead window, clipped to the season's end.

        Args:
            gameweeks: All gameweeks in the snapshot
            lookahead: Window length (defaults to config)

        Returns:
            Ordered gameweek ids; may be shorter than lookahead near season end
        """
        if lookahead is None:
            lookahead = self.config.transfer_index.lookahead
        start = self.next_gameweek_id(gameweeks)

        last = self.config.transfer_index.season_length
        if gameweeks:
            last = min(last, max(gw.gameweek_id for gw in gameweeks))

        end = min(last, start + lookahead - 1)
        return list(range(start, end + 1))

    @staticmethod
    def build_fixture_lookup(
        fixtures: List[FixtureDomain], window: List[int]
    ) -> FixtureLookup:
        """
        Index unfinished fixtures in the window by (team, gameweek).

        Each fixture is listed for both participants. A double gameweek simply
        produces two entries under the same key, in kickoff order.
        """
        lookup: FixtureLookup = defaultdict(list)
        if not window:
            return lookup
        first, last = window[0], window[-1]

        upcoming = [
            f
            for f in fixtures
            if not f.finished and f.event is not None and first <= f.event <= last
        ]
        upcoming.sort(key=_kickoff_order)

        for f in upcoming:
            for team_id in (f.home_team_id, f.away_team_id):
                lookup[(team_id, f.event)].append(
                    (f.get_opponent(team_id), f.is_home_fixture(team_id))
                )
        return lookup

    def normalize_fixture_ease(self, difficulty_sum: float, window_size: int) -> float:
        """
        Map a difficulty sum onto [0, 1], higher meaning easier.

        An all-tier-1 window scores 1.0. An all-Very-Hard window
        (window_size * 5) scores 0.0, as does anything worse such as an
        all-blank window.
        """
        if window_size <= 0:
            return 0.0
        worst = int(DifficultyTier.VERY_HARD)
        ease = (window_size * worst - difficulty_sum) / (window_size * (worst - 1))
        return max(0.0, min(1.0, ease))

    def normalize_form(self, form: float) -> float:
        """Form over the plausible ceiling, clamped to [0, 1]."""
        return max(0.0, min(1.0, form / self.config.transfer_index.form_ceiling))

    @staticmethod
    def ownership_ratios(player: PlayerDomain) -> Tuple[float, float]:
        """Ownership per form point and per season point (0 when undefined)."""
        ownership = player.selected_by_percent
        eo_form = ownership / player.form if player.form > 0 else 0.0
        points = player.total_points
        eo_points = ownership / points if points > 0 else 0.0
        return eo_form, eo_points

    @staticmethod
    def team_fixture_run(
        team_id: int,
        window: List[int],
        lookup: FixtureLookup,
        difficulty_for: "DifficultyLookup",
    ) -> Tuple[List[FixtureEntry], float]:
        """
        Walk the window for one team.

        Returns:
            (per-gameweek entries, difficulty sum). Blanks add the tier-6
            penalty; a double gameweek lists every fixture but adds the mean
            of its tiers, since it still fills a single slot of the window.
        """
        entries: List[FixtureEntry] = []
        difficulty_sum = 0.0

        for gameweek in window:
            matches = lookup.get((team_id, gameweek), [])
            if not matches:
                difficulty_sum += int(DifficultyTier.BLANK)
                entries.append(
                    FixtureEntry(
                        gameweek=gameweek,
                        opponent_team_id=None,
                        difficulty=int(DifficultyTier.BLANK),
                        is_home=False,
                    )
                )
                continue

            tiers = []
            for opponent_id, is_home in matches:
                tier = int(difficulty_for(opponent_id, not is_home).tier)
                tiers.append(tier)
                entries.append(
                    FixtureEntry(
                        gameweek=gameweek,
                        opponent_team_id=opponent_id,
                        difficulty=tier,
                        is_home=is_home,
                    )
                )
            difficulty_sum += sum(tiers) / len(tiers)

        return entries, difficulty_sum

    def score_player(
        self,
        player: PlayerDomain,
        window: List[int],
        lookup: FixtureLookup,
        difficulty_for: "DifficultyLookup",
        weights: TransferIndexWeights,
        window_size: int,
    ) -> TransferIndexResult:
        """
        Score a single player from shared read-only inputs.

        Args:
            player: Player to score
            window: Gameweek ids to walk
            lookup: Output of build_fixture_lookup
            difficulty_for: Callable (opponent_id, is_away) -> DifficultyResult
            weights: Form/fixture blend
            window_size: Nominal window length used for normalization

        Returns:
            TransferIndexResult for the player
        """
        entries, difficulty_sum = self.team_fixture_run(
            player.team_id, window, lookup, difficulty_for
        )

        # no gameweeks left in the season: nothing to look forward to
        fixture_ease = (
            self.normalize_fixture_ease(difficulty_sum, window_size) if window else 0.0
        )
        form_normalized = self.normalize_form(player.form)
        index = (
            weights.form_weight * form_normalized
            + weights.fixture_weight * fixture_ease
        )
        eo_form, eo_points = self.ownership_ratios(player)

        return TransferIndexResult(
            player_id=player.player_id,
            web_name=player.web_name,
            team_id=player.team_id,
            position=player.position,
            price=player.price,
            total_points=player.total_points,
            form=player.form,
            selected_by_percent=player.selected_by_percent,
            transfer_index=max(0.0, min(1.0, index)),
            fixture_difficulty_sum=difficulty_sum,
            fixture_ease=fixture_ease,
            form_normalized=form_normalized,
            next_fixtures=entries,
            eo_form_ratio=eo_form,
            eo_points_ratio=eo_points,
        )

    def build_context(
        self, snapshot: LeagueSnapshot, lookahead: Optional[int] = None
    ) -> Tuple[List[int], FixtureLookup, "DifficultyLookup"]:
        """Window, fixture lookup and difficulty memo for one computation."""
        window = self.resolve_window(snapshot.gameweeks, lookahead)
        lookup = self.build_fixture_lookup(snapshot.fixtures, window)
        positions = self.standings_service.calculate_league_positions(
            snapshot.teams, snapshot.fixtures
        )
        difficulty_for = DifficultyLookup(
            self.difficulty_service, snapshot.players, positions
        )
        return window, lookup, difficulty_for

    def compute_transfer_index(
        self,
        snapshot: LeagueSnapshot,
        lookahead: Optional[int] = None,
        weights: Optional[TransferIndexWeights] = None,
    ) -> List[TransferIndexResult]:
        """
        Compute the transfer index for every player in the snapshot.

        Args:
            snapshot: Teams, players, fixtures and gameweeks
            lookahead: Window length (defaults to config, 5)
            weights: Form/fixture blend (defaults to config, 50/50)

        Returns:
            One TransferIndexResult per player, in snapshot order
        """
        window_size = (
            self.config.transfer_index.lookahead if lookahead is None else lookahead
        )
        weights = weights or self.default_weights()

        window, lookup, difficulty_for = self.build_context(snapshot, window_size)

        if window:
            _service_logger.debug(
                f"Transfer index window GW{window[0]}-GW{window[-1]} "
                f"for {len(snapshot.players)} players"
            )
        else:
            _service_logger.warning(
                "Lookahead window is empty, fixture ease is 0 for every player"
            )

        return [
            self.score_player(
                player, window, lookup, difficulty_for, weights, window_size
            )
            for player in snapshot.players
        ]

    def rank_transfer_targets(
        self,
        results: List[TransferIndexResult],
        position: Optional[Position] = None,
        limit: Optional[int] = None,
        min_total_points: Optional[int] = None,
    ) -> List[TransferIndexResult]:
        """
        Order results best first for recommendation.

        Players at or below min_total_points are treated as inactive and
        dropped. Ties on the index fall back to player id.
        """
        if min_total_points is None:
            min_total_points = self.config.transfer_index.min_total_points

        candidates = [
            r
            for r in results
            if r.total_points > min_total_points
            and (position is None or r.position == position)
        ]
        candidates.sort(key=lambda r: (-r.transfer_index, r.player_id))
        return candidates[:limit] if limit is not None else candidates

    @staticmethod
    def to_dataframe(results: List[TransferIndexResult]) -> pd.DataFrame:
        """Flatten results into one row per player with a GW<n> tier column each."""
        rows = []
        for r in results:
            row = {
                "player_id": r.player_id,
                "web_name": r.web_name,
                "team_id": r.team_id,
                "position": r.position.value,
                "price": r.price,
                "form": r.form,
                "total_points": r.total_points,
                "selected_by_percent": r.selected_by_percent,
                "transfer_index": r.transfer_index,
                "transfer_index_pct": r.transfer_index_pct,
                "fixture_difficulty_sum": r.fixture_difficulty_sum,
                "eo_form_ratio": r.eo_form_ratio,
                "eo_points_ratio": r.eo_points_ratio,
            }
            for gameweek in sorted({f.gameweek for f in r.next_fixtures}):
                row[f"GW{gameweek}"] = r.difficulty_for_gameweek(gameweek)
            rows.append(row)
        return pd.DataFrame(rows)


class DifficultyLookup:
    """Per-call memo of opponent difficulties.

    Created fresh for each computation, so nothing is shared between calls.
    """

    def __init__(
        self,
        difficulty_service: FixtureDifficultyService,
        players: List[PlayerDomain],
        positions: Dict[int, int],
    ):
        self.difficulty_service = difficulty_service
        self.positions = positions
        self._forms = self._team_forms(difficulty_service.strength_service, players)
        self._results: Dict[Tuple[int, bool], DifficultyResult] = {}

    @staticmethod
    def _team_forms(
        strength_service: TeamStrengthService, players: List[PlayerDomain]
    ) -> Dict[int, Tuple[float, int]]:
        team_ids = {p.team_id for p in players}
        return {
            team_id: strength_service.calculate_form_average(team_id, players)
            for team_id in team_ids
        }

    def __call__(self, opponent_id: int, is_away: bool) -> DifficultyResult:
        key = (opponent_id, is_away)
        if key not in self._results:
            form_average, form_count = self._forms.get(opponent_id, (0.0, 0))
            self._results[key] = self.difficulty_service.classify(
                opponent_id,
                form_average,
                self.positions.get(opponent_id),
                is_away=is_away,
                form_count=form_count,
            )
        return self._results[key]
