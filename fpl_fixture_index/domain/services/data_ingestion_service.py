"""Conversion of raw public-feed payloads into a LeagueSnapshot.

String-encoded numbers are parsed here, once, by the domain models. Records
that still fail validation are skipped with a warning so one bad row never
blocks the rest of the snapshot.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from ..common.result import DomainError, Result
from ..models.fixture import FixtureDomain
from ..models.gameweek import GameweekDomain
from ..models.player import PlayerDomain, coerce_float
from ..models.snapshot import LeagueSnapshot
from ..models.team import TeamDomain

_service_logger = logger.bind(service="data_ingestion")

M = TypeVar("M", bound=BaseModel)


class DataIngestionService:
    """Builds domain snapshots from bootstrap-static and fixtures payloads."""

    REQUIRED_BOOTSTRAP_KEYS = ("teams", "elements", "events")

    def load_snapshot(
        self, bootstrap: Dict[str, Any], fixtures: List[Dict[str, Any]]
    ) -> Result[LeagueSnapshot]:
        """
        Convert raw payloads into a LeagueSnapshot.

        Args:
            bootstrap: bootstrap-static payload with teams, elements and events
            fixtures: fixtures payload (list of fixture records)

        Returns:
            Result containing the snapshot, or a validation error when a
            top-level collection is missing or has the wrong shape
        """
        if not isinstance(bootstrap, dict):
            return Result.failure(
                DomainError.validation_error("Bootstrap payload must be an object")
            )

        field_errors = {
            key: "missing or not a list"
            for key in self.REQUIRED_BOOTSTRAP_KEYS
            if not isinstance(bootstrap.get(key), list)
        }
        if not isinstance(fixtures, list):
            field_errors["fixtures"] = "missing or not a list"
        if field_errors:
            return Result.failure(
                DomainError.validation_error(
                    "Snapshot payload is incomplete", field_errors=field_errors
                )
            )

        snapshot = LeagueSnapshot(
            teams=self._parse_records(bootstrap["teams"], self.parse_team, "team"),
            players=self._parse_records(
                bootstrap["elements"], self.parse_player, "player"
            ),
            fixtures=self._parse_records(fixtures, self.parse_fixture, "fixture"),
            gameweeks=self._parse_records(
                bootstrap["events"], self.parse_gameweek, "gameweek"
            ),
        )
        _service_logger.info(
            f"Loaded snapshot: {len(snapshot.teams)} teams, "
            f"{len(snapshot.players)} players, {len(snapshot.fixtures)} fixtures, "
            f"{len(snapshot.gameweeks)} gameweeks"
        )
        return Result.success(snapshot)

    @staticmethod
    def _parse_records(
        records: List[Any], parser: Callable[[Dict[str, Any]], M], kind: str
    ) -> List[M]:
        parsed = []
        for record in records:
            if not isinstance(record, dict):
                _service_logger.warning(f"Skipping {kind} record that is not an object")
                continue
            try:
                parsed.append(parser(record))
            except (ValidationError, ValueError, TypeError) as e:
                _service_logger.warning(
                    f"Skipping malformed {kind} {record.get('id', '?')}: {e}"
                )
        return parsed

    @staticmethod
    def parse_team(record: Dict[str, Any]) -> TeamDomain:
        return TeamDomain(
            team_id=record.get("id"),
            name=record.get("name") or "Unknown",
            short_name=record.get("short_name") or "",
        )

    @staticmethod
    def parse_player(record: Dict[str, Any]) -> PlayerDomain:
        """Feed prices are in tenths of a million (now_cost)."""
        return PlayerDomain(
            player_id=record.get("id"),
            web_name=record.get("web_name") or "",
            team_id=record.get("team"),
            position=record.get("element_type"),
            price=coerce_float(record.get("now_cost")) / 10,
            total_points=record.get("total_points"),
            form=record.get("form"),
            selected_by_percent=record.get("selected_by_percent"),
        )

    @staticmethod
    def parse_fixture(record: Dict[str, Any]) -> FixtureDomain:
        return FixtureDomain(
            fixture_id=record.get("id"),
            event=record.get("event"),
            home_team_id=record.get("team_h"),
            away_team_id=record.get("team_a"),
            home_score=record.get("team_h_score"),
            away_score=record.get("team_a_score"),
            finished=bool(record.get("finished")),
            kickoff_utc=record.get("kickoff_time"),
        )

    @staticmethod
    def parse_gameweek(record: Dict[str, Any]) -> GameweekDomain:
        return GameweekDomain(
            gameweek_id=record.get("id"),
            name=record.get("name") or "",
            deadline_utc=record.get("deadline_time"),
            is_current=bool(record.get("is_current")),
            is_next=bool(record.get("is_next")),
            finished=bool(record.get("finished")),
        )


def get_active_gameweek_id(
    gameweeks: List[GameweekDomain], now: Optional[datetime] = None
) -> int:
    """
    The gameweek currently in play, judged by transfer deadlines.

    After gameweek X's deadline and before X+1's, X is active. Before the first
    deadline the first gameweek is active; after the last deadline the last
    one is. Gameweeks without a deadline are ignored; none at all gives 1.

    Args:
        gameweeks: Gameweeks in any order
        now: Reference time (defaults to current UTC time)

    Returns:
        Active gameweek id
    """
    dated = sorted(
        (gw for gw in gameweeks if gw.deadline_utc is not None),
        key=lambda gw: gw.gameweek_id,
    )
    if not dated:
        return 1

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    def deadline(gw: GameweekDomain) -> datetime:
        d = gw.deadline_utc
        return d if d.tzinfo else d.replace(tzinfo=timezone.utc)

    upcoming_index = next(
        (i for i, gw in enumerate(dated) if deadline(gw) > now), None
    )
    if upcoming_index is None:
        return dated[-1].gameweek_id
    if upcoming_index == 0:
        return dated[0].gameweek_id
    return dated[upcoming_index - 1].gameweek_id
