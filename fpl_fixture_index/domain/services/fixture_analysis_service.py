"""Fixture analysis service for team-level schedule outlook."""

from typing import Any, Dict, List, Optional

import pandas as pd
from loguru import logger

from ..models.snapshot import LeagueSnapshot
from ..models.transfer_index import FixtureEntry
from .transfer_index_service import TransferIndexService

_service_logger = logger.bind(service="fixture_analysis")


class FixtureAnalysisService:
    """Service for analyzing each team's upcoming run of fixtures."""

    def __init__(self, transfer_index_service: Optional[TransferIndexService] = None):
        """Initialize the service.

        Args:
            transfer_index_service: Supplies the window, fixture lookup and
                difficulty model (a default-configured one if omitted)
        """
        self.index_service = transfer_index_service or TransferIndexService()

    def team_fixture_run(
        self, team_id: int, snapshot: LeagueSnapshot, lookahead: Optional[int] = None
    ) -> List[FixtureEntry]:
        """Per-gameweek difficulty entries for one team (blank gameweeks as tier 6)."""
        window, lookup, difficulty_for = self.index_service.build_context(
            snapshot, lookahead
        )
        entries, _ = self.index_service.team_fixture_run(
            team_id, window, lookup, difficulty_for
        )
        return entries

    def analyze_fixture_outlook(
        self,
        snapshot: LeagueSnapshot,
        lookahead: Optional[int] = None,
        top_n: int = 3,
    ) -> Dict[str, Any]:
        """Analyze every team's schedule over the lookahead window.

        Args:
            snapshot: League snapshot
            lookahead: Window length (defaults to config)
            top_n: How many teams to list as easiest / hardest

        Returns:
            Dictionary with per-team runs and sums, easiest and hardest teams
            (by summed difficulty, ties by team id) and teams with double or
            blank gameweeks
        """
        window, lookup, difficulty_for = self.index_service.build_context(
            snapshot, lookahead
        )

        team_runs: Dict[int, List[FixtureEntry]] = {}
        team_sums: Dict[int, float] = {}
        double_gameweeks: Dict[int, List[int]] = {}
        blank_gameweeks: Dict[int, List[int]] = {}

        for team in snapshot.teams:
            entries, difficulty_sum = self.index_service.team_fixture_run(
                team.team_id, window, lookup, difficulty_for
            )
            team_runs[team.team_id] = entries
            team_sums[team.team_id] = difficulty_sum

            per_gameweek: Dict[int, int] = {}
            for entry in entries:
                if not entry.is_blank:
                    gameweek = entry.gameweek
                    per_gameweek[gameweek] = per_gameweek.get(gameweek, 0) + 1
            doubles = [gw for gw, count in per_gameweek.items() if count > 1]
            blanks = [e.gameweek for e in entries if e.is_blank]
            if doubles:
                double_gameweeks[team.team_id] = sorted(doubles)
            if blanks:
                blank_gameweeks[team.team_id] = blanks

        ranked = sorted(team_sums, key=lambda team_id: (team_sums[team_id], team_id))
        names = snapshot.team_names()

        if window:
            _service_logger.debug(
                f"Fixture outlook GW{window[0]}-GW{window[-1]} for {len(ranked)} teams"
            )

        return {
            "gameweeks": window,
            "analysis_period": f"GW{window[0]}-{window[-1]}" if window else "",
            "team_runs": team_runs,
            "difficulty_sums": team_sums,
            "easiest_teams": [names.get(t, "Unknown") for t in ranked[:top_n]],
            "hardest_teams": [
                names.get(t, "Unknown") for t in reversed(ranked[-top_n:])
            ]
            if ranked
            else [],
            "double_gameweeks": double_gameweeks,
            "blank_gameweeks": blank_gameweeks,
        }

    def difficulty_grid(
        self, snapshot: LeagueSnapshot, lookahead: Optional[int] = None
    ) -> pd.DataFrame:
        """Team x gameweek table of tiers; double gameweeks show the harder fixture.

        Rows are ordered by summed difficulty, easiest schedule first.
        """
        outlook = self.analyze_fixture_outlook(snapshot, lookahead)
        names = snapshot.team_names()

        rows = []
        for team_id, entries in outlook["team_runs"].items():
            row: Dict[str, Any] = {
                "team_id": team_id,
                "team": names.get(team_id, "Unknown"),
                "difficulty_sum": outlook["difficulty_sums"][team_id],
            }
            for gameweek in outlook["gameweeks"]:
                tiers = [e.difficulty for e in entries if e.gameweek == gameweek]
                row[f"GW{gameweek}"] = max(tiers) if tiers else 6
            rows.append(row)

        if not rows:
            return pd.DataFrame(columns=["team_id", "team", "difficulty_sum"])
        return (
            pd.DataFrame(rows)
            .sort_values(["difficulty_sum", "team_id"])
            .reset_index(drop=True)
        )
