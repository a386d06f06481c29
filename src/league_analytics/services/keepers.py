"""
Keeper Service

Measures how the players each roster kept went on to score.
"""

import logging
from collections import defaultdict

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.models.league import KeeperPick
from league_analytics.models.player import PlayerWeeklyPoints
from league_analytics.models.trade_grade import (
    KeeperEvaluation,
    KeeperSeason,
    KeeperSuccess,
)

logger = logging.getLogger(__name__)


def season_totals(points: list[PlayerWeeklyPoints]) -> dict[tuple[str, int], float]:
    """Total points per (player_id, season_id)."""
    totals: dict[tuple[str, int], float] = defaultdict(float)
    for p in points:
        totals[(p.player_id, p.season_id)] += p.points
    return totals


class KeeperService:
    """Service for keeper evaluation and keeper success rates."""

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()

    def evaluate_keepers(
        self,
        keepers: list[KeeperPick],
        player_points: list[PlayerWeeklyPoints],
        roster_id: int | None = None,
    ) -> list[KeeperSeason]:
        """
        Score each roster's keepers in the season they were kept.

        Args:
            keepers: Keeper picks across any number of seasons
            player_points: Weekly player points
            roster_id: Restrict to one roster when given

        Returns:
            KeeperSeason per (roster, season), newest season first; keepers
            inside are sorted by points with the top performers flagged
        """
        totals = season_totals(player_points)
        top_n = self.settings.keeper_top_performers

        grouped: dict[tuple[int, int], list[KeeperPick]] = defaultdict(list)
        for pick in keepers:
            if roster_id is None or pick.roster_id == roster_id:
                grouped[(pick.roster_id, pick.season_id)].append(pick)

        seasons = []
        for (rid, season_id), picks in grouped.items():
            evaluations = sorted(
                (
                    KeeperEvaluation(
                        player_id=pick.player_id,
                        player_name=self.ctx.get_player_name(pick.player_id),
                        position=self.ctx.get_player_position(pick.player_id),
                        round=pick.round,
                        total_points=totals.get((pick.player_id, season_id), 0.0),
                    )
                    for pick in picks
                ),
                key=lambda k: -k.total_points,
            )
            for keeper in evaluations[:top_n]:
                keeper.is_top_performer = True

            seasons.append(
                KeeperSeason(
                    roster_id=rid,
                    season_id=season_id,
                    season_year=self.ctx.get_season_year(season_id),
                    keepers=evaluations,
                )
            )

        seasons.sort(key=lambda s: (-s.season_year, s.roster_id))
        return seasons

    def league_average_keeper_points(
        self,
        keepers: list[KeeperPick],
        player_points: list[PlayerWeeklyPoints],
        season_id: int,
    ) -> float:
        """Average season total of every keeper in the league, 0 with no keepers."""
        totals = season_totals(player_points)
        season_keepers = [k for k in keepers if k.season_id == season_id]
        if not season_keepers:
            return 0.0
        return sum(totals.get((k.player_id, season_id), 0.0) for k in season_keepers) / len(
            season_keepers
        )

    def calculate_keeper_success(
        self,
        keepers: list[KeeperPick],
        player_points: list[PlayerWeeklyPoints],
        season_id: int,
    ) -> list[KeeperSuccess]:
        """
        Percentage of each roster's keepers that beat the league-average keeper.

        Args:
            keepers: Keeper picks; only those for season_id are used
            player_points: Weekly player points
            season_id: Season to evaluate

        Returns:
            KeeperSuccess for every roster, highest success rate first
        """
        totals = season_totals(player_points)
        league_avg = self.league_average_keeper_points(keepers, player_points, season_id)

        by_roster: dict[int, list[float]] = {rid: [] for rid in self.ctx.roster_ids()}
        for pick in keepers:
            if pick.season_id == season_id:
                by_roster.setdefault(pick.roster_id, []).append(
                    totals.get((pick.player_id, season_id), 0.0)
                )

        logger.debug(
            "Keeper success for season %d, league average %.1f", season_id, league_avg
        )

        results = []
        for rid, points in by_roster.items():
            above = sum(1 for p in points if p > league_avg)
            results.append(
                KeeperSuccess(
                    roster_id=rid,
                    team_name=self.ctx.get_team_name(rid),
                    keepers=len(points),
                    success_rate=above / len(points) * 100 if points else 0.0,
                )
            )
        return sorted(results, key=lambda r: (-r.success_rate, r.roster_id))
