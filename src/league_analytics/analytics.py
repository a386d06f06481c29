"""
League Analytics

Facade that runs the analytics services over one league snapshot, one
method per dashboard view.
"""

import logging

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.exceptions import AnalyticsError
from league_analytics.models import (
    KeeperSeason,
    KeeperSuccess,
    LeaguePulse,
    LeagueSnapshot,
    ManagerActivity,
    MatchupPair,
    PositionChurn,
    PowerRankingRow,
    PowerRankingSummary,
    RivalryStats,
    Standing,
    TradeInfo,
    TradeMatrixCell,
    TransactionSummary,
    WinStreak,
)
from league_analytics.services import (
    KeeperService,
    LeaguePulseService,
    MatchupService,
    PowerRankingService,
    RivalryService,
    StandingsService,
    TradeGradingService,
    TransactionService,
)

logger = logging.getLogger(__name__)


class LeagueAnalytics:
    """
    Main class for analyzing a fantasy football league.

    Example:
        analytics = LeagueAnalytics(snapshot)
        standings = analytics.get_standings()
        rankings = analytics.get_power_rankings()
        rivalry = analytics.get_rivalry(1, 4)
    """

    def __init__(self, snapshot: LeagueSnapshot, settings: Settings | None = None):
        self.snapshot = snapshot
        self.settings = settings or get_settings()
        self.ctx = LeagueContext.from_snapshot(snapshot)

        self.matchups = MatchupService(self.ctx, self.settings)
        self.standings = StandingsService(self.ctx, self.settings)
        self.power_rankings = PowerRankingService(self.ctx, self.settings)
        self.rivalry = RivalryService(self.ctx, self.settings)
        self.pulse = LeaguePulseService(self.ctx, self.settings)
        self.transactions = TransactionService(self.ctx, self.settings)
        self.trades = TradeGradingService(self.ctx, self.settings)
        self.keepers = KeeperService(self.ctx, self.settings)

        self._pairs: list[MatchupPair] | None = None

    @property
    def pairs(self) -> list[MatchupPair]:
        """Every matchup pair in the snapshot, built once."""
        if self._pairs is None:
            self._pairs = self.matchups.build_pairs(self.snapshot.weekly_scores)
        return self._pairs

    def _season_id(self, season_id: int | None) -> int:
        if season_id is not None:
            return season_id
        current = self.ctx.current_season
        if current is None:
            raise AnalyticsError("League has no seasons")
        return current.id

    def current_week(self, season_id: int | None = None) -> int:
        """Latest week with a played score in the season, 0 before kickoff."""
        sid = self._season_id(season_id)
        return max(
            (r.week for r in self.snapshot.weekly_scores if r.season_id == sid and r.is_played),
            default=0,
        )

    # ==================== Standings ====================

    def get_standings(self, season_id: int | None = None) -> list[Standing]:
        return self.standings.calculate_standings(self.pairs, self._season_id(season_id))

    def get_all_time_standings(self) -> list[Standing]:
        return self.standings.calculate_standings(self.pairs)

    def get_win_streaks(self) -> dict[int, WinStreak]:
        return self.standings.calculate_win_streaks(self.pairs)

    # ==================== Power Rankings ====================

    def get_power_rankings(self, season_id: int | None = None) -> list[PowerRankingRow]:
        return self.power_rankings.calculate_power_rankings(
            self.snapshot.weekly_scores, self._season_id(season_id)
        )

    def get_power_ranking_summary(self, season_id: int | None = None) -> PowerRankingSummary:
        return self.power_rankings.get_summary(self.get_power_rankings(season_id))

    # ==================== Rivalry ====================

    def get_rivalry(
        self, team_a_roster_id: int, team_b_roster_id: int, season_id: int | None = None
    ) -> RivalryStats:
        """Head-to-head analysis; all seasons unless season_id is given."""
        return self.rivalry.calculate_rivalry_stats(
            self.snapshot.weekly_scores, team_a_roster_id, team_b_roster_id, season_id
        )

    # ==================== League Pulse ====================

    def get_league_pulse(self, season_id: int | None = None) -> LeaguePulse:
        return self.pulse.calculate_league_pulse(
            self.snapshot.weekly_scores, self._season_id(season_id)
        )

    # ==================== Transactions ====================

    def _season_transactions(self, season_id: int | None):
        if season_id is None:
            return self.snapshot.transactions
        return [t for t in self.snapshot.transactions if t.season_id == season_id]

    def get_manager_activity(self, season_id: int | None = None) -> list[ManagerActivity]:
        return self.transactions.calculate_manager_activity(self._season_transactions(season_id))

    def get_trade_matrix(self, season_id: int | None = None) -> list[TradeMatrixCell]:
        return self.transactions.build_trade_matrix(self._season_transactions(season_id))

    def get_position_churn(self, season_id: int | None = None) -> list[PositionChurn]:
        return self.transactions.calculate_position_churn(self._season_transactions(season_id))

    def get_transaction_summary(self, season_id: int | None = None) -> TransactionSummary:
        return self.transactions.get_transaction_summary(self._season_transactions(season_id))

    # ==================== GM Portal ====================

    def get_trade_grades(self, roster_id: int) -> list[TradeInfo]:
        """Grade every trade the roster made, across all seasons."""
        season_id = self._season_id(None)
        return self.trades.grade_roster_trades(
            self.snapshot.transactions,
            roster_id,
            self.snapshot.player_points,
            self.current_week(season_id),
            season_id,
        )

    def get_keeper_history(self, roster_id: int) -> list[KeeperSeason]:
        return self.keepers.evaluate_keepers(
            self.snapshot.keepers, self.snapshot.player_points, roster_id
        )

    def get_keeper_success(self, season_id: int | None = None) -> list[KeeperSuccess]:
        return self.keepers.calculate_keeper_success(
            self.snapshot.keepers, self.snapshot.player_points, self._season_id(season_id)
        )
