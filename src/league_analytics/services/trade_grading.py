"""
Trade Grading Service

Grades completed trades by comparing the fantasy points of the players each
side received over the weeks following the trade, plus draft pick value.
"""

import logging

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.exceptions import InvalidParameterError
from league_analytics.models.player import PlayerWeeklyPoints
from league_analytics.models.trade_grade import (
    GradedPick,
    GradedPlayer,
    TradeGrade,
    TradeGradeStatus,
    TradeInfo,
)
from league_analytics.models.transaction import Transaction

logger = logging.getLogger(__name__)

PointsIndex = dict[tuple[str, int, int], float]


def index_player_points(points: list[PlayerWeeklyPoints]) -> PointsIndex:
    """Index weekly points by (player_id, season_id, week)."""
    index: PointsIndex = {}
    for p in points:
        key = (p.player_id, p.season_id, p.week)
        index[key] = index.get(key, 0.0) + p.points
    return index


class PickValueTable:
    """
    Draft pick values by round and distance into the future.

    Rounds are counted after the league's keeper rounds; rounds past the
    table get the default value. Each season between the trade and the
    draft multiplies the value by the future discount.
    """

    def __init__(self, settings: Settings):
        self.round_values = dict(settings.pick_round_values)
        self.default_value = settings.default_pick_value
        self.keeper_rounds = settings.keeper_rounds
        self.future_discount = settings.future_pick_discount

    def value(self, round_num: int, pick_season: int, trade_season: int) -> float:
        tradeable_round = round_num - self.keeper_rounds
        base = self.round_values.get(tradeable_round, self.default_value)
        years_out = max(0, pick_season - trade_season)
        return base * self.future_discount**years_out


class TradeGradingService:
    """
    Service for grading trades from one roster's point of view.

    A grade stays pending until the full evaluation window of weeks after
    the trade has been played; after that it is favorable when the roster
    gained points (and pick value) overall, unfavorable otherwise.
    """

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()
        if self.settings.trade_evaluation_weeks < 1:
            raise InvalidParameterError(
                f"Trade evaluation window must be positive, got {self.settings.trade_evaluation_weeks}"
            )
        self.pick_values = PickValueTable(self.settings)

    def grade_trade(
        self,
        transaction: Transaction,
        roster_id: int,
        player_points: list[PlayerWeeklyPoints],
        current_week: int,
        current_season_id: int | None = None,
    ) -> TradeGrade:
        """
        Grade one trade for one roster.

        Args:
            transaction: The trade
            roster_id: Roster whose side is graded
            player_points: Weekly player points
            current_week: Latest week with results in the current season
            current_season_id: Current season, defaults to the context's

        Returns:
            TradeGrade with per-player points, pick values and the grade
        """
        return self._grade(
            transaction,
            roster_id,
            index_player_points(player_points),
            current_week,
            self._current_season_id(current_season_id),
        )

    def grade_roster_trades(
        self,
        transactions: list[Transaction],
        roster_id: int,
        player_points: list[PlayerWeeklyPoints],
        current_week: int,
        current_season_id: int | None = None,
    ) -> list[TradeInfo]:
        """
        Grade every completed trade a roster took part in.

        Args:
            transactions: Raw transactions of any type and status
            roster_id: Roster whose trades are graded
            player_points: Weekly player points
            current_week: Latest week with results in the current season
            current_season_id: Current season, defaults to the context's

        Returns:
            TradeInfo list, newest trade first
        """
        index = index_player_points(player_points)
        current = self._current_season_id(current_season_id)

        trades = [
            t
            for t in transactions
            if t.is_trade and t.is_complete and roster_id in t.roster_ids
        ]
        logger.debug("Grading %d trades for roster %d", len(trades), roster_id)

        infos = [
            TradeInfo(
                transaction_id=t.transaction_id,
                week=t.week,
                season_id=t.season_id,
                season_year=self.ctx.get_season_year(t.season_id),
                created_at=t.created_at,
                grade=self._grade(t, roster_id, index, current_week, current),
            )
            for t in trades
        ]
        infos.sort(
            key=lambda i: (i.season_year, i.week, i.created_at or 0), reverse=True
        )
        return infos

    def evaluation_weeks(
        self, transaction: Transaction, current_week: int, current_season_id: int | None
    ) -> list[int]:
        """
        Weeks of the trade's season that count towards its grade.

        Starts the week after the trade and ends at the window size or the
        current week, whichever comes first. A trade from an earlier season
        has its full window available.
        """
        window = self.settings.trade_evaluation_weeks
        if self._is_past_season(transaction.season_id, current_season_id):
            available = window
        else:
            available = max(0, current_week - transaction.week)
        return [transaction.week + i for i in range(1, min(window, available) + 1)]

    def _grade(
        self,
        transaction: Transaction,
        roster_id: int,
        index: PointsIndex,
        current_week: int,
        current_season_id: int | None,
    ) -> TradeGrade:
        weeks = self.evaluation_weeks(transaction, current_week, current_season_id)
        season_id = transaction.season_id

        acquired = [
            self._graded_player(pid, season_id, weeks, index)
            for pid, rid in (transaction.adds or {}).items()
            if rid == roster_id
        ]
        lost = [
            self._graded_player(pid, season_id, weeks, index)
            for pid, rid in (transaction.drops or {}).items()
            if rid == roster_id
        ]

        trade_year = self.ctx.get_season_year(season_id)
        picks_received: list[GradedPick] = []
        picks_given: list[GradedPick] = []
        for pick in transaction.draft_picks:
            pick_season = self._pick_season(pick.season, trade_year)
            graded = GradedPick(
                round=pick.round,
                season=pick_season,
                value=self.pick_values.value(pick.round, pick_season, trade_year),
            )
            if pick.owner_id == roster_id and pick.previous_owner_id != roster_id:
                picks_received.append(graded)
            elif pick.previous_owner_id == roster_id and pick.owner_id != roster_id:
                picks_given.append(graded)

        player_differential = sum(p.points for p in acquired) - sum(p.points for p in lost)
        pick_value = sum(p.value for p in picks_received) - sum(p.value for p in picks_given)
        total_differential = player_differential + pick_value

        if len(weeks) < self.settings.trade_evaluation_weeks:
            grade = TradeGradeStatus.PENDING
        elif total_differential > 0:
            grade = TradeGradeStatus.FAVORABLE
        else:
            grade = TradeGradeStatus.UNFAVORABLE

        return TradeGrade(
            transaction_id=transaction.transaction_id,
            roster_id=roster_id,
            grade=grade,
            acquired=acquired,
            lost=lost,
            picks_received=picks_received,
            picks_given=picks_given,
            player_differential=player_differential,
            pick_value=pick_value,
            total_differential=total_differential,
            weeks_analyzed=len(weeks),
        )

    def _graded_player(
        self, player_id: str, season_id: int, weeks: list[int], index: PointsIndex
    ) -> GradedPlayer:
        return GradedPlayer(
            player_id=player_id,
            name=self.ctx.get_player_name(player_id),
            points=sum(index.get((player_id, season_id, week), 0.0) for week in weeks),
        )

    def _current_season_id(self, season_id: int | None) -> int | None:
        if season_id is not None:
            return season_id
        current = self.ctx.current_season
        return current.id if current else None

    def _is_past_season(self, season_id: int, current_season_id: int | None) -> bool:
        if current_season_id is None or season_id == current_season_id:
            return False
        trade_year = self.ctx.get_season_year(season_id)
        current_year = self.ctx.get_season_year(current_season_id)
        if trade_year and current_year:
            return trade_year < current_year
        return season_id < current_season_id

    @staticmethod
    def _pick_season(season: str, fallback: int) -> int:
        try:
            return int(season)
        except ValueError:
            return fallback
