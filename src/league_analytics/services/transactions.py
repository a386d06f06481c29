"""
Transaction Analytics Service

Aggregates completed transactions into manager activity, trade-partner
counts and position churn.
"""

import logging
from collections import Counter, defaultdict

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.models.transaction import (
    ActiveManager,
    EnrichedTransaction,
    ManagerActivity,
    PlayerMove,
    PositionChurn,
    TeamRef,
    TradeMatrixCell,
    Transaction,
    TransactionSummary,
    TransactionType,
    WeekCount,
)

logger = logging.getLogger(__name__)

CHURN_POSITIONS = ["QB", "RB", "WR", "TE", "K", "DEF"]

_ACTIVITY_FIELDS = {
    TransactionType.TRADE: "trades",
    TransactionType.WAIVER: "waivers",
    TransactionType.FREE_AGENT: "free_agents",
    TransactionType.COMMISSIONER: "commissioner",
}


def completed(transactions: list[Transaction]) -> list[Transaction]:
    """Only completed transactions take part in analytics."""
    return [t for t in transactions if t.is_complete]


class TransactionService:
    """
    Service for analyzing league transactions.

    Provides methods to:
    - Resolve team and player names on transactions
    - Count transactions per manager and per type
    - Build the trade-partner matrix
    - Track adds and drops by position

    Failed and pending transactions are ignored by every method.
    """

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()

    def extract_player_ids(self, transactions: list[Transaction]) -> list[str]:
        """Unique player IDs added or dropped, in first-seen order."""
        seen: dict[str, None] = {}
        for txn in completed(transactions):
            for player_id in (txn.adds or {}):
                seen.setdefault(player_id, None)
            for player_id in (txn.drops or {}):
                seen.setdefault(player_id, None)
        return list(seen)

    def enrich_transactions(
        self, transactions: list[Transaction]
    ) -> list[EnrichedTransaction]:
        """
        Attach team names and player details to transactions.

        Args:
            transactions: Raw transactions

        Returns:
            EnrichedTransaction list in input order
        """
        enriched = []
        for txn in completed(transactions):
            enriched.append(
                EnrichedTransaction(
                    transaction=txn,
                    involved_teams=[
                        TeamRef(roster_id=rid, team_name=self.ctx.get_team_name(rid))
                        for rid in txn.roster_ids
                    ],
                    added_players=[
                        self._player_move(pid, rid) for pid, rid in (txn.adds or {}).items()
                    ],
                    dropped_players=[
                        self._player_move(pid, rid) for pid, rid in (txn.drops or {}).items()
                    ],
                )
            )
        return enriched

    def calculate_manager_activity(
        self, transactions: list[Transaction]
    ) -> list[ManagerActivity]:
        """
        Count each manager's transactions by type.

        Args:
            transactions: Raw transactions

        Returns:
            ManagerActivity per roster, busiest first
        """
        activity: dict[int, ManagerActivity] = {
            rid: ManagerActivity(roster_id=rid, team_name=self.ctx.get_team_name(rid))
            for rid in self.ctx.roster_ids()
        }

        for txn in completed(transactions):
            field = _ACTIVITY_FIELDS[txn.type]
            for rid in txn.roster_ids:
                row = activity.get(rid)
                if row is None:
                    row = activity[rid] = ManagerActivity(
                        roster_id=rid, team_name=self.ctx.get_team_name(rid)
                    )
                setattr(row, field, getattr(row, field) + 1)
                row.total += 1

        return sorted(activity.values(), key=lambda a: (-a.total, a.roster_id))

    def build_trade_matrix(self, transactions: list[Transaction]) -> list[TradeMatrixCell]:
        """
        Count trades between each pair of rosters.

        Only two-team trades are counted; the pair key is order-independent.

        Args:
            transactions: Raw transactions

        Returns:
            One cell per trading pair, most trades first
        """
        counts: Counter[tuple[int, int]] = Counter()
        for txn in completed(transactions):
            if txn.is_trade and txn.teams_count == 2:
                first, second = sorted(txn.roster_ids)
                counts[(first, second)] += 1

        cells = [
            TradeMatrixCell(
                roster_id_1=first,
                roster_id_2=second,
                team_name_1=self.ctx.get_team_name(first),
                team_name_2=self.ctx.get_team_name(second),
                trade_count=count,
            )
            for (first, second), count in counts.items()
        ]
        return sorted(cells, key=lambda c: (-c.trade_count, c.roster_id_1, c.roster_id_2))

    def calculate_position_churn(self, transactions: list[Transaction]) -> list[PositionChurn]:
        """
        League-wide adds and drops per fantasy position.

        Players at other positions, or with no known position, are not reported.

        Args:
            transactions: Raw transactions

        Returns:
            PositionChurn for QB, RB, WR, TE, K and DEF in that order
        """
        adds: Counter[str] = Counter()
        drops: Counter[str] = Counter()
        for txn in completed(transactions):
            for player_id in (txn.adds or {}):
                adds[self.ctx.get_player_position(player_id) or "Unknown"] += 1
            for player_id in (txn.drops or {}):
                drops[self.ctx.get_player_position(player_id) or "Unknown"] += 1

        return [
            PositionChurn(
                position=pos,
                adds=adds[pos],
                drops=drops[pos],
                net=adds[pos] - drops[pos],
            )
            for pos in CHURN_POSITIONS
        ]

    def get_transaction_summary(self, transactions: list[Transaction]) -> TransactionSummary:
        """
        Get summary statistics for all transactions.

        Args:
            transactions: Raw transactions

        Returns:
            TransactionSummary with totals, busiest week and most active manager
        """
        txns = completed(transactions)
        if not txns:
            return TransactionSummary()

        by_type: dict[TransactionType, int] = defaultdict(int)
        by_week: dict[int, int] = defaultdict(int)
        for txn in txns:
            by_type[txn.type] += 1
            by_week[txn.week] += 1

        # Earliest week wins a tie for busiest
        busiest_week, busiest_count = max(
            sorted(by_week.items()), key=lambda item: item[1]
        )

        activity = self.calculate_manager_activity(txns)
        most_active = activity[0] if activity and activity[0].total > 0 else None

        logger.debug("Summarised %d completed transactions", len(txns))

        return TransactionSummary(
            total_transactions=len(txns),
            total_trades=by_type[TransactionType.TRADE],
            total_waivers=by_type[TransactionType.WAIVER],
            total_free_agents=by_type[TransactionType.FREE_AGENT],
            total_commissioner=by_type[TransactionType.COMMISSIONER],
            busiest_week=WeekCount(week=busiest_week, count=busiest_count),
            most_active_manager=(
                ActiveManager(
                    roster_id=most_active.roster_id,
                    team_name=most_active.team_name,
                    count=most_active.total,
                )
                if most_active
                else None
            ),
        )

    @staticmethod
    def group_by_week(
        transactions: list[EnrichedTransaction],
    ) -> dict[int, list[EnrichedTransaction]]:
        """Group enriched transactions by week, ordered by week number."""
        by_week: dict[int, list[EnrichedTransaction]] = defaultdict(list)
        for txn in transactions:
            by_week[txn.week].append(txn)
        return {week: by_week[week] for week in sorted(by_week)}

    @staticmethod
    def filter_by_type(
        transactions: list[EnrichedTransaction], types: list[TransactionType]
    ) -> list[EnrichedTransaction]:
        """Keep the given types; an empty filter keeps everything."""
        if not types:
            return list(transactions)
        return [t for t in transactions if t.type in types]

    def _player_move(self, player_id: str, roster_id: int) -> PlayerMove:
        return PlayerMove(
            player_id=player_id,
            name=self.ctx.get_player_name(player_id),
            position=self.ctx.get_player_position(player_id) or "N/A",
            roster_id=roster_id,
            team_name=self.ctx.get_team_name(roster_id),
        )
