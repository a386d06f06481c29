"""Pydantic models and schemas."""

from league_analytics.models.league import (
    KeeperPick,
    LeagueSnapshot,
    Roster,
    Season,
    WeeklyScoreRow,
)
from league_analytics.models.matchup import (
    GameResult,
    MatchupPair,
    MatchupSide,
    PairWinner,
    Standing,
    WeeklyResult,
    WinStreak,
)
from league_analytics.models.player import Player, PlayerWeeklyPoints
from league_analytics.models.power_rankings import (
    PowerRankingRow,
    PowerRankingSummary,
    WeeklyRank,
)
from league_analytics.models.pulse import (
    GameOfTheWeek,
    GameReason,
    GameRecord,
    LeaguePulse,
    LeagueRecords,
    ParityMetrics,
    PlayoffStatus,
    PlayoffStatusType,
    ScoreRecord,
    ScoringBucket,
    SeasonHighScore,
    StreakRecord,
    TeamScore,
    WeeklyExtreme,
    WeeklyTrendPoint,
)
from league_analytics.models.rivalry import (
    AllTimeRecord,
    BiggestBlowouts,
    MomentumPoint,
    RevengeGame,
    RivalryStats,
    ScoringComparison,
)
from league_analytics.models.trade_grade import (
    GradedPick,
    GradedPlayer,
    KeeperEvaluation,
    KeeperSeason,
    KeeperSuccess,
    TradeGrade,
    TradeGradeStatus,
    TradeInfo,
)
from league_analytics.models.transaction import (
    ActiveManager,
    DraftPickTrade,
    EnrichedTransaction,
    ManagerActivity,
    PlayerMove,
    PositionChurn,
    TeamRef,
    TradeMatrixCell,
    Transaction,
    TransactionStatus,
    TransactionSummary,
    TransactionType,
    WeekCount,
)

__all__ = [
    # League
    "KeeperPick",
    "LeagueSnapshot",
    "Roster",
    "Season",
    "WeeklyScoreRow",
    # Matchup
    "GameResult",
    "MatchupPair",
    "MatchupSide",
    "PairWinner",
    "Standing",
    "WeeklyResult",
    "WinStreak",
    # Player
    "Player",
    "PlayerWeeklyPoints",
    # Power rankings
    "PowerRankingRow",
    "PowerRankingSummary",
    "WeeklyRank",
    # League pulse
    "GameOfTheWeek",
    "GameReason",
    "GameRecord",
    "LeaguePulse",
    "LeagueRecords",
    "ParityMetrics",
    "PlayoffStatus",
    "PlayoffStatusType",
    "ScoreRecord",
    "ScoringBucket",
    "SeasonHighScore",
    "StreakRecord",
    "TeamScore",
    "WeeklyExtreme",
    "WeeklyTrendPoint",
    # Rivalry
    "AllTimeRecord",
    "BiggestBlowouts",
    "MomentumPoint",
    "RevengeGame",
    "RivalryStats",
    "ScoringComparison",
    # Trade grading
    "GradedPick",
    "GradedPlayer",
    "KeeperEvaluation",
    "KeeperSeason",
    "KeeperSuccess",
    "TradeGrade",
    "TradeGradeStatus",
    "TradeInfo",
    # Transaction
    "ActiveManager",
    "DraftPickTrade",
    "EnrichedTransaction",
    "ManagerActivity",
    "PlayerMove",
    "PositionChurn",
    "TeamRef",
    "TradeMatrixCell",
    "Transaction",
    "TransactionStatus",
    "TransactionSummary",
    "TransactionType",
    "WeekCount",
]
