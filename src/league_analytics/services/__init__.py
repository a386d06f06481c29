"""Business logic services."""

from league_analytics.services.keepers import KeeperService
from league_analytics.services.league_pulse import LeaguePulseService
from league_analytics.services.matchups import MatchupService
from league_analytics.services.power_rankings import PowerRankingService
from league_analytics.services.rivalry import RivalryService
from league_analytics.services.standings import StandingsService
from league_analytics.services.trade_grading import TradeGradingService
from league_analytics.services.transactions import TransactionService

__all__ = [
    # Matchups
    "MatchupService",
    "StandingsService",
    # Rankings
    "PowerRankingService",
    # Rivalry
    "RivalryService",
    # League pulse
    "LeaguePulseService",
    # Transactions/Trades
    "TransactionService",
    "TradeGradingService",
    "KeeperService",
]
