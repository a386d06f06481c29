"""
Transaction-related Pydantic models.
"""

from enum import Enum

from pydantic import BaseModel, Field


class TransactionType(str, Enum):
    """Types of transactions in Sleeper."""

    TRADE = "trade"
    WAIVER = "waiver"
    FREE_AGENT = "free_agent"
    COMMISSIONER = "commissioner"


class TransactionStatus(str, Enum):
    """Transaction status."""

    COMPLETE = "complete"
    PENDING = "pending"
    FAILED = "failed"


class DraftPickTrade(BaseModel):
    """Draft pick moved by a transaction."""

    season: str
    round: int
    roster_id: int = Field(description="Roster the pick originally belongs to")
    previous_owner_id: int | None = None
    owner_id: int


class Transaction(BaseModel):
    """League transaction."""

    transaction_id: str
    season_id: int
    week: int = Field(default=0, description="Week the transaction occurred")
    type: TransactionType
    status: TransactionStatus
    roster_ids: list[int] = Field(default_factory=list)
    adds: dict[str, int] | None = Field(
        default=None, description="Player ID -> Roster ID receiving"
    )
    drops: dict[str, int] | None = Field(
        default=None, description="Player ID -> Roster ID dropping"
    )
    draft_picks: list[DraftPickTrade] = Field(default_factory=list)
    created_at: int | None = Field(default=None, description="Unix timestamp (ms)")

    @property
    def is_trade(self) -> bool:
        return self.type == TransactionType.TRADE

    @property
    def is_complete(self) -> bool:
        return self.status == TransactionStatus.COMPLETE

    @property
    def teams_count(self) -> int:
        return len(self.roster_ids)


class TeamRef(BaseModel):
    """A roster resolved to its display name."""

    roster_id: int
    team_name: str


class PlayerMove(BaseModel):
    """A player added to or dropped from a roster."""

    player_id: str
    name: str
    position: str
    roster_id: int
    team_name: str


class EnrichedTransaction(BaseModel):
    """Transaction with team and player names resolved."""

    transaction: Transaction
    involved_teams: list[TeamRef] = Field(default_factory=list)
    added_players: list[PlayerMove] = Field(default_factory=list)
    dropped_players: list[PlayerMove] = Field(default_factory=list)

    @property
    def week(self) -> int:
        return self.transaction.week

    @property
    def type(self) -> TransactionType:
        return self.transaction.type


class ManagerActivity(BaseModel):
    """Transaction counts for one manager."""

    roster_id: int
    team_name: str
    trades: int = 0
    waivers: int = 0
    free_agents: int = 0
    commissioner: int = 0
    total: int = 0


class TradeMatrixCell(BaseModel):
    """Number of trades between one pair of rosters."""

    roster_id_1: int = Field(description="Lower roster ID of the pair")
    roster_id_2: int
    team_name_1: str
    team_name_2: str
    trade_count: int


class PositionChurn(BaseModel):
    """League-wide adds and drops at one position."""

    position: str
    adds: int = 0
    drops: int = 0
    net: int = Field(default=0, description="adds - drops")


class WeekCount(BaseModel):
    week: int
    count: int


class ActiveManager(BaseModel):
    roster_id: int
    team_name: str
    count: int


class TransactionSummary(BaseModel):
    """Summary of transactions in a league."""

    total_transactions: int = 0
    total_trades: int = 0
    total_waivers: int = 0
    total_free_agents: int = 0
    total_commissioner: int = 0
    busiest_week: WeekCount | None = None
    most_active_manager: ActiveManager | None = None
