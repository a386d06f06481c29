"""
Trade Grading Models

Post-trade production comparison and keeper evaluation.
"""

from enum import Enum

from pydantic import BaseModel, Field


class TradeGradeStatus(str, Enum):
    """Outcome of a trade for one roster."""

    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"
    PENDING = "pending"


class GradedPlayer(BaseModel):
    player_id: str
    name: str
    points: float = Field(default=0.0, description="Points inside the evaluation window")


class GradedPick(BaseModel):
    round: int
    season: int
    value: float


class TradeGrade(BaseModel):
    """A single trade graded from one roster's point of view."""

    transaction_id: str
    roster_id: int
    grade: TradeGradeStatus
    acquired: list[GradedPlayer] = Field(default_factory=list)
    lost: list[GradedPlayer] = Field(default_factory=list)
    picks_received: list[GradedPick] = Field(default_factory=list)
    picks_given: list[GradedPick] = Field(default_factory=list)
    player_differential: float = 0.0
    pick_value: float = 0.0
    total_differential: float = 0.0
    weeks_analyzed: int = 0


class TradeInfo(BaseModel):
    """A graded trade with its timing."""

    transaction_id: str
    week: int
    season_id: int
    season_year: int
    created_at: int | None = None
    grade: TradeGrade


class KeeperEvaluation(BaseModel):
    """A kept player's production in the season they were kept."""

    player_id: str
    player_name: str
    position: str | None = None
    round: int
    total_points: float = 0.0
    is_top_performer: bool = False


class KeeperSeason(BaseModel):
    roster_id: int
    season_id: int
    season_year: int
    keepers: list[KeeperEvaluation] = Field(default_factory=list)


class KeeperSuccess(BaseModel):
    """Share of a roster's keepers that beat the league-average keeper."""

    roster_id: int
    team_name: str
    keepers: int = 0
    success_rate: float = Field(default=0.0, description="Percentage, 0-100")
