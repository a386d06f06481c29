"""
League Pulse Models

League-wide scoring extremes, excitement, parity, records and the playoff race.
"""

from enum import Enum

from pydantic import BaseModel, Field

from league_analytics.models.matchup import MatchupPair


class TeamScore(BaseModel):
    roster_id: int
    team_name: str
    points: float


class WeeklyExtreme(BaseModel):
    """Highest and lowest scorer of a week."""

    week: int
    high: TeamScore
    low: TeamScore
    spread: float


class GameReason(str, Enum):
    PHOTO_FINISH = "Photo Finish"
    NAIL_BITER = "Nail-biter"
    SHOOTOUT = "Shootout"
    STATEMENT_WIN = "Statement Win"
    CLASSIC_CLASH = "Classic Clash"


class GameOfTheWeek(BaseModel):
    matchup: MatchupPair
    excitement_score: float
    reason: GameReason


class WeeklyTrendPoint(BaseModel):
    week: int
    avg_score: float
    high_score: float
    low_score: float
    median_score: float


class ScoringBucket(BaseModel):
    """Histogram bucket covering [min, max)."""

    range: str
    min: float
    max: float
    count: int
    percentage: int


class ParityMetrics(BaseModel):
    parity_index: int = Field(default=0, ge=0, le=100, description="Higher = more competitive")
    avg_margin: float = 0.0
    close_game_percentage: int = 0
    blowout_percentage: int = 0
    total_games: int = 0

    @property
    def label(self) -> str:
        if self.parity_index >= 80:
            return "Highly Competitive"
        if self.parity_index >= 60:
            return "Well-Balanced"
        if self.parity_index >= 40:
            return "Moderate"
        if self.parity_index >= 20:
            return "Top-Heavy"
        return "Dominated"

    @property
    def margin_label(self) -> str:
        if self.avg_margin < 10:
            return "Nail-biters"
        if self.avg_margin < 20:
            return "Competitive"
        if self.avg_margin < 30:
            return "Moderate"
        return "Blowout-Heavy"


class ScoreRecord(BaseModel):
    """A single-team scoring record."""

    roster_id: int
    team_name: str
    value: float
    week: int
    season_year: int


class GameRecord(BaseModel):
    """A single-game margin record."""

    winner: str
    loser: str
    margin: float
    week: int
    season_year: int


class StreakRecord(BaseModel):
    roster_id: int
    team_name: str
    streak: int
    season_year: int | None = None


class LeagueRecords(BaseModel):
    highest_score: ScoreRecord | None = None
    lowest_score: ScoreRecord | None = None
    lowest_winning_score: ScoreRecord | None = None
    biggest_blowout: GameRecord | None = None
    closest_game: GameRecord | None = None
    longest_win_streak: StreakRecord | None = None


class PlayoffStatusType(str, Enum):
    CLINCHED = "clinched"
    CONTENDING = "contending"
    IN_HUNT = "in_hunt"
    ELIMINATED = "eliminated"


class PlayoffStatus(BaseModel):
    roster_id: int
    team_name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    status: PlayoffStatusType
    games_back: int = Field(default=0, ge=0)


class SeasonHighScore(BaseModel):
    roster_id: int
    team_name: str
    points: float
    week: int


class LeaguePulse(BaseModel):
    """Every pulse metric for one season."""

    season_id: int
    max_week: int = 0
    weekly_extremes: list[WeeklyExtreme] = Field(default_factory=list)
    game_of_the_week: GameOfTheWeek | None = None
    matchup_pairs: list[MatchupPair] = Field(default_factory=list)
    weekly_trends: list[WeeklyTrendPoint] = Field(default_factory=list)
    scoring_distribution: list[ScoringBucket] = Field(default_factory=list)
    parity_metrics: ParityMetrics = Field(default_factory=ParityMetrics)
    league_records: LeagueRecords = Field(
        default_factory=LeagueRecords, description="All-time, across every season"
    )
    playoff_race: list[PlayoffStatus] = Field(default_factory=list)
    season_high_score: SeasonHighScore | None = None
