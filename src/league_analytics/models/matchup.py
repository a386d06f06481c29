"""
Matchup-related Pydantic models.
"""

from enum import Enum

from pydantic import BaseModel, Field

from league_analytics.rounding import round_tenths


class PairWinner(str, Enum):
    """Outcome of a head-to-head pairing."""

    TEAM_A = "team_a"
    TEAM_B = "team_b"
    TIE = "tie"


class GameResult(str, Enum):
    """A single team's result for a week."""

    WIN = "W"
    LOSS = "L"
    TIE = "T"


class MatchupSide(BaseModel):
    """A team's side of a matchup."""

    roster_id: int
    team_name: str
    points: float = 0.0


class MatchupPair(BaseModel):
    """Two teams that played each other in a given season and week."""

    season_id: int
    season_year: int
    week: int
    game_id: int
    team_a: MatchupSide
    team_b: MatchupSide
    winner: PairWinner
    margin: float = Field(ge=0, description="|team_a.points - team_b.points|")

    @property
    def combined_points(self) -> float:
        return self.team_a.points + self.team_b.points

    @property
    def winning_side(self) -> MatchupSide | None:
        if self.winner == PairWinner.TEAM_A:
            return self.team_a
        if self.winner == PairWinner.TEAM_B:
            return self.team_b
        return None

    @property
    def losing_side(self) -> MatchupSide | None:
        if self.winner == PairWinner.TEAM_A:
            return self.team_b
        if self.winner == PairWinner.TEAM_B:
            return self.team_a
        return None

    def involves(self, roster_id: int) -> bool:
        return roster_id in (self.team_a.roster_id, self.team_b.roster_id)

    def result_for(self, roster_id: int) -> GameResult:
        """Result from one participant's point of view."""
        if self.winner == PairWinner.TIE:
            return GameResult.TIE
        won = self.winning_side
        return GameResult.WIN if won and won.roster_id == roster_id else GameResult.LOSS

    def side_for(self, roster_id: int) -> MatchupSide:
        return self.team_a if self.team_a.roster_id == roster_id else self.team_b

    def opponent_of(self, roster_id: int) -> MatchupSide:
        return self.team_b if self.team_a.roster_id == roster_id else self.team_a


class WeeklyResult(BaseModel):
    """A team's result for a single week."""

    season_year: int
    week: int
    points: float
    opponent_roster_id: int
    opponent: str
    opponent_points: float
    result: GameResult

    @property
    def won(self) -> bool:
        return self.result == GameResult.WIN


class Standing(BaseModel):
    """League standing entry."""

    rank: int
    roster_id: int
    team_name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    streak: int = Field(default=0, description="Length of the current W or L run")
    streak_type: GameResult | None = Field(
        default=None, description="W or L; None when the last game was a tie"
    )

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_pct(self) -> float:
        if self.games_played == 0:
            return 0.0
        return round_tenths(self.wins / self.games_played * 100)

    @property
    def avg_points(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.points_for / self.games_played


class WinStreak(BaseModel):
    """Current and longest win streaks for a roster."""

    roster_id: int
    current: int = 0
    longest: int = 0
    season_year: int | None = Field(
        default=None, description="Season in which the longest streak was reached"
    )
