"""
Rivalry Models

Head-to-head history between two teams.
"""

from typing import Literal

from pydantic import BaseModel, Field

from league_analytics.models.matchup import MatchupPair, PairWinner


class AllTimeRecord(BaseModel):
    team_a_wins: int = 0
    team_b_wins: int = 0
    ties: int = 0
    total_games: int = 0


class ScoringComparison(BaseModel):
    team_a_avg: float = 0.0
    team_b_avg: float = 0.0
    team_a_total: float = 0.0
    team_b_total: float = 0.0


class BiggestBlowouts(BaseModel):
    team_a: MatchupPair | None = Field(default=None, description="Team A's biggest win")
    team_b: MatchupPair | None = Field(default=None, description="Team B's biggest win")
    overall: MatchupPair | None = None


class RevengeGame(BaseModel):
    """A win over an opponent that had beaten this team last time."""

    loss_matchup: MatchupPair
    revenge_matchup: MatchupPair
    weeks_between: int = Field(ge=0)
    avenged_by: Literal["team_a", "team_b"]


class MomentumPoint(BaseModel):
    """One point of the rivalry point-differential series."""

    label: str = Field(description="e.g. '24W3'")
    margin: float = Field(description="Positive when team A won, negative when team B won")
    winner: PairWinner
    team_a_points: float
    team_b_points: float
    week: int
    season_year: int


class RivalryStats(BaseModel):
    """Complete head-to-head analysis between two rosters."""

    team_a_roster_id: int
    team_b_roster_id: int
    team_a_name: str
    team_b_name: str
    all_time_record: AllTimeRecord
    scoring_comparison: ScoringComparison
    biggest_blowouts: BiggestBlowouts
    closest_games: list[MatchupPair] = Field(default_factory=list)
    revenge_games: list[RevengeGame] = Field(default_factory=list)
    matchup_history: list[MatchupPair] = Field(default_factory=list)
    momentum: list[MomentumPoint] = Field(default_factory=list)
