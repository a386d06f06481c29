"""
Power Ranking Models

Composite team strength combining record, scoring, all-play and consistency.
"""

from pydantic import BaseModel, Field


class WeeklyRank(BaseModel):
    """Power rank computed using only the data through one week."""

    week: int
    rank: int
    points: float = Field(description="Average points through this week")


class PowerRankingRow(BaseModel):
    """Power ranking for one roster in one season."""

    roster_id: int
    team_name: str
    power_rank: int = 0
    power_score: float = 0.0
    actual_wins: int = 0
    actual_losses: int = 0
    actual_ties: int = 0
    expected_wins: float = Field(
        default=0.0, description="All-play wins, each week normalised to 0-1"
    )
    luck_index: float = Field(
        default=0.0, description="actual_wins - expected_wins; positive = lucky"
    )
    should_be_wins: int = Field(default=0, description="Weeks at or above the league median")
    should_be_losses: int = 0
    consistency_score: float = Field(
        default=0.0, description="Std dev of weekly points; lower = more consistent"
    )
    avg_points: float = 0.0
    total_points: float = 0.0
    strength_of_schedule: float = Field(
        default=0.0, description="Average points scored by actual opponents"
    )
    weekly_ranks: list[WeeklyRank] = Field(default_factory=list)
    weeks_played: int = 0


class PowerRankingSummary(BaseModel):
    """Headline teams from a set of power rankings."""

    luckiest: PowerRankingRow | None = None
    unluckiest: PowerRankingRow | None = None
    most_consistent: PowerRankingRow | None = None
    toughest_schedule: PowerRankingRow | None = None
