"""
League-related Pydantic models.

These are the raw records produced by the sync layer; the analytics services
only read them.
"""

from pydantic import BaseModel, Field

from league_analytics.models.player import Player, PlayerWeeklyPoints
from league_analytics.models.transaction import Transaction


class Roster(BaseModel):
    """League roster identity."""

    roster_id: int
    team_name: str | None = None

    @property
    def display_name(self) -> str:
        """Get team name, falling back to the roster number."""
        return self.team_name or f"Team {self.roster_id}"


class Season(BaseModel):
    """A league season."""

    id: int
    season_year: int
    is_current: bool | None = None


class WeeklyScoreRow(BaseModel):
    """
    One team's score for one week.

    ``points`` is null (or 0) until the game has been played, so it is kept
    optional here; use ``score`` for arithmetic and ``is_played`` to tell a
    played week from an unplayed one.
    """

    season_id: int
    week: int = Field(ge=0)
    game_id: int | None = Field(default=None, description="Rows sharing a game_id faced each other")
    roster_id: int
    points: float | None = None

    @property
    def score(self) -> float:
        """Points with the not-yet-played default applied."""
        return self.points if self.points is not None else 0.0

    @property
    def is_played(self) -> bool:
        return self.points is not None and self.points > 0


class KeeperPick(BaseModel):
    """A draft slot used to keep a player from the previous season."""

    player_id: str
    roster_id: int
    season_id: int
    round: int


class LeagueSnapshot(BaseModel):
    """Every raw collection the dashboard reads for one league."""

    rosters: list[Roster] = Field(default_factory=list)
    seasons: list[Season] = Field(default_factory=list)
    players: list[Player] = Field(default_factory=list)
    weekly_scores: list[WeeklyScoreRow] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    player_points: list[PlayerWeeklyPoints] = Field(default_factory=list)
    keepers: list[KeeperPick] = Field(default_factory=list)
