"""
Player-related Pydantic models.
"""

from pydantic import BaseModel, Field


class Player(BaseModel):
    """NFL player reference data."""

    player_id: str
    full_name: str | None = None
    position: str | None = None

    @property
    def display_name(self) -> str:
        """Get display name for the player."""
        return self.full_name or f"Player {self.player_id}"


class PlayerWeeklyPoints(BaseModel):
    """Fantasy points a player scored in one week of one season."""

    player_id: str
    season_id: int
    week: int = Field(ge=0)
    points: float = 0.0
