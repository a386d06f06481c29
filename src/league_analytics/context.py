"""
League Context

Holds the reference records every analytics service needs (rosters, seasons,
players) and provides convenient lookups with display fallbacks.
"""

from league_analytics.models import LeagueSnapshot, Player, Roster, Season


class LeagueContext:
    """
    Helper class to hold league context and provide convenient lookups.

    Resolves roster IDs to team names, season IDs to season years and
    player IDs to player info. Unknown IDs resolve to synthesized defaults
    instead of raising.
    """

    def __init__(
        self,
        rosters: list[Roster],
        seasons: list[Season] | None = None,
        players: list[Player] | None = None,
    ):
        self.rosters = list(rosters)
        self.seasons = sorted(seasons or [], key=lambda s: s.season_year)
        self.players = list(players or [])

        self._roster_map: dict[int, Roster] = {r.roster_id: r for r in self.rosters}
        self._season_map: dict[int, Season] = {s.id: s for s in self.seasons}
        self._player_map: dict[str, Player] = {p.player_id: p for p in self.players}

    @classmethod
    def from_snapshot(cls, snapshot: LeagueSnapshot) -> "LeagueContext":
        """Build a context from the reference collections of a snapshot."""
        return cls(
            rosters=snapshot.rosters,
            seasons=snapshot.seasons,
            players=snapshot.players,
        )

    # ==================== Rosters ====================

    def get_team_name(self, roster_id: int) -> str:
        """Get team name from roster ID."""
        roster = self._roster_map.get(roster_id)
        if roster:
            return roster.display_name
        return f"Team {roster_id}"

    def get_roster(self, roster_id: int) -> Roster | None:
        """Get roster by ID."""
        return self._roster_map.get(roster_id)

    def roster_ids(self) -> list[int]:
        """Get all roster IDs in the league."""
        return list(self._roster_map.keys())

    # ==================== Seasons ====================

    def get_season(self, season_id: int) -> Season | None:
        return self._season_map.get(season_id)

    def get_season_year(self, season_id: int) -> int:
        """Get the season year, 0 when the season is unknown."""
        season = self._season_map.get(season_id)
        return season.season_year if season else 0

    @property
    def current_season(self) -> Season | None:
        """The season flagged current, else the most recent one."""
        for season in self.seasons:
            if season.is_current:
                return season
        return self.seasons[-1] if self.seasons else None

    # ==================== Players ====================

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        return self._player_map.get(player_id)

    def get_player_name(self, player_id: str) -> str:
        """Get player name from player ID."""
        player = self._player_map.get(player_id)
        if player:
            return player.display_name
        return f"Player {player_id}"

    def get_player_position(self, player_id: str) -> str | None:
        """Get player position from player ID."""
        player = self._player_map.get(player_id)
        if player and player.position:
            return player.position
        return None
