"""
Standings Service

Folds matchup pairs into records, points and win/loss streaks.
"""

import logging

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.models.matchup import (
    GameResult,
    MatchupPair,
    PairWinner,
    Standing,
    WinStreak,
)
from league_analytics.services.matchups import chronological_key

logger = logging.getLogger(__name__)


def current_streak(results: list[GameResult]) -> tuple[int, GameResult | None]:
    """
    Length and type of the run at the end of a chronological result list.

    A tie as the most recent result means there is no active streak.
    """
    if not results:
        return 0, None

    last = results[-1]
    if last == GameResult.TIE:
        return 0, None

    streak = 0
    for result in reversed(results):
        if result != last:
            break
        streak += 1
    return streak, last


class StandingsService:
    """
    Service for league standings.

    Provides methods to:
    - Calculate standings with current streaks
    - Track current and longest win streaks across seasons
    """

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()

    def calculate_standings(
        self, pairs: list[MatchupPair], season_id: int | None = None
    ) -> list[Standing]:
        """
        Get league standings.

        Args:
            pairs: Matchup pairs; restricted to season_id when given
            season_id: Season to rank, or None for all-time

        Returns:
            List of Standing objects sorted by wins then points for
        """
        if season_id is not None:
            pairs = [p for p in pairs if p.season_id == season_id]
        pairs = sorted(pairs, key=chronological_key)

        records: dict[int, dict] = {
            rid: self._empty_record() for rid in self.ctx.roster_ids()
        }
        results_by_roster: dict[int, list[GameResult]] = {}

        for pair in pairs:
            for side, other in ((pair.team_a, pair.team_b), (pair.team_b, pair.team_a)):
                record = records.setdefault(side.roster_id, self._empty_record())
                record["points_for"] += side.points
                record["points_against"] += other.points

                result = pair.result_for(side.roster_id)
                if result == GameResult.WIN:
                    record["wins"] += 1
                elif result == GameResult.LOSS:
                    record["losses"] += 1
                else:
                    record["ties"] += 1
                results_by_roster.setdefault(side.roster_id, []).append(result)

        logger.debug("Standings from %d pairs across %d rosters", len(pairs), len(records))

        ordered = sorted(
            records.items(),
            key=lambda item: (item[1]["wins"], item[1]["points_for"]),
            reverse=True,
        )

        standings = []
        for rank, (roster_id, record) in enumerate(ordered, start=1):
            streak, streak_type = current_streak(results_by_roster.get(roster_id, []))
            standings.append(
                Standing(
                    rank=rank,
                    roster_id=roster_id,
                    team_name=self.ctx.get_team_name(roster_id),
                    streak=streak,
                    streak_type=streak_type,
                    **record,
                )
            )
        return standings

    def calculate_win_streaks(self, pairs: list[MatchupPair]) -> dict[int, WinStreak]:
        """
        Track win streaks with a chronological fold over all pairs.

        Streaks carry across season boundaries; a loss or a tie ends them.

        Args:
            pairs: Matchup pairs from any number of seasons

        Returns:
            Dict mapping roster ID to its WinStreak
        """
        streaks: dict[int, WinStreak] = {
            rid: WinStreak(roster_id=rid) for rid in self.ctx.roster_ids()
        }

        for pair in sorted(pairs, key=chronological_key):
            for side in (pair.team_a, pair.team_b):
                streak = streaks.setdefault(side.roster_id, WinStreak(roster_id=side.roster_id))
                if pair.winner != PairWinner.TIE and pair.winning_side.roster_id == side.roster_id:
                    streak.current += 1
                    if streak.current > streak.longest:
                        streak.longest = streak.current
                        streak.season_year = pair.season_year
                else:
                    streak.current = 0

        return streaks

    @staticmethod
    def _empty_record() -> dict:
        return {
            "wins": 0,
            "losses": 0,
            "ties": 0,
            "points_for": 0.0,
            "points_against": 0.0,
        }
