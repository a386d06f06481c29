"""
Matchup Pairing Service

Groups per-roster weekly score rows into head-to-head pairs and resolves
winners and margins. Every other engine consumes these pairs.
"""

import logging
from collections import defaultdict

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.models.league import WeeklyScoreRow
from league_analytics.models.matchup import (
    MatchupPair,
    MatchupSide,
    PairWinner,
    WeeklyResult,
)

logger = logging.getLogger(__name__)

GameKey = tuple[int, int, int]


def group_rows_by_game(rows: list[WeeklyScoreRow]) -> dict[GameKey, list[WeeklyScoreRow]]:
    """Group rows by (season_id, week, game_id); rows without a game_id are skipped."""
    groups: dict[GameKey, list[WeeklyScoreRow]] = defaultdict(list)
    for row in rows:
        if row.game_id is None:
            continue
        groups[(row.season_id, row.week, row.game_id)].append(row)
    return groups


def group_rows_by_week(rows: list[WeeklyScoreRow]) -> dict[int, list[WeeklyScoreRow]]:
    """Group rows by week, ordered by week number."""
    by_week: dict[int, list[WeeklyScoreRow]] = defaultdict(list)
    for row in rows:
        by_week[row.week].append(row)
    return {week: by_week[week] for week in sorted(by_week)}


def chronological_key(pair: MatchupPair) -> tuple[int, int, int]:
    return (pair.season_year, pair.week, pair.game_id)


class MatchupService:
    """
    Service for pairing weekly score rows into matchups.

    Provides methods to:
    - Build all matchup pairs for a league
    - Isolate the head-to-head pairs of two rosters
    - Produce a roster's week-by-week results

    Pairs are always returned in chronological order (season year, then
    week), which the streak and revenge scans depend on.
    """

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()

    def build_pairs(self, rows: list[WeeklyScoreRow]) -> list[MatchupPair]:
        """
        Pair every game that has exactly two rows.

        Team A is the lower roster ID. Groups with any other size, and games
        where both teams still have 0 points, are dropped.

        Args:
            rows: Weekly score rows, any order

        Returns:
            Chronologically sorted MatchupPair list
        """
        pairs: list[MatchupPair] = []
        malformed = 0
        unplayed = 0

        for (season_id, week, game_id), group in group_rows_by_game(rows).items():
            if len(group) != 2:
                malformed += 1
                continue

            first, second = sorted(group, key=lambda r: r.roster_id)
            pair = self._make_pair(season_id, week, game_id, first, second)
            if pair is None:
                unplayed += 1
                continue
            pairs.append(pair)

        if malformed or unplayed:
            logger.debug(
                "Dropped %d malformed and %d unplayed games out of %d rows",
                malformed,
                unplayed,
                len(rows),
            )

        pairs.sort(key=chronological_key)
        return pairs

    def find_head_to_head(
        self,
        rows: list[WeeklyScoreRow],
        team_a_roster_id: int,
        team_b_roster_id: int,
        season_id: int | None = None,
    ) -> list[MatchupPair]:
        """
        Find every game the two rosters played against each other.

        Args:
            rows: Weekly score rows for any number of rosters
            team_a_roster_id: Roster oriented as team A
            team_b_roster_id: Roster oriented as team B
            season_id: Restrict to one season when given

        Returns:
            Chronologically sorted pairs with team A = team_a_roster_id
        """
        wanted = {team_a_roster_id, team_b_roster_id}
        relevant = [
            r
            for r in rows
            if r.roster_id in wanted and (season_id is None or r.season_id == season_id)
        ]

        pairs: list[MatchupPair] = []
        for (sid, week, game_id), group in group_rows_by_game(relevant).items():
            if len(group) != 2 or {r.roster_id for r in group} != wanted:
                continue

            row_a = next(r for r in group if r.roster_id == team_a_roster_id)
            row_b = next(r for r in group if r.roster_id == team_b_roster_id)
            pair = self._make_pair(sid, week, game_id, row_a, row_b)
            if pair is not None:
                pairs.append(pair)

        pairs.sort(key=chronological_key)
        return pairs

    def weekly_results(
        self, pairs: list[MatchupPair], roster_id: int
    ) -> list[WeeklyResult]:
        """
        Get a roster's results in the order of the given pairs.

        Args:
            pairs: Chronologically sorted pairs
            roster_id: Team's roster ID

        Returns:
            List of WeeklyResult for the games the roster played
        """
        results = []
        for pair in pairs:
            if not pair.involves(roster_id):
                continue
            mine = pair.side_for(roster_id)
            theirs = pair.opponent_of(roster_id)
            results.append(
                WeeklyResult(
                    season_year=pair.season_year,
                    week=pair.week,
                    points=mine.points,
                    opponent_roster_id=theirs.roster_id,
                    opponent=theirs.team_name,
                    opponent_points=theirs.points,
                    result=pair.result_for(roster_id),
                )
            )
        return results

    def _make_pair(
        self,
        season_id: int,
        week: int,
        game_id: int,
        row_a: WeeklyScoreRow,
        row_b: WeeklyScoreRow,
    ) -> MatchupPair | None:
        """Build a pair, or None when neither side has scored yet."""
        points_a = row_a.score
        points_b = row_b.score

        # 0-0 means the game has not been played
        if points_a == 0 and points_b == 0:
            return None

        if points_a > points_b:
            winner = PairWinner.TEAM_A
        elif points_b > points_a:
            winner = PairWinner.TEAM_B
        else:
            winner = PairWinner.TIE

        return MatchupPair(
            season_id=season_id,
            season_year=self.ctx.get_season_year(season_id),
            week=week,
            game_id=game_id,
            team_a=MatchupSide(
                roster_id=row_a.roster_id,
                team_name=self.ctx.get_team_name(row_a.roster_id),
                points=points_a,
            ),
            team_b=MatchupSide(
                roster_id=row_b.roster_id,
                team_name=self.ctx.get_team_name(row_b.roster_id),
                points=points_b,
            ),
            winner=winner,
            margin=abs(points_a - points_b),
        )
