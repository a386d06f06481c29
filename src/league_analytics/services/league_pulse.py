"""
League Pulse Service

League-wide metrics: weekly extremes, game of the week, scoring trends and
distribution, parity, all-time records and the playoff race.
"""

import logging
import math
import statistics

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.exceptions import InvalidParameterError
from league_analytics.models.league import WeeklyScoreRow
from league_analytics.models.matchup import MatchupPair, PairWinner
from league_analytics.models.pulse import (
    GameOfTheWeek,
    GameReason,
    GameRecord,
    LeaguePulse,
    LeagueRecords,
    ParityMetrics,
    PlayoffStatus,
    PlayoffStatusType,
    ScoreRecord,
    ScoringBucket,
    SeasonHighScore,
    StreakRecord,
    TeamScore,
    WeeklyExtreme,
    WeeklyTrendPoint,
)
from league_analytics.rounding import round_half_up, round_tenths
from league_analytics.services.matchups import MatchupService, group_rows_by_week
from league_analytics.services.standings import StandingsService

logger = logging.getLogger(__name__)


def excitement_score(pair: MatchupPair, week_avg: float) -> float:
    """
    How exciting a game was: 60% closeness, 40% combined scoring.

    Closeness is 100 for a dead heat and 0 from a 50-point margin up;
    scoring reaches 100 when the combined total is twice the weekly
    two-team average.
    """
    closeness = max(0.0, 50 - pair.margin) * 2
    scoring = min(100.0, pair.combined_points / (week_avg * 2) * 50) if week_avg > 0 else 0.0
    return closeness * 0.6 + scoring * 0.4


def game_reason(pair: MatchupPair) -> GameReason:
    if pair.margin < 3:
        return GameReason.PHOTO_FINISH
    if pair.margin < 10:
        return GameReason.NAIL_BITER
    if pair.combined_points > 280:
        return GameReason.SHOOTOUT
    if pair.margin > 50:
        return GameReason.STATEMENT_WIN
    return GameReason.CLASSIC_CLASH


class LeaguePulseService:
    """
    Service for league-wide pulse metrics.

    Score rows with null or 0 points count as not yet played and are left
    out of extremes, trends, the distribution and score records.
    """

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()
        self.matchup_service = MatchupService(context, self.settings)
        self.standings_service = StandingsService(context, self.settings)

    def calculate_league_pulse(
        self, rows: list[WeeklyScoreRow], season_id: int
    ) -> LeaguePulse:
        """
        Get every pulse metric for one season.

        Args:
            rows: Weekly score rows for all seasons
            season_id: Season the weekly metrics are scoped to

        Returns:
            LeaguePulse; league records cover every season in rows
        """
        season_rows = [r for r in rows if r.season_id == season_id]
        all_pairs = self.matchup_service.build_pairs(rows)
        season_pairs = [p for p in all_pairs if p.season_id == season_id]

        extremes = self.calculate_weekly_extremes(season_rows)
        max_week = max((e.week for e in extremes), default=0)

        season_high = max(extremes, key=lambda e: e.high.points, default=None)

        logger.debug(
            "Pulse for season %d: %d rows, %d pairs, through week %d",
            season_id,
            len(season_rows),
            len(season_pairs),
            max_week,
        )

        return LeaguePulse(
            season_id=season_id,
            max_week=max_week,
            weekly_extremes=extremes,
            game_of_the_week=self.find_game_of_the_week(season_pairs, max_week),
            matchup_pairs=season_pairs,
            weekly_trends=self.calculate_weekly_trends(season_rows),
            scoring_distribution=self.build_scoring_distribution(season_rows),
            parity_metrics=self.calculate_parity_metrics(season_pairs),
            league_records=self.calculate_league_records(rows, all_pairs),
            playoff_race=self.calculate_playoff_race(season_pairs),
            season_high_score=(
                SeasonHighScore(
                    roster_id=season_high.high.roster_id,
                    team_name=season_high.high.team_name,
                    points=season_high.high.points,
                    week=season_high.week,
                )
                if season_high
                else None
            ),
        )

    def calculate_weekly_extremes(self, rows: list[WeeklyScoreRow]) -> list[WeeklyExtreme]:
        """Highest and lowest played score of each week."""
        extremes = []
        for week, week_rows in group_rows_by_week(rows).items():
            played = [r for r in week_rows if r.is_played]
            if not played:
                continue

            high = max(played, key=lambda r: r.score)
            low = min(played, key=lambda r: r.score)
            extremes.append(
                WeeklyExtreme(
                    week=week,
                    high=self._team_score(high),
                    low=self._team_score(low),
                    spread=high.score - low.score,
                )
            )
        return extremes

    def find_game_of_the_week(
        self, pairs: list[MatchupPair], week: int
    ) -> GameOfTheWeek | None:
        """
        Most exciting game of the given week.

        Args:
            pairs: Matchup pairs of one season
            week: Week to choose from, usually the latest completed week

        Returns:
            GameOfTheWeek or None when the week has no games
        """
        week_pairs = [p for p in pairs if p.week == week]
        if not week_pairs:
            return None

        all_points = [pt for p in week_pairs for pt in (p.team_a.points, p.team_b.points)]
        week_avg = sum(all_points) / len(all_points)

        best = max(week_pairs, key=lambda p: excitement_score(p, week_avg))
        return GameOfTheWeek(
            matchup=best,
            excitement_score=excitement_score(best, week_avg),
            reason=game_reason(best),
        )

    def calculate_weekly_trends(self, rows: list[WeeklyScoreRow]) -> list[WeeklyTrendPoint]:
        trends = []
        for week, week_rows in group_rows_by_week(rows).items():
            points = sorted(r.score for r in week_rows if r.is_played)
            if not points:
                continue

            trends.append(
                WeeklyTrendPoint(
                    week=week,
                    avg_score=round_tenths(statistics.mean(points)),
                    high_score=points[-1],
                    low_score=points[0],
                    median_score=round_tenths(statistics.median(points)),
                )
            )
        return trends

    def build_scoring_distribution(
        self, rows: list[WeeklyScoreRow], bucket_size: int | None = None
    ) -> list[ScoringBucket]:
        """
        Histogram of played scores with fixed-width [min, max) buckets.

        The range runs from the lowest score floored to the bucket width up
        to the highest score ceiled to it; when the highest score sits exactly
        on a boundary one more bucket is added so it is counted.
        """
        if bucket_size is None:
            bucket_size = self.settings.histogram_bucket_size
        if bucket_size <= 0:
            raise InvalidParameterError(f"Bucket size must be positive, got {bucket_size}")

        points = [r.score for r in rows if r.is_played]
        if not points:
            return []

        lowest = math.floor(min(points) / bucket_size) * bucket_size
        highest = math.ceil(max(points) / bucket_size) * bucket_size
        if highest <= max(points):
            highest += bucket_size

        buckets = []
        start = lowest
        while start < highest:
            end = start + bucket_size
            count = sum(1 for p in points if start <= p < end)
            buckets.append(
                ScoringBucket(
                    range=f"{start}-{end}",
                    min=start,
                    max=end,
                    count=count,
                    percentage=round_half_up(count / len(points) * 100),
                )
            )
            start = end
        return buckets

    def calculate_parity_metrics(self, pairs: list[MatchupPair]) -> ParityMetrics:
        """
        League competitiveness from game margins.

        parity = round_half_up(max(0, 100 - 2 * avg_margin) * 0.6 + close_pct * 0.4)
        """
        if not pairs:
            return ParityMetrics()

        total = len(pairs)
        avg_margin = sum(p.margin for p in pairs) / total
        close_games = sum(1 for p in pairs if p.margin < self.settings.close_game_margin)
        blowouts = sum(1 for p in pairs if p.margin > self.settings.blowout_margin)

        close_pct = round_half_up(close_games / total * 100)
        margin_factor = max(0.0, 100 - avg_margin * 2)

        return ParityMetrics(
            parity_index=round_half_up(margin_factor * 0.6 + close_pct * 0.4),
            avg_margin=round_tenths(avg_margin),
            close_game_percentage=close_pct,
            blowout_percentage=round_half_up(blowouts / total * 100),
            total_games=total,
        )

    def calculate_league_records(
        self,
        rows: list[WeeklyScoreRow],
        pairs: list[MatchupPair],
        season_id: int | None = None,
    ) -> LeagueRecords:
        """
        All-time (or single-season) league records.

        Args:
            rows: Weekly score rows
            pairs: Matchup pairs built from the same rows
            season_id: Restrict to one season when given

        Returns:
            LeagueRecords with null entries where no qualifying game exists
        """
        if season_id is not None:
            rows = [r for r in rows if r.season_id == season_id]
            pairs = [p for p in pairs if p.season_id == season_id]

        played = [r for r in rows if r.is_played]
        highest = max(played, key=lambda r: r.score, default=None)
        lowest = min(played, key=lambda r: r.score, default=None)

        decided = [p for p in pairs if p.winner != PairWinner.TIE]
        lowest_win = min(decided, key=lambda p: p.winning_side.points, default=None)
        blowout = max(decided, key=lambda p: p.margin, default=None)
        closest = min((p for p in decided if p.margin > 0), key=lambda p: p.margin, default=None)

        return LeagueRecords(
            highest_score=self._row_record(highest),
            lowest_score=self._row_record(lowest),
            lowest_winning_score=(
                ScoreRecord(
                    roster_id=lowest_win.winning_side.roster_id,
                    team_name=lowest_win.winning_side.team_name,
                    value=lowest_win.winning_side.points,
                    week=lowest_win.week,
                    season_year=lowest_win.season_year,
                )
                if lowest_win
                else None
            ),
            biggest_blowout=self._game_record(blowout),
            closest_game=self._game_record(closest),
            longest_win_streak=self._longest_streak(pairs),
        )

    def calculate_playoff_race(
        self, pairs: list[MatchupPair], playoff_spots: int | None = None
    ) -> list[PlayoffStatus]:
        """
        Classify every team's playoff position.

        Teams are ordered by wins then points for. Inside the top N a team
        has clinched once it leads the cutoff team by the configured margin;
        outside it a team is eliminated once it trails by more than the
        configured number of games. The cutoff is the wins of the last
        playoff team, or 0 when the league has fewer teams than spots.

        Args:
            pairs: Matchup pairs of one season
            playoff_spots: Number of playoff teams, defaults to settings

        Returns:
            PlayoffStatus per team in standings order
        """
        spots = self.settings.playoff_spots if playoff_spots is None else playoff_spots
        if spots < 1:
            raise InvalidParameterError(f"Playoff spots must be positive, got {spots}")

        standings = self.standings_service.calculate_standings(pairs)
        cutoff_wins = standings[spots - 1].wins if len(standings) >= spots else 0

        race = []
        for index, team in enumerate(standings):
            games_back = cutoff_wins - team.wins

            if index < spots:
                if games_back <= -self.settings.clinch_games_ahead:
                    status = PlayoffStatusType.CLINCHED
                else:
                    status = PlayoffStatusType.CONTENDING
            elif games_back > self.settings.elimination_games_back:
                status = PlayoffStatusType.ELIMINATED
            else:
                status = PlayoffStatusType.IN_HUNT

            race.append(
                PlayoffStatus(
                    roster_id=team.roster_id,
                    team_name=team.team_name,
                    wins=team.wins,
                    losses=team.losses,
                    ties=team.ties,
                    points_for=team.points_for,
                    status=status,
                    games_back=max(0, games_back),
                )
            )
        return race

    def _team_score(self, row: WeeklyScoreRow) -> TeamScore:
        return TeamScore(
            roster_id=row.roster_id,
            team_name=self.ctx.get_team_name(row.roster_id),
            points=row.score,
        )

    def _row_record(self, row: WeeklyScoreRow | None) -> ScoreRecord | None:
        if row is None:
            return None
        return ScoreRecord(
            roster_id=row.roster_id,
            team_name=self.ctx.get_team_name(row.roster_id),
            value=row.score,
            week=row.week,
            season_year=self.ctx.get_season_year(row.season_id),
        )

    @staticmethod
    def _game_record(pair: MatchupPair | None) -> GameRecord | None:
        if pair is None:
            return None
        return GameRecord(
            winner=pair.winning_side.team_name,
            loser=pair.losing_side.team_name,
            margin=pair.margin,
            week=pair.week,
            season_year=pair.season_year,
        )

    def _longest_streak(self, pairs: list[MatchupPair]) -> StreakRecord | None:
        streaks = self.standings_service.calculate_win_streaks(pairs)
        best = max(streaks.values(), key=lambda s: s.longest, default=None)
        if best is None or best.longest == 0:
            return None
        return StreakRecord(
            roster_id=best.roster_id,
            team_name=self.ctx.get_team_name(best.roster_id),
            streak=best.longest,
            season_year=best.season_year,
        )
