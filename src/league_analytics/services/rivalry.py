"""
Rivalry Service

Head-to-head history between two teams: record, scoring, blowouts, close
games and revenge games.
"""

import logging

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.exceptions import InvalidParameterError
from league_analytics.models.league import WeeklyScoreRow
from league_analytics.models.matchup import MatchupPair, PairWinner
from league_analytics.models.rivalry import (
    AllTimeRecord,
    BiggestBlowouts,
    MomentumPoint,
    RevengeGame,
    RivalryStats,
    ScoringComparison,
)
from league_analytics.services.matchups import MatchupService

logger = logging.getLogger(__name__)


class RivalryService:
    """
    Service for analyzing the rivalry between two rosters.

    All methods expect head-to-head pairs oriented with the same team A and
    sorted chronologically, as returned by MatchupService.find_head_to_head.
    """

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()
        self.matchup_service = MatchupService(context, self.settings)

    def calculate_rivalry_stats(
        self,
        rows: list[WeeklyScoreRow],
        team_a_roster_id: int,
        team_b_roster_id: int,
        season_id: int | None = None,
    ) -> RivalryStats:
        """
        Get the complete rivalry analysis for two rosters.

        Args:
            rows: Weekly score rows across any number of seasons
            team_a_roster_id: First team's roster ID
            team_b_roster_id: Second team's roster ID
            season_id: Restrict to one season when given

        Returns:
            RivalryStats with record, scoring, blowouts, close and revenge games
        """
        if team_a_roster_id == team_b_roster_id:
            raise InvalidParameterError(
                f"A rivalry needs two different rosters, got {team_a_roster_id} twice"
            )

        history = self.matchup_service.find_head_to_head(
            rows, team_a_roster_id, team_b_roster_id, season_id
        )
        logger.debug(
            "Rivalry %d vs %d: %d games", team_a_roster_id, team_b_roster_id, len(history)
        )

        return RivalryStats(
            team_a_roster_id=team_a_roster_id,
            team_b_roster_id=team_b_roster_id,
            team_a_name=self.ctx.get_team_name(team_a_roster_id),
            team_b_name=self.ctx.get_team_name(team_b_roster_id),
            all_time_record=self.calculate_all_time_record(history),
            scoring_comparison=self.calculate_scoring_comparison(history),
            biggest_blowouts=self.find_biggest_blowouts(history),
            closest_games=self.find_closest_games(history),
            revenge_games=self.track_revenge_games(history),
            matchup_history=history,
            momentum=self.build_momentum(history),
        )

    def calculate_all_time_record(self, matchups: list[MatchupPair]) -> AllTimeRecord:
        record = AllTimeRecord(total_games=len(matchups))
        for m in matchups:
            if m.winner == PairWinner.TEAM_A:
                record.team_a_wins += 1
            elif m.winner == PairWinner.TEAM_B:
                record.team_b_wins += 1
            else:
                record.ties += 1
        return record

    def calculate_scoring_comparison(
        self, matchups: list[MatchupPair]
    ) -> ScoringComparison:
        if not matchups:
            return ScoringComparison()

        team_a_total = sum(m.team_a.points for m in matchups)
        team_b_total = sum(m.team_b.points for m in matchups)
        return ScoringComparison(
            team_a_avg=team_a_total / len(matchups),
            team_b_avg=team_b_total / len(matchups),
            team_a_total=team_a_total,
            team_b_total=team_b_total,
        )

    def find_biggest_blowouts(self, matchups: list[MatchupPair]) -> BiggestBlowouts:
        """
        Each side's largest winning margin, and the larger of the two.

        When both sides share the same largest margin, team A's game is the
        overall blowout.
        """
        team_a_best: MatchupPair | None = None
        team_b_best: MatchupPair | None = None

        for m in matchups:
            if m.winner == PairWinner.TEAM_A:
                if team_a_best is None or m.margin > team_a_best.margin:
                    team_a_best = m
            elif m.winner == PairWinner.TEAM_B:
                if team_b_best is None or m.margin > team_b_best.margin:
                    team_b_best = m

        if team_a_best is not None and team_b_best is not None:
            overall = team_a_best if team_a_best.margin >= team_b_best.margin else team_b_best
        else:
            overall = team_a_best or team_b_best

        return BiggestBlowouts(team_a=team_a_best, team_b=team_b_best, overall=overall)

    def find_closest_games(
        self, matchups: list[MatchupPair], limit: int | None = None
    ) -> list[MatchupPair]:
        """
        The decided games with the smallest margins.

        Args:
            matchups: Head-to-head pairs
            limit: Number of games to return, defaults to the configured limit

        Returns:
            Non-tie pairs sorted by margin ascending
        """
        limit = self.settings.closest_games_limit if limit is None else limit
        if limit < 0:
            raise InvalidParameterError(f"Closest games limit must not be negative, got {limit}")

        decided = [m for m in matchups if m.winner != PairWinner.TIE]
        return sorted(decided, key=lambda m: m.margin)[:limit]

    def track_revenge_games(self, matchups: list[MatchupPair]) -> list[RevengeGame]:
        """
        Find wins that avenge the previous loss to the same opponent.

        Scans chronologically keeping each side's last unavenged loss. A win
        clears the winner's pending loss and makes this game the loser's
        pending loss. Ties leave both pending losses untouched.
        """
        revenge_games: list[RevengeGame] = []
        pending_loss: dict[str, MatchupPair | None] = {"team_a": None, "team_b": None}

        for m in matchups:
            if m.winner == PairWinner.TIE:
                continue

            winner = "team_a" if m.winner == PairWinner.TEAM_A else "team_b"
            loser = "team_b" if winner == "team_a" else "team_a"

            earlier = pending_loss[winner]
            if earlier is not None:
                revenge_games.append(
                    RevengeGame(
                        loss_matchup=earlier,
                        revenge_matchup=m,
                        weeks_between=self.weeks_between(earlier, m),
                        avenged_by=winner,
                    )
                )
                pending_loss[winner] = None

            pending_loss[loser] = m

        return revenge_games

    def weeks_between(self, earlier: MatchupPair, later: MatchupPair) -> int:
        """
        Approximate number of weeks separating two games.

        Across seasons every season counts as a fixed number of weeks, so
        the result is an estimate rather than a calendar difference.
        """
        week_delta = later.week - earlier.week
        if earlier.season_year == later.season_year:
            return week_delta
        seasons_apart = later.season_year - earlier.season_year
        return max(0, seasons_apart * self.settings.weeks_per_season + week_delta)

    def build_momentum(self, matchups: list[MatchupPair]) -> list[MomentumPoint]:
        """Signed point differential per game, for the rivalry trend chart."""
        points = []
        for m in matchups:
            if m.winner == PairWinner.TEAM_A:
                margin = m.margin
            elif m.winner == PairWinner.TEAM_B:
                margin = -m.margin
            else:
                margin = 0.0
            points.append(
                MomentumPoint(
                    label=f"{str(m.season_year)[-2:]}W{m.week}",
                    margin=margin,
                    winner=m.winner,
                    team_a_points=m.team_a.points,
                    team_b_points=m.team_b.points,
                    week=m.week,
                    season_year=m.season_year,
                )
            )
        return points
