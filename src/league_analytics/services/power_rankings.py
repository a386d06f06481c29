"""
Power Ranking Service

Ranks teams on a weighted blend of record, scoring, all-play results and
consistency, and separates deserved records from scheduling luck.
"""

import logging
import statistics
from collections import defaultdict

import numpy as np

from league_analytics.config import Settings, get_settings
from league_analytics.context import LeagueContext
from league_analytics.models.league import Roster, WeeklyScoreRow
from league_analytics.models.matchup import GameResult, MatchupPair
from league_analytics.models.power_rankings import (
    PowerRankingRow,
    PowerRankingSummary,
    WeeklyRank,
)
from league_analytics.rounding import round_tenths
from league_analytics.services.matchups import MatchupService, group_rows_by_week

logger = logging.getLogger(__name__)

WEIGHT_RECORD = 0.35
WEIGHT_AVG_POINTS = 0.30
WEIGHT_EXPECTED_WINS = 0.20
WEIGHT_CONSISTENCY = 0.15


def expected_wins_for_week(points: float, opponent_points: list[float]) -> float:
    """Share of the week's other teams this score beats; ties count half."""
    if not opponent_points:
        return 0.0
    wins = sum(1 for p in opponent_points if points > p)
    ties = sum(1 for p in opponent_points if points == p)
    return (wins + ties * 0.5) / len(opponent_points)


def beats_median(points: float, week_points: list[float]) -> bool:
    """
    Median-comparison result for one week.

    Scoring exactly the median counts as a win; with an even number of teams
    the median is the mean of the two middle scores.
    """
    return points >= statistics.median(week_points)


def power_score(stats: dict, all_stats: list[dict]) -> float:
    """
    Weighted composite of the four normalised metrics.

    Each metric is divided by the league maximum (floored at 1);
    consistency is inverted because lower dispersion is better.
    """
    max_wins = max([s["wins"] for s in all_stats] + [1])
    max_points = max([s["avg_points"] for s in all_stats] + [1])
    max_expected = max([s["expected_wins"] for s in all_stats] + [1])
    max_consistency = max([s["consistency"] for s in all_stats] + [1])

    return (
        stats["wins"] / max_wins * WEIGHT_RECORD
        + stats["avg_points"] / max_points * WEIGHT_AVG_POINTS
        + stats["expected_wins"] / max_expected * WEIGHT_EXPECTED_WINS
        + (1 - stats["consistency"] / max_consistency) * WEIGHT_CONSISTENCY
    )


class PowerRankingService:
    """
    Service for calculating season power rankings.

    Per team it computes:
    - Actual record and all-play expected wins (luck index = difference)
    - Record against the weekly league median
    - Consistency (population std dev of weekly points)
    - Strength of schedule (average points of actual opponents)
    - Composite power score, rank and week-by-week rank trend
    """

    def __init__(self, context: LeagueContext, settings: Settings | None = None):
        self.ctx = context
        self.settings = settings or get_settings()
        self.matchup_service = MatchupService(context, self.settings)

    def calculate_power_rankings(
        self,
        rows: list[WeeklyScoreRow],
        season_id: int | None = None,
        rosters: list[Roster] | None = None,
    ) -> list[PowerRankingRow]:
        """
        Calculate power rankings for one season.

        Args:
            rows: Weekly score rows; when season_id is None they must all
                belong to a single season
            season_id: Season to rank
            rosters: Teams to rank, defaults to every roster in the context

        Returns:
            One PowerRankingRow per roster, ordered by power rank
        """
        if season_id is not None:
            rows = [r for r in rows if r.season_id == season_id]
        rosters = rosters if rosters is not None else self.ctx.rosters
        roster_ids = [r.roster_id for r in rosters]

        weeks = self._played_weeks(rows)
        pairs = self.matchup_service.build_pairs(rows)
        pairs_by_week: dict[int, list[MatchupPair]] = defaultdict(list)
        for pair in pairs:
            pairs_by_week[pair.week].append(pair)

        logger.debug(
            "Ranking %d rosters over %d played weeks", len(roster_ids), len(weeks)
        )

        season_stats = self._score_teams(roster_ids, weeks, pairs_by_week)

        weekly_ranks: dict[int, list[WeeklyRank]] = {rid: [] for rid in roster_ids}
        week_numbers = list(weeks)
        for idx, week in enumerate(week_numbers):
            through = {w: weeks[w] for w in week_numbers[: idx + 1]}
            for stats in self._score_teams(roster_ids, through, pairs_by_week):
                weekly_ranks[stats["roster_id"]].append(
                    WeeklyRank(week=week, rank=stats["rank"], points=stats["avg_points"])
                )

        return [
            PowerRankingRow(
                roster_id=stats["roster_id"],
                team_name=self.ctx.get_team_name(stats["roster_id"]),
                power_rank=stats["rank"],
                power_score=stats["power_score"],
                actual_wins=stats["wins"],
                actual_losses=stats["losses"],
                actual_ties=stats["ties"],
                expected_wins=stats["expected_wins"],
                luck_index=stats["wins"] - stats["expected_wins"],
                should_be_wins=stats["should_be_wins"],
                should_be_losses=stats["should_be_losses"],
                consistency_score=round_tenths(stats["consistency"]),
                avg_points=stats["avg_points"],
                total_points=stats["total_points"],
                strength_of_schedule=stats["strength_of_schedule"],
                weekly_ranks=weekly_ranks[stats["roster_id"]],
                weeks_played=stats["weeks_played"],
            )
            for stats in season_stats
        ]

    def get_summary(self, rankings: list[PowerRankingRow]) -> PowerRankingSummary:
        """Find the luckiest, unluckiest, most consistent and toughest-schedule teams."""
        if not rankings:
            return PowerRankingSummary()

        return PowerRankingSummary(
            luckiest=max(rankings, key=lambda r: r.luck_index),
            unluckiest=min(rankings, key=lambda r: r.luck_index),
            most_consistent=min(rankings, key=lambda r: r.consistency_score),
            toughest_schedule=max(rankings, key=lambda r: r.strength_of_schedule),
        )

    def _played_weeks(
        self, rows: list[WeeklyScoreRow]
    ) -> dict[int, list[WeeklyScoreRow]]:
        """Weeks in which at least one team has scored, in week order."""
        return {
            week: week_rows
            for week, week_rows in group_rows_by_week(rows).items()
            if any(r.is_played for r in week_rows)
        }

    def _score_teams(
        self,
        roster_ids: list[int],
        weeks: dict[int, list[WeeklyScoreRow]],
        pairs_by_week: dict[int, list[MatchupPair]],
    ) -> list[dict]:
        """Raw stats, power score and rank for every roster over the given weeks."""
        all_stats = [
            self._team_stats(rid, weeks, pairs_by_week) for rid in roster_ids
        ]
        for stats in all_stats:
            stats["power_score"] = power_score(stats, all_stats)

        # Ties on power score fall back to total points, then roster ID
        all_stats.sort(
            key=lambda s: (-s["power_score"], -s["total_points"], s["roster_id"])
        )
        for rank, stats in enumerate(all_stats, start=1):
            stats["rank"] = rank
        return all_stats

    def _team_stats(
        self,
        roster_id: int,
        weeks: dict[int, list[WeeklyScoreRow]],
        pairs_by_week: dict[int, list[MatchupPair]],
    ) -> dict:
        weekly_points: list[float] = []
        expected_wins = 0.0
        should_be_wins = 0
        should_be_losses = 0
        wins = losses = ties = 0
        opponent_points: list[float] = []

        for week, week_rows in weeks.items():
            mine = next((r for r in week_rows if r.roster_id == roster_id), None)
            if mine is None:
                continue

            points = mine.score
            weekly_points.append(points)

            others = [r.score for r in week_rows if r.roster_id != roster_id]
            expected_wins += expected_wins_for_week(points, others)

            if beats_median(points, [r.score for r in week_rows]):
                should_be_wins += 1
            else:
                should_be_losses += 1

            for pair in pairs_by_week.get(week, []):
                if not pair.involves(roster_id):
                    continue
                opponent_points.append(pair.opponent_of(roster_id).points)
                result = pair.result_for(roster_id)
                if result == GameResult.WIN:
                    wins += 1
                elif result == GameResult.LOSS:
                    losses += 1
                else:
                    ties += 1

        total_points = float(sum(weekly_points))
        return {
            "roster_id": roster_id,
            "wins": wins,
            "losses": losses,
            "ties": ties,
            "expected_wins": expected_wins,
            "should_be_wins": should_be_wins,
            "should_be_losses": should_be_losses,
            "total_points": total_points,
            "avg_points": total_points / len(weekly_points) if weekly_points else 0.0,
            "consistency": float(np.std(weekly_points)) if weekly_points else 0.0,
            "strength_of_schedule": (
                float(np.mean(opponent_points)) if opponent_points else 0.0
            ),
            "weeks_played": len(weekly_points),
        }
