from league_analytics.models import GameResult
from league_analytics.services.matchups import MatchupService
from league_analytics.services.standings import StandingsService, current_streak

from conftest import game


def test_current_streak_counts_trailing_run():
    results = [GameResult.LOSS, GameResult.WIN, GameResult.WIN]
    assert current_streak(results) == (2, GameResult.WIN)


def test_current_streak_reset_by_tie():
    results = [GameResult.WIN, GameResult.WIN, GameResult.TIE]
    assert current_streak(results) == (0, None)


def test_current_streak_stops_at_tie():
    results = [GameResult.LOSS, GameResult.TIE, GameResult.LOSS, GameResult.LOSS]
    assert current_streak(results) == (2, GameResult.LOSS)


def test_current_streak_empty():
    assert current_streak([]) == (0, None)


def test_calculate_standings(context, settings, season_rows):
    pairs = MatchupService(context, settings).build_pairs(season_rows)
    standings = StandingsService(context, settings).calculate_standings(pairs)

    assert [s.roster_id for s in standings] == [1, 3, 2, 4]
    assert [s.rank for s in standings] == [1, 2, 3, 4]

    alpha = standings[0]
    assert (alpha.wins, alpha.losses, alpha.ties) == (2, 1, 0)
    assert alpha.points_for == 350.0
    assert alpha.points_against == 300.0
    assert alpha.streak == 1 and alpha.streak_type == GameResult.WIN
    assert alpha.win_pct == 66.7

    bravo = standings[2]
    assert (bravo.wins, bravo.losses, bravo.ties) == (1, 1, 1)
    assert bravo.streak == 0 and bravo.streak_type is None

    last = standings[3]
    assert last.team_name == "Team 4"
    assert last.streak == 3 and last.streak_type == GameResult.LOSS


def test_standings_sort_by_points_when_wins_tie(context, settings):
    rows = game(20, 1, 1, (1, 100.0), (2, 90.0)) + game(20, 1, 2, (3, 150.0), (4, 10.0))
    pairs = MatchupService(context, settings).build_pairs(rows)
    standings = StandingsService(context, settings).calculate_standings(pairs)
    assert [s.roster_id for s in standings][:2] == [3, 1]


def test_standings_season_filter_and_empty_rosters(context, settings, season_rows):
    rows = season_rows + game(10, 1, 1, (1, 10.0), (2, 20.0))
    pairs = MatchupService(context, settings).build_pairs(rows)
    standings = StandingsService(context, settings).calculate_standings(pairs, season_id=10)

    assert len(standings) == 4
    assert standings[0].roster_id == 2
    assert sum(s.games_played for s in standings) == 2
    untouched = [s for s in standings if s.games_played == 0]
    assert {s.roster_id for s in untouched} == {3, 4}
    assert all(s.avg_points == 0.0 and s.win_pct == 0.0 for s in untouched)


def test_win_streaks_carry_across_seasons(context, settings):
    rows = (
        game(10, 13, 1, (1, 100.0), (2, 90.0))
        + game(10, 14, 1, (1, 100.0), (3, 90.0))
        + game(20, 1, 1, (1, 100.0), (4, 90.0))
        + game(20, 2, 1, (1, 80.0), (2, 90.0))
        + game(20, 3, 1, (1, 100.0), (3, 90.0))
    )
    pairs = MatchupService(context, settings).build_pairs(rows)
    streaks = StandingsService(context, settings).calculate_win_streaks(pairs)

    assert streaks[1].longest == 3
    assert streaks[1].season_year == 2024
    assert streaks[1].current == 1
    assert streaks[2].longest == 1
    assert streaks[4].longest == 0 and streaks[4].season_year is None


def test_win_streak_ended_by_tie(context, settings):
    rows = (
        game(20, 1, 1, (1, 100.0), (2, 90.0))
        + game(20, 2, 1, (1, 100.0), (2, 100.0))
        + game(20, 3, 1, (1, 100.0), (2, 90.0))
    )
    pairs = MatchupService(context, settings).build_pairs(rows)
    streaks = StandingsService(context, settings).calculate_win_streaks(pairs)
    assert streaks[1].longest == 1
    assert streaks[1].current == 1
