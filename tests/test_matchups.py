import random

from league_analytics.models import GameResult, PairWinner, WeeklyScoreRow
from league_analytics.services.matchups import MatchupService, group_rows_by_game

from conftest import game


def test_build_pairs_orients_lower_roster_as_team_a(context, settings):
    rows = game(20, 1, 7, (3, 101.5), (1, 99.0))
    pairs = MatchupService(context, settings).build_pairs(rows)

    assert len(pairs) == 1
    pair = pairs[0]
    assert pair.team_a.roster_id == 1 and pair.team_b.roster_id == 3
    assert pair.winner == PairWinner.TEAM_B
    assert pair.margin == 2.5
    assert pair.season_year == 2024
    assert pair.team_a.team_name == "Alpha"


def test_margin_invariant(context, settings, season_rows):
    for pair in MatchupService(context, settings).build_pairs(season_rows):
        assert pair.margin == abs(pair.team_a.points - pair.team_b.points)
        assert (pair.winner == PairWinner.TIE) == (pair.margin == 0)


def test_unplayed_zero_zero_game_is_dropped(context, settings):
    rows = game(20, 4, 1, (1, 0.0), (2, None)) + game(20, 4, 2, (3, 0.0), (4, 12.0))
    pairs = MatchupService(context, settings).build_pairs(rows)

    assert len(pairs) == 1
    assert pairs[0].team_a.roster_id == 3
    assert pairs[0].winner == PairWinner.TEAM_B


def test_groups_without_exactly_two_rows_are_dropped(context, settings):
    rows = [
        WeeklyScoreRow(season_id=20, week=1, game_id=1, roster_id=1, points=100),
        WeeklyScoreRow(season_id=20, week=1, game_id=2, roster_id=2, points=90),
        WeeklyScoreRow(season_id=20, week=1, game_id=2, roster_id=3, points=80),
        WeeklyScoreRow(season_id=20, week=1, game_id=2, roster_id=4, points=70),
        WeeklyScoreRow(season_id=20, week=1, game_id=None, roster_id=4, points=70),
    ]
    assert MatchupService(context, settings).build_pairs(rows) == []


def test_group_rows_by_game_skips_rows_without_game_id():
    rows = [
        WeeklyScoreRow(season_id=20, week=1, game_id=None, roster_id=1, points=100),
        WeeklyScoreRow(season_id=20, week=1, game_id=3, roster_id=2, points=90),
    ]
    groups = group_rows_by_game(rows)
    assert list(groups) == [(20, 1, 3)]


def test_pairs_are_chronological_and_deterministic(context, settings, season_rows):
    older = game(10, 5, 1, (1, 80.0), (2, 70.0))
    rows = season_rows + older
    shuffled = list(rows)
    random.Random(4).shuffle(shuffled)

    service = MatchupService(context, settings)
    first = service.build_pairs(rows)
    second = service.build_pairs(shuffled)

    assert first == second
    keys = [(p.season_year, p.week) for p in first]
    assert keys == sorted(keys)
    assert keys[0] == (2023, 5)


def test_find_head_to_head_keeps_requested_orientation(context, settings, season_rows):
    rows = season_rows + game(10, 2, 1, (1, 60.0), (3, 70.0))
    pairs = MatchupService(context, settings).find_head_to_head(rows, 3, 1)

    assert [(p.season_year, p.week) for p in pairs] == [(2023, 2), (2024, 2)]
    assert all(p.team_a.roster_id == 3 for p in pairs)
    assert all(p.winner == PairWinner.TEAM_A for p in pairs)


def test_find_head_to_head_season_filter(context, settings, season_rows):
    rows = season_rows + game(10, 2, 1, (1, 60.0), (3, 70.0))
    pairs = MatchupService(context, settings).find_head_to_head(rows, 1, 3, season_id=10)
    assert len(pairs) == 1 and pairs[0].season_id == 10


def test_weekly_results(context, settings, season_rows):
    service = MatchupService(context, settings)
    results = service.weekly_results(service.build_pairs(season_rows), 2)

    assert [r.result for r in results] == [GameResult.LOSS, GameResult.WIN, GameResult.TIE]
    assert results[0].opponent == "Alpha"
    assert results[1].opponent == "Team 4"
    assert results[1].won
