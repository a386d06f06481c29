import pytest

from league_analytics.exceptions import InvalidParameterError
from league_analytics.models import PairWinner
from league_analytics.services.rivalry import RivalryService

from conftest import game


@pytest.fixture
def three_game_rivalry():
    return (
        game(20, 1, 1, (1, 120.0), (2, 100.0))
        + game(20, 2, 1, (1, 90.0), (2, 130.0))
        + game(20, 3, 1, (1, 140.0), (2, 90.0))
        + game(20, 3, 2, (3, 100.0), (4, 99.0))
    )


def test_three_game_rivalry(context, settings, three_game_rivalry):
    stats = RivalryService(context, settings).calculate_rivalry_stats(three_game_rivalry, 1, 2)

    record = stats.all_time_record
    assert (record.team_a_wins, record.team_b_wins, record.ties) == (2, 1, 0)
    assert record.total_games == 3

    assert stats.biggest_blowouts.team_a.margin == 50.0
    assert stats.biggest_blowouts.team_a.week == 3
    assert stats.biggest_blowouts.team_b.margin == 40.0
    assert stats.biggest_blowouts.overall.week == 3

    assert stats.closest_games[0].margin == 20.0
    assert stats.closest_games[0].week == 1

    assert stats.scoring_comparison.team_a_total == 350.0
    assert stats.scoring_comparison.team_b_avg == pytest.approx(320 / 3)


def test_revenge_games(context, settings, three_game_rivalry):
    stats = RivalryService(context, settings).calculate_rivalry_stats(three_game_rivalry, 1, 2)
    revenge = stats.revenge_games

    team_a_revenge = [r for r in revenge if r.avenged_by == "team_a"]
    assert len(team_a_revenge) == 1
    assert team_a_revenge[0].loss_matchup.week == 2
    assert team_a_revenge[0].revenge_matchup.week == 3
    assert team_a_revenge[0].weeks_between == 1

    # Bravo's week 2 win avenges the week 1 loss
    assert [(r.avenged_by, r.loss_matchup.week, r.revenge_matchup.week) for r in revenge] == [
        ("team_b", 1, 2),
        ("team_a", 2, 3),
    ]
    for r in revenge:
        assert (r.revenge_matchup.season_year, r.revenge_matchup.week) > (
            r.loss_matchup.season_year,
            r.loss_matchup.week,
        )


def test_revenge_across_seasons(context, settings):
    rows = game(10, 14, 1, (1, 80.0), (3, 100.0)) + game(20, 2, 1, (1, 110.0), (3, 100.0))
    service = RivalryService(context, settings)
    revenge = service.calculate_rivalry_stats(rows, 1, 3).revenge_games

    assert len(revenge) == 1
    assert revenge[0].avenged_by == "team_a"
    assert revenge[0].weeks_between == 17 - 12


def test_ties_do_not_clear_pending_losses(context, settings):
    rows = (
        game(20, 1, 1, (1, 80.0), (2, 100.0))
        + game(20, 2, 1, (1, 100.0), (2, 100.0))
        + game(20, 3, 1, (1, 120.0), (2, 100.0))
    )
    stats = RivalryService(context, settings).calculate_rivalry_stats(rows, 1, 2)

    assert stats.all_time_record.ties == 1
    assert len(stats.revenge_games) == 1
    assert stats.revenge_games[0].weeks_between == 2
    assert [m.margin for m in stats.closest_games] == [20.0, 20.0]


def test_blowout_tie_goes_to_team_a(context, settings):
    rows = game(20, 1, 1, (1, 130.0), (2, 100.0)) + game(20, 2, 1, (1, 70.0), (2, 100.0))
    stats = RivalryService(context, settings).calculate_rivalry_stats(rows, 1, 2)
    assert stats.biggest_blowouts.overall.winner == PairWinner.TEAM_A


def test_orientation_follows_arguments(context, settings, three_game_rivalry):
    stats = RivalryService(context, settings).calculate_rivalry_stats(three_game_rivalry, 2, 1)
    assert stats.team_a_name == "Bravo"
    assert stats.all_time_record.team_a_wins == 1
    assert stats.all_time_record.team_b_wins == 2


def test_momentum(context, settings, three_game_rivalry):
    stats = RivalryService(context, settings).calculate_rivalry_stats(three_game_rivalry, 1, 2)
    assert [p.label for p in stats.momentum] == ["24W1", "24W2", "24W3"]
    assert [p.margin for p in stats.momentum] == [20.0, -40.0, 50.0]


def test_closest_games_limit(context, settings, three_game_rivalry):
    service = RivalryService(context, settings)
    history = service.matchup_service.find_head_to_head(three_game_rivalry, 1, 2)
    assert len(service.find_closest_games(history, limit=2)) == 2
    assert service.find_closest_games(history, limit=0) == []
    with pytest.raises(InvalidParameterError):
        service.find_closest_games(history, limit=-1)


def test_no_games_between_teams(context, settings, three_game_rivalry):
    stats = RivalryService(context, settings).calculate_rivalry_stats(three_game_rivalry, 1, 4)
    assert stats.all_time_record.total_games == 0
    assert stats.biggest_blowouts.overall is None
    assert stats.closest_games == []
    assert stats.revenge_games == []
    assert stats.scoring_comparison.team_a_avg == 0.0
    assert stats.team_b_name == "Team 4"


def test_rivalry_with_itself_is_rejected(context, settings):
    with pytest.raises(InvalidParameterError):
        RivalryService(context, settings).calculate_rivalry_stats([], 1, 1)
