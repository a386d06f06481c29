import pytest

from league_analytics.analytics import LeagueAnalytics
from league_analytics.cli import load_snapshot
from league_analytics.exceptions import AnalyticsError
from league_analytics.models import (
    KeeperPick,
    LeagueSnapshot,
    PlayerWeeklyPoints,
    TradeGradeStatus,
    Transaction,
)

from conftest import game


@pytest.fixture
def snapshot(rosters, seasons, players, season_rows):
    return LeagueSnapshot(
        rosters=rosters,
        seasons=seasons,
        players=players,
        weekly_scores=season_rows + game(10, 1, 1, (1, 70.0), (2, 90.0)),
        transactions=[
            Transaction(
                transaction_id="t1",
                season_id=20,
                week=1,
                type="trade",
                status="complete",
                roster_ids=[1, 2],
                adds={"p1": 1},
                drops={"p1": 2},
            ),
            Transaction(
                transaction_id="w1",
                season_id=10,
                week=4,
                type="waiver",
                status="complete",
                roster_ids=[3],
                adds={"p2": 3},
            ),
        ],
        player_points=[
            PlayerWeeklyPoints(player_id="p1", season_id=20, week=2, points=18.0),
            PlayerWeeklyPoints(player_id="p1", season_id=20, week=3, points=22.0),
        ],
        keepers=[KeeperPick(player_id="p1", roster_id=2, season_id=20, round=1)],
    )


@pytest.fixture
def analytics(snapshot, settings):
    return LeagueAnalytics(snapshot, settings)


def test_defaults_to_current_season(analytics):
    standings = analytics.get_standings()
    assert sum(s.games_played for s in standings) == 12
    assert analytics.current_week() == 3


def test_all_time_views(analytics):
    all_time = {s.roster_id: s for s in analytics.get_all_time_standings()}
    assert all_time[2].wins == 2

    rivalry = analytics.get_rivalry(1, 2)
    assert rivalry.all_time_record.total_games == 2
    assert analytics.get_rivalry(1, 2, season_id=10).all_time_record.team_b_wins == 1


def test_power_rankings_and_summary(analytics):
    rankings = analytics.get_power_rankings()
    assert [r.roster_id for r in rankings] == [1, 3, 2, 4]
    assert analytics.get_power_ranking_summary().luckiest.roster_id == 3


def test_league_pulse(analytics):
    pulse = analytics.get_league_pulse()
    assert pulse.season_id == 20
    assert pulse.max_week == 3
    assert pulse.league_records.lowest_score.value == 70.0


def test_transaction_views_filter_by_season(analytics):
    assert analytics.get_transaction_summary().total_transactions == 2
    assert analytics.get_transaction_summary(season_id=20).total_transactions == 1
    assert analytics.get_trade_matrix()[0].trade_count == 1
    activity = {a.roster_id: a.total for a in analytics.get_manager_activity(season_id=10)}
    assert activity == {1: 0, 2: 0, 3: 1, 4: 0}


def test_trade_grades_use_current_week(analytics):
    trades = analytics.get_trade_grades(1)
    assert len(trades) == 1
    grade = trades[0].grade
    assert grade.weeks_analyzed == 2
    assert grade.player_differential == 40.0
    assert grade.grade == TradeGradeStatus.PENDING


def test_keeper_views(analytics):
    assert analytics.get_keeper_history(2)[0].keepers[0].total_points == 40.0
    success = {s.roster_id: s.success_rate for s in analytics.get_keeper_success()}
    assert success[2] == 0.0


def test_pairs_are_cached(analytics):
    assert analytics.pairs is analytics.pairs


def test_league_without_seasons(settings, rosters):
    analytics = LeagueAnalytics(LeagueSnapshot(rosters=rosters), settings)
    with pytest.raises(AnalyticsError):
        analytics.get_standings()
    assert len(analytics.get_all_time_standings()) == 4


def test_load_snapshot(tmp_path, snapshot):
    path = tmp_path / "league.json"
    path.write_text(snapshot.model_dump_json(), encoding="utf-8")
    assert load_snapshot(str(path)) == snapshot
