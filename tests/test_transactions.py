import pytest
from pydantic import ValidationError

from league_analytics.models import Transaction, TransactionType
from league_analytics.services.transactions import TransactionService


def txn(txn_id, kind, roster_ids, week=1, status="complete", adds=None, drops=None):
    return Transaction(
        transaction_id=txn_id,
        season_id=20,
        week=week,
        type=kind,
        status=status,
        roster_ids=roster_ids,
        adds=adds,
        drops=drops,
    )


@pytest.fixture
def transactions():
    return [
        txn("t1", "trade", [2, 1], week=3, adds={"p1": 1, "p2": 2}, drops={"p1": 2, "p2": 1}),
        txn("t2", "trade", [1, 2], week=5, adds={"p3": 2}, drops={"p3": 1}),
        txn("t3", "trade", [1, 3], week=5, adds={"p4": 3}, drops={"p4": 1}),
        txn("t4", "trade", [1, 2, 3], week=6),
        txn("w1", "waiver", [3], week=3, adds={"p5": 3}, drops={"p2": 3}),
        txn("f1", "free_agent", [4], week=3, adds={"p3": 4}),
        txn("c1", "commissioner", [4], week=7),
        txn("x1", "waiver", [2], week=3, status="failed", adds={"p1": 2}),
        txn("x2", "trade", [1, 2], week=8, status="pending"),
    ]


@pytest.fixture
def service(context, settings):
    return TransactionService(context, settings)


def test_manager_activity(service, transactions):
    activity = service.calculate_manager_activity(transactions)
    rows = {a.roster_id: a for a in activity}

    assert activity[0].roster_id == 1
    assert (rows[1].trades, rows[1].total) == (4, 4)
    assert (rows[2].trades, rows[2].waivers, rows[2].total) == (3, 0, 3)
    assert (rows[3].trades, rows[3].waivers, rows[3].total) == (2, 1, 3)
    assert (rows[4].free_agents, rows[4].commissioner) == (1, 1)
    assert rows[4].team_name == "Team 4"


def test_manager_activity_unknown_roster(service):
    activity = service.calculate_manager_activity([txn("w9", "waiver", [9])])
    assert activity[0].roster_id == 9
    assert activity[0].team_name == "Team 9"
    assert len(activity) == 5


def test_trade_matrix_counts_two_team_trades(service, transactions):
    matrix = service.build_trade_matrix(transactions)

    assert [(c.roster_id_1, c.roster_id_2, c.trade_count) for c in matrix] == [
        (1, 2, 2),
        (1, 3, 1),
    ]
    assert matrix[0].team_name_2 == "Bravo"


def test_position_churn(service, transactions):
    churn = {c.position: c for c in service.calculate_position_churn(transactions)}

    assert list(churn) == ["QB", "RB", "WR", "TE", "K", "DEF"]
    assert (churn["QB"].adds, churn["QB"].drops) == (1, 1)
    assert (churn["RB"].adds, churn["RB"].drops, churn["RB"].net) == (1, 2, -1)
    assert (churn["WR"].adds, churn["WR"].drops, churn["WR"].net) == (2, 1, 1)
    assert churn["K"].adds == 0 and churn["K"].net == 0


def test_transaction_summary(service, transactions):
    summary = service.get_transaction_summary(transactions)

    assert summary.total_transactions == 7
    assert summary.total_trades == 4
    assert summary.total_waivers == 1
    assert summary.total_free_agents == 1
    assert summary.total_commissioner == 1
    assert (summary.busiest_week.week, summary.busiest_week.count) == (3, 3)
    assert summary.most_active_manager.roster_id == 1
    assert summary.most_active_manager.count == 4


def test_transaction_summary_empty(service):
    summary = service.get_transaction_summary([])
    assert summary.total_transactions == 0
    assert summary.busiest_week is None
    assert summary.most_active_manager is None


def test_enrich_transactions(service, transactions):
    enriched = service.enrich_transactions(transactions)

    assert len(enriched) == 7
    first = enriched[0]
    assert [t.team_name for t in first.involved_teams] == ["Bravo", "Alpha"]
    assert {p.name for p in first.added_players} == {"Quinn Back", "Rory Runner"}

    waiver = next(e for e in enriched if e.transaction.transaction_id == "w1")
    assert waiver.added_players[0].name == "Player p5"
    assert waiver.added_players[0].position == "N/A"


def test_group_and_filter(service, transactions):
    enriched = service.enrich_transactions(transactions)

    by_week = service.group_by_week(enriched)
    assert list(by_week) == [3, 5, 6, 7]
    assert len(by_week[3]) == 3

    waivers = service.filter_by_type(enriched, [TransactionType.WAIVER])
    assert [e.transaction.transaction_id for e in waivers] == ["w1"]
    assert len(service.filter_by_type(enriched, [])) == 7


def test_extract_player_ids(service, transactions):
    assert service.extract_player_ids(transactions) == ["p1", "p2", "p3", "p4", "p5"]


def test_unknown_transaction_type_is_rejected():
    with pytest.raises(ValidationError):
        txn("bad", "keeper_swap", [1])
