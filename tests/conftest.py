import pytest

from league_analytics.config import Settings
from league_analytics.context import LeagueContext
from league_analytics.models import Player, Roster, Season, WeeklyScoreRow


def game(season_id, week, game_id, a, b):
    """Two score rows that faced each other; a and b are (roster_id, points)."""
    return [
        WeeklyScoreRow(season_id=season_id, week=week, game_id=game_id, roster_id=a[0], points=a[1]),
        WeeklyScoreRow(season_id=season_id, week=week, game_id=game_id, roster_id=b[0], points=b[1]),
    ]


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def rosters():
    return [
        Roster(roster_id=1, team_name="Alpha"),
        Roster(roster_id=2, team_name="Bravo"),
        Roster(roster_id=3, team_name="Charlie"),
        Roster(roster_id=4, team_name=None),
    ]


@pytest.fixture
def seasons():
    return [
        Season(id=10, season_year=2023, is_current=False),
        Season(id=20, season_year=2024, is_current=True),
    ]


@pytest.fixture
def players():
    return [
        Player(player_id="p1", full_name="Quinn Back", position="QB"),
        Player(player_id="p2", full_name="Rory Runner", position="RB"),
        Player(player_id="p3", full_name="Wes Wideout", position="WR"),
        Player(player_id="p4", full_name="Tate End", position="TE"),
        Player(player_id="p5", full_name=None, position=None),
    ]


@pytest.fixture
def context(rosters, seasons, players):
    return LeagueContext(rosters, seasons, players)


@pytest.fixture
def season_rows():
    """Three weeks of a four-team 2024 season."""
    return (
        game(20, 1, 1, (1, 120.0), (2, 100.0))
        + game(20, 1, 2, (3, 95.0), (4, 80.0))
        + game(20, 2, 1, (1, 90.0), (3, 110.0))
        + game(20, 2, 2, (2, 130.0), (4, 125.0))
        + game(20, 3, 1, (1, 140.0), (4, 90.0))
        + game(20, 3, 2, (2, 105.0), (3, 105.0))
    )
