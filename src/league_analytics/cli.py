"""
League Analytics CLI

Command-line interface for running the analytics over a league snapshot
exported as JSON by the sync layer.
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from league_analytics.analytics import LeagueAnalytics
from league_analytics.config import configure_logging, get_settings
from league_analytics.exceptions import AnalyticsError
from league_analytics.models import LeagueSnapshot


def load_snapshot(path: str) -> LeagueSnapshot:
    """Read and validate a snapshot JSON file."""
    return LeagueSnapshot.model_validate_json(Path(path).read_text(encoding="utf-8"))


def format_record(wins: int, losses: int, ties: int) -> str:
    record = f"{wins}-{losses}"
    if ties:
        record += f"-{ties}"
    return record


def print_standings(analytics: LeagueAnalytics, season_id: int | None) -> None:
    print(f"{'Rank':<5} {'Team':<25} {'Record':<10} {'PF':<10} {'PA':<10} {'Strk':<5}")
    print("-" * 68)
    for s in analytics.get_standings(season_id):
        streak = f"{s.streak_type.value}{s.streak}" if s.streak_type else "-"
        print(
            f"{s.rank:<5} {s.team_name:<25} {format_record(s.wins, s.losses, s.ties):<10} "
            f"{s.points_for:<10.1f} {s.points_against:<10.1f} {streak:<5}"
        )


def print_power_rankings(analytics: LeagueAnalytics, season_id: int | None) -> None:
    rankings = analytics.get_power_rankings(season_id)
    print(f"{'Rank':<5} {'Team':<25} {'Score':<8} {'Record':<10} {'xW':<7} {'Luck':<7}")
    print("-" * 66)
    for r in rankings:
        record = format_record(r.actual_wins, r.actual_losses, r.actual_ties)
        print(
            f"{r.power_rank:<5} {r.team_name:<25} {r.power_score:<8.3f} {record:<10} "
            f"{r.expected_wins:<7.2f} {r.luck_index:<+7.2f}"
        )

    summary = analytics.power_rankings.get_summary(rankings)
    if summary.luckiest:
        print(f"\nLuckiest: {summary.luckiest.team_name}")
        print(f"Unluckiest: {summary.unluckiest.team_name}")
        print(f"Most consistent: {summary.most_consistent.team_name}")
        print(f"Toughest schedule: {summary.toughest_schedule.team_name}")


def print_rivalry(analytics: LeagueAnalytics, team_a: int, team_b: int) -> None:
    stats = analytics.get_rivalry(team_a, team_b)
    record = stats.all_time_record
    print(f"{stats.team_a_name} vs {stats.team_b_name}\n")
    print(f"All-time: {format_record(record.team_a_wins, record.team_b_wins, record.ties)}")
    print(
        f"Average: {stats.scoring_comparison.team_a_avg:.1f} - "
        f"{stats.scoring_comparison.team_b_avg:.1f}"
    )

    if stats.biggest_blowouts.overall:
        game = stats.biggest_blowouts.overall
        print(
            f"Biggest blowout: {game.winning_side.team_name} by {game.margin:.1f} "
            f"({game.season_year} week {game.week})"
        )
    for revenge in stats.revenge_games:
        avenger = (
            stats.team_a_name if revenge.avenged_by == "team_a" else stats.team_b_name
        )
        print(
            f"Revenge: {avenger} in {revenge.revenge_matchup.season_year} "
            f"week {revenge.revenge_matchup.week} ({revenge.weeks_between} weeks later)"
        )


def print_pulse(analytics: LeagueAnalytics, season_id: int | None) -> None:
    pulse = analytics.get_league_pulse(season_id)
    parity = pulse.parity_metrics
    print(f"Through week {pulse.max_week}\n")
    print(f"Parity index: {parity.parity_index} ({parity.label})")
    print(f"Average margin: {parity.avg_margin} ({parity.margin_label})")

    if pulse.game_of_the_week:
        gotw = pulse.game_of_the_week
        print(
            f"\nGame of the week: {gotw.matchup.team_a.team_name} "
            f"{gotw.matchup.team_a.points:.1f} - {gotw.matchup.team_b.points:.1f} "
            f"{gotw.matchup.team_b.team_name} ({gotw.reason.value})"
        )

    print("\nPlayoff race:")
    for team in pulse.playoff_race:
        print(
            f"  {team.team_name:<25} {format_record(team.wins, team.losses, team.ties):<8} "
            f"GB {team.games_back:<3} {team.status.value}"
        )


def print_transactions(analytics: LeagueAnalytics, season_id: int | None) -> None:
    summary = analytics.get_transaction_summary(season_id)
    print(f"Total transactions: {summary.total_transactions}\n")
    print(f"  trades: {summary.total_trades}")
    print(f"  waivers: {summary.total_waivers}")
    print(f"  free agents: {summary.total_free_agents}")
    print(f"  commissioner: {summary.total_commissioner}")

    print("\nBy team:")
    for activity in analytics.get_manager_activity(season_id):
        print(f"  {activity.team_name}: {activity.total}")


def print_trades(analytics: LeagueAnalytics, roster_id: int) -> None:
    trades = analytics.get_trade_grades(roster_id)
    if not trades:
        print("No trades found.")
        return

    for trade in trades:
        grade = trade.grade
        print(f"{trade.season_year} week {trade.week} - {grade.grade.value}")
        for player in grade.acquired:
            print(f"  + {player.name}: {player.points:.1f}")
        for player in grade.lost:
            print(f"  - {player.name}: {player.points:.1f}")
        print(
            f"  Net: {grade.total_differential:+.1f} "
            f"({grade.weeks_analyzed} weeks, picks {grade.pick_value:+.1f})\n"
        )


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Fantasy Football League Analytics CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show standings for the current season
  league-analytics league.json standings

  # Head-to-head history between rosters 1 and 4
  league-analytics league.json rivalry 1 4

  # Grade roster 3's trades
  league-analytics league.json trades 3
        """,
    )

    parser.add_argument("snapshot", help="League snapshot JSON file")
    parser.add_argument(
        "--season-id",
        type=int,
        default=None,
        help="Season ID to analyze (default: current season)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("standings", help="Show league standings")
    subparsers.add_parser("power", help="Show power rankings")
    subparsers.add_parser("pulse", help="Show league pulse")
    subparsers.add_parser("transactions", help="Transaction summary")

    rivalry_parser = subparsers.add_parser("rivalry", help="Head-to-head history")
    rivalry_parser.add_argument("team_a", type=int, help="First roster ID")
    rivalry_parser.add_argument("team_b", type=int, help="Second roster ID")

    trades_parser = subparsers.add_parser("trades", help="Grade a roster's trades")
    trades_parser.add_argument("roster_id", type=int, help="Roster ID")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    settings = get_settings()
    configure_logging(settings)

    try:
        analytics = LeagueAnalytics(load_snapshot(args.snapshot), settings)

        if args.command == "standings":
            print_standings(analytics, args.season_id)
        elif args.command == "power":
            print_power_rankings(analytics, args.season_id)
        elif args.command == "pulse":
            print_pulse(analytics, args.season_id)
        elif args.command == "transactions":
            print_transactions(analytics, args.season_id)
        elif args.command == "rivalry":
            print_rivalry(analytics, args.team_a, args.team_b)
        elif args.command == "trades":
            print_trades(analytics, args.roster_id)
    except (OSError, ValidationError) as e:
        print(f"Could not read snapshot: {e}", file=sys.stderr)
        sys.exit(1)
    except AnalyticsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
