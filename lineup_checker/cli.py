"""Main CLI application for Lineup Checker."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from rich.prompt import Prompt, Confirm
from rich.table import Table
from rich.panel import Panel

from lineup_checker.config import Config, ConfigManager
from lineup_checker.io.csv_export import CSVExporter
from lineup_checker.models.league import LoadState
from lineup_checker.models.lineup import EvaluatedTeam, LineupReport, StarterDetail, Verdict
from lineup_checker.services.bye_weeks import ByeWeekTable
from lineup_checker.services.injuries import rules_for
from lineup_checker.services.lineups import describe_lineup
from lineup_checker.services.loader import LineupChecker

app = typer.Typer(
    name="lineup-checker",
    help="Sleeper lineup completeness checker",
    add_completion=False
)
console = Console()

VERDICT_STYLE = {
    Verdict.OK: "green",
    Verdict.POTENTIAL: "yellow",
    Verdict.INCOMPLETE: "red",
}


def build_checker(
    config: Config,
    bye_weeks: Optional[Path] = None,
    pup_out: Optional[bool] = None,
    week: Optional[int] = None,
) -> LineupChecker:
    """Create a LineupChecker from config plus command-line overrides."""
    bye_table = ByeWeekTable.load(bye_weeks or config.bye_weeks_file)
    pup_is_out = config.pup_is_out if pup_out is None else pup_out
    return LineupChecker(bye_table, rules=rules_for(pup_is_out), week=week)


def render_report(report: LineupReport) -> None:
    """Print the three verdict sections of a report."""
    console.print(f"\n[bold blue]🏈 {report.week_label} • League: {report.league_id}[/bold blue]")

    for verdict in (Verdict.OK, Verdict.POTENTIAL, Verdict.INCOMPLETE):
        teams = report.groups.get(verdict, [])
        style = VERDICT_STYLE[verdict]

        if not teams:
            body = "[dim]No teams in this category.[/dim]"
        else:
            table = Table(show_header=False, box=None, padding=(0, 1))
            table.add_column("Roster", style="cyan")
            table.add_column("Team")
            for team in teams:
                table.add_row(str(team.roster_id), _team_cell(team))
            body = table

        console.print(Panel(
            body,
            title=f"{verdict.label} ({len(teams)})",
            title_align="left",
            border_style=style
        ))


def _team_cell(team: EvaluatedTeam) -> str:
    lines = [f"[bold]{team.name}[/bold]"]
    for entry in team.flagged:
        lines.append(f"  • {entry.name or entry.pid} [dim]— {entry.reason}[/dim]")
    return "\n".join(lines)


def render_lineup(team: EvaluatedTeam, details: List[StarterDetail]) -> None:
    """Print a team's starting lineup with each starter's status."""
    table = Table(title=f"{team.name} — Starting Lineup")
    table.add_column("Pos", style="cyan")
    table.add_column("Player")
    table.add_column("Status")

    for detail in details:
        style = VERDICT_STYLE[detail.status]
        table.add_row(detail.position, detail.name, f"[{style}]{detail.display_reason}[/{style}]")

    console.print(table)
    if team.avatar:
        console.print(f"[dim]Avatar: {team.avatar}[/dim]")


def lineup_details(state: LoadState, checker: LineupChecker, roster_id: int) -> List[StarterDetail]:
    """Build the starter details for one roster of a finished load."""
    report, snapshot = state.report, state.snapshot
    if report is None or snapshot is None or report.find_team(roster_id) is None:
        raise ValueError(f"Roster {roster_id} has no matchup this week")

    matchup = snapshot.matchup_for_roster(roster_id)
    return describe_lineup(
        matchup.get_starters_list(),
        snapshot.players,
        checker.bye_table.teams_on_bye(report.week),
        checker.rules
    )


class LineupCLI:
    """Interactive lineup checker."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or ConfigManager()
        self.config = self.config_manager.load_config().with_env_overrides()
        self.checker: Optional[LineupChecker] = None

    def remember_league(self, league_id: str) -> None:
        """Persist the last successfully loaded league id."""
        self.config.league_id = league_id
        self.config.last_used = datetime.now().isoformat(timespec="seconds")
        self.config_manager.save_config(self.config)

    def prompt_league_id(self) -> Optional[str]:
        """Ask for a league id, offering the cached one first."""
        if self.config.league_id:
            console.print(f"[blue]Found cached league ID: {self.config.league_id}[/blue]")
            if Confirm.ask("Use cached league ID?"):
                return self.config.league_id

        while True:
            league_id = Prompt.ask("Enter Sleeper league_id").strip()
            if league_id:
                return league_id
            console.print("[red]League ID cannot be empty[/red]")
            if not Confirm.ask("Try again?"):
                return None

    def check_league(self, league_id: str) -> LoadState:
        """Load a league, render it, and remember it on success."""
        console.print(f"[blue]Loading league {league_id}...[/blue]")
        state = self.checker.load_sync(league_id)

        if state.error:
            console.print(f"[red]❌ {state.error}[/red]")
        elif state.report:
            render_report(state.report)
            self.remember_league(league_id)

        return state

    def lineup_flow(self, state: LoadState) -> None:
        """Let the user pick a team and show its starting lineup."""
        report = state.report
        if report is None or not report.teams:
            console.print("[red]❌ No teams loaded[/red]")
            return

        choices = [str(team.roster_id) for team in report.teams]
        roster_id = int(Prompt.ask("Roster to view", choices=choices))

        try:
            details = lineup_details(state, self.checker, roster_id)
        except ValueError as e:
            console.print(f"[red]❌ {e}[/red]")
            return

        render_lineup(report.find_team(roster_id), details)

    def run(self) -> None:
        """Run the interactive loop."""
        try:
            self.checker = build_checker(self.config)
            console.print("\n[bold blue]🏈 Sleeper Lineup Completeness Checker[/bold blue]")

            league_id = self.prompt_league_id()
            while league_id:
                state = self.check_league(league_id)

                while state.report and state.report.teams and Confirm.ask("View a team's lineup?", default=False):
                    self.lineup_flow(state)

                if not Confirm.ask("Load another league?", default=False):
                    break
                self.config.league_id = None
                league_id = self.prompt_league_id()

            console.print("[blue]👋 Goodbye![/blue]")

        except KeyboardInterrupt:
            console.print("\n[yellow]❌ Interrupted by user[/yellow]")
        except ValueError as e:
            console.print(f"[red]❌ {e}[/red]")


def _resolve_league_id(config: Config, league_id: Optional[str]) -> str:
    target = (league_id or config.league_id or "").strip()
    if not target:
        console.print("[red]❌ No league ID provided. Use --league-id or run interactive mode first.[/red]")
        raise typer.Exit(1)
    return target


def _load_or_exit(checker: LineupChecker, league_id: str) -> LoadState:
    state = checker.load_sync(league_id)
    if state.error:
        console.print(f"[red]❌ {state.error}[/red]")
        raise typer.Exit(1)
    return state


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Run the interactive lineup checker."""
    if ctx.invoked_subcommand is not None:
        return

    LineupCLI().run()


@app.command("check")
def check(
    league_id: Optional[str] = typer.Option(None, "--league-id", "-l", help="League ID to check"),
    week: Optional[int] = typer.Option(None, help="Override the current NFL week"),
    bye_weeks: Optional[Path] = typer.Option(None, "--bye-weeks", exists=True, dir_okay=False, help="Bye-week JSON file"),
    pup_out: Optional[bool] = typer.Option(None, "--pup-out/--no-pup-out", help="Treat PUP players as out"),
    export: bool = typer.Option(False, "--export", help="Export the report to CSV"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output")
) -> None:
    """Classify every team's starting lineup for the current week."""
    try:
        config_manager = ConfigManager()
        config = config_manager.load_config().with_env_overrides()
        target_league_id = _resolve_league_id(config, league_id)

        checker = build_checker(config, bye_weeks, pup_out, week)
        state = _load_or_exit(checker, target_league_id)

        render_report(state.report)

        config.league_id = target_league_id
        config.last_used = datetime.now().isoformat(timespec="seconds")
        config_manager.save_config(config)

        if export:
            output_path = CSVExporter.export_lineup_report(state.report)
            console.print(f"\n[bold green]✅ Report exported to: {output_path}[/bold green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]❌ Error during lineup check: {e}[/red]")
        if verbose:
            raise
        raise typer.Exit(1)


@app.command("lineup")
def lineup(
    roster_id: int = typer.Option(..., "--roster-id", "-r", help="Roster to show"),
    league_id: Optional[str] = typer.Option(None, "--league-id", "-l", help="League ID to check"),
    week: Optional[int] = typer.Option(None, help="Override the current NFL week"),
    bye_weeks: Optional[Path] = typer.Option(None, "--bye-weeks", exists=True, dir_okay=False, help="Bye-week JSON file"),
    pup_out: Optional[bool] = typer.Option(None, "--pup-out/--no-pup-out", help="Treat PUP players as out"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output")
) -> None:
    """Show one team's starting lineup with each starter's status."""
    try:
        config = ConfigManager().load_config().with_env_overrides()
        target_league_id = _resolve_league_id(config, league_id)

        checker = build_checker(config, bye_weeks, pup_out, week)
        state = _load_or_exit(checker, target_league_id)

        details = lineup_details(state, checker, roster_id)
        render_lineup(state.report.find_team(roster_id), details)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]❌ Error showing lineup: {e}[/red]")
        if verbose:
            raise
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
