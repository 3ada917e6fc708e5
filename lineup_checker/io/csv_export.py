"""CSV export utilities for lineup reports."""

from pathlib import Path
from typing import List, Optional
import pandas as pd
from rich.console import Console

from lineup_checker.io.files import FileManager, file_manager
from lineup_checker.models.lineup import LineupReport, Verdict

console = Console()

REPORT_COLUMNS = [
    "league_id", "week", "roster_id", "team_name", "verdict", "matchup_id",
    "flagged_player_id", "flagged_player_name", "reason"
]

VERDICT_ORDER = {Verdict.INCOMPLETE.value: 0, Verdict.POTENTIAL.value: 1, Verdict.OK.value: 2}


class CSVExporter:
    """Handles CSV export operations."""
    
    @staticmethod
    def build_report_dataframe(report: LineupReport) -> pd.DataFrame:
        """One row per flagged starter; teams without flags get a single row."""
        rows = []
        
        for team in report.teams:
            base = {
                "league_id": report.league_id,
                "week": report.week,
                "roster_id": team.roster_id,
                "team_name": team.name,
                "verdict": team.status.value,
                "matchup_id": team.matchup_id,
            }
            if not team.flagged:
                rows.append({**base, "flagged_player_id": "", "flagged_player_name": "", "reason": ""})
                continue
            
            for entry in team.flagged:
                rows.append({
                    **base,
                    "flagged_player_id": entry.pid,
                    "flagged_player_name": entry.name or entry.pid,
                    "reason": entry.reason
                })
        
        if not rows:
            return pd.DataFrame(columns=REPORT_COLUMNS)
        
        df = pd.DataFrame(rows)[REPORT_COLUMNS]
        
        # Worst verdicts first; stable so flag order survives within a team
        df = df.sort_values(
            "verdict", key=lambda col: col.map(VERDICT_ORDER), kind="stable"
        ).reset_index(drop=True)
        
        return df
    
    @staticmethod
    def export_lineup_report(report: LineupReport, files: Optional[FileManager] = None) -> Path:
        """Export a lineup report to CSV."""
        files = files or file_manager
        df = CSVExporter.build_report_dataframe(report)
        if report.teams:
            CSVExporter.validate_dataframe(df, REPORT_COLUMNS)
        else:
            console.print(f"[yellow]No matchups for {report.week_label}; writing header only[/yellow]")
        
        filename = files.lineups_filename(report.league_id, report.week)
        output_path = files.get_output_path(filename)
        
        # Ensure output directory exists
        files.ensure_output_dir()
        
        df.to_csv(output_path, index=False, encoding='utf-8')
        
        console.print(f"[green]✅ {report.week_label} lineups exported: {output_path}[/green]")
        console.print(f"[blue]📊 {len(report.teams)} teams exported[/blue]")
        
        return output_path
    
    @staticmethod
    def validate_dataframe(df: pd.DataFrame, required_columns: List[str]) -> None:
        """Validate that dataframe has required columns and data."""
        if df.empty:
            raise ValueError("Dataframe is empty")
        
        missing_columns = [col for col in required_columns if col not in df.columns]
        if missing_columns:
            raise ValueError(f"Missing required columns: {missing_columns}")
