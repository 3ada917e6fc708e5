"""File management utilities."""

from pathlib import Path
from typing import Optional
from lineup_checker.config import ConfigManager


class FileManager:
    """Manages file paths and directories."""
    
    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or ConfigManager()
    
    def get_output_path(self, filename: str) -> Path:
        """Get output file path."""
        output_dir = self.config_manager.get_output_dir()
        return output_dir / filename
    
    def get_cache_path(self, filename: str) -> Path:
        """Get cache file path."""
        cache_dir = self.config_manager.get_cache_dir()
        return cache_dir / filename
    
    def players_cache_filename(self, sport: str = "nfl") -> str:
        """Generate players cache filename."""
        return f"players_{sport}.json"
    
    def lineups_filename(self, league_id: str, week: int) -> str:
        """Generate lineup report CSV filename."""
        safe_league_id = "".join(c for c in league_id if c.isalnum() or c in "._-")
        return f"lineups_{safe_league_id}_week{week}.csv"
    
    def ensure_output_dir(self) -> Path:
        """Ensure output directory exists and return path."""
        return self.config_manager.get_output_dir()


# Global file manager instance
file_manager = FileManager()
