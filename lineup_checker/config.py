"""Configuration management for Lineup Checker."""

import json
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel
from rich.console import Console

console = Console()

load_dotenv()

LEAGUE_ID_ENV = "SLEEPER_LEAGUE_ID"
BYE_WEEKS_FILE_ENV = "SLEEPER_BYE_WEEKS_FILE"


class Config(BaseModel):
    """Application configuration."""
    
    league_id: Optional[str] = None
    last_used: Optional[str] = None
    bye_weeks_file: Optional[str] = None
    pup_is_out: bool = True
    
    def with_env_overrides(self) -> "Config":
        """Apply SLEEPER_* environment variables over the stored values."""
        updates = {}
        if os.getenv(LEAGUE_ID_ENV):
            updates["league_id"] = os.getenv(LEAGUE_ID_ENV).strip()
        if os.getenv(BYE_WEEKS_FILE_ENV):
            updates["bye_weeks_file"] = os.getenv(BYE_WEEKS_FILE_ENV)
        return self.model_copy(update=updates)


class ConfigManager:
    """Manages application configuration persistence."""
    
    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".lineup_checker"
        self.config_file = self.config_dir / "config.json"
        self._ensure_config_dir()
    
    def _ensure_config_dir(self) -> None:
        """Ensure config directory exists."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
    
    def load_config(self) -> Config:
        """Load configuration from file."""
        if not self.config_file.exists():
            return Config()
        
        try:
            with open(self.config_file, 'r') as f:
                data = json.load(f)
                return Config(**data)
        except (json.JSONDecodeError, ValueError) as e:
            console.print(f"[yellow]Warning: Invalid config file, using defaults: {e}[/yellow]")
            return Config()
    
    def save_config(self, config: Config) -> None:
        """Save configuration to file."""
        try:
            with open(self.config_file, 'w') as f:
                json.dump(config.model_dump(), f, indent=2)
        except OSError as e:
            console.print(f"[yellow]Warning: Could not save config: {e}[/yellow]")
    
    def get_cache_dir(self) -> Path:
        """Get cache directory path."""
        cache_dir = self.config_dir / "cache"
        cache_dir.mkdir(exist_ok=True)
        return cache_dir
    
    def get_output_dir(self) -> Path:
        """Get output directory path."""
        output_dir = Path("out")
        output_dir.mkdir(exist_ok=True)
        return output_dir
