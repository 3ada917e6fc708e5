"""Bye-week lookup table."""

import json
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union
from rich.console import Console

console = Console()

DEFAULT_BYE_WEEKS_FILE = Path(__file__).resolve().parent.parent / "data" / "bye_weeks_2025.json"


class ByeWeekTable:
    """Maps an NFL week to the team codes on bye that week.
    
    The table is season data maintained outside the code; load a fresh
    file each season rather than editing callers.
    """
    
    def __init__(self, weeks: Optional[Mapping[int, Iterable[str]]] = None):
        self._weeks: Dict[int, frozenset] = {
            int(week): frozenset(code.upper() for code in codes)
            for week, codes in (weeks or {}).items()
        }
    
    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ByeWeekTable":
        """Load a table from JSON shaped like {"5": ["DET", "SEA"], ...}."""
        path = Path(path)
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ValueError(f"Bye-week file not found: {path}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid bye-week file {path}: {e}")
        
        if not isinstance(data, dict):
            raise ValueError(f"Invalid bye-week file {path}: expected an object keyed by week")
        
        for week, codes in data.items():
            if not week.isdigit():
                raise ValueError(f"Invalid bye-week file {path}: week {week!r} is not a number")
            if not isinstance(codes, list) or not all(isinstance(code, str) for code in codes):
                raise ValueError(f"Invalid bye-week file {path}: week {week} must list team codes as strings")
        
        table = cls(data)
        console.print(f"[blue]Loaded bye weeks for {len(table)} weeks from {path.name}[/blue]")
        return table
    
    @classmethod
    def default(cls) -> "ByeWeekTable":
        """Load the bye-week snapshot bundled with the package."""
        return cls.from_file(DEFAULT_BYE_WEEKS_FILE)
    
    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "ByeWeekTable":
        """Load from ``path`` when given, else the bundled snapshot."""
        return cls.from_file(path) if path else cls.default()
    
    def teams_on_bye(self, week: Optional[int]) -> frozenset:
        """Get team codes on bye for a week (empty if unknown)."""
        if week is None:
            return frozenset()
        return self._weeks.get(int(week), frozenset())
    
    def __len__(self) -> int:
        return len(self._weeks)
