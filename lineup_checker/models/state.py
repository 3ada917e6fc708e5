"""NFL season state model."""

from typing import Optional
from pydantic import BaseModel


class NflState(BaseModel):
    """Sleeper ``state/nfl`` snapshot."""
    
    week: Optional[int] = None
    display_week: Optional[int] = None
    leg: Optional[int] = None
    season: Optional[str] = None
    season_type: str = "regular"
    
    @classmethod
    def from_api_response(cls, data: dict) -> "NflState":
        """Create NflState from API response."""
        return cls(
            week=data.get("week"),
            display_week=data.get("display_week"),
            leg=data.get("leg"),
            season=data.get("season"),
            season_type=data.get("season_type") or "regular"
        )
    
    @property
    def current_week(self) -> Optional[int]:
        """Week whose matchups are checked (0 counts as unset)."""
        return self.display_week or self.week or self.leg
    
    @property
    def is_preseason(self) -> bool:
        """Check if the league calendar is in preseason."""
        return self.season_type == "pre"
