"""Matchup data models."""

from typing import Optional
from pydantic import BaseModel


class Matchup(BaseModel):
    """One team's entry in a week's matchups."""
    
    roster_id: int
    matchup_id: Optional[int] = None
    starters: Optional[list[Optional[str]]] = None
    
    @classmethod
    def from_api_response(cls, data: dict) -> "Matchup":
        """Create Matchup from API response."""
        return cls(
            roster_id=data["roster_id"],
            matchup_id=data.get("matchup_id"),
            starters=data.get("starters") or []
        )
    
    def get_starters_list(self) -> list[str]:
        """Get list of starter IDs, filtering out None and empty values."""
        if not self.starters:
            return []
        return [player_id for player_id in self.starters if player_id]
