"""Roster data models."""

from typing import Optional
from pydantic import BaseModel


class Roster(BaseModel):
    """Sleeper roster model."""
    
    roster_id: int
    owner_id: Optional[str] = None
    
    @classmethod
    def from_api_response(cls, data: dict) -> "Roster":
        """Create Roster from API response."""
        return cls(
            roster_id=data["roster_id"],
            owner_id=data.get("owner_id")
        )
