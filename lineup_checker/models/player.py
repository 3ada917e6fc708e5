"""Player data models."""

from typing import Optional
from pydantic import BaseModel


class Player(BaseModel):
    """NFL player record from the Sleeper players dictionary."""
    
    player_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None
    team: Optional[str] = None
    injury_status: Optional[str] = None
    status: Optional[str] = None
    
    @classmethod
    def from_api_response(cls, player_id: str, data: dict) -> "Player":
        """Create Player from API response."""
        return cls(
            player_id=player_id,
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            position=data.get("position"),
            team=data.get("team"),
            injury_status=data.get("injury_status"),
            status=data.get("status")
        )
    
    @property
    def full_name(self) -> str:
        """Get player's full name ("" when neither part is known)."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
    
    @property
    def display_position(self) -> str:
        """Get display-friendly position."""
        return self.position or "Unknown"
    
    def to_cache_dict(self) -> dict:
        """Serialize the fields kept in the local players cache."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "position": self.position,
            "team": self.team,
            "injury_status": self.injury_status,
            "status": self.status
        }
