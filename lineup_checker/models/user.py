"""User data models."""

from typing import Optional
from pydantic import BaseModel


class User(BaseModel):
    """Sleeper league member."""
    
    user_id: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    team_name: Optional[str] = None
    avatar: Optional[str] = None
    
    @classmethod
    def from_api_response(cls, data: dict) -> "User":
        """Create User from API response.
        
        The team nickname lives under ``metadata.team_name``.
        """
        metadata = data.get("metadata") or {}
        
        return cls(
            user_id=data.get("user_id"),
            username=data.get("username"),
            display_name=data.get("display_name"),
            team_name=metadata.get("team_name"),
            avatar=data.get("avatar")
        )
    
    @property
    def effective_name(self) -> str:
        """Get the most appropriate team name."""
        return self.team_name or self.display_name or self.username or f"Team {self.user_id}"
