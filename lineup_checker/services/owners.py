"""Resolve which league member owns each matchup entry."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from lineup_checker.models.matchup import Matchup
from lineup_checker.models.roster import Roster
from lineup_checker.models.user import User

AVATAR_CDN = "https://sleepercdn.com/avatars"


class TeamOwner(BaseModel):
    """Display identity for one matchup entry."""
    
    roster_id: int
    name: str
    avatar: Optional[str] = None
    matchup_id: Optional[int] = None


def avatar_url(avatar_id: Optional[str], size: str = "thumbs") -> Optional[str]:
    """Build a Sleeper CDN avatar URL, or None without an avatar id."""
    if not avatar_id:
        return None
    prefix = "thumbs/" if size == "thumbs" else ""
    return f"{AVATAR_CDN}/{prefix}{avatar_id}"


def display_team_name(user: Optional[User]) -> str:
    """Team nickname, then display name, then username, then a fallback."""
    if user is None:
        return "Team None"
    return user.effective_name


class RosterResolver:
    """Joins users, rosters and a week's matchups."""
    
    def __init__(self, users: List[User], rosters: List[Roster]):
        self.user_by_id: Dict[str, User] = {user.user_id: user for user in users if user.user_id}
        self.roster_by_id: Dict[int, Roster] = {roster.roster_id: roster for roster in rosters}
    
    def owner_of(self, roster_id: int) -> Optional[User]:
        """Get the user owning a roster, if one resolves."""
        roster = self.roster_by_id.get(roster_id)
        if roster is None or not roster.owner_id:
            return None
        return self.user_by_id.get(roster.owner_id)
    
    def resolve(self, matchup: Matchup) -> TeamOwner:
        owner = self.owner_of(matchup.roster_id)
        return TeamOwner(
            roster_id=matchup.roster_id,
            name=display_team_name(owner),
            avatar=avatar_url(owner.avatar if owner else None),
            matchup_id=matchup.matchup_id
        )
    
    def resolve_all(self, matchups: List[Matchup]) -> List[TeamOwner]:
        """Resolve every matchup entry, in matchup order."""
        return [self.resolve(matchup) for matchup in matchups]
