"""League snapshot models."""

from typing import Optional
from pydantic import BaseModel, Field

from lineup_checker.models.lineup import LineupReport
from lineup_checker.models.matchup import Matchup
from lineup_checker.models.player import Player
from lineup_checker.models.roster import Roster
from lineup_checker.models.state import NflState
from lineup_checker.models.user import User


class LeagueSnapshot(BaseModel):
    """Everything fetched for one league load."""
    
    league_id: str
    week: int
    state: NflState
    users: list[User] = Field(default_factory=list)
    rosters: list[Roster] = Field(default_factory=list)
    matchups: list[Matchup] = Field(default_factory=list)
    players: dict[str, Player] = Field(default_factory=dict)
    
    def matchup_for_roster(self, roster_id: int) -> Optional[Matchup]:
        """Get the week's matchup entry for a roster."""
        for matchup in self.matchups:
            if matchup.roster_id == roster_id:
                return matchup
        return None


class LoadState(BaseModel):
    """What the presentation layer sees for the latest load."""
    
    league_id: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None
    report: Optional[LineupReport] = None
    snapshot: Optional[LeagueSnapshot] = None
