"""League, roster and matchup fetch services."""

from typing import List
from rich.console import Console

from lineup_checker.models.matchup import Matchup
from lineup_checker.models.roster import Roster
from lineup_checker.models.state import NflState
from lineup_checker.models.user import User
from lineup_checker.services.api import (
    SleeperAPIClient,
    SleeperAPIError,
    league_endpoint,
    state_endpoint,
)

console = Console()


async def fetch_nfl_state(client: SleeperAPIClient, sport: str = "nfl") -> NflState:
    """Fetch the current season state (week, season type)."""
    data = await client.get_json(state_endpoint(sport))
    if not isinstance(data, dict):
        raise ValueError("Invalid API response format for season state")
    
    state = NflState.from_api_response(data)
    console.print(f"[green]Season state: week {state.current_week} ({state.season_type})[/green]")
    return state


class LeagueService:
    """Fetches the per-league data a lineup check needs."""
    
    def __init__(self, client: SleeperAPIClient, league_id: str):
        self.client = client
        self.league_id = league_id
    
    async def get_users(self) -> List[User]:
        """Get all users in the league."""
        try:
            data = await self.client.get_json(league_endpoint(self.league_id, "users"))
        except SleeperAPIError as e:
            if e.status_code == 404:
                raise ValueError(f"Users not found for league {self.league_id}")
            raise
        
        if not isinstance(data, list):
            raise ValueError(f"League {self.league_id} not found")
        
        users = [User.from_api_response(user_data) for user_data in data]
        console.print(f"[green]Found {len(users)} users in league[/green]")
        return users
    
    async def get_rosters(self) -> List[Roster]:
        """Get all rosters in the league."""
        try:
            data = await self.client.get_json(league_endpoint(self.league_id, "rosters"))
        except SleeperAPIError as e:
            if e.status_code == 404:
                raise ValueError(f"Rosters not found for league {self.league_id}")
            raise
        
        if not isinstance(data, list):
            raise ValueError(f"League {self.league_id} not found")
        
        rosters = [Roster.from_api_response(roster_data) for roster_data in data]
        console.print(f"[green]Found {len(rosters)} rosters in league[/green]")
        return rosters
    
    async def get_matchups(self, week: int) -> List[Matchup]:
        """Get the league's matchup entries for a week.
        
        A payload that is not a list is treated as a week without matchups.
        """
        console.print(f"[blue]Fetching matchups for week {week}...[/blue]")
        data = await self.client.get_json(league_endpoint(self.league_id, "matchups", week))
        
        if not isinstance(data, list):
            console.print(f"[yellow]No matchup data found for week {week}[/yellow]")
            return []
        
        matchups = [Matchup.from_api_response(item) for item in data]
        console.print(f"[green]Found {len(matchups)} matchup entries for week {week}[/green]")
        return matchups
