"""League loading: fetch, evaluate, and publish the latest result."""

import asyncio
from typing import Callable, Optional
from rich.console import Console

from lineup_checker.models.league import LeagueSnapshot, LoadState
from lineup_checker.services.api import SleeperAPIClient
from lineup_checker.services.bye_weeks import ByeWeekTable
from lineup_checker.services.injuries import DEFAULT_RULES, InjuryRules
from lineup_checker.services.leagues import LeagueService, fetch_nfl_state
from lineup_checker.services.lineups import build_report
from lineup_checker.services.players import PlayersCache, players_cache

console = Console()


async def load_league_snapshot(
    client: SleeperAPIClient,
    league_id: str,
    players: PlayersCache = players_cache,
    week: Optional[int] = None,
) -> LeagueSnapshot:
    """Fetch season state, then users, rosters, matchups and players together.
    
    ``week`` overrides the current week reported by the season state.
    Any failed request aborts the whole load.
    """
    state = await fetch_nfl_state(client)
    target_week = week or state.current_week
    if not target_week:
        raise ValueError("Could not determine the current NFL week")
    
    league_service = LeagueService(client, league_id)
    users, rosters, matchups, player_map = await asyncio.gather(
        league_service.get_users(),
        league_service.get_rosters(),
        league_service.get_matchups(target_week),
        players.ensure_loaded(client),
    )
    
    return LeagueSnapshot(
        league_id=league_id,
        week=target_week,
        state=state,
        users=users,
        rosters=rosters,
        matchups=matchups,
        players=player_map
    )


class LineupChecker:
    """Loads leagues and keeps the state of the most recent load.
    
    Every call to ``load`` starts a new generation. A load that finishes
    after a newer one was started is discarded without touching ``state``.
    """
    
    def __init__(
        self,
        bye_table: ByeWeekTable,
        rules: InjuryRules = DEFAULT_RULES,
        players: PlayersCache = players_cache,
        week: Optional[int] = None,
        client_factory: Callable[[], SleeperAPIClient] = SleeperAPIClient,
    ):
        self.bye_table = bye_table
        self.rules = rules
        self.players = players
        self.week = week
        self.client_factory = client_factory
        self.state = LoadState()
        self._generation = 0
    
    @property
    def generation(self) -> int:
        return self._generation
    
    def _is_current(self, generation: int) -> bool:
        return generation == self._generation
    
    async def load(self, league_id: str) -> LoadState:
        """Load a league and publish the result if it is still current."""
        league_id = (league_id or "").strip()
        self._generation += 1
        generation = self._generation
        self.state = LoadState(league_id=league_id, loading=True)
        
        try:
            async with self.client_factory() as client:
                snapshot = await load_league_snapshot(client, league_id, self.players, self.week)
            report = build_report(snapshot, self.bye_table, self.rules)
        except Exception as e:
            if not self._is_current(generation):
                return self.state
            message = str(e) or "Failed to load data"
            console.print(f"[red]❌ Failed to load league {league_id}: {message}[/red]")
            self.state = LoadState(league_id=league_id, loading=False, error=message)
            return self.state
        
        if not self._is_current(generation):
            console.print(f"[dim]Discarding stale results for league {league_id}[/dim]")
            return self.state
        
        self.state = LoadState(
            league_id=league_id,
            loading=False,
            report=report,
            snapshot=snapshot
        )
        return self.state
    
    def load_sync(self, league_id: str) -> LoadState:
        """Run ``load`` to completion from synchronous code."""
        return asyncio.run(self.load(league_id))
