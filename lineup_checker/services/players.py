"""Players dictionary cache with JSON persistence."""

import asyncio
import json
import weakref
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Optional
from rich.console import Console

from lineup_checker.models.player import Player
from lineup_checker.services.api import SleeperAPIClient, players_endpoint
from lineup_checker.io.files import file_manager

console = Console()

CACHE_MAX_AGE = timedelta(days=7)


class PlayersCache:
    """Holds the NFL players dictionary across league loads.
    
    The dictionary is the same for every league, so it is fetched once,
    kept in memory and mirrored to a JSON file in the cache directory.
    """
    
    def __init__(self, sport: str = "nfl", cache_file: Optional[Path] = None):
        self.sport = sport
        self._cache_file = cache_file
        self._players: Dict[str, Player] = {}
        self._loaded = False
        self._locks = weakref.WeakKeyDictionary()
    
    @property
    def cache_file(self) -> Path:
        if self._cache_file is None:
            self._cache_file = file_manager.get_cache_path(
                file_manager.players_cache_filename(self.sport)
            )
        return self._cache_file
    
    def _is_cache_fresh(self) -> bool:
        """Check if cache file is fresh (less than 7 days old)."""
        if not self.cache_file.exists():
            return False
        
        file_age = datetime.now() - datetime.fromtimestamp(self.cache_file.stat().st_mtime)
        return file_age < CACHE_MAX_AGE
    
    def _load_from_cache(self) -> bool:
        """Load players from cache file."""
        if not self.cache_file.exists():
            return False
        
        try:
            with open(self.cache_file, 'r') as f:
                data = json.load(f)
                
            self._players = self._parse(data)
            
            console.print(f"[green]Loaded {len(self._players)} players from cache[/green]")
            return True
            
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            console.print(f"[yellow]Invalid cache file, will refresh: {e}[/yellow]")
            return False
    
    async def _fetch_from_api(self, client: SleeperAPIClient) -> None:
        """Fetch players dictionary from Sleeper API."""
        console.print("[blue]Fetching NFL players database...[/blue]")
        
        api_data = await client.get_json(players_endpoint(self.sport))
        
        if not isinstance(api_data, dict):
            raise ValueError("Invalid API response format for players")
        
        self._players = self._parse(api_data)
        console.print(f"[green]Loaded {len(self._players)} players from API[/green]")
    
    def _save_to_cache(self) -> None:
        """Save players data to cache file."""
        try:
            cache_data = {
                player_id: player.to_cache_dict()
                for player_id, player in self._players.items()
            }
            
            with open(self.cache_file, 'w') as f:
                json.dump(cache_data, f)
                
            console.print(f"[green]Cached {len(self._players)} players to {self.cache_file}[/green]")
            
        except OSError as e:
            console.print(f"[yellow]Warning: Could not save players cache: {e}[/yellow]")
    
    @staticmethod
    def _parse(data: dict) -> Dict[str, Player]:
        return {
            player_id: Player.from_api_response(player_id, player_data)
            for player_id, player_data in data.items()
            if isinstance(player_data, dict)
        }
    
    def _lock(self) -> asyncio.Lock:
        """One lock per event loop, so concurrent loads share a single fetch."""
        loop = asyncio.get_running_loop()
        lock = self._locks.get(loop)
        if lock is None:
            lock = self._locks[loop] = asyncio.Lock()
        return lock
    
    async def ensure_loaded(self, client: SleeperAPIClient, refresh: bool = False) -> Dict[str, Player]:
        """Ensure players data is loaded, refreshing if necessary.
        
        Callers that arrive while a fetch is in flight wait for it and
        reuse its result. Cache file reads and writes run off the event loop.
        """
        if self._loaded and not refresh:
            return self._players
        
        async with self._lock():
            if self._loaded and not refresh:
                return self._players
            
            if not refresh and self._is_cache_fresh() and await asyncio.to_thread(self._load_from_cache):
                self._loaded = True
                return self._players
            
            await self._fetch_from_api(client)
            await asyncio.to_thread(self._save_to_cache)
            self._loaded = True
            return self._players


# Global players cache instance, shared across league loads
players_cache = PlayersCache()
