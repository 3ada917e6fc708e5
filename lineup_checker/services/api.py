"""HTTP API client for Sleeper API."""

from typing import Any, Optional
import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    retry_if_result
)
from rich.console import Console

console = Console()

RETRY_STATUS_CODES = [429, 500, 502, 503, 504]


def state_endpoint(sport: str = "nfl") -> str:
    """Season state: current week and season type."""
    return f"state/{sport}"


def players_endpoint(sport: str = "nfl") -> str:
    """Full players dictionary keyed by player id."""
    return f"players/{sport}"


def league_endpoint(league_id: str, *parts) -> str:
    """League resource path, e.g. league_endpoint("123", "matchups", 5)."""
    return "/".join(["league", league_id, *(str(part) for part in parts)])


class SleeperAPIError(Exception):
    """Exception raised for Sleeper API errors."""
    
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error {status_code}: {message}")


class SleeperAPIClient:
    """Async HTTP client for Sleeper API with retry logic.
    
    One client is shared by all requests of a load so the concurrent
    fetches reuse the same connection pool.
    """
    
    BASE_URL = "https://api.sleeper.app/v1"
    
    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(30.0),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5)
        )
    
    async def __aenter__(self):
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()
    
    def _should_retry(self, response: httpx.Response) -> bool:
        """Check if response should be retried."""
        return response.status_code in RETRY_STATUS_CODES
    
    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        retry=(
            retry_if_exception_type(httpx.RequestError) |
            retry_if_result(lambda r: isinstance(r, httpx.Response) and r.status_code in RETRY_STATUS_CODES)
        )
    )
    async def _make_request(self, url: str, params: Optional[dict] = None) -> httpx.Response:
        """Make HTTP request with retry logic."""
        try:
            response = await self.client.get(url, params=params)
            
            if self._should_retry(response):
                console.print(f"[yellow]Retrying request to {url} (status: {response.status_code})[/yellow]")
                return response
            
            if response.status_code == 404:
                raise SleeperAPIError(404, f"Resource not found: {url}")
            elif response.status_code >= 400:
                raise SleeperAPIError(response.status_code, f"HTTP {response.status_code}")
            
            return response
            
        except httpx.RequestError as e:
            console.print(f"[red]Request error: {e}[/red]")
            raise
    
    async def get_json(self, endpoint: str, *, params: Optional[dict] = None) -> Any:
        """Get JSON data from API endpoint."""
        url = f"{self.BASE_URL}/{endpoint.lstrip('/')}"
        
        try:
            response = await self._make_request(url, params)
            
            try:
                return response.json()
            except ValueError as e:
                raise SleeperAPIError(response.status_code, f"Invalid JSON response: {e}")
                
        except SleeperAPIError:
            raise
        except Exception as e:
            raise SleeperAPIError(500, f"Unexpected error: {e}")
