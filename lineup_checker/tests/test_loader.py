"""Tests for league loading and the stale-load guard."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from lineup_checker.models.lineup import Verdict
from lineup_checker.services.api import SleeperAPIError
from lineup_checker.services.bye_weeks import ByeWeekTable
from lineup_checker.services.loader import LineupChecker, load_league_snapshot
from lineup_checker.services.players import PlayersCache


PLAYERS = {
    "1023": {"first_name": "Travis", "last_name": "Kelce", "position": "TE", "team": "KC", "injury_status": "Questionable"},
    "2001": {"first_name": "Josh", "last_name": "Allen", "position": "QB", "team": "BUF"},
}


def league_responses(league_id, week=10):
    return {
        f"league/{league_id}/users": [
            {"user_id": "u1", "username": "one", "metadata": {"team_name": f"{league_id} One"}},
            {"user_id": "u2", "username": "two", "avatar": "av2"},
        ],
        f"league/{league_id}/rosters": [
            {"roster_id": 1, "owner_id": "u1"},
            {"roster_id": 2, "owner_id": "u2"},
        ],
        f"league/{league_id}/matchups/{week}": [
            {"roster_id": 1, "matchup_id": 1, "starters": ["KC", "1023"]},
            {"roster_id": 2, "matchup_id": 1, "starters": ["2001", "1023"]},
        ],
    }


def make_client(responses, delays=None):
    """AsyncMock client answering get_json from an endpoint table."""
    delays = delays or {}
    client = AsyncMock()
    client.__aenter__.return_value = client
    client.__aexit__.return_value = None
    
    async def get_json(endpoint, *, params=None):
        await asyncio.sleep(delays.get(endpoint, 0))
        value = responses[endpoint]
        if isinstance(value, Exception):
            raise value
        return value
    
    client.get_json.side_effect = get_json
    return client


def requested(client):
    return [call.args[0] for call in client.get_json.call_args_list]


@pytest.fixture
def players(tmp_path):
    return PlayersCache(cache_file=tmp_path / "players_nfl.json")


@pytest.fixture
def responses():
    return {
        "state/nfl": {"week": 10, "display_week": 10, "season_type": "regular"},
        "players/nfl": PLAYERS,
        **league_responses("A"),
        **league_responses("B"),
    }


class TestLoadLeagueSnapshot:
    """Test load_league_snapshot."""
    
    def test_fetches_state_first_then_league_data(self, responses, players):
        client = make_client(responses)
        
        snapshot = asyncio.run(load_league_snapshot(client, "A", players))
        
        calls = requested(client)
        assert calls[0] == "state/nfl"
        assert set(calls[1:]) == {
            "league/A/users", "league/A/rosters", "league/A/matchups/10", "players/nfl"
        }
        assert snapshot.week == 10
        assert len(snapshot.users) == 2
        assert len(snapshot.rosters) == 2
        assert len(snapshot.matchups) == 2
        assert snapshot.players["1023"].injury_status == "Questionable"
    
    def test_week_override(self, responses, players):
        responses.update(league_responses("A", week=3))
        client = make_client(responses)
        
        snapshot = asyncio.run(load_league_snapshot(client, "A", players, week=3))
        
        assert "league/A/matchups/3" in requested(client)
        assert snapshot.week == 3
    
    def test_missing_week(self, responses, players):
        responses["state/nfl"] = {"season_type": "off"}
        client = make_client(responses)
        
        with pytest.raises(ValueError, match="Could not determine the current NFL week"):
            asyncio.run(load_league_snapshot(client, "A", players))
    
    def test_non_list_matchups_is_empty_week(self, responses, players):
        responses["league/A/matchups/10"] = None
        client = make_client(responses)
        
        snapshot = asyncio.run(load_league_snapshot(client, "A", players))
        
        assert snapshot.matchups == []

    
    def test_overlapping_loads_fetch_players_once(self, responses, players):
        client = make_client(responses, delays={"players/nfl": 0.05})
        
        async def run():
            return await asyncio.gather(
                load_league_snapshot(client, "A", players),
                load_league_snapshot(client, "B", players),
            )
        
        first, second = asyncio.run(run())
        
        assert requested(client).count("players/nfl") == 1
        assert first.players.keys() == second.players.keys()

class TestLineupChecker:
    """Test LineupChecker."""
    
    def make_checker(self, client, players, **kwargs):
        return LineupChecker(
            ByeWeekTable({10: ["KC"]}),
            players=players,
            client_factory=lambda: client,
            **kwargs
        )
    
    def test_successful_load(self, responses, players):
        checker = self.make_checker(make_client(responses), players)
        
        state = checker.load_sync("  A  ")
        
        assert state.league_id == "A"
        assert state.loading is False
        assert state.error is None
        report = state.report
        assert report.week == 10
        assert [team.name for team in report.groups[Verdict.INCOMPLETE]] == ["A One", "two"]
        assert report.groups[Verdict.INCOMPLETE][0].flagged[0].name == "KC D/ST"
        assert report.groups[Verdict.INCOMPLETE][1].flagged[0].reason == "BYE"
        assert state.snapshot.matchup_for_roster(2).starters == ["2001", "1023"]
    
    def test_failed_load_sets_error(self, responses, players):
        responses["league/A/users"] = SleeperAPIError(404, "Resource not found")
        checker = self.make_checker(make_client(responses), players)
        
        state = checker.load_sync("A")
        
        assert state.loading is False
        assert state.report is None
        assert "Users not found for league A" in state.error
    
    def test_transport_error_aborts_load(self, responses, players):
        responses["players/nfl"] = SleeperAPIError(500, "Unexpected error: boom")
        checker = self.make_checker(make_client(responses), players)
        
        state = checker.load_sync("A")
        
        assert state.report is None
        assert state.error == "API Error 500: Unexpected error: boom"
    
    def test_players_cached_across_leagues(self, responses, players):
        client = make_client(responses)
        checker = self.make_checker(client, players)
        
        checker.load_sync("A")
        checker.load_sync("B")
        
        assert requested(client).count("players/nfl") == 1
        assert checker.state.report.league_id == "B"
        assert checker.generation == 2
    
    def test_stale_result_is_discarded(self, responses, players):
        """Test a slow load finishing after a newer one is not applied."""
        client = make_client(responses, delays={"league/A/users": 0.05})
        checker = self.make_checker(client, players)
        
        async def run():
            first = asyncio.create_task(checker.load("A"))
            await asyncio.sleep(0)
            await checker.load("B")
            return await first
        
        result = asyncio.run(run())
        
        assert checker.state.league_id == "B"
        assert checker.state.report.league_id == "B"
        assert result.league_id == "B"
    
    def test_stale_error_is_discarded(self, responses, players):
        responses["league/A/users"] = SleeperAPIError(500, "HTTP 500")
        client = make_client(responses, delays={"league/A/users": 0.05})
        checker = self.make_checker(client, players)
        
        async def run():
            first = asyncio.create_task(checker.load("A"))
            await asyncio.sleep(0)
            await checker.load("B")
            await first
        
        asyncio.run(run())
        
        assert checker.state.error is None
        assert checker.state.report.league_id == "B"
    
    def test_week_override(self, responses, players):
        responses.update(league_responses("A", week=4))
        checker = self.make_checker(make_client(responses), players, week=4)
        
        state = checker.load_sync("A")
        
        assert state.report.week == 4
        assert state.report.groups[Verdict.INCOMPLETE] == []
