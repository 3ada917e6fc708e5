"""Tests for roster owner resolution."""

from lineup_checker.models.matchup import Matchup
from lineup_checker.models.roster import Roster
from lineup_checker.models.user import User
from lineup_checker.services.owners import RosterResolver, avatar_url, display_team_name


class TestAvatarUrl:
    """Test avatar_url."""
    
    def test_thumbnail(self):
        assert avatar_url("abc123") == "https://sleepercdn.com/avatars/thumbs/abc123"
    
    def test_full_size(self):
        assert avatar_url("abc123", size="full") == "https://sleepercdn.com/avatars/abc123"
    
    def test_no_avatar(self):
        assert avatar_url(None) is None
        assert avatar_url("") is None


class TestDisplayTeamName:
    """Test display_team_name."""
    
    def test_no_owner(self):
        assert display_team_name(None) == "Team None"
    
    def test_user_fallback(self):
        assert display_team_name(User(user_id="42")) == "Team 42"


class TestRosterResolver:
    """Test RosterResolver."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.users = [
            User(user_id="u1", username="alpha", display_name="Alpha", team_name="Alpha Dogs", avatar="av1"),
            User(user_id="u2", username="bravo"),
        ]
        self.rosters = [
            Roster(roster_id=1, owner_id="u1"),
            Roster(roster_id=2, owner_id="u2"),
            Roster(roster_id=3, owner_id=None),
        ]
        self.resolver = RosterResolver(self.users, self.rosters)
    
    def test_resolve_owner_identity(self):
        owner = self.resolver.resolve(Matchup(roster_id=1, matchup_id=4))
        
        assert owner.roster_id == 1
        assert owner.name == "Alpha Dogs"
        assert owner.avatar == "https://sleepercdn.com/avatars/thumbs/av1"
        assert owner.matchup_id == 4
    
    def test_resolve_without_avatar(self):
        owner = self.resolver.resolve(Matchup(roster_id=2, matchup_id=4))
        
        assert owner.name == "bravo"
        assert owner.avatar is None
    
    def test_orphaned_and_unknown_rosters_still_resolve(self):
        """Test matchups with no resolvable owner use the fallback name."""
        orphan = self.resolver.resolve(Matchup(roster_id=3))
        unknown = self.resolver.resolve(Matchup(roster_id=99))
        
        assert orphan.name == "Team None"
        assert unknown.name == "Team None"
        assert unknown.avatar is None
    
    def test_resolve_all_keeps_order(self):
        matchups = [Matchup(roster_id=2), Matchup(roster_id=1), Matchup(roster_id=3)]
        
        owners = self.resolver.resolve_all(matchups)
        
        assert [owner.roster_id for owner in owners] == [2, 1, 3]
