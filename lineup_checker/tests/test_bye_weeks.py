"""Tests for the bye-week table."""

import json

import pytest

from lineup_checker.services.bye_weeks import ByeWeekTable


class TestByeWeekTable:
    """Test ByeWeekTable."""
    
    def test_teams_on_bye(self):
        table = ByeWeekTable({5: ["DET", "SEA"], 6: ["gb"]})
        
        assert table.teams_on_bye(5) == frozenset({"DET", "SEA"})
        assert table.teams_on_bye(6) == frozenset({"GB"})
    
    def test_unknown_week_is_empty(self):
        table = ByeWeekTable({5: ["DET"]})
        
        assert table.teams_on_bye(1) == frozenset()
        assert table.teams_on_bye(None) == frozenset()
    
    def test_from_file(self, tmp_path):
        """Test JSON keys are converted to week numbers."""
        path = tmp_path / "byes.json"
        path.write_text(json.dumps({"7": ["BUF", "CIN"], "13": []}))
        
        table = ByeWeekTable.from_file(path)
        
        assert len(table) == 2
        assert table.teams_on_bye(7) == frozenset({"BUF", "CIN"})
        assert table.teams_on_bye(13) == frozenset()
    
    def test_from_file_missing(self, tmp_path):
        with pytest.raises(ValueError, match="Bye-week file not found"):
            ByeWeekTable.from_file(tmp_path / "nope.json")
    
    def test_from_file_invalid(self, tmp_path):
        path = tmp_path / "byes.json"
        path.write_text("[1, 2, 3]")
        
        with pytest.raises(ValueError, match="expected an object keyed by week"):
            ByeWeekTable.from_file(path)
    
    def test_default_snapshot_loads(self):
        """Test the bundled snapshot is readable."""
        table = ByeWeekTable.default()
        
        assert len(table) > 0
        assert table.teams_on_bye(1) == frozenset()
    
    def test_load_prefers_path(self, tmp_path):
        path = tmp_path / "byes.json"
        path.write_text(json.dumps({"5": ["NYJ"]}))
        
        assert ByeWeekTable.load(path).teams_on_bye(5) == frozenset({"NYJ"})
        assert len(ByeWeekTable.load(None)) == len(ByeWeekTable.default())
    
    def test_from_file_non_string_codes(self, tmp_path):
        path = tmp_path / "byes.json"
        path.write_text(json.dumps({"5": ["DET", 7]}))
        
        with pytest.raises(ValueError, match="must list team codes as strings"):
            ByeWeekTable.from_file(path)
    
    def test_from_file_non_numeric_week(self, tmp_path):
        path = tmp_path / "byes.json"
        path.write_text(json.dumps({"week5": ["DET"]}))
        
        with pytest.raises(ValueError, match="is not a number"):
            ByeWeekTable.from_file(path)
