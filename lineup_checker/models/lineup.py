"""Lineup evaluation result models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Verdict(str, Enum):
    """Lineup readiness tier, ordered by severity."""
    
    OK = "OK"
    POTENTIAL = "POTENTIAL"
    INCOMPLETE = "INCOMPLETE"
    
    @property
    def severity(self) -> int:
        return _SEVERITY[self]
    
    @property
    def label(self) -> str:
        """Section title used when rendering grouped teams."""
        return _LABELS[self]
    
    def worst(self, other: "Verdict") -> "Verdict":
        """Return the more severe of two verdicts."""
        return self if self.severity >= other.severity else other


_SEVERITY = {Verdict.OK: 0, Verdict.POTENTIAL: 1, Verdict.INCOMPLETE: 2}
_LABELS = {
    Verdict.OK: "Complete",
    Verdict.POTENTIAL: "Potential to be Incomplete",
    Verdict.INCOMPLETE: "Incomplete",
}


class FlaggedEntry(BaseModel):
    """A starter that pushed a lineup out of the OK tier."""
    
    pid: str
    name: str
    reason: str


class EvaluatedTeam(BaseModel):
    """One team's lineup verdict for the week."""
    
    roster_id: int
    name: str
    avatar: Optional[str] = None
    status: Verdict = Verdict.OK
    flagged: list[FlaggedEntry] = Field(default_factory=list)
    matchup_id: Optional[int] = None


class StarterDetail(BaseModel):
    """Per-starter row shown in a team's lineup view."""
    
    pid: str
    name: str
    position: str
    status: Verdict
    reason: Optional[str] = None
    is_dst: bool = False
    
    @property
    def display_reason(self) -> str:
        if self.reason == "pup":
            return "PUP"
        if self.reason:
            return self.reason
        return "Healthy" if self.status == Verdict.OK else ""


class LineupReport(BaseModel):
    """Grouped verdicts for every team in a league's current week."""
    
    league_id: str
    week: int
    season_type: str = "regular"
    teams: list[EvaluatedTeam] = Field(default_factory=list)
    groups: dict[Verdict, list[EvaluatedTeam]] = Field(default_factory=dict)
    
    @property
    def is_preseason(self) -> bool:
        return self.season_type == "pre"
    
    @property
    def week_label(self) -> str:
        """Header text, e.g. "Preseason Week 2"."""
        prefix = "Preseason " if self.is_preseason else ""
        return f"{prefix}Week {self.week}"
    
    def find_team(self, roster_id: int) -> Optional[EvaluatedTeam]:
        """Look up an evaluated team by roster_id."""
        for team in self.teams:
            if team.roster_id == roster_id:
                return team
        return None
