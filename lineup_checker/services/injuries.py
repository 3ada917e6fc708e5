"""Injury classification for individual players."""

from pydantic import BaseModel

from lineup_checker.models.lineup import Verdict
from lineup_checker.models.player import Player


class InjuryRules(BaseModel):
    """Lower-case status strings mapped onto readiness tiers."""
    
    out_injury_statuses: frozenset[str] = frozenset({"out", "ir", "suspended", "pup"})
    out_roster_statuses: frozenset[str] = frozenset({"ir", "suspension", "pup"})
    questionable_statuses: frozenset[str] = frozenset({"questionable", "doubtful"})
    
    def without_pup(self) -> "InjuryRules":
        """Variant where PUP players are not counted as out."""
        return self.model_copy(update={
            "out_injury_statuses": self.out_injury_statuses - {"pup"},
            "out_roster_statuses": self.out_roster_statuses - {"pup"},
        })


DEFAULT_RULES = InjuryRules()


def rules_for(pup_is_out: bool = True) -> InjuryRules:
    """Get the rule set for the configured PUP handling."""
    return DEFAULT_RULES if pup_is_out else DEFAULT_RULES.without_pup()


def classify_injury(player: Player, rules: InjuryRules = DEFAULT_RULES) -> Verdict:
    """Classify a player's availability from injury_status and status.
    
    Matching is case-insensitive; missing fields count as empty and any
    status outside the rule set is OK.
    """
    injury = str(player.injury_status or "").lower()
    status = str(player.status or "").lower()
    
    if injury in rules.out_injury_statuses or status in rules.out_roster_statuses:
        return Verdict.INCOMPLETE
    if injury in rules.questionable_statuses:
        return Verdict.POTENTIAL
    return Verdict.OK
