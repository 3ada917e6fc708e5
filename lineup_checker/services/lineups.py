"""Lineup evaluation: per-team verdicts and flagged starters."""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from lineup_checker.models.league import LeagueSnapshot
from lineup_checker.models.lineup import (
    EvaluatedTeam,
    FlaggedEntry,
    LineupReport,
    StarterDetail,
    Verdict,
)
from lineup_checker.models.player import Player
from lineup_checker.services.bye_weeks import ByeWeekTable
from lineup_checker.services.injuries import DEFAULT_RULES, InjuryRules, classify_injury
from lineup_checker.services.owners import RosterResolver

TEAM_CODE_PATTERN = re.compile(r"[A-Z]{2,4}")

POSITION_ORDER = {
    "QB": 1,
    "RB": 2,
    "WR": 3,
    "TE": 4,
    "FLEX": 5,
    "K": 6,
    "DEF": 7,
}


def is_dst_starter_id(starter_id: str) -> bool:
    """Team codes like "KC" stand in for a D/ST starter."""
    return TEAM_CODE_PATTERN.fullmatch(starter_id) is not None


def evaluate_lineup(
    starters: Iterable[Optional[str]],
    players: Dict[str, Player],
    bye_teams: frozenset,
    rules: InjuryRules = DEFAULT_RULES,
) -> Tuple[Verdict, List[FlaggedEntry]]:
    """Scan starters in order and return the lineup verdict and flags.
    
    The first INCOMPLETE starter (bye or out) ends the scan. POTENTIAL
    starters are all flagged. Unknown player ids are skipped.
    """
    status = Verdict.OK
    flagged: List[FlaggedEntry] = []
    
    for pid in starters:
        if not pid:
            continue
        
        if is_dst_starter_id(pid):
            if pid in bye_teams:
                flagged.append(FlaggedEntry(pid=pid, name=f"{pid} D/ST", reason="BYE"))
                return Verdict.INCOMPLETE, flagged
            continue
        
        player = players.get(pid)
        if player is None:
            continue
        
        if player.team and player.team in bye_teams:
            flagged.append(FlaggedEntry(pid=pid, name=player.full_name, reason="BYE"))
            return Verdict.INCOMPLETE, flagged
        
        bucket = classify_injury(player, rules)
        if bucket == Verdict.INCOMPLETE:
            reason = player.injury_status or player.status or "Out"
            flagged.append(FlaggedEntry(pid=pid, name=player.full_name, reason=str(reason)))
            return Verdict.INCOMPLETE, flagged
        elif bucket == Verdict.POTENTIAL:
            status = status.worst(bucket)
            reason = player.injury_status or "Questionable"
            flagged.append(FlaggedEntry(pid=pid, name=player.full_name, reason=reason))
    
    return status, flagged


def describe_lineup(
    starters: Iterable[Optional[str]],
    players: Dict[str, Player],
    bye_teams: frozenset,
    rules: InjuryRules = DEFAULT_RULES,
) -> List[StarterDetail]:
    """Describe every starter of a lineup, sorted by position."""
    details = []
    
    for pid in starters:
        if not pid:
            continue
        
        if is_dst_starter_id(pid):
            on_bye = pid in bye_teams
            details.append(StarterDetail(
                pid=pid,
                name=f"{pid} D/ST",
                position="DEF",
                status=Verdict.INCOMPLETE if on_bye else Verdict.OK,
                reason="BYE" if on_bye else None,
                is_dst=True
            ))
            continue
        
        player = players.get(pid)
        if player is None:
            details.append(StarterDetail(pid=pid, name=pid, position="Unknown", status=Verdict.OK))
            continue
        
        if player.team and player.team in bye_teams:
            details.append(StarterDetail(
                pid=pid,
                name=player.full_name,
                position=player.display_position,
                status=Verdict.INCOMPLETE,
                reason="BYE"
            ))
            continue
        
        status = classify_injury(player, rules)
        reason = player.injury_status or ("Out" if status == Verdict.INCOMPLETE else None)
        details.append(StarterDetail(
            pid=pid,
            name=player.full_name,
            position=player.display_position,
            status=status,
            reason=reason
        ))
    
    return sorted(details, key=lambda detail: POSITION_ORDER.get(detail.position, 99))


def evaluate_teams(
    snapshot: LeagueSnapshot,
    bye_teams: frozenset,
    rules: InjuryRules = DEFAULT_RULES,
) -> List[EvaluatedTeam]:
    """Evaluate one team per matchup entry, in matchup order."""
    resolver = RosterResolver(snapshot.users, snapshot.rosters)
    teams = []
    
    for matchup, owner in zip(snapshot.matchups, resolver.resolve_all(snapshot.matchups)):
        status, flagged = evaluate_lineup(matchup.get_starters_list(), snapshot.players, bye_teams, rules)
        teams.append(EvaluatedTeam(
            roster_id=owner.roster_id,
            name=owner.name,
            avatar=owner.avatar,
            status=status,
            flagged=flagged,
            matchup_id=owner.matchup_id
        ))
    
    return teams


def group_by_verdict(teams: List[EvaluatedTeam]) -> Dict[Verdict, List[EvaluatedTeam]]:
    """Group teams by verdict, keeping their order within each group."""
    grouped: Dict[Verdict, List[EvaluatedTeam]] = {verdict: [] for verdict in Verdict}
    for team in teams:
        grouped[team.status].append(team)
    return grouped


def build_report(
    snapshot: LeagueSnapshot,
    bye_table: ByeWeekTable,
    rules: InjuryRules = DEFAULT_RULES,
) -> LineupReport:
    """Evaluate a league snapshot into a grouped lineup report."""
    teams = evaluate_teams(snapshot, bye_table.teams_on_bye(snapshot.week), rules)
    return LineupReport(
        league_id=snapshot.league_id,
        week=snapshot.week,
        season_type=snapshot.state.season_type,
        teams=teams,
        groups=group_by_verdict(teams)
    )
