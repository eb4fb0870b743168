import logging
from collections import Counter, defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .types import DuoStats, MatchRecord, MatchSummary, Participation, Player, PlayerStats
from .utils import pairs, percentage

logger = logging.getLogger("fulbito.stats")

TEAMS = ("A", "B")


def match_outcome(match: MatchRecord, team: str) -> str:
    ours, theirs = (match.score_a, match.score_b) if team == "A" else (match.score_b, match.score_a)
    if ours > theirs:
        return "win"
    if ours < theirs:
        return "loss"
    return "draw"


def _recency(match: MatchRecord) -> tuple:
    return (match.date, match.id)


def _index_matches(matches: Iterable[MatchRecord]) -> Dict[int, MatchRecord]:
    return {m.id: m for m in matches}


def _usable(participations: Iterable[Participation], match_map: Dict[int, MatchRecord]) -> Iterator[Participation]:
    skipped = 0
    for entry in participations:
        if entry.match_id not in match_map or entry.team not in TEAMS:
            skipped += 1
            continue
        yield entry
    if skipped:
        logger.debug("Ignored %d participation rows without a known match or team", skipped)


def _build_player_stats(
    player: Player,
    entries: List[Participation],
    match_map: Dict[int, MatchRecord],
) -> PlayerStats:
    stats = PlayerStats(player_id=player.id, name=player.name)
    # newest first, so the streak can be read off the front
    entries = sorted(entries, key=lambda e: _recency(match_map[e.match_id]), reverse=True)
    streak_open = True
    for entry in entries:
        outcome = match_outcome(match_map[entry.match_id], entry.team)
        if outcome == "win":
            stats.wins += 1
            if streak_open:
                stats.streak += 1
        else:
            streak_open = False
            if outcome == "loss":
                stats.losses += 1
            else:
                stats.draws += 1
    stats.games_played = len(entries)
    stats.win_rate = percentage(stats.wins, stats.wins + stats.losses)
    return stats


def player_stats(
    player: Player,
    matches: Iterable[MatchRecord],
    participations: Iterable[Participation],
) -> PlayerStats:
    match_map = _index_matches(matches)
    entries = [e for e in _usable(participations, match_map) if e.player_id == player.id]
    return _build_player_stats(player, entries, match_map)


def _leaderboard_order(row: PlayerStats) -> tuple:
    return (row.win_rate is None, -(row.win_rate or 0.0), -row.games_played, row.name)


def leaderboard(
    players: Sequence[Player],
    matches: Iterable[MatchRecord],
    participations: Iterable[Participation],
    min_games: int = 0,
) -> List[PlayerStats]:
    """Per-player record, best win rate first; players without decided games sink to the bottom."""
    match_map = _index_matches(matches)
    by_player: Dict[int, List[Participation]] = defaultdict(list)
    for entry in _usable(participations, match_map):
        by_player[entry.player_id].append(entry)

    rows = [_build_player_stats(p, by_player.get(p.id, []), match_map) for p in players]
    rows = [row for row in rows if row.games_played >= min_games]
    rows.sort(key=_leaderboard_order)
    return rows


def _team_rosters(
    participations: Iterable[Participation],
    match_map: Dict[int, MatchRecord],
) -> Dict[int, Dict[str, List[int]]]:
    rosters: Dict[int, Dict[str, List[int]]] = {}
    for entry in _usable(participations, match_map):
        teams = rosters.setdefault(entry.match_id, {team: [] for team in TEAMS})
        if entry.player_id not in teams[entry.team]:
            teams[entry.team].append(entry.player_id)
    return rosters


def duo_stats(
    players: Sequence[Player],
    matches: Iterable[MatchRecord],
    participations: Iterable[Participation],
    min_games: int = 1,
) -> List[DuoStats]:
    """Record of every pair of players that shared a team at least ``min_games`` times."""
    order = {p.id: idx for idx, p in enumerate(players)}
    by_id = {p.id: p for p in players}
    match_map = _index_matches(matches)

    games: Counter = Counter()
    wins: Counter = Counter()
    for match_id, teams in _team_rosters(participations, match_map).items():
        match = match_map[match_id]
        for team, members in teams.items():
            known = sorted((pid for pid in members if pid in order), key=order.__getitem__)
            won = match_outcome(match, team) == "win"
            for pair in pairs(known):
                games[pair] += 1
                if won:
                    wins[pair] += 1

    threshold = max(1, min_games)
    duos = []
    for (first, second), count in games.items():
        if count < threshold:
            continue
        duos.append(
            DuoStats(
                player1_id=first,
                player1_name=by_id[first].name,
                player2_id=second,
                player2_name=by_id[second].name,
                games_together=count,
                wins_together=wins[(first, second)],
                win_rate=percentage(wins[(first, second)], count),
            )
        )
    duos.sort(key=lambda d: (-d.win_rate, -d.games_together, order[d.player1_id], order[d.player2_id]))
    return duos


def best_duo(duos: Iterable[DuoStats], min_games: int = 5) -> Optional[DuoStats]:
    return next((duo for duo in duos if duo.games_together >= min_games), None)


def last_match(
    matches: Iterable[MatchRecord],
    participations: Iterable[Participation],
) -> Optional[MatchSummary]:
    match_map = _index_matches(matches)
    if not match_map:
        return None
    latest = max(match_map.values(), key=_recency)
    teams = _team_rosters(participations, match_map).get(latest.id, {team: [] for team in TEAMS})
    return MatchSummary(
        id=latest.id,
        date=latest.date,
        score_a=latest.score_a,
        score_b=latest.score_b,
        team_a_ids=tuple(teams["A"]),
        team_b_ids=tuple(teams["B"]),
    )
