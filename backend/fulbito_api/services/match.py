import logging
from datetime import date
from typing import Iterable, List, Optional

from ..models import Match, MatchPlayer, Player

logger = logging.getLogger("fulbito.matches")


def _clean_ids(raw: Iterable, error: str = "player_ids_invalid") -> List[int]:
    ids = []
    for value in raw:
        if isinstance(value, bool):
            raise ValueError(error)
        try:
            ids.append(int(value))
        except (TypeError, ValueError):
            raise ValueError(error)
    return ids


def _clean_score(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError("scores_invalid")
    return value


def match_to_dict(match: Match, members: Iterable[MatchPlayer]) -> dict:
    members = list(members)
    return {
        "id": match.id,
        "match_date": match.match_date.isoformat(),
        "score_a": match.score_a,
        "score_b": match.score_b,
        "replay_url": match.replay_url,
        "team_a": [m.player_id for m in members if m.team == "A"],
        "team_b": [m.player_id for m in members if m.team == "B"],
    }


def _clean_rosters(team_a: Iterable, team_b: Iterable):
    team_a_ids = _clean_ids(team_a)
    team_b_ids = _clean_ids(team_b)
    if not team_a_ids or not team_b_ids:
        raise ValueError("teams_required")
    if len(set(team_a_ids)) != len(team_a_ids) or len(set(team_b_ids)) != len(team_b_ids):
        raise ValueError("player_ids_invalid")
    if set(team_a_ids) & set(team_b_ids):
        raise ValueError("teams_overlap")
    return team_a_ids, team_b_ids


def _check_players_exist(db, ids: Iterable[int]) -> None:
    wanted = set(ids)
    known = {pid for (pid,) in db.query(Player.id).filter(Player.id.in_(wanted)).all()}
    if known != wanted:
        raise LookupError(sorted(wanted - known))


def _add_members(db, match_id: int, team_a_ids: List[int], team_b_ids: List[int]) -> None:
    for team, ids in (("A", team_a_ids), ("B", team_b_ids)):
        for player_id in ids:
            db.add(MatchPlayer(match_id=match_id, player_id=player_id, team=team))


def save_match(
    db,
    match_date: date,
    score_a,
    score_b,
    team_a: Iterable,
    team_b: Iterable,
    replay_url: Optional[str] = None,
) -> Match:
    """Store a played match together with the two rosters, e.g. a chosen generated split."""
    team_a_ids, team_b_ids = _clean_rosters(team_a, team_b)
    score_a = _clean_score(score_a)
    score_b = _clean_score(score_b)
    _check_players_exist(db, team_a_ids + team_b_ids)

    match = Match(match_date=match_date, score_a=score_a, score_b=score_b, replay_url=replay_url or None)
    db.add(match)
    db.flush()
    _add_members(db, match.id, team_a_ids, team_b_ids)
    db.commit()
    logger.info("Saved match %s (%d-%d) on %s", match.id, score_a, score_b, match_date.isoformat())
    return match


def update_match(
    db,
    match_id: int,
    match_date: date,
    score_a,
    score_b,
    team_a: Iterable,
    team_b: Iterable,
    replay_url: Optional[str] = None,
) -> Optional[Match]:
    """Replace date, score, replay link and both rosters of a stored match.

    Validation is the same as for ``save_match``. Returns ``None`` when the
    match does not exist.
    """
    team_a_ids, team_b_ids = _clean_rosters(team_a, team_b)
    score_a = _clean_score(score_a)
    score_b = _clean_score(score_b)
    match = db.query(Match).filter_by(id=match_id).one_or_none()
    if match is None:
        return None
    _check_players_exist(db, team_a_ids + team_b_ids)

    match.match_date = match_date
    match.score_a = score_a
    match.score_b = score_b
    match.replay_url = replay_url or None
    db.query(MatchPlayer).filter_by(match_id=match_id).delete()
    _add_members(db, match_id, team_a_ids, team_b_ids)
    db.commit()
    logger.info("Updated match %s (%d-%d) on %s", match_id, score_a, score_b, match_date.isoformat())
    return match


def list_matches(db) -> List[dict]:
    matches = db.query(Match).order_by(Match.match_date.desc(), Match.id.desc()).all()
    members = db.query(MatchPlayer).filter(MatchPlayer.match_id.in_([m.id for m in matches])).all()
    by_match = {}
    for member in members:
        by_match.setdefault(member.match_id, []).append(member)
    return [match_to_dict(m, by_match.get(m.id, [])) for m in matches]


def delete_match(db, match_id: int) -> bool:
    match = db.query(Match).filter_by(id=match_id).one_or_none()
    if match is None:
        return False
    db.query(MatchPlayer).filter_by(match_id=match_id).delete()
    db.delete(match)
    db.commit()
    logger.info("Deleted match %s", match_id)
    return True


def delete_matches(db, match_ids: Iterable) -> int:
    """Delete several matches with their rosters; unknown ids are skipped."""
    ids = _clean_ids(match_ids, "match_ids_invalid")
    if not ids:
        raise ValueError("match_ids_required")
    db.query(MatchPlayer).filter(MatchPlayer.match_id.in_(ids)).delete(synchronize_session=False)
    deleted = db.query(Match).filter(Match.id.in_(ids)).delete(synchronize_session=False)
    db.commit()
    if deleted != len(set(ids)):
        logger.warning("Bulk delete asked for %d matches but removed %d", len(set(ids)), deleted)
    logger.info("Deleted %d matches", deleted)
    return deleted
