from typing import Iterable, List, Tuple

from fulbito_model import MatchRecord, Participation, Player as TeamPlayer

from ..models import Match, MatchPlayer, Player


def to_team_player(record: Player) -> TeamPlayer:
    return TeamPlayer(id=record.id, name=record.name, rating=record.rating)


def player_to_dict(record: Player) -> dict:
    return {"id": record.id, "name": record.name, "rating": record.rating}


def load_roster(db, player_ids: Iterable[int]) -> Tuple[List[TeamPlayer], List[int]]:
    """Players for ``player_ids`` in request order, plus the ids that do not exist."""
    player_ids = list(player_ids)
    records = {p.id: p for p in db.query(Player).filter(Player.id.in_(player_ids)).all()}
    missing = [pid for pid in player_ids if pid not in records]
    return [to_team_player(records[pid]) for pid in player_ids if pid in records], missing


def load_history(db) -> Tuple[List[TeamPlayer], List[MatchRecord], List[Participation]]:
    players = [to_team_player(p) for p in db.query(Player).order_by(Player.name.asc(), Player.id.asc()).all()]
    matches = [
        MatchRecord(id=m.id, date=m.match_date, score_a=m.score_a, score_b=m.score_b)
        for m in db.query(Match).all()
    ]
    participations = [
        Participation(match_id=mp.match_id, player_id=mp.player_id, team=mp.team)
        for mp in db.query(MatchPlayer).all()
    ]
    return players, matches, participations
