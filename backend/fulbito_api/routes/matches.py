from flask import Blueprint, request

from ..db import get_db
from ..models import MatchPlayer
from ..services.match import delete_match, delete_matches, list_matches, match_to_dict, save_match, update_match
from ..utils import err, ok, parse_date

bp = Blueprint("matches", __name__, url_prefix="/matches")


def _match_fields(data: dict):
    team_a = data.get("team_a")
    team_b = data.get("team_b")
    if not isinstance(team_a, list) or not isinstance(team_b, list):
        return None
    return {
        "match_date": parse_date(data.get("match_date")),
        "score_a": data.get("score_a"),
        "score_b": data.get("score_b"),
        "team_a": team_a,
        "team_b": team_b,
        "replay_url": data.get("replay_url"),
    }


def _match_response(db, match, status: int = 200):
    members = db.query(MatchPlayer).filter_by(match_id=match.id).all()
    return ok({"match": match_to_dict(match, members)}, status)


@bp.get("")
def index():
    db = get_db()
    return ok({"matches": list_matches(db)})


@bp.post("")
def create():
    db = get_db()
    fields = _match_fields(request.get_json(silent=True) or {})
    if fields is None:
        return err("invalid_payload", 400)
    try:
        match = save_match(db, **fields)
    except LookupError as exc:
        db.rollback()
        return err("player_not_found", 404, player_ids=exc.args[0])
    return _match_response(db, match, 201)


@bp.patch("/<int:match_id>")
def update(match_id: int):
    db = get_db()
    fields = _match_fields(request.get_json(silent=True) or {})
    if fields is None:
        return err("invalid_payload", 400)
    try:
        match = update_match(db, match_id, **fields)
    except LookupError as exc:
        db.rollback()
        return err("player_not_found", 404, player_ids=exc.args[0])
    if match is None:
        return err("match_not_found", 404)
    return _match_response(db, match)


@bp.delete("/<int:match_id>")
def remove(match_id: int):
    db = get_db()
    if not delete_match(db, match_id):
        return err("match_not_found", 404)
    return ok()


@bp.post("/bulk-delete")
def remove_many():
    db = get_db()
    data = request.get_json(silent=True) or {}
    match_ids = data.get("match_ids")
    if not isinstance(match_ids, list):
        return err("match_ids_required", 400)
    return ok({"deleted": delete_matches(db, match_ids)})
