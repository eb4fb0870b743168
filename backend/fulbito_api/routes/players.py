import logging

from flask import Blueprint, request

from fulbito_model.utils import is_finite_number

from ..db import get_db
from ..models import MatchPlayer, Player
from ..services.history import player_to_dict
from ..utils import err, ok

bp = Blueprint("players", __name__, url_prefix="/players")
logger = logging.getLogger("fulbito.players")


def _clean_rating(data: dict):
    rating = data.get("rating")
    if rating is None:
        return None
    if not is_finite_number(rating):
        raise ValueError("rating_invalid")
    return float(rating)


def _clean_name(data: dict) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError("name_required")
    return name.strip()


@bp.get("")
def list_players():
    db = get_db()
    players = db.query(Player).order_by(Player.name.asc(), Player.id.asc()).all()
    return ok({"players": [player_to_dict(p) for p in players]})


@bp.post("")
def create_player():
    db = get_db()
    data = request.get_json(silent=True) or {}
    player = Player(name=_clean_name(data), rating=_clean_rating(data))
    db.add(player)
    db.commit()
    return ok({"player": player_to_dict(player)}, 201)


@bp.patch("/<int:player_id>")
def update_player(player_id: int):
    db = get_db()
    player = db.query(Player).filter_by(id=player_id).one_or_none()
    if player is None:
        return err("player_not_found", 404)
    data = request.get_json(silent=True) or {}
    if "name" in data:
        player.name = _clean_name(data)
    if "rating" in data:
        player.rating = _clean_rating(data)
    db.commit()
    return ok({"player": player_to_dict(player)})


@bp.delete("/<int:player_id>")
def delete_player(player_id: int):
    db = get_db()
    player = db.query(Player).filter_by(id=player_id).one_or_none()
    if player is None:
        return err("player_not_found", 404)
    played = db.query(MatchPlayer).filter_by(player_id=player_id).count()
    if played:
        return err("player_has_matches", 409, matches=played)
    db.delete(player)
    db.commit()
    logger.info("Deleted player %s", player_id)
    return ok()
