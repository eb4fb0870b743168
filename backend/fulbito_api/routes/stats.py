from flask import Blueprint

from fulbito_model import best_duo, duo_stats, last_match, leaderboard

from ..config import Config
from ..db import get_db
from ..services.history import load_history
from ..utils import ok, query_int

bp = Blueprint("stats", __name__, url_prefix="/stats")


@bp.get("/leaderboard")
def leaderboard_view():
    min_games = query_int("min_games", 0)
    players, matches, participations = load_history(get_db())
    rows = leaderboard(players, matches, participations, min_games=min_games)
    return ok({"leaderboard": [row.to_dict() for row in rows]})


@bp.get("/duos")
def duos_view():
    min_games = query_int("min_games", 1)
    player_id = query_int("player_id")
    players, matches, participations = load_history(get_db())
    duos = duo_stats(players, matches, participations, min_games=min_games)
    if player_id is not None:
        duos = [duo for duo in duos if duo.includes(player_id)]
    return ok({"duos": [duo.to_dict() for duo in duos]})


@bp.get("/dashboard")
def dashboard():
    players, matches, participations = load_history(get_db())
    rows = leaderboard(players, matches, participations, min_games=query_int("min_games", 0))
    duo = best_duo(duo_stats(players, matches, participations), min_games=Config.DUO_MIN_GAMES)
    latest = last_match(matches, participations)
    names = {p.id: p.name for p in players}

    last = None
    if latest is not None:
        last = latest.to_dict()
        last["team_a_names"] = [names.get(pid, f"ID:{pid}") for pid in latest.team_a_ids]
        last["team_b_names"] = [names.get(pid, f"ID:{pid}") for pid in latest.team_b_ids]

    return ok(
        {
            "top_players": [row.to_dict() for row in rows[:3]],
            "best_duo": duo.to_dict() if duo else None,
            "last_match": last,
        }
    )
