from flask import Blueprint, current_app, request

from fulbito_model import BalancingError

from ..db import get_db
from ..services.history import load_roster
from ..utils import err, ok

bp = Blueprint("teams", __name__, url_prefix="/teams")


def _jobs():
    return current_app.extensions["teamgen_jobs"]


def _int_field(data: dict, key: str, default=None):
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key}_invalid")
    return value


@bp.post("/generate")
def generate():
    data = request.get_json(silent=True) or {}
    player_ids = data.get("player_ids")
    if not isinstance(player_ids, list) or not all(
        isinstance(pid, int) and not isinstance(pid, bool) for pid in player_ids
    ):
        return err("player_ids_invalid", 400)
    team_size = _int_field(data, "team_size")
    if team_size is None:
        return err("team_size_required", 400)
    top_n = _int_field(data, "top_n")

    db = get_db()
    roster, missing = load_roster(db, player_ids)
    if missing:
        return err("player_not_found", 404, player_ids=missing)

    try:
        job = _jobs().submit(roster, team_size, top_n=top_n)
    except BalancingError as exc:
        return err(exc.code, 400, **{k: v for k, v in exc.to_dict().items() if k != "error"})
    return ok(job.to_dict(), 202)


@bp.get("/jobs/<job_id>")
def job_status(job_id: str):
    job = _jobs().get(job_id)
    if job is None:
        return err("job_not_found", 404)
    return ok(job.to_dict())


@bp.delete("/jobs/<job_id>")
def discard_job(job_id: str):
    if not _jobs().discard(job_id):
        return err("job_not_found", 404)
    return ok()
