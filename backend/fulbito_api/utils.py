from datetime import date

from flask import jsonify, request


def ok(payload: dict | None = None, status: int = 200):
    data = payload or {}
    return jsonify({"ok": True, **data}), status


def err(message: str, status: int = 400, **extra):
    return jsonify({"ok": False, "error": message, **extra}), status


def query_int(name: str, default: int | None = None) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name}_invalid")


def parse_date(raw) -> date:
    if not isinstance(raw, str):
        raise ValueError("match_date_invalid")
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise ValueError("match_date_invalid")
