import logging

from flask import Flask
from flask_cors import CORS

from fulbito_model import BalancingError

from .config import Config
from .db import SessionLocal
from .schema import ensure_schema
from .services.jobs import TeamGenerationJobs


def _configure_logging() -> None:
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("fulbito").setLevel(Config.LOG_LEVEL)


def create_app() -> Flask:
    _configure_logging()
    app = Flask(__name__)
    app.url_map.strict_slashes = False
    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}},
        allow_headers=["Content-Type"],
    )

    app.extensions["teamgen_jobs"] = TeamGenerationJobs(
        Config.teamgen_config(),
        workers=Config.TEAMGEN_WORKERS,
        max_jobs=Config.TEAMGEN_MAX_JOBS,
    )

    from .routes import matches, players, stats, teams

    api_prefix = "/api"
    app.register_blueprint(players.bp, url_prefix=f"{api_prefix}/players")
    app.register_blueprint(matches.bp, url_prefix=f"{api_prefix}/matches")
    app.register_blueprint(teams.bp, url_prefix=f"{api_prefix}/teams")
    app.register_blueprint(stats.bp, url_prefix=f"{api_prefix}/stats")

    @app.get("/api/health")
    def healthcheck():
        return {"ok": True}

    @app.teardown_appcontext
    def shutdown_session(_exc=None):
        SessionLocal.remove()

    @app.errorhandler(BalancingError)
    def handle_balancing_error(exc):
        return {"ok": False, **exc.to_dict()}, 400

    @app.errorhandler(ValueError)
    def handle_value_error(exc):
        return {"ok": False, "error": str(exc)}, 400

    if Config.AUTO_CREATE_SCHEMA:
        ensure_schema()

    return app
