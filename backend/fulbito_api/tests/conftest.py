import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="fulbito-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["TEAMGEN_TEAM_SIZES"] = "2,5,6,8,11"
os.environ["AUTO_CREATE_SCHEMA"] = "0"

import pytest

from fulbito_api import create_app
from fulbito_api.schema import reset_schema


@pytest.fixture
def app():
    app = create_app()
    app.config["TESTING"] = True
    reset_schema()
    yield app
    app.extensions["teamgen_jobs"].shutdown()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def make_players(client):
    def _make(*ratings):
        ids = []
        for idx, rating in enumerate(ratings, start=1):
            response = client.post("/api/players", json={"name": f"Jugador {idx}", "rating": rating})
            assert response.status_code == 201
            ids.append(response.get_json()["player"]["id"])
        return ids

    return _make
