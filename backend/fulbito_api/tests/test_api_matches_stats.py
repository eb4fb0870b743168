from fulbito_api.config import Config


def _save(client, match_date, score_a, score_b, team_a, team_b):
    response = client.post(
        "/api/matches",
        json={
            "match_date": match_date,
            "score_a": score_a,
            "score_b": score_b,
            "team_a": team_a,
            "team_b": team_b,
        },
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["match"]


def _history(client, make_players):
    ana, beto, caro, dani = make_players(80, 70, 60, 50)
    _save(client, "2024-03-01", 3, 1, [ana, beto], [caro, dani])
    _save(client, "2024-03-08", 2, 2, [ana, caro], [beto, dani])
    _save(client, "2024-03-15", 0, 4, [ana, dani], [beto, caro])
    _save(client, "2024-03-22", 5, 2, [beto, caro], [ana, dani])
    return ana, beto, caro, dani


def test_save_and_list_matches(client, make_players):
    ana, beto, caro, dani = make_players(80, 70, 60, 50)

    saved = _save(client, "2024-03-01", 3, 1, [ana, beto], [caro, dani])
    _save(client, "2024-03-08", 0, 0, [ana, caro], [beto, dani])

    assert saved["team_a"] == [ana, beto]
    matches = client.get("/api/matches").get_json()["matches"]
    assert [m["match_date"] for m in matches] == ["2024-03-08", "2024-03-01"]
    assert matches[1]["team_b"] == [caro, dani]


def test_match_validation(client, make_players):
    ana, beto = make_players(1, 2)
    base = {"match_date": "2024-01-01", "score_a": 1, "score_b": 0, "team_a": [ana], "team_b": [beto]}

    overlap = client.post("/api/matches", json={**base, "team_b": [ana]})
    assert overlap.get_json()["error"] == "teams_overlap"
    negative = client.post("/api/matches", json={**base, "score_a": -1})
    assert negative.get_json()["error"] == "scores_invalid"
    empty = client.post("/api/matches", json={**base, "team_a": []})
    assert empty.get_json()["error"] == "teams_required"
    bad_date = client.post("/api/matches", json={**base, "match_date": "ayer"})
    assert bad_date.get_json()["error"] == "match_date_invalid"
    unknown = client.post("/api/matches", json={**base, "team_b": [999]})
    assert unknown.status_code == 404
    assert unknown.get_json()["player_ids"] == [999]
    assert client.post("/api/matches", json={"team_a": "x"}).get_json()["error"] == "invalid_payload"


def test_delete_match(client, make_players):
    ana, beto = make_players(1, 2)
    saved = _save(client, "2024-01-01", 1, 0, [ana], [beto])

    assert client.delete(f"/api/matches/{saved['id']}").status_code == 200
    assert client.get("/api/matches").get_json()["matches"] == []
    assert client.delete(f"/api/matches/{saved['id']}").status_code == 404


def test_leaderboard(client, make_players):
    ana, beto, caro, dani = _history(client, make_players)

    rows = client.get("/api/stats/leaderboard").get_json()["leaderboard"]

    assert [row["player_id"] for row in rows] == [beto, caro, ana, dani]
    assert rows[0]["streak"] == 2
    assert rows[0]["win_rate_display"] == "100.0%"
    assert (rows[2]["wins"], rows[2]["losses"], rows[2]["draws"]) == (1, 2, 1)


def test_duos(client, make_players):
    ana, beto, caro, dani = _history(client, make_players)

    duos = client.get("/api/stats/duos?min_games=2").get_json()["duos"]
    assert [(d["player1_id"], d["player2_id"]) for d in duos] == [(beto, caro), (ana, dani)]

    with_dani = client.get(f"/api/stats/duos?player_id={dani}").get_json()["duos"]
    assert all(dani in (d["player1_id"], d["player2_id"]) for d in with_dani)
    assert len(with_dani) == 3

    assert client.get("/api/stats/duos?min_games=lots").get_json()["error"] == "min_games_invalid"


def test_dashboard(client, make_players):
    ana, beto, caro, dani = _history(client, make_players)

    body = client.get("/api/stats/dashboard").get_json()

    assert [row["player_id"] for row in body["top_players"]] == [beto, caro, ana]
    assert body["best_duo"] is None
    assert body["last_match"]["team_a_names"] == ["Jugador 2", "Jugador 3"]
    assert body["last_match"]["score_a"] == 5


def test_dashboard_without_matches(client):
    body = client.get("/api/stats/dashboard").get_json()

    assert body == {"ok": True, "top_players": [], "best_duo": None, "last_match": None}


def test_update_match_replaces_score_and_rosters(client, make_players):
    ana, beto, caro, dani = make_players(80, 70, 60, 50)
    saved = _save(client, "2024-03-01", 3, 1, [ana, beto], [caro, dani])

    response = client.patch(
        f"/api/matches/{saved['id']}",
        json={
            "match_date": "2024-03-02",
            "score_a": 0,
            "score_b": 2,
            "team_a": [ana, caro],
            "team_b": [beto, dani],
            "replay_url": "https://example.com/replay",
        },
    )

    assert response.status_code == 200, response.get_json()
    updated = response.get_json()["match"]
    assert updated["id"] == saved["id"]
    assert (updated["score_a"], updated["score_b"]) == (0, 2)
    assert updated["replay_url"] == "https://example.com/replay"
    matches = client.get("/api/matches").get_json()["matches"]
    assert len(matches) == 1
    assert matches[0]["match_date"] == "2024-03-02"
    assert sorted(matches[0]["team_a"]) == [ana, caro]
    assert sorted(matches[0]["team_b"]) == [beto, dani]

    rows = client.get("/api/stats/leaderboard").get_json()["leaderboard"]
    assert {row["player_id"]: row["wins"] for row in rows} == {ana: 0, beto: 1, caro: 0, dani: 1}


def test_update_match_validation(client, make_players):
    ana, beto = make_players(1, 2)
    saved = _save(client, "2024-01-01", 1, 0, [ana], [beto])
    base = {"match_date": "2024-01-01", "score_a": 1, "score_b": 0, "team_a": [ana], "team_b": [beto]}
    url = f"/api/matches/{saved['id']}"

    assert client.patch(url, json={**base, "team_b": [ana]}).get_json()["error"] == "teams_overlap"
    assert client.patch(url, json={**base, "score_b": -2}).get_json()["error"] == "scores_invalid"
    assert client.patch(url, json={**base, "team_a": []}).get_json()["error"] == "teams_required"
    assert client.patch(url, json={"score_a": 1}).get_json()["error"] == "invalid_payload"
    unknown = client.patch(url, json={**base, "team_b": [beto, 999]})
    assert unknown.status_code == 404
    assert unknown.get_json()["player_ids"] == [999]
    assert client.patch("/api/matches/999", json=base).get_json()["error"] == "match_not_found"

    unchanged = client.get("/api/matches").get_json()["matches"][0]
    assert (unchanged["team_a"], unchanged["team_b"]) == ([ana], [beto])


def test_bulk_delete_matches(client, make_players):
    ana, beto = make_players(1, 2)
    first = _save(client, "2024-01-01", 1, 0, [ana], [beto])
    second = _save(client, "2024-01-08", 2, 2, [ana], [beto])
    kept = _save(client, "2024-01-15", 0, 1, [ana], [beto])

    response = client.post("/api/matches/bulk-delete", json={"match_ids": [first["id"], second["id"], 999]})

    assert response.get_json() == {"ok": True, "deleted": 2}
    assert [m["id"] for m in client.get("/api/matches").get_json()["matches"]] == [kept["id"]]
    assert client.post("/api/matches/bulk-delete", json={"match_ids": []}).get_json()["error"] == "match_ids_required"
    assert client.post("/api/matches/bulk-delete", json={}).status_code == 400
    bad = client.post("/api/matches/bulk-delete", json={"match_ids": ["x"]})
    assert bad.get_json()["error"] == "match_ids_invalid"


def test_dashboard_best_duo_uses_api_threshold(client, make_players, monkeypatch):
    ana, beto, caro, dani = _history(client, make_players)
    monkeypatch.setattr(Config, "DUO_MIN_GAMES", 2)

    duo = client.get("/api/stats/dashboard").get_json()["best_duo"]

    assert (duo["player1_id"], duo["player2_id"]) == (beto, caro)
    assert (duo["games_together"], duo["wins_together"]) == (2, 2)
