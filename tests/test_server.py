import asyncio
import logging

import pytest
from fastapi.testclient import TestClient

from wordsearch.server import create_app
from wordsearch.settings import Settings


@pytest.fixture
def client(monkeypatch):
    # Isolate each test from runtime edits to the shared settings object
    monkeypatch.setattr("wordsearch.server.settings", Settings())
    return TestClient(create_app())


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_solve_scenario(client):
    resp = client.post("/solve", content=b"2 2\nA B\nB A\nAB\n")
    assert resp.status_code == 200
    body = resp.json()
    assert body["query_count"] == 1
    query = body["queries"][0]
    assert query["query"] == 1
    assert query["rows"] == 2 and query["columns"] == 2
    assert query["words"] == ["AB"]
    assert query["paths"] == [
        "AB: (0,0)->(0,1)",
        "AB: (0,0)->(1,0)",
        "AB: (1,1)->(0,1)",
        "AB: (1,1)->(1,0)",
    ]
    assert "search" in body["stage_timings"]
    assert "total" in body["stage_timings"]


def test_solve_multi_chunk_results_independent(client):
    resp = client.post("/solve", content=b"1 1\nA\nAA\n1 1\nA\nB\n")
    queries = resp.json()["queries"]
    assert [q["query"] for q in queries] == [1, 2]
    assert queries[0]["paths"] == ["AA: (0,0)->(0,0)"]
    assert queries[1]["paths"] == []


def test_solve_empty_body(client):
    resp = client.post("/solve", content=b"")
    assert resp.status_code == 400


def test_solve_malformed(client):
    resp = client.post("/solve", content=b"2 2\nA B\nA\nAB\n")
    assert resp.status_code == 400
    assert "chunk 1, line 3" in resp.json()["detail"]


def test_solve_undecodable(client):
    resp = client.post("/solve", content=b"1 1\n\xff\nA\n")
    assert resp.status_code == 400


def test_solve_too_large(monkeypatch):
    cfg = Settings()
    cfg.MAX_UPLOAD_BYTES = 8
    monkeypatch.setattr("wordsearch.server.settings", cfg)
    client = TestClient(create_app())
    resp = client.post("/solve", content=b"2 2\nA B\nB A\nAB\n")
    assert resp.status_code == 413


def test_solve_word_too_long(monkeypatch):
    cfg = Settings()
    cfg.MAX_WORD_LENGTH = 3
    monkeypatch.setattr("wordsearch.server.settings", cfg)
    client = TestClient(create_app())
    resp = client.post("/solve", content=b"1 1\nA\nAAAA AA\n")
    assert resp.status_code == 400
    assert "AAAA" in resp.json()["detail"]


def test_get_settings(client):
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    body = resp.json()
    assert body["field_types"]["DEBUG"] == "bool"
    assert body["field_types"]["MAX_WORD_LENGTH"] == "int"
    assert body["settings"]["MAX_WORD_LENGTH"] == 0


def test_post_settings(client):
    resp = client.post("/api/settings", json={"MAX_WORD_LENGTH": 5})
    assert resp.status_code == 200
    assert resp.json()["updated"]["MAX_WORD_LENGTH"] == 5


def test_post_settings_errors(client):
    resp = client.post("/api/settings", json={"LOG_LEVEL": "DEBUG"})
    assert resp.status_code == 400
    assert "LOG_LEVEL" in resp.json()["errors"]


def test_post_settings_requires_object(client):
    resp = client.post("/api/settings", json=[1, 2])
    assert resp.status_code == 400


def test_module_app_serves_requests():
    from wordsearch.server import app
    client = TestClient(app)
    assert client.get("/health").json() == {"status": "ok"}
    resp = client.post("/solve", content=b"1 1\nA\nA\n")
    assert resp.json()["queries"][0]["paths"] == ["A: (0,0)"]


def test_post_settings_invalid_json(client):
    resp = client.post(
        "/api/settings", content=b"{not json", headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert "not valid JSON" in resp.json()["detail"]


def test_post_settings_empty_object(client):
    resp = client.post("/api/settings", json={})
    assert resp.status_code == 400


def test_search_runs_outside_event_loop(client, monkeypatch):
    from wordsearch import solver

    seen = []
    original = solver.solve_puzzle

    def _recording(puzzle, collector):
        try:
            asyncio.get_running_loop()
            seen.append("event-loop")
        except RuntimeError:
            seen.append("worker")
        return original(puzzle, collector)

    monkeypatch.setattr(solver, "solve_puzzle", _recording)
    resp = client.post("/solve", content=b"1 1\nA\nA\n1 1\nB\nB\n")
    assert resp.status_code == 200
    assert seen == ["worker", "worker"]


def test_log_timings_setting_logs_stages(client, caplog):
    assert client.post("/api/settings", json={"LOG_TIMINGS": True}).status_code == 200
    with caplog.at_level(logging.INFO, logger="wordsearch"):
        resp = client.post("/solve", content=b"1 1\nA\nA\n")
    assert resp.status_code == 200
    assert "stage=search runs=1" in caplog.text
    assert "stage=parse runs=1" in caplog.text


def test_timings_not_logged_by_default(client, caplog):
    with caplog.at_level(logging.INFO, logger="wordsearch"):
        client.post("/solve", content=b"1 1\nA\nA\n")
    assert "stage=search runs=" not in caplog.text
