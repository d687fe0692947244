"""Integration tests: full workflow from import through draft and snapshot restore."""
from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from draft_assistant.main import app
from draft_assistant.services import draft_tracker
from draft_assistant.services.draft_tracker import load_sample_pool, reset_state


@pytest.fixture(autouse=True)
def clean_state(tmp_path, monkeypatch):
    """Reset state between tests and keep the session cache out of the repo."""
    monkeypatch.setattr(draft_tracker, "SAVE_DIR", tmp_path / "draft_state")
    reset_state()
    load_sample_pool()
    yield
    reset_state()


client = TestClient(app)

SCENARIO_ROSTER = {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "flexSlots": 1, "DST": 1, "K": 1}


def _player_id(name: str) -> str:
    resp = client.get("/api/players", params={"hide_drafted": False})
    return next(p["id"] for p in resp.json()["players"] if p["name"] == name)


class TestFullWorkflow:
    def test_health(self):
        resp = client.get("/api/health")
        assert resp.json() == {"status": "ok"}

    def test_board(self):
        resp = client.get("/api/players")
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 20
        top = data["players"][0]
        assert top["name"] == "Christian McCaffrey"
        assert top["byeWeek"] == 9
        assert top["status"] == "available"
        assert top["score"] is not None

    def test_upload_csv(self):
        csv_data = "name,pos,team,bye,value,adp,injury\n"
        csv_data += "Lamar Jackson,QB,BAL,14,93,12,\n"
        csv_data += "Puka Nacua,WR,LAR,6,88,15,Q\n"
        resp = client.post(
            "/api/players/upload",
            files={"file": ("players.csv", csv_data.encode(), "text/csv")},
        )
        assert resp.status_code == 200
        assert resp.json()["player_count"] == 2

        resp = client.get("/api/players")
        names = [p["name"] for p in resp.json()["players"]]
        assert names == ["Lamar Jackson", "Puka Nacua"]

    def test_upload_without_name_column(self):
        resp = client.post(
            "/api/players/upload",
            files={"file": ("bad.csv", b"pos,team\nQB,BUF\n", "text/csv")},
        )
        assert resp.status_code == 400

    def test_draft_workflow(self):
        """Roster -> claim -> needs -> recommendations -> conflicts -> undo."""
        resp = client.put("/api/roster", json={**SCENARIO_ROSTER, "IDP": 3})
        assert resp.status_code == 200
        assert resp.json()["flexSlots"] == 1
        assert "IDP" not in resp.json()

        resp = client.get("/api/roster/needs")
        assert resp.json()["needs"] == {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "DST": 1, "K": 1, "flex": 1}

        resp = client.get("/api/draft/recommendations")
        assert resp.json()["greedy"]["name"] == "Christian McCaffrey"

        cmc = _player_id("Christian McCaffrey")
        hall = _player_id("Breece Hall")
        bijan = _player_id("Bijan Robinson")
        for pid in (cmc, hall):
            assert client.post(f"/api/players/{pid}/claim").status_code == 200

        needs = client.get("/api/roster/needs").json()
        assert needs["filled"]["RB"] == 2
        assert needs["filled"]["flex"] == 0
        assert needs["needs"]["RB"] == 0
        assert needs["needs"]["flex"] == 1

        client.post(f"/api/players/{bijan}/claim")
        needs = client.get("/api/roster/needs").json()
        assert needs["filled"]["flex"] == 1
        assert needs["needs"]["flex"] == 0

        # Claimed players never come back as recommendations
        recs = client.get("/api/draft/recommendations").json()
        assert recs["greedy"]["name"] == "Josh Allen"

        mine = client.get("/api/players/mine").json()
        assert mine["count"] == 3

        resp = client.post(f"/api/players/{bijan}/unclaim")
        assert resp.json()["status"] == "available"
        assert client.get("/api/roster/needs").json()["needs"]["flex"] == 1

    def test_bye_conflicts(self):
        resp = client.post("/api/players", json={"name": "Backup Back", "position": "RB", "bye_week": 9, "value": 40})
        assert resp.status_code == 200
        backup = resp.json()
        assert backup["team"] == "FA"

        for pid in (_player_id("Christian McCaffrey"), _player_id("Bijan Robinson"), backup["id"]):
            client.post(f"/api/players/{pid}/claim")

        conflicts = client.get("/api/draft/conflicts").json()
        assert conflicts == [{
            "position": "RB",
            "byeWeek": 9,
            "count": 2,
            "message": "RB has 2 starters on bye in week 9",
        }]

    def test_toggle_drafted_and_hide(self):
        cmc = _player_id("Christian McCaffrey")
        resp = client.post(f"/api/players/{cmc}/toggle-drafted")
        assert resp.json()["status"] == "draftedByOther"

        board = client.get("/api/players").json()
        assert board["count"] == 19
        board = client.get("/api/players", params={"hide_drafted": False}).json()
        assert board["count"] == 20

        recs = client.get("/api/draft/recommendations").json()
        assert recs["greedy"]["name"] == "Josh Allen"

        resp = client.post(f"/api/players/{cmc}/toggle-drafted")
        assert resp.json()["status"] == "available"

    def test_set_status_any_transition(self):
        cmc = _player_id("Christian McCaffrey")
        for status in ("claimedByUser", "draftedByOther", "claimedByUser", "available"):
            resp = client.put(f"/api/players/{cmc}/status", json={"status": status})
            assert resp.status_code == 200
            assert resp.json()["status"] == status

    def test_unknown_player(self):
        resp = client.post("/api/players/nonexistent/claim")
        assert resp.status_code == 404

    def test_reset_and_remove_drafted(self):
        ids = [p["id"] for p in client.get("/api/players").json()["players"]]
        client.post(f"/api/players/{ids[0]}/claim")
        client.post(f"/api/players/{ids[1]}/toggle-drafted")
        client.post(f"/api/players/{ids[2]}/toggle-drafted")

        resp = client.post("/api/players/remove-drafted")
        assert resp.json() == {"removed": 2, "total_in_pool": 18}

        resp = client.post("/api/players/reset-statuses")
        assert resp.json()["changed"] == 1
        assert client.get("/api/players/mine").json()["count"] == 0

    def test_no_available_players(self):
        client.post("/api/players/upload", files={"file": ("one.csv", b"name,position,value\nSolo,K,5\n", "text/csv")})
        pid = client.get("/api/players").json()["players"][0]["id"]
        client.post(f"/api/players/{pid}/claim")

        recs = client.get("/api/draft/recommendations").json()
        assert recs["greedy"] is None
        assert recs["balanced"] is None

    def test_preferences_and_weight(self):
        resp = client.put("/api/draft/preferences", json={"scarcity_weight": 60, "sort_key": "adp"})
        assert resp.status_code == 200
        assert resp.json()["scarcity_weight"] == 60
        assert resp.json()["hide_drafted"] is True

        resp = client.put("/api/draft/preferences", json={"scarcity_weight": 99})
        assert resp.status_code == 400

        resp = client.get("/api/draft/recommendations", params={"scarcity_weight": 0})
        data = resp.json()
        assert data["scarcity_weight"] == 0
        assert data["balanced_score"] == pytest.approx(100.0)

    def test_summary(self):
        resp = client.get("/api/draft/summary")
        assert resp.status_code == 200
        data = resp.json()
        assert set(data) >= {"recommendations", "needs", "filled", "conflicts", "pool"}
        assert [s["position"] for s in data["pool"]] == ["QB", "RB", "WR", "TE", "DST", "K"]


class TestSnapshots:
    def test_export_and_import(self):
        cmc = _player_id("Christian McCaffrey")
        client.post(f"/api/players/{cmc}/claim")
        client.put("/api/roster", json=SCENARIO_ROSTER)

        resp = client.get("/api/export/snapshot")
        assert resp.status_code == 200
        snapshot = resp.json()
        assert snapshot["version"] == 1
        assert snapshot["rosterShape"]["flexSlots"] == 1
        assert snapshot["scarcityWeight"] == 30

        reset_state()
        resp = client.post(
            "/api/export/snapshot",
            files={"file": ("session.json", json.dumps(snapshot).encode(), "application/json")},
        )
        assert resp.status_code == 200
        assert resp.json()["player_count"] == 20
        assert client.get("/api/players/mine").json()["players"][0]["name"] == "Christian McCaffrey"
        assert client.get("/api/roster").json()["QB"] == 1

    def test_import_missing_optional_fields_keeps_current(self):
        client.put("/api/draft/preferences", json={"scarcity_weight": 44, "hide_drafted": False})
        players = [{"id": "x1", "name": "Only Guy", "position": "WR", "value": 10}]
        resp = client.post(
            "/api/export/snapshot",
            files={"file": ("s.json", json.dumps({"players": players}).encode(), "application/json")},
        )
        assert resp.status_code == 200
        prefs = client.get("/api/draft/preferences").json()
        assert prefs["scarcity_weight"] == 44
        assert prefs["hide_drafted"] is False

    def test_import_without_players_rejected(self):
        resp = client.post(
            "/api/export/snapshot",
            files={"file": ("s.json", b'{"rosterShape": {"QB": 1}}', "application/json")},
        )
        assert resp.status_code == 400
        # Current pool untouched
        assert client.get("/api/players").json()["count"] == 20

    def test_import_invalid_json(self):
        resp = client.post(
            "/api/export/snapshot",
            files={"file": ("s.json", b"not json", "application/json")},
        )
        assert resp.status_code == 400

    def test_import_legacy_session(self):
        legacy = {
            "players": [
                {"id": "a", "name": "Old QB", "pos": "QB", "team": "BUF", "bye": 13,
                 "value": 90, "adp": None, "injury": "", "status": "claimed"},
                {"id": "b", "name": "Old RB", "pos": "RB", "team": "SF", "bye": None,
                 "value": 80, "adp": 3, "injury": "", "status": "drafted"},
            ],
            "roster": {"QB": 2, "RB": 2, "WR": 3, "TE": 1, "FLEX": 1, "DST": 1, "K": 1, "BENCH": 6},
            "sortKey": "pos",
            "sortDir": "asc",
            "scarcityAlpha": 20,
        }
        resp = client.post(
            "/api/export/snapshot",
            files={"file": ("old.json", json.dumps(legacy).encode(), "application/json")},
        )
        assert resp.status_code == 200
        assert resp.json()["roster"]["flexSlots"] == 1

        board = client.get("/api/players", params={"hide_drafted": False}).json()["players"]
        statuses = {p["id"]: p["status"] for p in board}
        assert statuses == {"a": "claimedByUser", "b": "draftedByOther"}
        prefs = client.get("/api/draft/preferences").json()
        assert prefs["sort_key"] == "position"
        assert prefs["sort_direction"] == "asc"
        assert prefs["scarcity_weight"] == 20

    def test_import_unknown_sort_key_keeps_current(self):
        client.put("/api/draft/preferences", json={"sort_key": "adp"})
        snapshot = client.get("/api/export/snapshot").json()
        snapshot["sortKey"] = "height"
        resp = client.post(
            "/api/export/snapshot",
            files={"file": ("snap.json", json.dumps(snapshot).encode(), "application/json")},
        )
        assert resp.status_code == 200
        assert client.get("/api/draft/preferences").json()["sort_key"] == "adp"

    def test_autosave_and_load(self):
        cmc = _player_id("Christian McCaffrey")
        client.post(f"/api/players/{cmc}/claim")
        assert (draft_tracker.SAVE_DIR / "current.json").exists()

        reset_state()
        resp = client.post("/api/export/load")
        assert resp.status_code == 200
        assert resp.json()["player_count"] == 20
        assert client.get("/api/players/mine").json()["count"] == 1

    def test_load_without_saved_state(self):
        # The fixture's sample load autosaves, so clear it first
        (draft_tracker.SAVE_DIR / "current.json").unlink()
        resp = client.post("/api/export/load")
        assert resp.status_code == 404

    def test_board_csv_export(self):
        resp = client.get("/api/export/board", params={"format": "csv"})
        assert resp.status_code == 200
        assert "text/csv" in resp.headers["content-type"]
        lines = resp.text.strip().splitlines()
        assert lines[0] == "Name,Position,Team,Bye,Value,ADP,Injury,Status"
        assert lines[1].startswith("Christian McCaffrey,RB,SF,9")
        assert len(lines) == 21
