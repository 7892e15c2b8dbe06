"""
Tests for the FastAPI endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from api.main import app

CSV = (
    "Driver,Total,distance with Ann,distance with Bob\n"
    "Ann,100,,40\n"
    "Bob,90,40,\n"
    "Cid,70,,\n"
)
CREW_CSV = "Driver,nr\nAnn,1\nBob,1\n"


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("FLEET_KM_STORE", str(tmp_path / "store.json"))
    monkeypatch.setenv("FLEET_KM_SYSTEM_ROSTER", str(tmp_path / "system.xlsx"))
    monkeypatch.setenv("FLEET_KM_CREW_ROSTER", str(tmp_path / "crew.xlsx"))
    monkeypatch.setenv("FLEET_KM_TOP_N", "2")
    return TestClient(app)


class TestApi:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_process_without_rosters(self, client):
        res = client.post("/api/process", files={"data_file": ("march.csv", CSV.encode(), "text/csv")})
        assert res.status_code == 200
        body = res.json()
        assert body["totals"]["shared_kilometers"] == 40
        assert body["totals"]["total_kilometers"] == 60 + 50 + 70 + 40
        assert body["dataset"]["duet_pairs"][0]["label"] == "Ann + Bob"
        assert body["rankings"]["top_total"]["labels"] == ["Ann", "Bob"]
        assert body["saved_as"] is None

    def test_process_with_crew_roster_and_save(self, client):
        res = client.post(
            "/api/process",
            files={
                "data_file": ("march.csv", CSV.encode(), "text/csv"),
                "crew_file": ("crew.csv", CREW_CSV.encode(), "text/csv"),
            },
            data={"save_as": "march"},
        )
        body = res.json()
        assert body["totals"]["shared_kilometers"] == 0
        assert body["rankings"]["crew"] == {"labels": ["Crew 1: Ann + Bob"], "values": [40]}
        assert body["rosters"]["crew_groups"] == [{"nr": "1", "members": ["Ann", "Bob"]}]
        assert body["saved_as"] == "march"

        listed = client.get("/api/snapshots").json()["snapshots"]
        assert [s["key"] for s in listed] == ["march"]
        assert client.get("/api/snapshots/march").json()["totals"]["shared_kilometers"] == 40
        drivers = client.get("/api/snapshots/march/drivers", params={"search": "b"}).json()["drivers"]
        assert [d["name"] for d in drivers] == ["Bob"]

        assert client.delete("/api/snapshots/march").status_code == 200
        assert client.get("/api/snapshots/march").status_code == 404

    def test_invalid_sheet_is_422(self, client):
        res = client.post("/api/process", files={"data_file": ("bad.csv", b"Driver,Total\nAnn,1\n", "text/csv")})
        assert res.status_code == 422
        assert "Missing columns" in res.json()["detail"]

    def test_unsupported_upload_is_400(self, client):
        res = client.post("/api/process", files={"data_file": ("notes.txt", b"hello", "text/plain")})
        assert res.status_code == 400

    def test_clear_snapshots(self, client):
        client.post("/api/process", files={"data_file": ("march.csv", CSV.encode(), "text/csv")}, data={"save_as": "m"})
        assert client.delete("/api/snapshots").json() == {"cleared": True}
        assert client.get("/api/snapshots").json() == {"snapshots": []}
        assert client.delete("/api/snapshots/m").status_code == 404
