"""API tests using FastAPI TestClient."""
import pytest
from fastapi.testclient import TestClient

IMPORT_TEXT = "Név;Meghatározás\nalma;gyümölcs\nbanán;sárga gyümölcs\n"


@pytest.fixture
def client():
    # Fresh store per test
    from frayer import container
    container.get_concept_repo.cache_clear()
    container.get_concept_store.cache_clear()

    from frayer.main import app
    return TestClient(app)


# ------------------------------------------------------------------
# Health
# ------------------------------------------------------------------
def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ------------------------------------------------------------------
# Import / list / export
# ------------------------------------------------------------------
def test_import_and_list(client):
    resp = client.post("/import", json={"text": IMPORT_TEXT})
    assert resp.status_code == 200
    assert resp.json()["added"] == 2
    assert resp.json()["unsaved"] is True

    names = [c["name"] for c in client.get("/concepts/").json()]
    assert names == ["alma", "banán"]

    filtered = client.get("/concepts/", params={"q": "BAN"}).json()
    assert [c["name"] for c in filtered] == ["banán"]


def test_import_nothing_new(client):
    client.post("/import", json={"text": IMPORT_TEXT})
    resp = client.post("/import", json={"text": IMPORT_TEXT})
    assert resp.status_code == 400


def test_export(client):
    client.post("/import", json={"text": IMPORT_TEXT})
    resp = client.get("/export")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "freyer_konyvtar.csv" in resp.headers["content-disposition"]
    assert resp.content.decode("utf-8").startswith("\ufeffNév;Meghatározás")

    assert client.get("/state/unsaved").json() == {"unsaved": True}
    client.post("/export/ack")
    assert client.get("/state/unsaved").json() == {"unsaved": False}


def test_export_empty_refused(client):
    resp = client.get("/export")
    assert resp.status_code == 400


def test_set_unsaved_flag(client):
    resp = client.put("/state/unsaved", json={"unsaved": True})
    assert resp.json() == {"unsaved": True}


# ------------------------------------------------------------------
# Save protocol
# ------------------------------------------------------------------
def test_proposal_flow_with_collision(client):
    client.post("/import", json={"text": IMPORT_TEXT})

    proposal = client.post(
        "/concepts/proposals",
        json={"name": "banán", "definition": "új", "original_name": "alma"},
    )
    assert proposal.status_code == 201
    body = proposal.json()
    assert body["collision"]["name"] == "banán"

    declined = client.post(f"/concepts/proposals/{body['token']}", json={"accept": False})
    assert declined.json()["saved"] is False
    assert len(client.get("/concepts/").json()) == 2

    retry = client.post(
        "/concepts/proposals",
        json={"name": "banán", "definition": "új", "original_name": "alma"},
    ).json()
    accepted = client.post(f"/concepts/proposals/{retry['token']}", json={"accept": True})
    assert accepted.json()["saved"] is True
    assert client.get("/concepts/").json() == [
        {"name": "banán", "definition": "új", "characteristics": "", "examples": "", "non_examples": ""}
    ]


def test_save_endpoint(client):
    resp = client.put("/concepts/", json={"name": " körte ", "definition": "gyümölcs"})
    assert resp.status_code == 200
    assert resp.json()["selected_name"] == "körte"

    blocked = client.put("/concepts/", json={"name": "KÖRTE", "definition": "más"})
    assert blocked.json()["saved"] is False

    forced = client.put("/concepts/", json={"name": "KÖRTE", "definition": "más", "overwrite": True})
    assert forced.json()["saved"] is True
    assert client.get("/concepts/körte").json()["name"] == "KÖRTE"


def test_save_blank_name_rejected(client):
    resp = client.put("/concepts/", json={"name": "   "})
    assert resp.status_code == 400


def test_confirm_unknown_token(client):
    resp = client.post("/concepts/proposals/missing", json={"accept": True})
    assert resp.status_code == 400


# ------------------------------------------------------------------
# Get / delete
# ------------------------------------------------------------------
def test_get_missing_concept(client):
    assert client.get("/concepts/nincs").status_code == 404


def test_delete_concept(client):
    client.put("/concepts/", json={"name": "alma"})
    assert client.delete("/concepts/ALMA").status_code == 204
    assert client.delete("/concepts/alma").status_code == 404


def test_concepts_named_like_actions_are_reachable(client):
    client.put("/concepts/", json={"name": "export", "definition": "kivitel"})
    client.put("/concepts/", json={"name": "import", "definition": "behozatal"})
    assert client.get("/concepts/export").json()["definition"] == "kivitel"
    assert client.get("/concepts/import").json()["definition"] == "behozatal"
    assert client.delete("/concepts/export").status_code == 204
