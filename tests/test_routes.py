import pytest
from fastapi.testclient import TestClient
from conftest import FakeClient
from app.deps import get_client
from app.main import create_app

@pytest.fixture
def client():
    app = create_app()
    fake = FakeClient()
    app.dependency_overrides[get_client] = lambda: fake
    with TestClient(app) as c:
        c.fake = fake
        yield c

def _seed(client):
    a = client.post("/devices", json={"name": "Oven", "kind": "onOff", "is_on": True}).json()
    b = client.post("/devices", json={"name": "Thermostat", "kind": "sensor"}).json()
    client.post("/people", json={"name": "Sam", "bio": "night shifts"})
    client.post("/rules", json={"description": "Oven off after 9pm"})
    client.put("/address", json={"address": "221B Baker Street"})
    return a, b

def test_home_crud(client):
    oven, thermo = _seed(client)
    assert oven["is_on"] is True and oven["value"] is None
    assert thermo["is_on"] is None and thermo["value"] is None

    assert [d["name"] for d in client.get("/devices").json()] == ["Oven", "Thermostat"]
    assert client.get("/people").json()[0]["bio"] == "night shifts"
    assert client.get("/rules").json()[0]["description"] == "Oven off after 9pm"
    assert client.get("/address").json() == {"address": "221B Baker Street"}
    assert client.get("/health").json() == {"devices": 2, "people": 1, "rules": 1, "events": 0}

    r = client.delete(f"/devices/{oven['id']}")
    assert r.status_code == 200
    assert [d["name"] for d in client.get("/devices").json()] == ["Thermostat"]

def test_unknown_ids_are_404(client):
    for path in ("/devices/nope", "/people/nope", "/rules/nope", "/events/nope"):
        assert client.delete(path).status_code == 404

def test_bad_device_kind_is_rejected(client):
    assert client.post("/devices", json={"name": "X", "kind": "dimmer"}).status_code == 422

def test_fetch_events_path(client):
    _seed(client)
    client.fake.replies.append("The oven was left on while Sam slept.")
    r = client.post("/events/fetch")
    assert r.status_code == 200
    assert r.json()["description"] == "The oven was left on while Sam slept."
    assert "- Oven (On/Off Device) is on" in client.fake.prompts[0]

    events = client.get("/events").json()
    assert len(events) == 1
    assert client.delete(f"/events/{events[0]['id']}").status_code == 200
    assert client.get("/events").json() == []

def test_call_smart_home_path(client):
    _seed(client)
    client.fake.replies.append("Oven is Off\nThermostat is 19C\nSam is asleep")
    r = client.post("/events/call-smart-home")
    assert r.status_code == 200
    body = r.json()
    assert [(u["name"], u["state"]) for u in body["updates"]] == [("Oven", False), ("Thermostat", "19C")]
    assert [s["reason"] for s in body["skipped"]] == ["unknown_device"]
    assert [e["description"] for e in body["events"]] == ["Oven is now Off", "Thermostat value is 19C"]

    devices = {d["name"]: d for d in client.get("/devices").json()}
    assert devices["Oven"]["is_on"] is False
    assert devices["Thermostat"]["value"] == "19C"
