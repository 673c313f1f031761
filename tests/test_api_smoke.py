import logging

from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_healthz():
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert "X-Request-ID" in r.headers


def test_request_id_is_echoed():
    r = client.get("/healthz", headers={"X-Request-ID": "rid-test-01"})
    assert r.headers["X-Request-ID"] == "rid-test-01"


def test_unusable_request_id_is_replaced(caplog):
    with caplog.at_level(logging.DEBUG, logger="hd.request"):
        r = client.get("/healthz", headers={"X-Request-ID": "x" * 200})
    issued = r.headers["X-Request-ID"]
    assert issued != "x" * 200
    records = [rec for rec in caplog.records if rec.getMessage() == "request_id_issued"]
    assert records and records[-1].request_id == issued
    assert records[-1].replaced is True


def test_decode_smoke(api_headers):
    r = client.post("/api/chart/decode", json={"longitudes": [3.875, 123.4]}, headers=api_headers)
    assert r.status_code == 200, f"Unexpected {r.status_code}: {r.text}"
    rows = r.json()["data"]
    assert len(rows) == 2
    assert rows[0]["gate"] == 17
    assert rows[0]["line"] == 1


def test_missing_authorization_is_401(api_headers):
    headers = {k: v for k, v in api_headers.items() if k != "Authorization"}
    r = client.post("/api/chart/decode", json={"longitudes": [1.0]}, headers=headers)
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


def test_missing_tracking_header_is_400(api_headers):
    headers = {k: v for k, v in api_headers.items() if k != "X-App-ID"}
    r = client.post("/api/chart/decode", json={"longitudes": [1.0]}, headers=headers)
    assert r.status_code == 400
    assert "X-App-ID" in r.json()["error"]["message"]


def test_validation_error_envelope(api_headers, birth_payload):
    r = client.post("/api/chart/build", json={**birth_payload, "latitude": 200}, headers=api_headers)
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "UNPROCESSABLE_ENTITY"
    assert any("latitude" in (d.get("field") or "") for d in err["details"])


def test_invalid_input_maps_to_400(api_headers, birth_payload):
    r = client.post("/api/chart/build", json={**birth_payload, "timeZone": "Nowhere/Land"}, headers=api_headers)
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "BAD_REQUEST"


def test_build_chart_smoke(api_headers, birth_payload):
    r = client.post("/api/chart/build", json=birth_payload, headers=api_headers)
    assert r.status_code == 200, f"Unexpected {r.status_code}: {r.text}"
    data = r.json()["data"]
    assert data["name"] == "Amit"
    assert data["type"] in {"Manifestor", "Generator", "Manifesting Generator", "Projector", "Reflector"}
    assert len(data["definedCenters"]) + len(data["openCenters"]) == 9
    assert {p["planetName"] for p in data["personality"]} >= {"Sun", "Earth", "NorthNode", "SouthNode"}


def test_report_smoke(api_headers, birth_payload):
    r = client.post("/api/chart/report", json=birth_payload, headers=api_headers)
    assert r.status_code == 200, f"Unexpected {r.status_code}: {r.text}"
    text = r.json()["data"]["text"]
    assert text.startswith("Human Design Birth Chart Analysis")
    for section in ("Birth Chart Cross Points:", "Defined/Undefined Centers:", "Destiny Map:", "Active Channels:"):
        assert section in text


def test_connection_smoke(api_headers, birth_payload):
    other = {**birth_payload, "name": "Riya", "dateOfBirth": "1993-02-20", "timeOfBirth": "06:10:00"}
    r = client.post("/api/connection/analyze", json={"person1": birth_payload, "person2": other}, headers=api_headers)
    assert r.status_code == 200, f"Unexpected {r.status_code}: {r.text}"
    data = r.json()["data"]
    assert (data["personA"], data["personB"]) == ("Amit", "Riya")
    code = data["compositeCenters"]["code"]
    defined, open_ = (int(x) for x in code.split("-"))
    assert defined + open_ == 9


def test_transit_connection_smoke(api_headers, birth_payload):
    body = {**birth_payload, "transitDate": "2025-11-01", "transitTime": "12:00"}
    r = client.post("/api/transit/connection", json=body, headers=api_headers)
    assert r.status_code == 200, f"Unexpected {r.status_code}: {r.text}"
    data = r.json()["data"]
    assert data["connection"]["personB"] == "Transit"
    assert data["report"].startswith("Human Design Transit Analysis")
    assert set(data["summary"]) == {"electromagnetic", "compromise", "companion", "dominance"}
