import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


@pytest.fixture()
def client(coordinator, tmp_path):
    app = create_app(settings=Settings(db_url=f"sqlite:///{tmp_path / 'unused.db'}"), coordinator=coordinator)
    return TestClient(app)


@pytest.fixture()
def report_json(client, make_payload):
    payload = make_payload(department_statuses={"Fire Department": "In Progress"})
    response = client.post("/reports", json=payload.model_dump(mode="json"))
    assert response.status_code == 201
    return response.json()


def test_create_and_list_reports(client, report_json):
    assert report_json["department_statuses"]["Fire Department"] == "In Progress"
    assert report_json["department_statuses"]["Geoscience"] == "Not Responsible"

    assert [r["id"] for r in client.get("/reports").json()] == [report_json["id"]]
    assert [r["id"] for r in client.get("/reports/open").json()] == [report_json["id"]]
    assert client.get(f"/reports/{report_json['id']}").json()["location"] == "Blue Mountains"


def test_unknown_report_is_404(client):
    assert client.get("/reports/999").status_code == 404
    assert client.post("/reports/999/priority").status_code == 404


def test_details(client, report_json):
    details = client.get(f"/reports/{report_json['id']}/details").json()["details"]

    assert "Fire Intensity: High" in details


def test_priority_endpoint(client, report_json):
    body = client.post(f"/reports/{report_json['id']}/priority").json()

    assert body["level"] == "Critical"
    assert body["score"] == 15
    assert "Final score: 15" in body["trace"]


def test_priority_with_bad_timestamp_is_422(client, make_payload):
    created = client.post("/reports", json=make_payload(date_time="yesterday").model_dump(mode="json")).json()

    assert client.post(f"/reports/{created['id']}/priority").status_code == 422


def test_assignments(client, report_json):
    response = client.put(
        f"/reports/{report_json['id']}/assignments",
        json={"assignments": {"Meteorology": "Pending", "Fire Department": None}},
    )

    assert response.status_code == 200
    stored = client.get(f"/reports/{report_json['id']}").json()
    assert stored["department_statuses"]["Meteorology"] == "Pending"
    assert stored["department_statuses"]["Fire Department"] == "Not Responsible"


def test_events(client, report_json):
    url = f"/reports/{report_json['id']}/events"

    response = client.post(url, json={"type": "log_entry", "entry": "Evacuation centre open"})
    assert response.json()["communication_log"] == "Evacuation centre open"

    assert client.post(url, json={"type": "resource_request"}).status_code == 400
    assert client.post("/reports/999/events", json={"type": "reprioritize"}).status_code == 404
    assert client.post(url, json={"type": "teleport"}).status_code == 422


def test_department_endpoints(client, report_json):
    fire = client.get("/departments/fire_department/reports").json()
    assert [r["id"] for r in fire] == [report_json["id"]]
    assert client.get("/departments/Health Department/reports").json() == []

    status = client.get("/departments/GEOSCIENCE/status").json()
    assert status["department"] == "Geoscience"
    assert client.get("/departments/coast_guard/status").status_code == 404


def test_geocode_and_weather(client):
    assert client.get("/geocode", params={"location": "Sydney"}).json() == {"latitude": -33.8688, "longitude": 151.2093}

    body = client.get("/weather", params={"lat": -33.7, "lon": 150.3, "disaster_type": "Flood"}).json()
    assert body["observation"]["temperature_c"] == 20.0
    assert body["impact"]["risk_level"] == "Low"


def test_summary(client, report_json):
    client.post(f"/reports/{report_json['id']}/priority")

    body = client.get("/summary").json()

    assert body["total_reports"] == 1
    assert body["open_reports"] == 1
    assert body["priorities"]["Critical"] == 1
    assert body["department_statuses"]["Fire Department"]["In Progress"] == 1
    assert body["rationales"][0].startswith(f"Report {report_json['id']} (Wildfire at Blue Mountains) is Critical")


def test_create_report_with_numeric_area(client, make_payload):
    body = make_payload().model_dump(mode="json")
    body["affected_area_size"] = 1500

    response = client.post("/reports", json=body)

    assert response.status_code == 201
    assert response.json()["affected_area_size"] == "1500"
    assert client.post(f"/reports/{response.json()['id']}/priority").json()["level"] == "Critical"
