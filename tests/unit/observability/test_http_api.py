"""
HTTP 엔드포인트 테스트

헬스/레디니스/메트릭 엔드포인트와 /api 도메인 라우트를 테스트합니다.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from floodguard.errors import StoreError
from floodguard.features.flood_service import FloodService
from floodguard.observability.health import create_app
from factories import HYDERABAD

USER = {"id": 7, "email": "resident@example.com", "receiveAlerts": True}


@pytest.fixture
def client(sample_settings, service):
    """시드 서비스 위의 테스트 클라이언트"""
    return TestClient(create_app(sample_settings, service))


class TestHealthEndpoints:
    """운영 엔드포인트 테스트"""

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "test-service"

    def test_ready_endpoint(self, client):
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_ready_fails_when_store_down(self, sample_settings, mock_dispatcher):
        store = AsyncMock()
        store.get_river_levels_by_area.side_effect = StoreError("database is locked")
        app = create_app(sample_settings, FloodService(store, mock_dispatcher, sample_settings))

        response = TestClient(app).get("/ready")
        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"

    def test_metrics_endpoint(self, client):
        client.get("/api/flood-risk", params={"latitude": HYDERABAD[0], "longitude": HYDERABAD[1]})
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "flood_assessments_total" in response.text

    def test_metrics_disabled(self, sample_settings, service):
        sample_settings.observability.metrics_enabled = False
        response = TestClient(create_app(sample_settings, service)).get("/metrics")
        assert response.status_code == 503

    def test_info_endpoint(self, client):
        data = client.get("/info").json()
        assert data["version"] == "1.0.0"
        assert data["storage_backend"] == "memory"
        assert data["distance_override_km"] == 5.0

    def test_root_lists_endpoints(self, client):
        data = client.get("/").json()
        assert data["endpoints"]["safe_routes"] == "/api/safe-routes"


class TestFloodApi:
    """/api 라우트 테스트"""

    def test_flood_risk_wire_names(self, client):
        response = client.get("/api/flood-risk",
                              params={"latitude": HYDERABAD[0], "longitude": HYDERABAD[1]})
        assert response.status_code == 200
        data = response.json()
        assert data["riskLevel"] == "HIGH"
        assert data["waterLevel"] == 85.0
        assert data["thresholdLevel"] == 80.0
        assert data["riverName"] == "Musi River"

    def test_out_of_range_latitude_rejected(self, client):
        response = client.get("/api/flood-risk", params={"latitude": 100, "longitude": 0})
        assert response.status_code == 422

    def test_road_status(self, client):
        response = client.get("/api/road-status", params={
            "startLat": HYDERABAD[0], "startLong": HYDERABAD[1],
            "endLat": 17.395044, "endLong": 78.496671,
        })
        assert response.json() == {"status": "UNDER_FLOOD", "color": "red"}

    def test_safe_routes(self, client):
        params = {
            "startLat": HYDERABAD[0], "startLong": HYDERABAD[1],
            "endLat": 17.405044, "endLong": 78.506671,
        }
        data = client.get("/api/safe-routes", params=params).json()
        assert [r["status"] for r in data["routes"]] == ["SAFE", "SAFE", "UNDER_FLOOD", "UNDER_FLOOD"]
        assert data["safeCount"] == 1
        assert data["totalRoads"] == 3

        safe = client.get("/api/safe-routes", params={**params, "safeOnly": "true"}).json()
        assert [r["status"] for r in safe["routes"]] == ["SAFE", "SAFE"]
        assert safe["totalRoads"] == 3

    def test_roads_and_river_levels(self, client):
        params = {"latitude": HYDERABAD[0], "longitude": HYDERABAD[1], "radius": 5}
        roads = client.get("/api/roads", params=params).json()
        assert [r["startLat"] for r in roads] == [HYDERABAD[0], 17.395044, HYDERABAD[0]]

        rivers = client.get("/api/river-levels", params=params).json()
        assert rivers[0]["criticalThreshold"] == 80.0

    def test_roads_requires_positive_radius(self, client):
        response = client.get("/api/roads", params={"latitude": 0, "longitude": 0, "radius": 0})
        assert response.status_code == 422

    def test_check_in_creates_alert(self, client, mock_dispatcher):
        response = client.post("/api/locations", json={
            "user": USER, "latitude": HYDERABAD[0], "longitude": HYDERABAD[1],
        })
        assert response.status_code == 201
        data = response.json()
        assert data["assessment"]["riskLevel"] == "HIGH"
        assert data["alert"]["userId"] == 7
        assert data["dispatched"] is True

        alerts = client.get("/api/alerts", params={"userId": 7}).json()
        assert len(alerts) == 1
        current = client.get("/api/flood-risks/current", params={"userId": 7}).json()
        assert current["riskLevel"] == "HIGH"

        read = client.post(f"/api/alerts/{alerts[0]['id']}/read", json={"userId": 7})
        assert read.json()["isRead"] is True
        other = client.post(f"/api/alerts/{alerts[0]['id']}/read", json={"userId": 8})
        assert other.status_code == 403

    def test_missing_alert_is_404(self, client):
        response = client.post("/api/alerts/999/read", json={"userId": 7})
        assert response.status_code == 404

    def test_current_risk_without_history_is_404(self, client):
        response = client.get("/api/flood-risks/current", params={"userId": 42})
        assert response.status_code == 404

    def test_manual_alert(self, client):
        response = client.post("/api/alerts/send", json={"user": USER})
        assert response.status_code == 201
        assert response.json()["message"].startswith("Manual flood risk alert")

    def test_store_error_maps_to_503(self, sample_settings, mock_dispatcher):
        store = AsyncMock()
        store.get_river_levels_by_area.side_effect = StoreError("disk I/O error")
        app = create_app(sample_settings, FloodService(store, mock_dispatcher, sample_settings))

        response = TestClient(app).get("/api/flood-risk", params={"latitude": 1, "longitude": 1})
        assert response.status_code == 503
