"""Tests for the Flask application."""

import pytest

from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestFlaskApp:
    """Test the Flask routes and responses."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "healthy"}

    def test_api_info(self, client):
        response = client.get("/api")

        assert response.status_code == 200
        assert "calculate_incentives" in response.get_json()["endpoints"]

    def test_cors_header_present(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:5173"})
        # flask-cors echoes the Origin back on newer releases
        assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://localhost:5173")

    def test_calculate_incentives(self, client, sample_payload):
        response = client.post("/calculate_incentives", json=sample_payload)

        assert response.status_code == 200
        body = response.get_json()
        assert body["summary"]["earning_count"] == 2
        assert body["calculations"][0]["incentive_amount"] == 4500.0

    def test_calculate_incentives_empty_body(self, client):
        response = client.post("/calculate_incentives", data="", content_type="application/json")

        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_calculate_incentives_validation_error(self, client, sample_payload):
        sample_payload["incentive_rules"][0]["tiers"][0]["incentive_rate"] = 250

        response = client.post("/calculate_incentives", json=sample_payload)

        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_calculate_incentives_missing_user(self, client):
        response = client.post("/calculate_incentives", json={"accounts": []})

        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_calculate_incentives_non_finite_number(self, client, sample_payload):
        sample_payload["sales_data"][0]["gross_commission"] = "NaN"

        response = client.post("/calculate_incentives", json=sample_payload)

        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_calculate_incentives_integer_ids(self, client, sample_payload):
        sample_payload["users"] = []
        sample_payload["accounts"][0]["user_id"] = 123456789012

        response = client.post("/calculate_incentives", json=sample_payload)

        assert response.status_code == 200
        assert response.get_json()["calculations"][0]["user_name"] == "User 12345678"
