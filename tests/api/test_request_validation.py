"""
Tests for payload validation at the HTTP boundary.
"""

import pytest


class TestRequestValidation:
    """Test cases for field rules rejected with a 400."""

    def test_organizer_contact_without_punctuation(self, client, auth_headers, db_session):
        """Test that a bare digit string is not a valid contact."""
        response = client.post(
            "/api/v1/organizers",
            json={"name": "Ana Souza", "contact": "99999999999"},
            headers=auth_headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert [detail["field"] for detail in body["details"]] == ["contact"]
        assert client.get("/api/v1/organizers").json() == []

    def test_organizer_contact_formatted(self, client, auth_headers):
        """Test that a formatted phone is accepted."""
        response = client.post(
            "/api/v1/organizers",
            json={"name": "Ana Souza", "contact": "(11)91234-5678"},
            headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["contact"] == "(11)91234-5678"

    def test_organizer_empty_contact(self, client, auth_headers):
        """Test that an empty contact is rejected and nothing is stored."""
        response = client.post(
            "/api/v1/organizers",
            json={"name": "Ana Souza", "contact": ""},
            headers=auth_headers
        )

        assert response.status_code == 400
        assert client.get("/api/v1/organizers").json() == []

    def test_missing_required_field(self, client, sample_venue_data):
        """Test that a missing field is reported by name."""
        payload = {key: value for key, value in sample_venue_data.items() if key != "address"}

        response = client.post("/api/v1/venues", json=payload)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "address"

    @pytest.mark.parametrize("field,value", [
        ("email", "not-an-email"),
        ("national_id", "12345678909"),
        ("name", "x" * 101),
    ])
    def test_invalid_participant(self, client, sample_participant_data, field, value):
        """Test participant field rules."""
        response = client.post(
            "/api/v1/participants", json={**sample_participant_data, field: value}
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == field

    @pytest.mark.parametrize("capacity", [0, 10001])
    def test_event_capacity_out_of_range(self, client, sample_event_data, capacity):
        """Test that event capacity must be between 1 and 10000."""
        response = client.post(
            "/api/v1/events", json={**sample_event_data, "capacity": capacity}
        )

        assert response.status_code == 400
        assert client.get("/api/v1/events").json() == []

    def test_event_description_too_long(self, client, sample_event_data):
        """Test the event description length limit."""
        response = client.post(
            "/api/v1/events", json={**sample_event_data, "description": "d" * 501}
        )

        assert response.status_code == 400

    def test_venue_capacity_out_of_range(self, client, sample_venue_data):
        """Test the venue capacity range."""
        response = client.post(
            "/api/v1/venues", json={**sample_venue_data, "max_capacity": 0}
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("resource,field", [
        ("events", "venue_id"),
        ("events", "organizer_id"),
        ("registrations", "event_id"),
        ("registrations", "participant_id"),
    ])
    @pytest.mark.parametrize("value", [2 ** 31, 2 ** 64])
    def test_reference_id_out_of_range(self, client, resource_payloads, resource, field, value):
        """Test that references wider than the id column are rejected."""
        response = client.post(
            f"/api/v1/{resource}", json={**resource_payloads[resource], field: value}
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == field
        assert client.get(f"/api/v1/{resource}").json() == []

    def test_registration_requires_participant(self, client, sample_registration_data):
        """Test that a registration needs a participant id."""
        payload = {**sample_registration_data}
        del payload["participant_id"]

        response = client.post("/api/v1/registrations", json=payload)

        assert response.status_code == 400

    def test_invalid_update_payload(self, client, auth_headers, sample_sponsor_data):
        """Test that updates are validated like creates."""
        created = client.post(
            "/api/v1/sponsors", json=sample_sponsor_data, headers=auth_headers
        ).json()

        response = client.put(
            f"/api/v1/sponsors/{created['id']}",
            json={**sample_sponsor_data, "id": created["id"], "contact": "123"},
            headers=auth_headers
        )

        assert response.status_code == 400
        assert client.get(f"/api/v1/sponsors/{created['id']}").json()["contact"] == "(21)98765-4321"
