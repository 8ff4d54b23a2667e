"""
Tests for the /phone endpoints
"""
import pytest

PHONE_URL = "/api/v1/phone"


def test_phone_without_id_is_rejected(client):
    response = client.post(PHONE_URL, json={"name": "Ana"})

    assert response.status_code == 400
    assert response.json()["message"] == "Missing connection ID"


@pytest.mark.parametrize("phone_id", ["", "   ", 42, None])
def test_phone_with_unusable_id_is_rejected(client, phone_id):
    response = client.post(PHONE_URL, json={"id": phone_id})

    assert response.status_code == 400


def test_first_post_adds_phone(client):
    response = client.post(PHONE_URL, json={"id": "phone-1", "name": "Ana", "screenWidth": 390})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data == {"success": True, "id": "phone-1", "created": True}


def test_second_post_updates_phone(client, clock):
    client.post(PHONE_URL, json={"id": "p1", "gyroscope": {"alpha": 10, "beta": 5, "gamma": 0}})
    first = client.get(f"{PHONE_URL}/p1").json()["data"]

    clock.advance(0.1)
    response = client.post(PHONE_URL, json={"id": "p1", "gyroscope": {"alpha": 20, "beta": 5, "gamma": 0}})

    assert response.status_code == 200
    assert response.json()["data"]["created"] is False
    second = client.get(f"{PHONE_URL}/p1").json()["data"]
    assert second["gyroscope"]["alpha"] == 20
    assert second["firstSeen"] == first["firstSeen"]
    assert second["lastUpdate"] > first["lastUpdate"]


def test_unknown_fields_are_rejected(client):
    response = client.post(PHONE_URL, json={"id": "p1", "battery": 80})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid phone data"
    assert client.get(f"{PHONE_URL}/p1").status_code == 404


def test_invalid_location_is_rejected(client):
    response = client.post(PHONE_URL, json={"id": "p1", "location": {"latitude": 123, "longitude": 0, "accuracy": 5}})

    assert response.status_code == 400


def test_orientation_may_be_partial(client):
    response = client.post(PHONE_URL, json={"id": "p1", "gyroscope": {"alpha": None, "beta": 3.5, "gamma": -2}})

    assert response.status_code == 201
    gyroscope = client.get(f"{PHONE_URL}/p1").json()["data"]["gyroscope"]
    assert gyroscope == {"alpha": None, "beta": 3.5, "gamma": -2}


def test_list_phones(client):
    client.post(PHONE_URL, json={"id": "p1", "userAgent": "Mozilla/5.0", "platform": "Android"})
    client.post(PHONE_URL, json={"id": "p2", "image": "data:image/jpeg;base64,AAAA"})

    data = client.get(PHONE_URL).json()["data"]

    assert data["total"] == 2
    assert data["activeCount"] == 2
    assert [phone["id"] for phone in data["phones"]] == ["p1", "p2"]
    assert data["phones"][0]["userAgent"] == "Mozilla/5.0"
    assert data["phones"][1]["image"].startswith("data:image/jpeg")


def test_get_unknown_phone(client):
    response = client.get(f"{PHONE_URL}/missing")

    assert response.status_code == 404
    assert response.json()["status"] == "error"


def test_delete_phone(client):
    client.post(PHONE_URL, json={"id": "p1"})

    assert client.delete(f"{PHONE_URL}/p1").status_code == 200
    assert client.delete(f"{PHONE_URL}/p1").status_code == 404
    assert client.get(PHONE_URL).json()["data"]["total"] == 0


def test_get_phone_past_ttl_is_not_found(client, clock):
    client.post(PHONE_URL, json={"id": "p1", "name": "Ana"})
    clock.advance(301)

    assert client.get(f"{PHONE_URL}/p1").status_code == 404


def test_phone_returning_after_ttl_is_added_again(client, clock):
    client.post(PHONE_URL, json={"id": "p1", "name": "Ana"})
    clock.advance(301)

    response = client.post(PHONE_URL, json={"id": "p1", "name": "Ana"})

    assert response.status_code == 201
    assert response.json()["message"] == "Phone added"
    assert response.json()["data"]["created"] is True
    assert client.get(f"{PHONE_URL}/p1").json()["data"]["firstSeen"] == clock.now_ms()
