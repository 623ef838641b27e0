# tests/services/test_persons_api_fake.py
"""
HTTP surface against in-memory collaborators: envelopes, status mapping,
and the no-write-on-failed-enrichment guarantee.
"""
from __future__ import annotations

import uuid

BASE = "/api/persons"


def _create(client, **body):
    payload = {"name": "Alice", "surname": "Smith", **body}
    r = client.post(BASE, json=payload)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_returns_enriched_record(fake_client):
    r = fake_client.post(BASE, json={"name": "Alice", "surname": "Smith", "patronymic": "J"})

    assert r.status_code == 201
    body = r.json()
    assert body["code"] == 201
    assert body["message"] == "Successfully created"
    data = body["data"]
    assert (data["age"], data["gender"], data["nationality"]) == (30, "female", "US")
    assert data["patronymic"] == "J"
    uuid.UUID(data["id"])


def test_get_by_id(fake_client):
    created = _create(fake_client)

    r = fake_client.get(f"{BASE}/{created['id']}")

    assert r.status_code == 200
    assert r.json()["data"] == created


def test_missing_surname_is_400_envelope(fake_client, fake_lookup):
    r = fake_client.post(BASE, json={"name": "Alice"})

    assert r.status_code == 400
    body = r.json()
    assert body["code"] == 400
    assert body["resource"] == BASE
    assert "surname" in body["message"]
    assert fake_lookup.calls == []


def test_blank_name_is_400(fake_client, fake_store):
    r = fake_client.post(BASE, json={"name": "   ", "surname": "Smith"})
    assert r.status_code == 400
    assert "name is required" in r.json()["message"]
    assert fake_store.writes == []


def test_malformed_json_is_400(fake_client):
    r = fake_client.post(BASE, content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400


def test_lookup_failure_is_502_and_nothing_stored(fake_client, fake_lookup, fake_store):
    fake_lookup.fail_on = "gender"

    r = fake_client.post(BASE, json={"name": "Alice", "surname": "Smith"})

    assert r.status_code == 502
    body = r.json()
    assert body["code"] == 502
    assert "gender" in body["message"]
    assert fake_store.rows == {}


def test_list_envelope_and_query_params(fake_client, fake_store):
    _create(fake_client, name="Ann")
    _create(fake_client, name="Ben")

    r = fake_client.get(BASE, params={"name": "an", "age_min": 20, "age_max": 40, "limit": 5})

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "OK"
    assert [p["name"] for p in body["data"]] == ["Ben", "Ann"]
    assert fake_store.statements[-1].args == (20, 40, "%an%", 5, 0)


def test_inverted_age_range_is_400(fake_client, fake_store):
    r = fake_client.get(BASE, params={"age_min": 50, "age_max": 10})
    assert r.status_code == 400
    assert "age_min cannot be greater than age_max" in r.json()["message"]
    assert fake_store.statements == []


def test_non_integer_query_param_is_400(fake_client):
    r = fake_client.get(BASE, params={"limit": "ten"})
    assert r.status_code == 400
    assert "limit" in r.json()["message"]


def test_unknown_id_is_404(fake_client):
    r = fake_client.get(f"{BASE}/{uuid.uuid4()}")
    assert r.status_code == 404
    assert r.json()["code"] == 404


def test_malformed_id_is_400(fake_client):
    r = fake_client.get(f"{BASE}/not-a-uuid")
    assert r.status_code == 400
    assert r.json()["resource"] == f"{BASE}/not-a-uuid"


def test_update_sends_only_supplied_fields(fake_client, fake_store):
    created = _create(fake_client)

    r = fake_client.put(
        f"{BASE}/{created['id']}",
        json={"name": "Alice", "surname": "Smith", "gender": None},
    )

    assert r.status_code == 200
    assert r.json()["message"] == "Successfully updated"
    stmt = fake_store.statements[-1]
    assert stmt.sql == (
        "UPDATE persons SET name = $1, surname = $2, gender = $3, "
        "updated_at = clock_timestamp() WHERE id = $4"
    )
    assert stmt.args[:3] == ("Alice", "Smith", None)


def test_update_requires_names(fake_client):
    created = _create(fake_client)
    r = fake_client.put(f"{BASE}/{created['id']}", json={"age": 5})
    assert r.status_code == 400


def test_update_negative_age_is_400(fake_client):
    created = _create(fake_client)
    r = fake_client.put(f"{BASE}/{created['id']}", json={"name": "A", "surname": "B", "age": -1})
    assert r.status_code == 400


def test_update_unknown_id_is_404(fake_client):
    r = fake_client.put(f"{BASE}/{uuid.uuid4()}", json={"name": "A", "surname": "B"})
    assert r.status_code == 404


def test_delete_twice(fake_client):
    created = _create(fake_client)

    first = fake_client.delete(f"{BASE}/{created['id']}")
    assert first.status_code == 200
    assert first.json()["message"] == "Successfully deleted"

    second = fake_client.delete(f"{BASE}/{created['id']}")
    assert second.status_code == 404


def test_healthz(fake_client):
    r = fake_client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_negative_age_bound_is_400(fake_client, fake_store):
    r = fake_client.get(BASE, params={"age_min": 50, "age_max": -1})
    assert r.status_code == 400
    assert "age_max must be >= 0" in r.json()["message"]
    assert fake_store.statements == []
