"""Tests for the MongoDB HTTP endpoints."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import OperationFailure

from docbridge.services.mongodb.client import get_client

PREFIX = "/mongo"


def test_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_insert_many_returns_ids_in_input_order(client):
    response = client.post(f"{PREFIX}/documents/insert-many", json={
        "database": "d",
        "collection": "c",
        "documents": [{"a": 1}, {"a": 2}],
    })

    assert response.status_code == 200
    inserted_ids = response.json()["inserted_ids"]
    assert len(inserted_ids) == 2

    for expected, inserted_id in zip([1, 2], inserted_ids):
        found = client.post(f"{PREFIX}/documents/find-one", json={
            "database": "d",
            "collection": "c",
            "filter": {"_id": inserted_id},
        })
        assert found.status_code == 200
        assert found.json()["document"]["a"] == expected


def test_insert_many_with_no_documents(client):
    response = client.post(f"{PREFIX}/documents/insert-many", json={
        "database": "d",
        "collection": "c",
        "documents": [],
    })

    assert response.status_code == 200
    assert response.json() == {"inserted_ids": []}


def test_insert_one_and_find_without_filter(client):
    response = client.post(f"{PREFIX}/documents/insert-one", json={
        "database": "d",
        "collection": "c",
        "document": {"name": "Ada"},
    })
    assert response.status_code == 200
    assert "$oid" in response.json()["inserted_id"]

    implicit = client.post(f"{PREFIX}/documents/find", json={"database": "d", "collection": "c"})
    explicit = client.post(f"{PREFIX}/documents/find", json={"database": "d", "collection": "c", "filter": {}})

    assert implicit.status_code == 200
    assert implicit.json() == explicit.json()
    assert [doc["name"] for doc in implicit.json()["documents"]] == ["Ada"]


def test_find_applies_sort_and_limit(client):
    client.post(f"{PREFIX}/documents/insert-many", json={
        "database": "d",
        "collection": "c",
        "documents": [{"a": 1}, {"a": 3}, {"a": 2}],
    })

    response = client.post(f"{PREFIX}/documents/find", json={
        "database": "d",
        "collection": "c",
        "options": {"sort": {"a": -1}, "limit": 2},
    })

    assert response.status_code == 200
    assert [doc["a"] for doc in response.json()["documents"]] == [3, 2]


def test_find_one_without_match(client):
    response = client.post(f"{PREFIX}/documents/find-one", json={
        "database": "d",
        "collection": "c",
        "filter": {"a": 42},
    })

    assert response.status_code == 200
    assert response.json() == {"document": None}


def test_update_matching_nothing_has_no_upserted_id(client):
    response = client.post(f"{PREFIX}/documents/update-one", json={
        "database": "d",
        "collection": "c",
        "filter": {"a": 42},
        "update": {"$set": {"b": 1}},
    })

    assert response.status_code == 200
    assert response.json() == {"matched_count": 0, "modified_count": 0}


def test_update_with_upsert_returns_upserted_id(client):
    response = client.post(f"{PREFIX}/documents/update-one", json={
        "database": "d",
        "collection": "c",
        "filter": {"a": 42},
        "update": {"$set": {"b": 1}},
        "options": {"upsert": True},
    })

    assert response.status_code == 200
    body = response.json()
    assert body["matched_count"] == 0
    assert "upserted_id" in body

    found = client.post(f"{PREFIX}/documents/find-one", json={
        "database": "d",
        "collection": "c",
        "filter": {"_id": body["upserted_id"]},
    })
    assert found.json()["document"]["b"] == 1


def test_update_many_counts(client):
    client.post(f"{PREFIX}/documents/insert-many", json={
        "database": "d",
        "collection": "c",
        "documents": [{"a": 1}, {"a": 1}, {"a": 2}],
    })

    response = client.post(f"{PREFIX}/documents/update-many", json={
        "database": "d",
        "collection": "c",
        "filter": {"a": 1},
        "update": {"$set": {"b": True}},
    })

    assert response.json() == {"matched_count": 2, "modified_count": 2}


def test_replace_one(client):
    client.post(f"{PREFIX}/documents/insert-one", json={
        "database": "d",
        "collection": "c",
        "document": {"a": 1, "b": 1},
    })

    response = client.post(f"{PREFIX}/documents/replace-one", json={
        "database": "d",
        "collection": "c",
        "filter": {"a": 1},
        "replacement": {"a": 10},
    })

    assert response.status_code == 200
    assert response.json() == {"matched_count": 1, "modified_count": 1}
    found = client.post(f"{PREFIX}/documents/find-one", json={"database": "d", "collection": "c"})
    assert "b" not in found.json()["document"]


def test_delete_one_and_many(client):
    client.post(f"{PREFIX}/documents/insert-many", json={
        "database": "d",
        "collection": "c",
        "documents": [{"a": 1}, {"a": 1}, {"a": 1}],
    })

    one = client.post(f"{PREFIX}/documents/delete-one", json={"database": "d", "collection": "c", "filter": {"a": 1}})
    many = client.post(f"{PREFIX}/documents/delete-many", json={"database": "d", "collection": "c", "filter": {"a": 1}})

    assert one.json() == {"deleted_count": 1}
    assert many.json() == {"deleted_count": 2}


def test_list_collections(client):
    for name in ("users", "orders"):
        client.post(f"{PREFIX}/documents/insert-one", json={"database": "d", "collection": name, "document": {}})

    response = client.get(f"{PREFIX}/collections", params={"database": "d"})

    assert response.status_code == 200
    assert sorted(response.json()["collections"]) == ["orders", "users"]


def test_list_collections_requires_database(client):
    response = client.get(f"{PREFIX}/collections")

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "invalid_request"
    assert body["detail"][0]["loc"] == ["database"]


def test_malformed_body_is_rejected(client):
    response = client.post(f"{PREFIX}/documents/insert-one", json={
        "collection": "c",
        "document": "not a document",
    })

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_request"


def test_driver_errors_become_server_errors(app, client):
    collection = MagicMock()
    collection.delete_one = AsyncMock(side_effect=OperationFailure("not authorized"))
    failing_client = MagicMock()
    failing_client.__getitem__.return_value.__getitem__.return_value = collection
    app.dependency_overrides[get_client] = lambda: failing_client

    response = client.post(f"{PREFIX}/documents/delete-one", json={
        "database": "d",
        "collection": "c",
        "filter": {},
    })

    assert response.status_code == 500
    assert "not authorized" in response.json()["detail"]


@pytest.mark.parametrize("bad_value", [
    {"$oid": "zz"},
    {"$oid": 5},
    {"$oid": "64b7f0c2a1b2c3d4e5f60718", "x": 1},
    {"$date": "not-a-date"},
    {"$numberLong": "abc"},
])
def test_malformed_extended_json_is_rejected(client, bad_value):
    response = client.post(f"{PREFIX}/documents/find-one", json={
        "database": "d",
        "collection": "c",
        "filter": {"_id": bad_value},
    })

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "invalid_request"
    assert body["detail"][0]["loc"] == ["body", "filter"]
    assert body["detail"][0]["type"] == "value_error"


def test_malformed_extended_json_in_insert_is_rejected(client):
    response = client.post(f"{PREFIX}/documents/insert-one", json={
        "database": "d",
        "collection": "c",
        "document": {"when": {"$date": "not-a-date"}},
    })

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_request"


def test_stored_wrapper_like_keys_are_returned_literally(app, client):
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value={"_id": 1, "n": {"$numberLong": "5"}})
    stored_client = MagicMock()
    stored_client.__getitem__.return_value.__getitem__.return_value = collection
    app.dependency_overrides[get_client] = lambda: stored_client

    response = client.post(f"{PREFIX}/documents/find-one", json={"database": "d", "collection": "c"})

    assert response.status_code == 200
    assert response.json() == {"document": {"_id": 1, "n": {"$numberLong": "5"}}}
