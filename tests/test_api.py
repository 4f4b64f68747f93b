# (c) Copyright Datacraft, 2026
"""End to end requests through the FastAPI application."""
import uuid

import httpx
import pytest

from docroute.app import app
from docroute.core.db.engine import get_db


@pytest.fixture
async def api_client(session_factory, departments):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def actor_headers(department_id=None):
    headers = {"X-Actor-Id": str(uuid.uuid4()), "X-Actor-Name": "Jane Roe"}
    if department_id:
        headers["X-Actor-Department"] = str(department_id)
    return headers


@pytest.mark.asyncio
async def test_create_requires_actor(api_client, departments):
    response = await api_client.post(
        "/documents", json={"title": "Memo", "origin": str(departments.a)}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_malformed_actor_id_is_rejected(api_client, departments):
    response = await api_client.post(
        "/documents",
        json={"title": "Memo", "origin": str(departments.a)},
        headers={"X-Actor-Id": "not-a-uuid"},
    )

    assert response.status_code == 422
    assert response.json()["kind"] == "rejected"


@pytest.mark.asyncio
async def test_unknown_document(api_client):
    response = await api_client.get(f"/documents/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


@pytest.mark.asyncio
async def test_route_document_between_departments(api_client, departments):
    created = await api_client.post(
        "/documents",
        json={"title": "Memo", "origin": str(departments.a), "code": "M-1"},
        headers=actor_headers(departments.a),
    )
    assert created.status_code == 201
    document_id = created.json()["id"]
    assert created.json()["ledger"]["chain"] == [str(departments.a)]

    released = await api_client.post(
        f"/documents/{document_id}/release",
        json={"to_department": str(departments.b), "action": ["review", "sign"]},
        headers=actor_headers(departments.a),
    )
    assert released.status_code == 200
    assert released.json()["status"] == "intransit"

    incoming = await api_client.get(
        "/documents/in-transit/incoming", headers=actor_headers(departments.b)
    )
    assert incoming.status_code == 200
    assert [d["id"] for d in incoming.json()["items"]] == [document_id]

    received = await api_client.post(
        f"/documents/{document_id}/receive", json={}, headers=actor_headers(departments.b)
    )
    assert received.status_code == 200
    assert received.json()["status"] == "received"

    again = await api_client.post(
        f"/documents/{document_id}/receive", json={}, headers=actor_headers(departments.b)
    )
    assert again.status_code == 409
    assert again.json()["code"] == "already_received"

    details = await api_client.get(f"/documents/{document_id}")
    ledger = details.json()["ledger"]
    assert ledger["chain"] == [str(departments.a), str(departments.b)]
    assert ledger["acknowledged"] == [str(departments.b)]

    trail = await api_client.get(f"/audit/documents/{document_id}")
    assert trail.status_code == 200
    assert [e["status"] for e in trail.json()] == ["dispatch", "intransit", "received"]
