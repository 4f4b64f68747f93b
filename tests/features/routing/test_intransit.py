# (c) Copyright Datacraft, 2026
"""Tests for the department inbox and outbox views."""
import pytest

from docroute.core.features.routing import intransit


@pytest.mark.asyncio
async def test_incoming_lists_unreceived_documents(
    make_document, routing_service, departments, actor_id, db_session
):
    first = await make_document(title="Budget", code="B-1")
    second = await make_document(title="Contract", code="C-1")
    await make_document(title="Not routed", code="N-1")
    await routing_service.release(first.id, departments.b, actor_id=actor_id)
    await routing_service.release(second.id, departments.b, actor_id=actor_id)
    await routing_service.receive(second.id, departments.b, actor_id=actor_id)

    page = await intransit.incoming(db_session, departments.b)

    assert [d.id for d in page.items] == [first.id]
    assert page.pagination.total == 1
    # the origin never sees its own documents as incoming
    origin_page = await intransit.incoming(db_session, departments.a)
    assert origin_page.items == []


@pytest.mark.asyncio
async def test_outgoing_lists_routed_documents_of_origin(
    make_document, routing_service, departments, actor_id, db_session
):
    routed = await make_document(title="Routed", code="R-1")
    await make_document(title="Stays home", code="S-1")
    await routing_service.release(routed.id, departments.b, actor_id=actor_id)

    page = await intransit.outgoing(db_session, departments.a)
    assert [d.id for d in page.items] == [routed.id]

    assert (await intransit.outgoing(db_session, departments.b)).items == []


@pytest.mark.asyncio
async def test_pagination(make_document, routing_service, departments, actor_id, db_session):
    for i in range(5):
        document = await make_document(title=f"Doc {i}", code=f"D-{i}")
        await routing_service.release(document.id, departments.c, actor_id=actor_id)

    page = await intransit.incoming(db_session, departments.c, page=2, limit=2)

    assert len(page.items) == 2
    assert page.pagination.total == 5
    assert page.pagination.total_pages == 3
    assert page.pagination.has_next is True
    assert page.pagination.has_prev is True

    last = await intransit.incoming(db_session, departments.c, page=3, limit=2)
    assert len(last.items) == 1
    assert last.pagination.has_next is False
