# (c) Copyright Datacraft, 2026
"""Tests for document creation, sharing and the ledger model."""
import uuid

import pytest

from docroute.core.exceptions import NotFound
from docroute.core.features.audit.db import api as audit_api
from docroute.core.features.documents.db import api as db_api
from docroute.core.features.documents.db.orm import WorkflowLedger
from docroute.core.features.documents.schema import DocumentCreate
from docroute.core.features.documents.states import DocumentStatus, SigningStatus


@pytest.mark.asyncio
async def test_create_document_starts_chain_at_origin(
    make_document, departments, db_session, notifier, event_sink
):
    document = await make_document()

    assert document.status == DocumentStatus.DISPATCH
    assert document.ledger.chain == [departments.a]
    assert document.ledger.acknowledged == []
    assert document.ledger.signing.status == SigningStatus.UNSUBMITTED
    assert document.ledger.version == 1

    trail = await audit_api.get_document_trail(db_session, document.id)
    assert len(trail) == 1
    assert trail[0].status == "dispatch"
    assert trail[0].to_department == departments.a

    # dispatch entries go to the originating department only
    assert sorted(notifier.recipients(), key=str) == sorted(departments.users["A"], key=str)
    assert event_sink.names == ["documentUpdated"]


@pytest.mark.asyncio
async def test_create_document_unknown_origin(document_service, departments, actor_id):
    data = DocumentCreate(title="Memo", origin=uuid.uuid4())
    with pytest.raises(NotFound):
        await document_service.create_document(data, actor_id)


@pytest.mark.asyncio
async def test_get_unknown_document(db_session):
    with pytest.raises(NotFound):
        await db_api.get_document(db_session, uuid.uuid4())


@pytest.mark.asyncio
async def test_share_document_is_idempotent(
    make_document, document_service, actor_id, notifier, event_sink, db_session
):
    document = await make_document()
    alice, bob = uuid.uuid4(), uuid.uuid4()
    notifier.sent.clear()

    result = await document_service.share_document(document.id, actor_id, [alice, bob])
    assert result.success
    assert set(result.notified) == {alice, bob}
    assert "documentShared" in event_sink.names

    again = await document_service.share_document(document.id, actor_id, [bob])
    assert again.audit_entry_id is None
    assert again.notified == []

    details = await document_service.get_document(document.id)
    assert set(details.ledger.shared_with) == {alice, bob}
    # sharing does not touch the department acknowledgments
    assert details.ledger.acknowledged == []

    trail = await audit_api.get_document_trail(db_session, document.id)
    assert [e.action for e in trail] == ["created", "shared"]


def test_ledger_chain_property_normalizes_legacy_shapes():
    a, b = uuid.uuid4(), uuid.uuid4()
    ledger = WorkflowLedger()
    ledger.chain_raw = {"second": str(b), "first": str(a)}

    assert ledger.chain == [a, b]
    assert ledger.origin == a

    ledger.chain = [a, b, a]
    assert ledger.chain_raw == [str(a), str(b)]
