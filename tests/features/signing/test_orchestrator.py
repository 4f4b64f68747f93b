# (c) Copyright Datacraft, 2026
"""Tests for submitting documents to the signing provider."""
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from docroute.core.exceptions import (
    AlreadySubmitted,
    InvalidTransition,
    ProviderError,
    SigningFailed,
    UnresolvedSigner,
    ValidationError,
)
from docroute.core.features.auth.schema import Actor
from docroute.core.features.documents.db import api as db_api
from docroute.core.features.documents.db.orm import DocumentFile
from docroute.core.features.documents.states import SigningStatus
from docroute.core.features.signing.orchestrator import (
    SigningOrchestrator,
    extract_signer_records,
)
from docroute.core.features.signing.schema import (
    MarkInput,
    PrimarySignerOverride,
    RemoteProject,
    SignRequest,
)
from docroute.core.storage import LocalFileStore


@pytest.fixture
def actor():
    return Actor(user_id=uuid.uuid4(), email="Jane.Roe@example.com", name="Jane Roe")


@pytest.fixture
def client():
    client = AsyncMock()
    client.create_project.return_value = RemoteProject(
        project_id="p-1", tx_hash="0x01", redirect_url="https://signing.test/p-1"
    )
    client.add_signer.return_value = {
        "data": [{"id": 11, "email": "jane.roe@example.com"}]
    }
    client.add_signer_mark.return_value = {"data": {"id": 1}}
    client.send_project.return_value = {"success": True}
    return client


@pytest.fixture
def orchestrator(db_session, client, file_store, event_sink):
    return SigningOrchestrator(db_session, client, file_store, event_sink)


async def set_ledger(session, document_id, **values):
    document = await db_api.get_document(session, document_id)
    for name, value in values.items():
        setattr(document.ledger, name, value)
    await db_api.commit(session)


async def load_ledger(session, document_id):
    document = await db_api.get_document(session, document_id)
    return document.ledger


def signature_mark(**kwargs):
    return MarkInput(
        type="signature",
        position_x=100,
        position_y=200,
        width=120,
        height=40,
        page_no=1,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_submit_creates_draft_project(
    make_document, orchestrator, client, db_session, actor, event_sink
):
    document = await make_document()

    result = await orchestrator.submit(document.id, actor)

    assert result.status == SigningStatus.DRAFT
    assert result.project_id == "p-1"
    assert result.signers[0].email == "Jane.Roe@example.com"
    assert result.signers[0].id == 11

    payload = client.add_signer.await_args.args[1]
    assert payload["first_name"] == "Jane"
    assert payload["last_name"] == "Roe"
    assert payload["signer_role"] == "Signer"
    assert payload["type"] == "GUEST"
    client.send_project.assert_not_awaited()

    ledger = await load_ledger(db_session, document.id)
    assert ledger.signing_status == SigningStatus.DRAFT
    assert ledger.project_id == "p-1"
    assert ledger.tx_hash == "0x01"
    assert ledger.submitted_by == actor.user_id
    assert "documentUpdated" in event_sink.names


@pytest.mark.asyncio
async def test_submit_and_send_immediately(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    request = SignRequest(
        send_immediately=True,
        marks=[signature_mark(signer_email="jane.roe@EXAMPLE.com")],
    )

    result = await orchestrator.submit(document.id, actor, request)

    assert result.status == SigningStatus.PROCESSING
    client.add_signer_mark.assert_awaited_once()
    project_id, signer_id, mark = client.add_signer_mark.await_args.args
    assert (project_id, signer_id) == ("p-1", 11)
    assert "signer_email" not in mark
    client.send_project.assert_awaited_once_with("p-1")

    ledger = await load_ledger(db_session, document.id)
    assert ledger.signing_status == SigningStatus.PROCESSING


@pytest.mark.asyncio
async def test_submit_uses_stored_file(
    make_document, orchestrator, client, db_session, file_store, actor
):
    document = await make_document()
    stored = await file_store.put("docs/request.pdf", b"%PDF-1.7 request")
    db_session.add(DocumentFile(
        document_id=document.id,
        name="request.pdf",
        storage_path=stored.path,
        size=stored.size,
        is_primary=True,
    ))
    await db_session.commit()

    await orchestrator.submit(document.id, actor)

    file_bytes, file_name = client.create_project.await_args.args
    assert file_bytes == b"%PDF-1.7 request"
    assert file_name == "request.pdf"


@pytest.mark.asyncio
async def test_submit_without_file_registers_placeholder(
    make_document, orchestrator, client, db_session, file_store, actor
):
    document = await make_document()

    await orchestrator.submit(document.id, actor)

    file_bytes, _ = client.create_project.await_args.args
    assert file_bytes.startswith(b"%PDF")

    files = await db_api.list_files(db_session, document.id)
    assert len(files) == 1
    assert files[0].is_placeholder
    assert not files[0].is_primary
    assert await file_store.exists(files[0].storage_path)


class UnreadableStore(LocalFileStore):
    async def read(self, path):
        raise PermissionError(13, "Permission denied", path)


@pytest.mark.asyncio
async def test_file_outside_storage_root_falls_back_to_placeholder(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    db_session.add(DocumentFile(
        document_id=document.id,
        name="passwd",
        storage_path="../../etc/passwd",
        is_primary=True,
    ))
    await db_session.commit()

    await orchestrator.submit(document.id, actor)

    file_bytes, file_name = client.create_project.await_args.args
    assert file_bytes.startswith(b"%PDF")
    assert file_name.endswith("-placeholder.pdf")


@pytest.mark.asyncio
async def test_unreadable_file_falls_back_to_placeholder(
    make_document, client, db_session, event_sink, tmp_path, actor
):
    document = await make_document()
    db_session.add(DocumentFile(
        document_id=document.id,
        name="scan.pdf",
        storage_path="docs/scan.pdf",
        is_primary=True,
    ))
    await db_session.commit()
    store = UnreadableStore(tmp_path / "locked")
    orchestrator = SigningOrchestrator(db_session, client, store, event_sink)

    result = await orchestrator.submit(document.id, actor)

    assert result.status == SigningStatus.DRAFT
    file_bytes, _ = client.create_project.await_args.args
    assert file_bytes.startswith(b"%PDF")
    files = await db_api.list_files(db_session, document.id)
    assert [f.is_placeholder for f in files] == [False, True]


@pytest.mark.asyncio
async def test_upload_named_like_placeholder_is_a_real_file(
    make_document, orchestrator, client, db_session, file_store, actor
):
    document = await make_document()
    upload = await file_store.put("docs/placeholder-form.pdf", b"%PDF-1.7 form")
    generated = await file_store.put("generated/old.pdf", b"%PDF-1.4 generated")
    db_session.add_all([
        DocumentFile(
            document_id=document.id,
            name="placeholder-form.pdf",
            storage_path=upload.path,
            uploaded_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        ),
        DocumentFile(
            document_id=document.id,
            name="PR-001-placeholder.pdf",
            storage_path=generated.path,
            is_placeholder=True,
            uploaded_at=datetime(2026, 2, 1, tzinfo=timezone.utc),
        ),
    ])
    await db_session.commit()

    await orchestrator.submit(document.id, actor)

    file_bytes, file_name = client.create_project.await_args.args
    assert file_bytes == b"%PDF-1.7 form"
    assert file_name == "placeholder-form.pdf"


@pytest.mark.asyncio
async def test_submit_while_in_flight_is_rejected(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    await set_ledger(
        db_session, document.id,
        signing_status=SigningStatus.PROCESSING.value, project_id="p-0",
    )

    with pytest.raises(AlreadySubmitted):
        await orchestrator.submit(document.id, actor)

    client.create_project.assert_not_awaited()
    ledger = await load_ledger(db_session, document.id)
    assert ledger.signing_status == SigningStatus.PROCESSING
    assert ledger.project_id == "p-0"


@pytest.mark.asyncio
async def test_second_submit_keeps_first_project(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    first = await orchestrator.submit(document.id, actor)
    client.create_project.return_value = RemoteProject(project_id="p-other")

    with pytest.raises(AlreadySubmitted):
        await orchestrator.submit(document.id, actor)

    client.create_project.assert_awaited_once()
    ledger = await load_ledger(db_session, document.id)
    assert ledger.project_id == first.project_id == "p-1"
    assert ledger.signing_status == SigningStatus.DRAFT
    assert ledger.redirect_url == "https://signing.test/p-1"


@pytest.mark.asyncio
async def test_submit_signed_document_is_rejected(
    make_document, orchestrator, db_session, actor
):
    document = await make_document()
    await set_ledger(db_session, document.id, signing_status=SigningStatus.SIGNED.value)

    with pytest.raises(InvalidTransition):
        await orchestrator.submit(document.id, actor)


@pytest.mark.asyncio
async def test_unresolved_mark_signer_marks_failure(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    request = SignRequest(marks=[signature_mark(signer_email="ghost@example.com")])

    with pytest.raises(UnresolvedSigner):
        await orchestrator.submit(document.id, actor, request)

    client.add_signer_mark.assert_not_awaited()
    ledger = await load_ledger(db_session, document.id)
    assert ledger.signing_status == SigningStatus.FAILED
    assert ledger.project_id == "p-1"
    assert ledger.redirect_url is None
    assert "ghost@example.com" in ledger.last_error


@pytest.mark.asyncio
async def test_provider_failure_marks_failure(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    client.create_project.side_effect = ProviderError("upstream down", status=502)

    with pytest.raises(ProviderError):
        await orchestrator.submit(document.id, actor)

    ledger = await load_ledger(db_session, document.id)
    assert ledger.signing_status == SigningStatus.FAILED
    assert ledger.project_id is None
    assert ledger.last_error == "upstream down"


@pytest.mark.asyncio
async def test_unexpected_failure_is_wrapped(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    client.send_project.side_effect = RuntimeError("socket closed")

    with pytest.raises(SigningFailed) as exc_info:
        await orchestrator.submit(document.id, actor, SignRequest(send_immediately=True))

    assert exc_info.value.project_id == "p-1"
    assert isinstance(exc_info.value.cause, RuntimeError)
    ledger = await load_ledger(db_session, document.id)
    assert ledger.signing_status == SigningStatus.FAILED


@pytest.mark.asyncio
async def test_resubmit_after_failure(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    await set_ledger(
        db_session, document.id,
        signing_status=SigningStatus.FAILED.value, last_error="earlier failure",
    )
    client.create_project.return_value = RemoteProject(project_id="p-2")

    result = await orchestrator.submit(document.id, actor)

    assert result.project_id == "p-2"
    ledger = await load_ledger(db_session, document.id)
    assert ledger.signing_status == SigningStatus.DRAFT
    assert ledger.last_error is None


@pytest.mark.asyncio
async def test_primary_signer_requires_email(make_document, orchestrator, client):
    document = await make_document()
    anonymous = Actor(user_id=uuid.uuid4(), name="No Mail")

    with pytest.raises(ValidationError):
        await orchestrator.submit(document.id, anonymous)

    client.create_project.assert_not_awaited()


def test_primary_signer_override(orchestrator, actor):
    request = SignRequest(
        primary_signer=PrimarySignerOverride(
            email="cfo@example.com", first_name="Chief", signer_role="Approver"
        ),
    )

    primary, = orchestrator.build_signers(actor, request)

    assert primary.email == "cfo@example.com"
    assert primary.first_name == "Chief"
    assert primary.last_name == "Roe"
    assert primary.signer_role == "Approver"


def test_single_word_name_gets_empty_last_name(orchestrator):
    actor = Actor(user_id=uuid.uuid4(), email="plato@example.com", name="Plato")

    primary, = orchestrator.build_signers(actor, SignRequest())

    assert primary.first_name == "Plato"
    assert primary.last_name == ""


@pytest.mark.parametrize(
    "payload, expected",
    [
        (None, []),
        ([{"id": 1}], [{"id": 1}]),
        ({"data": [{"id": 2}]}, [{"id": 2}]),
        ({"data": {"data": [{"id": 3}]}}, [{"id": 3}]),
        ({"data": {"id": 4}}, [{"id": 4}]),
        ({"success": True}, []),
    ],
)
def test_extract_signer_records(payload, expected):
    assert extract_signer_records(payload) == expected


@pytest.mark.asyncio
async def test_dispatch_draft_project(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    await orchestrator.submit(document.id, actor)

    state = await orchestrator.dispatch(document.id)

    assert state.status == SigningStatus.PROCESSING
    client.send_project.assert_awaited_once_with("p-1")


@pytest.mark.asyncio
async def test_dispatch_requires_draft(make_document, orchestrator, client):
    document = await make_document()

    with pytest.raises(InvalidTransition):
        await orchestrator.dispatch(document.id)

    client.send_project.assert_not_awaited()


@pytest.mark.asyncio
async def test_sync_status_marks_signed(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    await orchestrator.submit(document.id, actor, SignRequest(send_immediately=True))
    client.get_project.return_value = {
        "data": {
            "status": "COMPLETED",
            "transaction_hash": "0xfeed",
            "completed_at": "2026-03-01T10:00:00Z",
            "signed_by": "jane.roe@example.com",
        }
    }

    state = await orchestrator.sync_status(document.id)

    assert state.status == SigningStatus.SIGNED
    assert state.remote_status == "completed"
    assert state.tx_hash == "0xfeed"
    assert state.signed_by == "jane.roe@example.com"
    assert state.signed_at is not None


@pytest.mark.asyncio
async def test_sync_status_rejected_project(
    make_document, orchestrator, client, db_session, actor
):
    document = await make_document()
    await orchestrator.submit(document.id, actor)
    client.get_project.return_value = {"data": {"status": "declined"}}

    state = await orchestrator.sync_status(document.id)

    assert state.status == SigningStatus.FAILED
    assert state.redirect_url is None
    assert state.last_error == "Remote project declined"


@pytest.mark.asyncio
async def test_sync_status_without_project(make_document, orchestrator):
    document = await make_document()

    with pytest.raises(InvalidTransition):
        await orchestrator.sync_status(document.id)
