# (c) Copyright Datacraft, 2026
import pytest

from docroute.core.exceptions import (
    AlreadySubmitted,
    ConcurrentModification,
    DocrouteError,
    NotFound,
    ProviderError,
    SigningFailed,
    StorageUnavailable,
    ValidationError,
)
from docroute.core.handlers import GENERIC_PROVIDER_MESSAGE, error_body, status_code_for


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ValidationError("bad id", field="document_id"), 422),
        (NotFound("Document", "x"), 404),
        (AlreadySubmitted("busy"), 409),
        (ConcurrentModification("stale"), 409),
        (ProviderError("down", status=500), 502),
        (SigningFailed("failed"), 502),
        (StorageUnavailable("disk"), 503),
        (DocrouteError("other"), 500),
    ],
)
def test_status_code_for(exc, expected):
    assert status_code_for(exc) == expected


def test_rejected_body_carries_field():
    body = error_body(ValidationError("document_id is not a valid UUID", field="document_id"))

    assert body == {
        "kind": "rejected",
        "detail": "document_id is not a valid UUID",
        "code": "validation_error",
        "field": "document_id",
    }


def test_provider_body_carries_provider_details():
    body = error_body(ProviderError("Signer exists", status=422, code="SIGNER_EXISTS"))

    assert body["kind"] == "provider_failed"
    assert body["detail"] == "Signer exists"
    assert body["code"] == "SIGNER_EXISTS"
    assert body["provider_status"] == 422


def test_signing_failed_body_hides_cause_message():
    exc = SigningFailed("Signing failed: secret", cause=RuntimeError("secret"), project_id="p-1")

    body = error_body(exc)

    assert body["detail"] == GENERIC_PROVIDER_MESSAGE
    assert body["project_id"] == "p-1"
    assert body["cause"] == "RuntimeError"
    assert "secret" not in str(body)
