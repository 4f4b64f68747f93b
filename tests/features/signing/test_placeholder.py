# (c) Copyright Datacraft, 2026
import uuid
from datetime import datetime, timezone

from docroute.core.features.documents.db.orm import Document
from docroute.core.features.signing.placeholder import (
    generate_placeholder_pdf,
    placeholder_file_name,
)


def make_document(**kwargs):
    return Document(
        id=uuid.UUID("0b7f0ad4-7b2c-4f4b-9a55-3c4a1f0e2d11"),
        title=kwargs.pop("title", "Annual budget"),
        origin=uuid.uuid4(),
        status="dispatch",
        **kwargs,
    )


def test_placeholder_is_a_pdf():
    document = make_document(code="BUD-1", description="Budget for the next year. " * 40)

    pdf = generate_placeholder_pdf(document, generated_for="Jane Roe")

    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 500


def test_placeholder_without_optional_fields():
    pdf = generate_placeholder_pdf(make_document(title="x" * 300))

    assert pdf.startswith(b"%PDF")


def test_placeholder_file_name_is_timestamped():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    name = placeholder_file_name(make_document(), now=now)

    assert name == "0b7f0ad4-7b2c-4f4b-9a55-3c4a1f0e2d11-placeholder-1767225600000.pdf"
