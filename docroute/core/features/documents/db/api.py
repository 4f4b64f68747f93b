# (c) Copyright Datacraft, 2026
"""Documents database API."""
import logging
import uuid
from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from docroute.core.exceptions import ConcurrentModification, NotFound
from docroute.core.features.documents.states import DocumentStatus

from .orm import Document, DocumentFile, WorkflowLedger

logger = logging.getLogger(__name__)


async def get_document(
	session: AsyncSession,
	document_id: uuid.UUID,
) -> Document:
	"""Load a document together with its ledger, reading fresh row values.

	Raises:
		NotFound: if the document or its ledger does not exist
	"""
	stmt = (
		select(Document)
		.options(selectinload(Document.ledger))
		.where(Document.id == document_id)
		.execution_options(populate_existing=True)
	)
	result = await session.execute(stmt)
	document = result.scalar_one_or_none()
	if document is None:
		raise NotFound("Document", document_id)
	if document.ledger is None:
		raise NotFound("Workflow ledger", document_id)
	return document


async def commit(session: AsyncSession) -> None:
	"""Commit, turning a lost optimistic-concurrency race into a rejection."""
	try:
		await session.commit()
	except StaleDataError as e:
		await session.rollback()
		logger.warning(f"Concurrent ledger update detected: {e}")
		raise ConcurrentModification(
			"Document was modified concurrently, reload and retry"
		) from e


async def list_files(
	session: AsyncSession,
	document_id: uuid.UUID,
) -> list[DocumentFile]:
	"""Files of a document, primary first, then newest first."""
	stmt = (
		select(DocumentFile)
		.where(DocumentFile.document_id == document_id)
		.order_by(DocumentFile.is_primary.desc(), DocumentFile.uploaded_at.desc())
	)
	result = await session.execute(stmt)
	return list(result.scalars().all())


async def list_documents_by_status(
	session: AsyncSession,
	statuses: Iterable[DocumentStatus],
	origin: uuid.UUID | None = None,
) -> list[Document]:
	stmt = (
		select(Document)
		.options(selectinload(Document.ledger))
		.where(Document.status.in_([s.value for s in statuses]))
		.order_by(Document.updated_at.desc(), Document.id)
	)
	if origin is not None:
		stmt = stmt.where(Document.origin == origin)
	result = await session.execute(stmt)
	return list(result.scalars().all())


async def list_deleted_documents(session: AsyncSession) -> list[Document]:
	stmt = (
		select(Document)
		.join(WorkflowLedger, WorkflowLedger.document_id == Document.id)
		.options(selectinload(Document.ledger))
		.where(Document.status == DocumentStatus.DELETED.value)
		.order_by(WorkflowLedger.deleted_at.desc(), Document.id)
	)
	result = await session.execute(stmt)
	return list(result.scalars().all())


async def get_deleted_documents(
	session: AsyncSession,
	document_ids: list[uuid.UUID],
) -> list[Document]:
	stmt = (
		select(Document)
		.options(selectinload(Document.files), selectinload(Document.ledger))
		.where(
			Document.id.in_(document_ids),
			Document.status == DocumentStatus.DELETED.value,
		)
	)
	result = await session.execute(stmt)
	return list(result.scalars().all())


async def delete_documents(
	session: AsyncSession,
	document_ids: list[uuid.UUID],
) -> None:
	"""Delete document rows together with files and ledgers."""
	if not document_ids:
		return
	await session.execute(
		delete(DocumentFile).where(DocumentFile.document_id.in_(document_ids))
	)
	await session.execute(
		delete(WorkflowLedger).where(WorkflowLedger.document_id.in_(document_ids))
	)
	await session.execute(delete(Document).where(Document.id.in_(document_ids)))
