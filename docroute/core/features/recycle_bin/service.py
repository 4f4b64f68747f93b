# (c) Copyright Datacraft, 2026
"""Soft delete, restore and purge of documents."""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.features.audit.recorder import AuditTrailRecorder
from docroute.core.features.documents.db import api as db_api
from docroute.core.features.documents.db.orm import Document
from docroute.core.features.documents.schema import (
	DocumentDetails,
	DocumentPage,
	OperationResult,
	Pagination,
)
from docroute.core.features.documents.service import document_payload
from docroute.core.features.documents.states import (
	DocumentStatus,
	ensure_document_transition,
)
from docroute.core.features.events.sink import DocumentEvent, EventSink
from docroute.core.storage import FileStore
from docroute.core.utils.ids import parse_uuid, parse_uuid_list
from docroute.core.utils.tz import utc_now

logger = logging.getLogger(__name__)


class RecycleBinService:
	def __init__(
		self,
		session: AsyncSession,
		recorder: AuditTrailRecorder,
		store: FileStore,
		events: EventSink,
	):
		self.session = session
		self.recorder = recorder
		self.store = store
		self.events = events

	async def delete_document(
		self,
		document_id: uuid.UUID | str,
		actor_id: uuid.UUID | None = None,
		remarks: str | None = None,
	) -> OperationResult:
		"""Move a document to the recycle bin."""
		document_id = parse_uuid(document_id, "document_id")
		document = await db_api.get_document(self.session, document_id)
		ensure_document_transition(document.status, DocumentStatus.DELETED, "delete")
		ledger = document.ledger

		document.status = DocumentStatus.DELETED.value
		ledger.deleted_at = utc_now()
		ledger.deleted_by = actor_id
		ledger.restored_at = None
		ledger.restored_by = None
		ledger.touch()
		entry = await self.recorder.record(
			document.id,
			DocumentStatus.DELETED,
			actor_id=actor_id,
			action="deleted",
			remarks=remarks or f"Document moved to recycle bin: {document.title}",
		)
		await db_api.commit(self.session)
		logger.info(f"Document {document.id} moved to recycle bin")

		payload = document_payload(document, remarks=entry.remarks)
		notified = await self.recorder.fan_out(entry, ledger.chain, payload)
		await self.events.emit(DocumentEvent.UPDATED, payload)

		return OperationResult(
			document_id=document.id,
			status=DocumentStatus.DELETED,
			message="Document moved to recycle bin",
			audit_entry_id=entry.id,
			notified=notified,
		)

	async def restore_document(
		self,
		document_id: uuid.UUID | str,
		actor_id: uuid.UUID | None = None,
	) -> OperationResult:
		"""
		Bring a deleted document back to dispatch.

		The deletion stamps are kept so the recycle bin history stays
		visible on the ledger.
		"""
		document_id = parse_uuid(document_id, "document_id")
		document = await db_api.get_document(self.session, document_id)
		ensure_document_transition(document.status, DocumentStatus.DISPATCH, "restore")
		ledger = document.ledger

		document.status = DocumentStatus.DISPATCH.value
		ledger.restored_at = utc_now()
		ledger.restored_by = actor_id
		ledger.touch()
		entry = await self.recorder.record(
			document.id,
			DocumentStatus.DISPATCH,
			to_department=ledger.origin,
			actor_id=actor_id,
			action="restored",
			remarks=f"Document restored from recycle bin: {document.title}",
		)
		await db_api.commit(self.session)
		logger.info(f"Document {document.id} restored from recycle bin")

		payload = document_payload(document, remarks=entry.remarks)
		notified = await self.recorder.fan_out(entry, ledger.chain, payload)
		await self.events.emit(DocumentEvent.RESTORED, payload)

		return OperationResult(
			document_id=document.id,
			status=DocumentStatus.DISPATCH,
			message="Document restored",
			audit_entry_id=entry.id,
			notified=notified,
		)

	async def bulk_purge(
		self,
		document_ids: list[uuid.UUID | str],
		actor_id: uuid.UUID | None = None,
	) -> int:
		"""
		Permanently remove deleted documents.

		Documents that are not in the recycle bin are ignored. Stored bytes
		are removed first; a failing removal is logged and the rows are
		purged regardless. The audit trail of a purged document is kept.

		Returns:
			Number of documents purged
		"""
		ids = parse_uuid_list(document_ids, "document_ids")
		if not ids:
			return 0

		documents = await db_api.get_deleted_documents(self.session, ids)
		for document in documents:
			for file in document.files:
				try:
					await self.store.delete(file.storage_path)
				except Exception:
					logger.error(
						f"Failed to remove stored file {file.storage_path} "
						f"of document {document.id}",
						exc_info=True,
					)

		purged = [d.id for d in documents]
		await db_api.delete_documents(self.session, purged)
		await db_api.commit(self.session)
		logger.info(f"Purged {len(purged)} document(s), requested by {actor_id}")
		return len(purged)

	async def list_deleted(
		self,
		department_id: uuid.UUID | None = None,
		page: int = 1,
		limit: int = 10,
	) -> DocumentPage:
		"""Deleted documents, newest deletion first."""
		documents: list[Document] = await db_api.list_deleted_documents(self.session)
		if department_id is not None:
			documents = [d for d in documents if department_id in d.ledger.chain]
		start = (page - 1) * limit
		return DocumentPage(
			items=[
				DocumentDetails.from_orm_document(d)
				for d in documents[start:start + limit]
			],
			pagination=Pagination.build(page, limit, len(documents)),
		)
