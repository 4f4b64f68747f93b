# (c) Copyright Datacraft, 2026
"""Document creation and sharing."""
import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.config import get_settings
from docroute.core.exceptions import NotFound
from docroute.core.features.audit.recorder import AuditTrailRecorder
from docroute.core.features.departments.directory import DepartmentDirectory
from docroute.core.features.events.sink import DocumentEvent, EventSink
from docroute.core.features.notifications.notifier import Notifier

from . import schema
from .db import api as db_api
from .db.orm import Document, WorkflowLedger
from .states import DocumentStatus

logger = logging.getLogger(__name__)


def document_payload(document: Document, **extra: Any) -> dict[str, Any]:
	"""Common payload for notifications and events about a document."""
	settings = get_settings()
	payload = {
		"document_id": str(document.id),
		"title": document.title,
		"code": document.code,
		"status": document.status,
		"link": f"{settings.frontend_url.rstrip('/')}/documents/{document.id}",
	}
	payload.update({k: (str(v) if isinstance(v, uuid.UUID) else v) for k, v in extra.items()})
	return payload


class DocumentService:
	def __init__(
		self,
		session: AsyncSession,
		recorder: AuditTrailRecorder,
		directory: DepartmentDirectory,
		notifier: Notifier,
		events: EventSink,
	):
		self.session = session
		self.recorder = recorder
		self.directory = directory
		self.notifier = notifier
		self.events = events

	async def create_document(
		self,
		data: schema.DocumentCreate,
		actor_id: uuid.UUID | None,
	) -> schema.DocumentDetails:
		"""Create a document in its origin department with a fresh ledger."""
		if not await self.directory.exists(data.origin):
			raise NotFound("Department", data.origin)

		document = Document(
			title=data.title,
			code=data.code,
			classification=data.classification,
			document_type=data.document_type,
			origin=data.origin,
			description=data.description,
			remarks=data.remarks,
			status=DocumentStatus.DISPATCH.value,
			created_by=actor_id,
		)
		document.ledger = WorkflowLedger()
		document.ledger.chain = [data.origin]
		self.session.add(document)
		await self.session.flush()

		entry = await self.recorder.record(
			document.id,
			DocumentStatus.DISPATCH,
			from_department=data.origin,
			to_department=data.origin,
			actor_id=actor_id,
			action="created",
			remarks=data.remarks,
		)
		await db_api.commit(self.session)
		logger.info(f"Document {document.id} created in department {data.origin}")

		await self.recorder.fan_out(
			entry, document.ledger.chain, document_payload(document, remarks=data.remarks)
		)
		await self.events.emit(DocumentEvent.UPDATED, document_payload(document))
		return schema.DocumentDetails.from_orm_document(document)

	async def get_document(self, document_id: uuid.UUID) -> schema.DocumentDetails:
		document = await db_api.get_document(self.session, document_id)
		return schema.DocumentDetails.from_orm_document(document)

	async def share_document(
		self,
		document_id: uuid.UUID,
		actor_id: uuid.UUID | None,
		user_ids: list[uuid.UUID],
		remarks: str | None = None,
	) -> schema.OperationResult:
		"""Grant users direct access. Users already shared with are skipped."""
		document = await db_api.get_document(self.session, document_id)
		ledger = document.ledger

		shared = ledger.shared_with
		added = [u for u in dict.fromkeys(user_ids) if u not in shared]
		entry_id = None
		if added:
			ledger.shared_with = shared | set(added)
			ledger.touch()
			entry = await self.recorder.record(
				document.id,
				document.status,
				actor_id=actor_id,
				action="shared",
				remarks=remarks or f"Shared with {len(added)} user(s)",
			)
			entry_id = entry.id
			await db_api.commit(self.session)
			logger.info(f"Document {document.id} shared with {len(added)} user(s)")

		notified = []
		payload = document_payload(document, shared_by=actor_id, remarks=remarks)
		for user_id in added:
			try:
				await self.notifier.notify(user_id, "shared", payload)
				notified.append(user_id)
			except Exception as e:
				logger.warning(f"Failed to notify user {user_id} about share: {e}")
		if added:
			await self.events.emit(
				DocumentEvent.SHARED,
				document_payload(document, user_ids=[str(u) for u in added]),
			)

		return schema.OperationResult(
			document_id=document.id,
			status=document.status,
			message=(
				f"Document shared with {len(added)} user(s)"
				if added
				else "Document already shared with these users"
			),
			audit_entry_id=entry_id,
			notified=notified,
		)
