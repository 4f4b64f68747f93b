# (c) Copyright Datacraft, 2026
"""Department-to-department custody operations."""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.exceptions import (
	AlreadyReceived,
	AlreadyTerminal,
	NotFound,
	NotInWorkflow,
)
from docroute.core.features.audit.db import api as audit_api
from docroute.core.features.audit.recorder import AuditTrailRecorder
from docroute.core.features.departments.directory import DepartmentDirectory
from docroute.core.features.documents.db import api as db_api
from docroute.core.features.documents.schema import OperationResult
from docroute.core.features.documents.service import document_payload
from docroute.core.features.documents.states import (
	TERMINAL_STATUSES,
	DocumentStatus,
	ensure_document_transition,
)
from docroute.core.features.events.sink import DocumentEvent, EventSink
from docroute.core.utils.ids import parse_uuid

logger = logging.getLogger(__name__)


class RoutingService:
	"""
	Moves documents along their custody chain.

	Every operation validates against the ledger, commits the ledger
	change together with one audit entry, then notifies the affected
	departments and emits document events. Notification problems never
	undo a committed change.
	"""

	def __init__(
		self,
		session: AsyncSession,
		recorder: AuditTrailRecorder,
		directory: DepartmentDirectory,
		events: EventSink,
	):
		self.session = session
		self.recorder = recorder
		self.directory = directory
		self.events = events

	async def release(
		self,
		document_id: uuid.UUID | str,
		to_department: uuid.UUID | str,
		actor_id: uuid.UUID | None = None,
		from_department: uuid.UUID | str | None = None,
		action: str | list[str] | None = None,
		remarks: str | None = None,
	) -> OperationResult:
		"""Hand the document over to another department."""
		document_id = parse_uuid(document_id, "document_id")
		to_department = parse_uuid(to_department, "to_department")
		if from_department is not None:
			from_department = parse_uuid(from_department, "from_department")

		if not await self.directory.exists(to_department):
			raise NotFound("Department", to_department)

		document = await db_api.get_document(self.session, document_id)
		ensure_document_transition(document.status, DocumentStatus.INTRANSIT, "release")
		ledger = document.ledger

		chain = ledger.chain
		if from_department is None:
			from_department = chain[-1] if chain else None
		already_present = to_department in chain
		if not already_present:
			ledger.chain = chain + [to_department]

		document.status = DocumentStatus.INTRANSIT.value
		ledger.touch()
		entry = await self.recorder.record(
			document.id,
			DocumentStatus.INTRANSIT,
			from_department=from_department,
			to_department=to_department,
			actor_id=actor_id,
			action=action,
			remarks=remarks,
		)
		await db_api.commit(self.session)
		logger.info(
			f"Document {document.id} released from {from_department} to {to_department}"
		)

		payload = document_payload(
			document,
			from_department=from_department,
			to_department=to_department,
			action=entry.action,
			remarks=remarks,
		)
		notified = await self.recorder.fan_out(entry, ledger.chain, payload)
		await self.events.emit(DocumentEvent.UPDATED, payload)
		await self.events.emit(DocumentEvent.RELEASED, payload)

		message = "Document released"
		if already_present:
			message = "Document released; department already in the routing chain"
		return OperationResult(
			document_id=document.id,
			status=DocumentStatus.INTRANSIT,
			message=message,
			audit_entry_id=entry.id,
			notified=notified,
		)

	async def receive(
		self,
		document_id: uuid.UUID | str,
		department: uuid.UUID | str,
		actor_id: uuid.UUID | None = None,
		remarks: str | None = None,
	) -> OperationResult:
		"""Acknowledge that a department in the chain has the document."""
		document_id = parse_uuid(document_id, "document_id")
		department = parse_uuid(department, "department")

		document = await db_api.get_document(self.session, document_id)
		ensure_document_transition(document.status, DocumentStatus.RECEIVED, "receive")
		ledger = document.ledger

		if department not in ledger.chain:
			raise NotInWorkflow(
				f"Department {department} is not part of the routing chain"
			)
		acknowledged = ledger.acknowledged
		if department in acknowledged:
			raise AlreadyReceived(f"Department {department} already received the document")

		release = await audit_api.find_unpaired_release(
			self.session, document.id, department
		)
		ledger.acknowledged = acknowledged | {department}
		document.status = DocumentStatus.RECEIVED.value
		ledger.touch()
		entry = await self.recorder.record(
			document.id,
			DocumentStatus.RECEIVED,
			from_department=release.from_department if release else None,
			to_department=department,
			actor_id=actor_id,
			action="received",
			remarks=remarks,
			pairs_with=release.id if release else None,
		)
		await db_api.commit(self.session)
		logger.info(f"Document {document.id} received by {department}")

		payload = document_payload(document, department=department, remarks=remarks)
		notified = await self.recorder.fan_out(entry, ledger.chain, payload)
		await self.events.emit(DocumentEvent.UPDATED, payload)

		return OperationResult(
			document_id=document.id,
			status=DocumentStatus.RECEIVED,
			message="Document received",
			audit_entry_id=entry.id,
			notified=notified,
		)

	async def complete_document(
		self,
		document_id: uuid.UUID | str,
		actor_id: uuid.UUID | None = None,
		remarks: str | None = None,
	) -> OperationResult:
		return await self._finish(
			document_id,
			DocumentStatus.COMPLETED,
			actor_id,
			remarks or "Document completed",
			DocumentEvent.COMPLETED,
		)

	async def cancel_document(
		self,
		document_id: uuid.UUID | str,
		actor_id: uuid.UUID | None = None,
		actor_name: str | None = None,
		remarks: str | None = None,
	) -> OperationResult:
		name = actor_name or (str(actor_id) if actor_id else "system")
		return await self._finish(
			document_id,
			DocumentStatus.CANCELED,
			actor_id,
			remarks or f"Document canceled by {name}",
			DocumentEvent.UPDATED,
		)

	async def _finish(
		self,
		document_id: uuid.UUID | str,
		target: DocumentStatus,
		actor_id: uuid.UUID | None,
		remarks: str,
		event: DocumentEvent,
	) -> OperationResult:
		document_id = parse_uuid(document_id, "document_id")
		document = await db_api.get_document(self.session, document_id)
		if DocumentStatus(document.status) in TERMINAL_STATUSES:
			raise AlreadyTerminal(f"Document is already {document.status}")
		ledger = document.ledger

		document.status = target.value
		ledger.touch()
		entry = await self.recorder.record(
			document.id,
			target,
			actor_id=actor_id,
			action=target.value,
			remarks=remarks,
		)
		await db_api.commit(self.session)
		logger.info(f"Document {document.id} {target.value}")

		payload = document_payload(document, remarks=remarks)
		notified = await self.recorder.fan_out(entry, ledger.chain, payload)
		await self.events.emit(event, payload)

		return OperationResult(
			document_id=document.id,
			status=target,
			message=f"Document {target.value}",
			audit_entry_id=entry.id,
			notified=notified,
		)
