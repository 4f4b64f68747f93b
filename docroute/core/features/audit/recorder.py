# (c) Copyright Datacraft, 2026
"""Append-only audit trail with notification fan-out."""
import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7str

from docroute.core.features.departments.directory import DepartmentDirectory
from docroute.core.features.documents.states import DocumentStatus
from docroute.core.features.notifications.notifier import Notifier
from docroute.core.utils.tz import utc_now

from .db.orm import AuditTrailEntry

logger = logging.getLogger(__name__)


class AuditTrailRecorder:
	"""Writes audit entries and tells the affected departments about them."""

	def __init__(
		self,
		session: AsyncSession,
		notifier: Notifier,
		directory: DepartmentDirectory,
	):
		self.session = session
		self.notifier = notifier
		self.directory = directory

	async def record(
		self,
		document_id: uuid.UUID,
		status: DocumentStatus | str,
		*,
		from_department: uuid.UUID | None = None,
		to_department: uuid.UUID | None = None,
		actor_id: uuid.UUID | None = None,
		action: str | list[str] | None = None,
		remarks: str | None = None,
		pairs_with: str | None = None,
	) -> AuditTrailEntry:
		"""Add one entry to the current transaction."""
		if isinstance(action, (list, tuple)):
			action = ", ".join(a for a in action if a) or None

		entry = AuditTrailEntry(
			id=uuid7str(),
			document_id=document_id,
			status=DocumentStatus(status).value,
			from_department=from_department,
			to_department=to_department,
			actor_user_id=actor_id,
			action=action,
			remarks=remarks,
			pairs_with=pairs_with,
			occurred_at=utc_now(),
		)
		# Flushed with the ledger change on commit
		self.session.add(entry)
		logger.debug(f"Audit entry {entry.id} ({entry.status}) for document {document_id}")
		return entry

	def recipient_departments(
		self,
		entry: AuditTrailEntry,
		chain: list[uuid.UUID],
	) -> list[uuid.UUID]:
		if entry.status in (DocumentStatus.COMPLETED, DocumentStatus.CANCELED):
			return list(chain)
		if entry.status == DocumentStatus.DISPATCH:
			return chain[:1]
		if entry.to_department is not None:
			return [entry.to_department]
		return []

	async def fan_out(
		self,
		entry: AuditTrailEntry,
		chain: list[uuid.UUID],
		payload: dict[str, Any],
	) -> list[uuid.UUID]:
		"""
		Notify the users of every department the entry concerns.

		Delivery failures are logged and never undo the recorded change.
		Returns the ids of the users that were notified.
		"""
		recipients: list[uuid.UUID] = []
		for department_id in self.recipient_departments(entry, chain):
			try:
				users = await self.directory.active_user_ids(department_id)
			except Exception as e:
				logger.warning(f"Could not list users of department {department_id}: {e}")
				continue
			for user_id in users:
				if user_id not in recipients:
					recipients.append(user_id)

		notified = []
		for user_id in recipients:
			try:
				await self.notifier.notify(user_id, entry.status, payload)
				notified.append(user_id)
			except Exception as e:
				logger.warning(
					f"Failed to notify user {user_id} about document "
					f"{entry.document_id}: {e}"
				)
		return notified
