# (c) Copyright Datacraft, 2026
"""Audit trail database API."""
import uuid
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from docroute.core.features.documents.states import DocumentStatus

from .orm import AuditTrailEntry


async def get_document_trail(
	session: AsyncSession,
	document_id: uuid.UUID,
) -> list[AuditTrailEntry]:
	stmt = (
		select(AuditTrailEntry)
		.where(AuditTrailEntry.document_id == document_id)
		.order_by(AuditTrailEntry.occurred_at, AuditTrailEntry.id)
	)
	result = await session.execute(stmt)
	return list(result.scalars().all())


async def find_unpaired_release(
	session: AsyncSession,
	document_id: uuid.UUID,
	department_id: uuid.UUID,
) -> AuditTrailEntry | None:
	"""Most recent release into the department not yet paired with a receive."""
	receipt = aliased(AuditTrailEntry)
	paired = (
		select(receipt.pairs_with)
		.where(
			receipt.document_id == document_id,
			receipt.pairs_with.is_not(None),
		)
	)
	stmt = (
		select(AuditTrailEntry)
		.where(
			AuditTrailEntry.document_id == document_id,
			AuditTrailEntry.to_department == department_id,
			AuditTrailEntry.status == DocumentStatus.INTRANSIT.value,
			AuditTrailEntry.id.not_in(paired),
		)
		.order_by(AuditTrailEntry.occurred_at.desc(), AuditTrailEntry.id.desc())
		.limit(1)
	)
	result = await session.execute(stmt)
	return result.scalar_one_or_none()


async def search_entries(
	session: AsyncSession,
	user_id: uuid.UUID | None = None,
	department_id: uuid.UUID | None = None,
	status: str | None = None,
	date_from: datetime | None = None,
	date_to: datetime | None = None,
	page_number: int = 1,
	page_size: int = 50,
) -> tuple[list[AuditTrailEntry], int]:
	"""Filtered audit search, newest first."""
	conditions = []
	if user_id is not None:
		conditions.append(AuditTrailEntry.actor_user_id == user_id)
	if department_id is not None:
		conditions.append(
			or_(
				AuditTrailEntry.from_department == department_id,
				AuditTrailEntry.to_department == department_id,
			)
		)
	if status is not None:
		conditions.append(AuditTrailEntry.status == status)
	if date_from is not None:
		conditions.append(AuditTrailEntry.occurred_at >= date_from)
	if date_to is not None:
		conditions.append(AuditTrailEntry.occurred_at <= date_to)

	count_stmt = select(func.count()).select_from(AuditTrailEntry).where(*conditions)
	total = (await session.execute(count_stmt)).scalar_one()

	stmt = (
		select(AuditTrailEntry)
		.where(*conditions)
		.order_by(AuditTrailEntry.occurred_at.desc(), AuditTrailEntry.id.desc())
		.offset((page_number - 1) * page_size)
		.limit(page_size)
	)
	result = await session.execute(stmt)
	return list(result.scalars().all()), total
