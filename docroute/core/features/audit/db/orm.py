# (c) Copyright Datacraft, 2026
"""Audit trail ORM model."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from uuid_extensions import uuid7str

from docroute.core.db.base import Base
from docroute.core.utils.tz import utc_now


class AuditTrailEntry(Base):
	"""
	Append-only record of one custody event.

	Rows are never updated or deleted. The trail outlives its document
	when the recycle bin is purged, so `document_id` carries no foreign key.
	"""
	__tablename__ = "audit_trail_entries"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid7str)
	document_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
	from_department: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
	to_department: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
	actor_user_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
	status: Mapped[str] = mapped_column(String(20), nullable=False)
	action: Mapped[str | None] = mapped_column(String(512), nullable=True)
	remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
	# Release entry a receive entry acknowledges
	pairs_with: Mapped[str | None] = mapped_column(String(36), nullable=True)
	occurred_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=utc_now, nullable=False
	)

	__table_args__ = (
		Index("idx_audit_trail_document", "document_id", "occurred_at"),
		Index("idx_audit_trail_to_department", "to_department"),
	)

	def __repr__(self) -> str:
		return f"AuditTrailEntry({self.id=}, {self.status=}, {self.to_department=})"
