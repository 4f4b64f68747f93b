# (c) Copyright Datacraft, 2026
"""Audit trail schemas."""
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuditTrailEntry(BaseModel):
	id: str
	document_id: uuid.UUID
	from_department: uuid.UUID | None = None
	to_department: uuid.UUID | None = None
	actor_user_id: uuid.UUID | None = None
	status: str
	action: str | None = None
	remarks: str | None = None
	pairs_with: str | None = None
	occurred_at: datetime

	model_config = ConfigDict(from_attributes=True)


class AuditSearchParams(BaseModel):
	user_id: uuid.UUID | None = None
	department_id: uuid.UUID | None = None
	status: str | None = None
	date_from: datetime | None = None
	date_to: datetime | None = None
	page_number: int = Field(default=1, ge=1)
	page_size: int = Field(default=50, ge=1, le=500)


class AuditSearchResult(BaseModel):
	items: list[AuditTrailEntry]
	total: int
	page_number: int
	page_size: int
