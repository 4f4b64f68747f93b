# (c) Copyright Datacraft, 2026
"""Document and workflow ledger schemas."""
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .states import DocumentStatus, SigningStatus


class DocumentCreate(BaseModel):
	title: str = Field(min_length=1, max_length=512)
	origin: uuid.UUID
	code: str | None = None
	classification: str | None = None
	document_type: str | None = None
	description: str | None = None
	remarks: str | None = None

	@field_validator("title")
	@classmethod
	def strip_title(cls, value: str) -> str:
		value = value.strip()
		if not value:
			raise ValueError("title must not be blank")
		return value


class Document(BaseModel):
	id: uuid.UUID
	title: str
	code: str | None = None
	classification: str | None = None
	document_type: str | None = None
	origin: uuid.UUID
	description: str | None = None
	remarks: str | None = None
	status: DocumentStatus
	created_by: uuid.UUID | None = None
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class SigningRecord(BaseModel):
	status: SigningStatus = SigningStatus.UNSUBMITTED
	project_id: str | None = None
	tx_hash: str | None = None
	redirect_url: str | None = None
	signed_at: datetime | None = None
	signed_by: str | None = None
	submitted_by: uuid.UUID | None = None
	last_error: str | None = None


class WorkflowLedger(BaseModel):
	chain: list[uuid.UUID]
	acknowledged: list[uuid.UUID]
	shared_with: list[uuid.UUID]
	signing: SigningRecord
	deleted_at: datetime | None = None
	deleted_by: uuid.UUID | None = None
	restored_at: datetime | None = None
	restored_by: uuid.UUID | None = None
	version: int

	@classmethod
	def from_orm_ledger(cls, ledger) -> "WorkflowLedger":
		return cls(
			chain=ledger.chain,
			acknowledged=sorted(ledger.acknowledged, key=str),
			shared_with=sorted(ledger.shared_with, key=str),
			signing=SigningRecord(
				status=ledger.signing_status,
				project_id=ledger.project_id,
				tx_hash=ledger.tx_hash,
				redirect_url=ledger.redirect_url,
				signed_at=ledger.signed_at,
				signed_by=ledger.signed_by,
				submitted_by=ledger.submitted_by,
				last_error=ledger.last_error,
			),
			deleted_at=ledger.deleted_at,
			deleted_by=ledger.deleted_by,
			restored_at=ledger.restored_at,
			restored_by=ledger.restored_by,
			version=ledger.version,
		)


class DocumentDetails(Document):
	ledger: WorkflowLedger

	@classmethod
	def from_orm_document(cls, document) -> "DocumentDetails":
		base = Document.model_validate(document)
		return cls(
			**base.model_dump(),
			ledger=WorkflowLedger.from_orm_ledger(document.ledger),
		)


class ShareRequest(BaseModel):
	user_ids: list[uuid.UUID] = Field(min_length=1)
	remarks: str | None = None


class OperationResult(BaseModel):
	"""Outcome of a routing or recycle bin operation."""
	success: bool = True
	document_id: uuid.UUID
	status: DocumentStatus
	message: str
	audit_entry_id: str | None = None
	notified: list[uuid.UUID] = Field(default_factory=list)


class Pagination(BaseModel):
	page: int
	limit: int
	total: int
	total_pages: int
	has_next: bool
	has_prev: bool

	@classmethod
	def build(cls, page: int, limit: int, total: int) -> "Pagination":
		total_pages = (total + limit - 1) // limit if total else 0
		return cls(
			page=page,
			limit=limit,
			total=total,
			total_pages=total_pages,
			has_next=page < total_pages,
			has_prev=page > 1,
		)


class DocumentPage(BaseModel):
	items: list[DocumentDetails]
	pagination: Pagination
