# (c) Copyright Datacraft, 2026
"""Documents ORM models: document, workflow ledger and stored files."""
import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docroute.core.db.base import Base, JSONType
from docroute.core.features.documents.chain import normalize_chain, serialize_chain
from docroute.core.features.documents.states import DocumentStatus, SigningStatus
from docroute.core.utils.tz import utc_now


class Document(Base):
	__tablename__ = "documents"

	id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
	title: Mapped[str] = mapped_column(String(512), nullable=False)
	code: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
	classification: Mapped[str | None] = mapped_column(String(100), nullable=True)
	document_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
	origin: Mapped[uuid.UUID] = mapped_column(
		ForeignKey("departments.id"), nullable=False, index=True
	)
	description: Mapped[str | None] = mapped_column(Text, nullable=True)
	remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
	status: Mapped[str] = mapped_column(
		String(20), default=DocumentStatus.DISPATCH.value, index=True
	)
	created_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
	created_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=utc_now
	)
	updated_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=utc_now, onupdate=utc_now
	)

	ledger: Mapped["WorkflowLedger"] = relationship(
		back_populates="document",
		uselist=False,
		cascade="all, delete-orphan",
		lazy="selectin",
	)
	files: Mapped[list["DocumentFile"]] = relationship(
		back_populates="document",
		cascade="all, delete-orphan",
	)

	def __repr__(self) -> str:
		return f"Document({self.id=}, {self.title=}, {self.status=})"


class WorkflowLedger(Base):
	"""
	Custody chain, acknowledgments, sharing and signing state of a document.

	The JSON columns are exposed through properties returning normalized
	Python values; assign through the properties so that every write
	replaces the stored value.
	"""
	__tablename__ = "workflow_ledgers"

	id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
	document_id: Mapped[uuid.UUID] = mapped_column(
		ForeignKey("documents.id", ondelete="CASCADE"),
		unique=True,
		nullable=False,
	)
	chain_raw: Mapped[list] = mapped_column("chain", JSONType, default=list)
	acknowledged_raw: Mapped[list] = mapped_column(
		"acknowledged", JSONType, default=list
	)
	shared_with_raw: Mapped[list] = mapped_column(
		"shared_with", JSONType, default=list
	)

	signing_status: Mapped[str] = mapped_column(
		String(20), default=SigningStatus.UNSUBMITTED.value
	)
	project_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
	tx_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
	redirect_url: Mapped[str | None] = mapped_column(Text, nullable=True)
	signed_at: Mapped[datetime | None] = mapped_column(
		DateTime(timezone=True), nullable=True
	)
	signed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
	submitted_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
	last_error: Mapped[str | None] = mapped_column(Text, nullable=True)

	deleted_at: Mapped[datetime | None] = mapped_column(
		DateTime(timezone=True), nullable=True
	)
	deleted_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
	restored_at: Mapped[datetime | None] = mapped_column(
		DateTime(timezone=True), nullable=True
	)
	restored_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

	version: Mapped[int] = mapped_column(Integer, nullable=False)
	updated_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=utc_now
	)

	document: Mapped[Document] = relationship(back_populates="ledger")

	__mapper_args__ = {"version_id_col": version}

	@property
	def chain(self) -> list[uuid.UUID]:
		return normalize_chain(self.chain_raw)

	@chain.setter
	def chain(self, value) -> None:
		self.chain_raw = serialize_chain(normalize_chain(value))

	@property
	def origin(self) -> uuid.UUID | None:
		chain = self.chain
		return chain[0] if chain else None

	@property
	def acknowledged(self) -> set[uuid.UUID]:
		return {uuid.UUID(str(d)) for d in self.acknowledged_raw or []}

	@acknowledged.setter
	def acknowledged(self, value) -> None:
		self.acknowledged_raw = sorted(str(d) for d in value)

	@property
	def shared_with(self) -> set[uuid.UUID]:
		return {uuid.UUID(str(u)) for u in self.shared_with_raw or []}

	@shared_with.setter
	def shared_with(self, value) -> None:
		self.shared_with_raw = sorted(str(u) for u in value)

	def touch(self) -> None:
		"""Mark the row as modified so the version stamp is checked and bumped."""
		self.updated_at = utc_now()

	def __repr__(self) -> str:
		return f"WorkflowLedger({self.document_id=}, {self.chain_raw=}, {self.version=})"


class DocumentFile(Base):
	__tablename__ = "document_files"

	id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
	document_id: Mapped[uuid.UUID] = mapped_column(
		ForeignKey("documents.id", ondelete="CASCADE"),
		nullable=False,
		index=True,
	)
	name: Mapped[str] = mapped_column(String(512), nullable=False)
	storage_path: Mapped[str] = mapped_column(String(1024), nullable=False)
	size: Mapped[int] = mapped_column(BigInteger, default=0)
	checksum: Mapped[str | None] = mapped_column(String(128), nullable=True)
	mime_type: Mapped[str] = mapped_column(String(100), default="application/pdf")
	is_primary: Mapped[bool] = mapped_column(default=False)
	# Generated by the signing orchestrator, not uploaded
	is_placeholder: Mapped[bool] = mapped_column(default=False)
	version_tag: Mapped[str | None] = mapped_column(String(50), nullable=True)
	uploaded_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
	uploaded_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), default=utc_now
	)

	document: Mapped[Document] = relationship(back_populates="files")
