# (c) Copyright Datacraft, 2026
"""Signing request and result schemas."""
import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from docroute.core.features.documents.states import SigningStatus

SignerRole = Literal["Signer", "Approver", "Viewer", "Issuee"]
SignerType = Literal["GUEST", "USER"]
MarkType = Literal["signature", "initial", "text", "date", "checkbox", "radio"]
PassportView = Literal[
	"history",
	"blockchain",
	"user_data",
	"verifiable_presentation",
	"certificate_url",
]


class SignerInput(BaseModel):
	email: str = Field(min_length=3)
	first_name: str = Field(min_length=1)
	last_name: str = ""
	signer_role: SignerRole = "Signer"
	type: SignerType = "GUEST"
	sequence: int = Field(default=1, ge=1)
	company: str | None = None
	job_title: str | None = None
	country: str | None = None
	project_role: str | None = None

	def to_payload(self) -> dict[str, Any]:
		return self.model_dump(exclude_none=True)


class PrimarySignerOverride(BaseModel):
	"""Fields replacing the submitting actor's identity as primary signer."""
	email: str | None = None
	first_name: str | None = None
	last_name: str | None = None
	signer_role: SignerRole | None = None
	type: SignerType | None = None
	sequence: int | None = Field(default=None, ge=1)
	company: str | None = None
	job_title: str | None = None
	country: str | None = None


class MarkInput(BaseModel):
	type: MarkType
	position_x: float
	position_y: float
	width: float
	height: float
	page_no: int | str
	signer_id: int | str | None = None
	signer_email: str | None = None
	value: str | None = None
	font_style: str | None = None
	font_size: int | None = None
	attach: int | None = None

	def to_payload(self) -> dict[str, Any]:
		return self.model_dump(
			exclude={"signer_id", "signer_email"},
			exclude_none=True,
		)


class SignRequest(BaseModel):
	primary_signer: PrimarySignerOverride | None = None
	additional_signers: list[SignerInput] = Field(default_factory=list)
	marks: list[MarkInput] = Field(default_factory=list)
	send_immediately: bool = False
	email_subject: str | None = None
	email_message: str | None = None


class RemoteProject(BaseModel):
	project_id: str
	tx_hash: str | None = None
	redirect_url: str | None = None
	status: str | None = None


class SignerSummary(BaseModel):
	email: str
	id: int | str | None = None


class SignResult(BaseModel):
	document_id: uuid.UUID
	status: SigningStatus
	project_id: str
	tx_hash: str | None = None
	redirect_url: str | None = None
	signers: list[SignerSummary] = Field(default_factory=list)
	message: str


class SigningState(BaseModel):
	document_id: uuid.UUID
	status: SigningStatus
	project_id: str | None = None
	tx_hash: str | None = None
	redirect_url: str | None = None
	signed_at: datetime | None = None
	signed_by: str | None = None
	last_error: str | None = None
	remote_status: str | None = None
