# (c) Copyright Datacraft, 2026
"""Drives a document through the remote signing provider."""
import logging
import uuid
from datetime import datetime
from typing import Any

import pydantic
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.config import get_settings
from docroute.core.exceptions import (
	AlreadySubmitted,
	DocrouteError,
	InvalidTransition,
	SigningFailed,
	StorageUnavailable,
	UnresolvedSigner,
	ValidationError,
)
from docroute.core.features.auth.schema import Actor
from docroute.core.features.documents.db import api as db_api
from docroute.core.features.documents.db.orm import Document, DocumentFile
from docroute.core.features.documents.service import document_payload
from docroute.core.features.documents.states import (
	ALLOWED_SIGNING_TRANSITIONS,
	IN_FLIGHT_SIGNING,
	SigningStatus,
	ensure_signing_transition,
)
from docroute.core.features.events.sink import DocumentEvent, EventSink, NullEventSink
from docroute.core.storage import FileStore
from docroute.core.utils.ids import parse_uuid
from docroute.core.utils.tz import utc_now

from . import schema
from .client import SigningProviderClient, unwrap_data
from .placeholder import generate_placeholder_pdf, placeholder_file_name

logger = logging.getLogger(__name__)

REMOTE_COMPLETED = {"completed", "signed", "done", "finished"}
REMOTE_REJECTED = {"rejected", "declined", "voided", "cancelled", "canceled", "expired"}
REMOTE_ACTIVE = {"processing", "in_progress", "sent", "ongoing", "pending"}


def extract_signer_records(payload: Any) -> list[dict]:
	"""Signer records from an add-signer response of any known shape."""
	if not payload:
		return []
	if isinstance(payload, list):
		return payload
	if isinstance(payload, dict):
		data = payload.get("data")
		if isinstance(data, list):
			return data
		if isinstance(data, dict) and isinstance(data.get("data"), list):
			return data["data"]
		if data:
			return [data]
	return []


def _split_name(name: str | None) -> tuple[str | None, str | None]:
	if not name:
		return None, None
	first, _, last = name.strip().partition(" ")
	return first or None, last.strip() or None


def _parse_remote_time(value: Any) -> datetime | None:
	if not isinstance(value, str):
		return None
	try:
		return datetime.fromisoformat(value.replace("Z", "+00:00"))
	except ValueError:
		return None


class SigningOrchestrator:
	def __init__(
		self,
		session: AsyncSession,
		client: SigningProviderClient,
		store: FileStore,
		events: EventSink | None = None,
	):
		self.session = session
		self.client = client
		self.store = store
		self.events = events or NullEventSink()

	def build_signers(
		self,
		actor: Actor,
		request: schema.SignRequest,
	) -> list[schema.SignerInput]:
		"""Primary signer from the actor unless overridden, then the additional ones."""
		override = request.primary_signer or schema.PrimarySignerOverride()
		first_name, last_name = _split_name(actor.name)
		email = override.email or actor.email
		if not email:
			raise ValidationError(
				"Primary signer email is required",
				field="primary_signer.email",
			)
		try:
			primary = schema.SignerInput(
				email=email,
				first_name=override.first_name or first_name or email.split("@")[0],
				last_name=override.last_name or last_name or "",
				signer_role=override.signer_role or "Signer",
				type=override.type or "GUEST",
				sequence=override.sequence or 1,
				company=override.company,
				job_title=override.job_title,
				country=override.country,
			)
		except pydantic.ValidationError as e:
			raise ValidationError(f"Invalid primary signer: {e}", field="primary_signer") from e
		return [primary, *request.additional_signers]

	async def resolve_file(self, document: Document, actor: Actor) -> tuple[str, bytes]:
		"""
		Bytes to upload for the document.

		Real files are preferred over earlier placeholders, primary first and
		newest first. When nothing readable exists a placeholder PDF is
		generated and registered as a non-primary file.
		"""
		files = await db_api.list_files(self.session, document.id)
		candidates = [f for f in files if not f.is_placeholder]
		candidates += [f for f in files if f.is_placeholder]
		for file in candidates:
			try:
				return file.name, await self.store.read(file.storage_path)
			except (OSError, ValueError) as e:
				logger.warning(
					f"File {file.storage_path} of document {document.id} "
					f"is unreadable: {e}"
				)

		settings = get_settings()
		try:
			pdf = generate_placeholder_pdf(document, generated_for=actor.display_name)
			path = f"{settings.placeholder_dir}/{placeholder_file_name(document)}"
			stored = await self.store.put(path, pdf)
		except Exception as e:
			raise StorageUnavailable(
				f"Document {document.id} has no file and no placeholder could be stored",
				cause=e,
			) from e

		placeholder = DocumentFile(
			document_id=document.id,
			name=f"{document.code or document.id}-placeholder.pdf",
			storage_path=stored.path,
			size=stored.size,
			checksum=stored.checksum,
			mime_type="application/pdf",
			is_primary=False,
			is_placeholder=True,
			uploaded_by=actor.user_id,
		)
		self.session.add(placeholder)
		logger.info(f"Generated placeholder file for document {document.id}")
		return placeholder.name, pdf

	async def submit(
		self,
		document_id: uuid.UUID | str,
		actor: Actor,
		request: schema.SignRequest | None = None,
	) -> schema.SignResult:
		document_id = parse_uuid(document_id, "document_id")
		request = request or schema.SignRequest()
		signers = self.build_signers(actor, request)

		document = await db_api.get_document(self.session, document_id)
		ledger = document.ledger
		current = SigningStatus(ledger.signing_status)
		if current in IN_FLIGHT_SIGNING:
			raise AlreadySubmitted(
				f"Document is already submitted for signing ({current.value})"
			)
		ensure_signing_transition(current, SigningStatus.PENDING)

		file_name, file_bytes = await self.resolve_file(document, actor)

		ledger.signing_status = SigningStatus.PENDING.value
		ledger.submitted_by = actor.user_id
		ledger.last_error = None
		ledger.touch()
		await db_api.commit(self.session)
		logger.info(f"Document {document_id} submitted for signing by {actor.user_id}")

		try:
			return await self._run_submission(
				document, file_name, file_bytes, signers, request
			)
		except Exception as e:
			logger.error(f"Signing of document {document_id} failed: {e}", exc_info=True)
			project_id = await self._mark_failed(document_id, e)
			if isinstance(e, DocrouteError):
				raise
			raise SigningFailed(
				f"Signing failed: {e}", cause=e, project_id=project_id
			) from e

	async def _run_submission(
		self,
		document: Document,
		file_name: str,
		file_bytes: bytes,
		signers: list[schema.SignerInput],
		request: schema.SignRequest,
	) -> schema.SignResult:
		ledger = document.ledger
		project = await self.client.create_project(
			file_bytes,
			file_name,
			project_name=document.title,
			description=document.description,
			email_subject=request.email_subject,
			email_message=request.email_message,
		)
		# The project id must be stored before any signer call
		ledger.project_id = project.project_id
		ledger.tx_hash = project.tx_hash
		ledger.redirect_url = project.redirect_url
		ledger.signing_status = SigningStatus.DRAFT.value
		ledger.signed_at = None
		ledger.signed_by = None
		ledger.touch()
		await db_api.commit(self.session)

		signer_ids: dict[str, int | str] = {}
		for signer in signers:
			response = await self.client.add_signer(project.project_id, signer.to_payload())
			email = signer.email.lower()
			for record in extract_signer_records(response):
				if not isinstance(record, dict):
					continue
				if str(record.get("email", "")).lower() == email and record.get("id") is not None:
					signer_ids[email] = record["id"]
					break

		for mark in request.marks:
			signer_id = mark.signer_id
			if signer_id is None and mark.signer_email:
				signer_id = signer_ids.get(mark.signer_email.lower())
			if signer_id is None:
				raise UnresolvedSigner(
					f"Unable to resolve signer for mark ({mark.signer_email or 'unknown'})"
				)
			await self.client.add_signer_mark(project.project_id, signer_id, mark.to_payload())

		status = SigningStatus.DRAFT
		if request.send_immediately:
			await self.client.send_project(project.project_id)
			status = SigningStatus.PROCESSING
			ledger.signing_status = status.value
			ledger.touch()
			await db_api.commit(self.session)

		await self.events.emit(
			DocumentEvent.UPDATED,
			document_payload(document, signing_status=status.value),
		)
		return schema.SignResult(
			document_id=document.id,
			status=status,
			project_id=project.project_id,
			tx_hash=project.tx_hash,
			redirect_url=project.redirect_url,
			signers=[
				schema.SignerSummary(email=s.email, id=signer_ids.get(s.email.lower()))
				for s in signers
			],
			message=(
				"Signing request sent"
				if status == SigningStatus.PROCESSING
				else "Signing project created"
			),
		)

	async def _mark_failed(self, document_id: uuid.UUID, error: Exception) -> str | None:
		"""Compensating update after a failed submission. Returns the kept project id."""
		await self.session.rollback()
		try:
			document = await db_api.get_document(self.session, document_id)
			ledger = document.ledger
			if SigningStatus(ledger.signing_status) in IN_FLIGHT_SIGNING:
				ledger.signing_status = SigningStatus.FAILED.value
				ledger.redirect_url = None
				ledger.last_error = str(error)[:2000] or type(error).__name__
				ledger.touch()
				await db_api.commit(self.session)
			return ledger.project_id
		except Exception:
			# Keep the original failure as the one reported to the caller
			logger.error(
				f"Could not mark signing of document {document_id} as failed",
				exc_info=True,
			)
			return None

	async def dispatch(self, document_id: uuid.UUID | str) -> schema.SigningState:
		"""Send a draft project to its signers."""
		document_id = parse_uuid(document_id, "document_id")
		document = await db_api.get_document(self.session, document_id)
		ledger = document.ledger
		current = SigningStatus(ledger.signing_status)
		if current != SigningStatus.DRAFT or not ledger.project_id:
			raise InvalidTransition(
				f"Only draft signing projects can be dispatched (status: {current.value})"
			)

		await self.client.send_project(ledger.project_id)
		ledger.signing_status = SigningStatus.PROCESSING.value
		ledger.touch()
		await db_api.commit(self.session)
		logger.info(f"Signing project {ledger.project_id} dispatched")
		await self.events.emit(
			DocumentEvent.UPDATED,
			document_payload(document, signing_status=ledger.signing_status),
		)
		return self._state(document)

	async def sync_status(self, document_id: uuid.UUID | str) -> schema.SigningState:
		"""Pull the remote project state into the ledger."""
		document_id = parse_uuid(document_id, "document_id")
		document = await db_api.get_document(self.session, document_id)
		ledger = document.ledger
		if not ledger.project_id:
			raise InvalidTransition("Document has no signing project")

		data = unwrap_data(await self.client.get_project(ledger.project_id))
		data = data if isinstance(data, dict) else {}
		remote_status = str(data.get("status") or "").lower() or None

		current = SigningStatus(ledger.signing_status)
		target = None
		if remote_status in REMOTE_COMPLETED:
			target = SigningStatus.SIGNED
		elif remote_status in REMOTE_REJECTED:
			target = SigningStatus.FAILED
		elif remote_status in REMOTE_ACTIVE and current == SigningStatus.DRAFT:
			target = SigningStatus.PROCESSING

		if target is not None and target in ALLOWED_SIGNING_TRANSITIONS[current]:
			ledger.signing_status = target.value
			if target == SigningStatus.SIGNED:
				ledger.signed_at = (
					_parse_remote_time(data.get("completed_at")) or utc_now()
				)
				signed_by = data.get("signed_by") or data.get("completed_by")
				ledger.signed_by = str(signed_by) if signed_by else None
				ledger.tx_hash = data.get("transaction_hash") or ledger.tx_hash
			elif target == SigningStatus.FAILED:
				ledger.redirect_url = None
				ledger.last_error = f"Remote project {remote_status}"
			ledger.touch()
			await db_api.commit(self.session)
			logger.info(
				f"Signing status of document {document_id}: "
				f"{current.value} -> {target.value}"
			)
			await self.events.emit(
				DocumentEvent.UPDATED,
				document_payload(document, signing_status=target.value),
			)

		return self._state(document, remote_status)

	async def passport(
		self,
		document_id: uuid.UUID | str,
		view: schema.PassportView = "history",
	) -> Any:
		document_id = parse_uuid(document_id, "document_id")
		document = await db_api.get_document(self.session, document_id)
		if not document.ledger.project_id:
			raise InvalidTransition("Document has no signing project")
		return unwrap_data(await self.client.get_passport(document.ledger.project_id, view))

	async def metrics(self) -> Any:
		return unwrap_data(await self.client.get_metrics())

	def _state(
		self,
		document: Document,
		remote_status: str | None = None,
	) -> schema.SigningState:
		ledger = document.ledger
		return schema.SigningState(
			document_id=document.id,
			status=ledger.signing_status,
			project_id=ledger.project_id,
			tx_hash=ledger.tx_hash,
			redirect_url=ledger.redirect_url,
			signed_at=ledger.signed_at,
			signed_by=ledger.signed_by,
			last_error=ledger.last_error,
			remote_status=remote_status,
		)
