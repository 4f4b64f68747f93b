# (c) Copyright Datacraft, 2026
"""Domain exceptions raised by routing, recycle bin and signing operations."""
from typing import Any


class DocrouteError(Exception):
	"""Base class for all docroute domain errors."""

	code: str = "error"

	def __init__(self, message: str):
		self.message = message
		super().__init__(message)


class ValidationError(DocrouteError):
	"""Malformed input such as a bad identifier or a missing field."""

	code = "validation_error"

	def __init__(self, message: str, field: str | None = None):
		self.field = field
		super().__init__(message)


class NotFound(DocrouteError):
	code = "not_found"

	def __init__(self, entity: str, entity_id: Any):
		self.entity = entity
		self.entity_id = entity_id
		super().__init__(f"{entity} not found: {entity_id}")


class PermissionDenied(DocrouteError):
	code = "permission_denied"


class InvalidTransition(DocrouteError):
	"""The requested operation is not allowed from the current state."""

	code = "invalid_transition"


class NotInWorkflow(InvalidTransition):
	code = "not_in_workflow"


class AlreadyReceived(InvalidTransition):
	code = "already_received"


class AlreadyTerminal(InvalidTransition):
	code = "already_terminal"


class AlreadySubmitted(InvalidTransition):
	code = "already_submitted"


class UnresolvedSigner(InvalidTransition):
	code = "unresolved_signer"


class ConcurrentModification(InvalidTransition):
	code = "concurrent_modification"


class ProviderError(DocrouteError):
	"""Non-success response or transport failure from the signing provider."""

	code = "provider_error"

	def __init__(
		self,
		message: str,
		status: int | None = None,
		code: str | None = None,
		details: Any = None,
	):
		self.status = status
		self.provider_code = code
		self.details = details
		super().__init__(message)


class StorageUnavailable(DocrouteError):
	code = "storage_unavailable"

	def __init__(self, message: str, cause: Exception | None = None):
		self.cause = cause
		super().__init__(message)


class SigningFailed(DocrouteError):
	"""
	Raised after a submission was marked failed.

	Carries the original cause and the project id that was kept on the
	ledger, if the remote project had been created.
	"""

	code = "signing_failed"

	def __init__(
		self,
		message: str,
		cause: Exception | None = None,
		project_id: str | None = None,
	):
		self.cause = cause
		self.project_id = project_id
		super().__init__(message)
