# (c) Copyright Datacraft, 2026
"""Document and signing state machines."""
from enum import Enum

from docroute.core.exceptions import InvalidTransition


class DocumentStatus(str, Enum):
	DISPATCH = "dispatch"
	INTRANSIT = "intransit"
	RECEIVED = "received"
	COMPLETED = "completed"
	CANCELED = "canceled"
	DELETED = "deleted"


class SigningStatus(str, Enum):
	UNSUBMITTED = "unsubmitted"
	PENDING = "pending"
	DRAFT = "draft"
	PROCESSING = "processing"
	SIGNED = "signed"
	FAILED = "failed"


_OPEN = {
	DocumentStatus.INTRANSIT,
	DocumentStatus.RECEIVED,
	DocumentStatus.COMPLETED,
	DocumentStatus.CANCELED,
	DocumentStatus.DELETED,
}

ALLOWED_TRANSITIONS: dict[DocumentStatus, set[DocumentStatus]] = {
	DocumentStatus.DISPATCH: _OPEN,
	DocumentStatus.INTRANSIT: _OPEN,
	DocumentStatus.RECEIVED: _OPEN,
	DocumentStatus.COMPLETED: {DocumentStatus.DELETED},
	DocumentStatus.CANCELED: {DocumentStatus.DELETED},
	DocumentStatus.DELETED: {DocumentStatus.DISPATCH},
}

TERMINAL_STATUSES = {
	DocumentStatus.COMPLETED,
	DocumentStatus.CANCELED,
	DocumentStatus.DELETED,
}

ALLOWED_SIGNING_TRANSITIONS: dict[SigningStatus, set[SigningStatus]] = {
	SigningStatus.UNSUBMITTED: {SigningStatus.PENDING},
	SigningStatus.PENDING: {SigningStatus.DRAFT, SigningStatus.FAILED},
	SigningStatus.DRAFT: {
		SigningStatus.PROCESSING,
		SigningStatus.SIGNED,
		SigningStatus.FAILED,
	},
	SigningStatus.PROCESSING: {SigningStatus.SIGNED, SigningStatus.FAILED},
	SigningStatus.SIGNED: set(),
	SigningStatus.FAILED: {SigningStatus.PENDING},
}

IN_FLIGHT_SIGNING = {
	SigningStatus.PENDING,
	SigningStatus.DRAFT,
	SigningStatus.PROCESSING,
}


def ensure_document_transition(
	current: DocumentStatus | str,
	target: DocumentStatus,
	operation: str,
) -> None:
	current = DocumentStatus(current)
	if target not in ALLOWED_TRANSITIONS[current]:
		raise InvalidTransition(
			f"Cannot {operation} document with status '{current.value}'"
		)


def ensure_signing_transition(
	current: SigningStatus | str,
	target: SigningStatus,
) -> None:
	current = SigningStatus(current)
	if target not in ALLOWED_SIGNING_TRANSITIONS[current]:
		raise InvalidTransition(
			f"Signing status cannot change from '{current.value}' to '{target.value}'"
		)
