# (c) Copyright Datacraft, 2026
"""Identifier parsing helpers."""
import uuid
from typing import Any

from docroute.core.exceptions import ValidationError


def parse_uuid(value: Any, field: str = "id") -> uuid.UUID:
	"""
	Parse a UUID from a UUID instance or its string form.

	Raises ValidationError for anything else so that malformed
	identifiers are rejected before the store is touched.
	"""
	if isinstance(value, uuid.UUID):
		return value
	if isinstance(value, str):
		try:
			return uuid.UUID(value.strip())
		except ValueError:
			pass
	raise ValidationError(f"Invalid {field} format: {value!r}", field=field)


def parse_uuid_list(values: Any, field: str = "ids") -> list[uuid.UUID]:
	if not isinstance(values, (list, tuple, set)):
		raise ValidationError(f"{field} must be a list", field=field)
	return [parse_uuid(v, field) for v in values]
