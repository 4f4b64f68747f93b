# (c) Copyright Datacraft, 2026
"""
Normalization of stored custody chains.

Chains written by older clients come in three shapes: a JSON array of
department ids, an object keyed by ordinal words (``first``, ``second``,
... or ``step1``, ``step2``, ...), or a JSON string holding either of
those. Everything read from or written to the ledger goes through
:func:`normalize_chain` so the rest of the code only sees ``list[UUID]``.
"""
import json
import re
import uuid
from typing import Any

from docroute.core.exceptions import ValidationError

ORDINALS = {
	"first": 1,
	"second": 2,
	"third": 3,
	"fourth": 4,
	"fifth": 5,
	"sixth": 6,
	"seventh": 7,
	"eighth": 8,
	"ninth": 9,
	"tenth": 10,
}

_STEP_KEY = re.compile(r"^(?:step)?_?(\d+)$", re.IGNORECASE)


def _ordinal(key: str) -> int:
	normalized = key.strip().lower()
	if normalized in ORDINALS:
		return ORDINALS[normalized]
	match = _STEP_KEY.match(normalized)
	if match:
		return int(match.group(1))
	raise ValidationError(f"Unrecognized chain position: {key!r}", field="chain")


def _to_uuid(value: Any) -> uuid.UUID:
	if isinstance(value, uuid.UUID):
		return value
	if isinstance(value, dict):
		value = value.get("department_id") or value.get("id")
	if isinstance(value, str):
		try:
			return uuid.UUID(value.strip())
		except ValueError:
			pass
	raise ValidationError(f"Invalid department id in chain: {value!r}", field="chain")


def normalize_chain(raw: Any) -> list[uuid.UUID]:
	"""Return the chain as an ordered, duplicate-free list of UUIDs."""
	if raw is None or raw == "":
		return []

	if isinstance(raw, (bytes, str)):
		try:
			raw = json.loads(raw)
		except json.JSONDecodeError as e:
			raise ValidationError(f"Chain is not valid JSON: {e}", field="chain") from e

	if isinstance(raw, dict):
		items = [v for _, v in sorted(raw.items(), key=lambda kv: _ordinal(kv[0]))]
	elif isinstance(raw, (list, tuple)):
		items = list(raw)
	else:
		raise ValidationError(f"Unsupported chain type: {type(raw).__name__}", field="chain")

	chain: list[uuid.UUID] = []
	for item in items:
		if item is None:
			continue
		department_id = _to_uuid(item)
		if department_id not in chain:
			chain.append(department_id)
	return chain


def serialize_chain(chain: list[uuid.UUID]) -> list[str]:
	return [str(d) for d in chain]
