# (c) Copyright Datacraft, 2026
"""Document event sinks."""
import json
import logging
from enum import Enum
from typing import Any, Protocol

from docroute.core.utils.tz import utc_now

from .websocket import ConnectionManager

logger = logging.getLogger(__name__)


class DocumentEvent(str, Enum):
	UPDATED = "documentUpdated"
	RELEASED = "documentReleased"
	COMPLETED = "documentCompleted"
	RESTORED = "documentRestored"
	SHARED = "documentShared"


class EventSink(Protocol):
	async def emit(self, event: DocumentEvent | str, payload: dict[str, Any]) -> None:
		...


class NullEventSink:
	"""Discards every event."""

	async def emit(self, event: DocumentEvent | str, payload: dict[str, Any]) -> None:
		return None


class BroadcastEventSink:
	"""Broadcasts events to every connected websocket client."""

	def __init__(self, connections: ConnectionManager):
		self.connections = connections

	async def emit(self, event: DocumentEvent | str, payload: dict[str, Any]) -> None:
		name = event.value if isinstance(event, DocumentEvent) else event
		message = json.dumps(
			{
				"event": name,
				"data": payload,
				"timestamp": utc_now().isoformat(),
			},
			default=str,
		)
		await self.connections.broadcast(message)
		logger.debug(f"Broadcast {name}")
