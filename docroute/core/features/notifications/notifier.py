# (c) Copyright Datacraft, 2026
"""Per-user notifications for routing and signing events."""
import logging
import uuid
from datetime import datetime
from typing import Any, Protocol

from pydantic import BaseModel, Field

from docroute.core.features.events.websocket import ConnectionManager
from docroute.core.utils.tz import utc_now

logger = logging.getLogger(__name__)


class Notification(BaseModel):
	"""Payload delivered to a single user."""
	user_id: uuid.UUID
	event_kind: str  # released, received, completed, canceled, deleted, ...
	title: str
	message: str
	data: dict[str, Any] = Field(default_factory=dict)
	timestamp: datetime = Field(default_factory=utc_now)


class Notifier(Protocol):
	async def notify(
		self,
		user_id: uuid.UUID,
		event_kind: str,
		payload: dict[str, Any],
	) -> None:
		...


def _title(event_kind: str, payload: dict[str, Any]) -> str:
	title = payload.get("title") or "Document"
	return f"{title}: {event_kind.replace('_', ' ')}"


class InAppNotifier:
	"""Delivers notifications over the websocket connection manager."""

	def __init__(self, connections: ConnectionManager):
		self.connections = connections

	async def notify(
		self,
		user_id: uuid.UUID,
		event_kind: str,
		payload: dict[str, Any],
	) -> None:
		notification = Notification(
			user_id=user_id,
			event_kind=event_kind,
			title=_title(event_kind, payload),
			message=payload.get("remarks") or "",
			data=payload,
		)
		delivered = await self.connections.send_to_user(
			user_id, notification.model_dump_json()
		)
		if not delivered:
			logger.debug(f"User {user_id} not connected, {event_kind} not delivered")
