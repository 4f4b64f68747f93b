# (c) Copyright Datacraft, 2026
"""WebSocket endpoint for live document events."""
import logging
import uuid

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from .websocket import manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Events"])


@router.websocket("/ws/events")
async def document_events(websocket: WebSocket, user_id: uuid.UUID):
	"""Stream document events and personal notifications to a user."""
	await manager.connect(websocket, user_id)
	try:
		while True:
			# Clients only listen; keep reading to detect disconnects
			await websocket.receive_text()
	except WebSocketDisconnect:
		manager.disconnect(websocket, user_id)
