# (c) Copyright Datacraft, 2026
"""WebSocket connections used for live document events and notifications."""
import logging
from uuid import UUID

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
	"""Manage WebSocket connections keyed by user."""

	def __init__(self):
		# Map user_id -> list of active connections
		self._connections: dict[UUID, list[WebSocket]] = {}

	@property
	def connected_users(self) -> list[UUID]:
		return list(self._connections)

	async def connect(self, websocket: WebSocket, user_id: UUID):
		await websocket.accept()
		self._connections.setdefault(user_id, []).append(websocket)
		logger.info(f"WebSocket connected: user={user_id}")

	def disconnect(self, websocket: WebSocket, user_id: UUID):
		sockets = self._connections.get(user_id)
		if sockets is None:
			return
		if websocket in sockets:
			sockets.remove(websocket)
		if not sockets:
			del self._connections[user_id]
		logger.info(f"WebSocket disconnected: user={user_id}")

	async def send_to_user(self, user_id: UUID, message: str) -> int:
		"""Send a text frame to every socket of a user.

		Returns the number of sockets the message reached.
		"""
		sockets = self._connections.get(user_id)
		if not sockets:
			return 0

		delivered = 0
		disconnected = []
		for websocket in sockets:
			try:
				await websocket.send_text(message)
				delivered += 1
			except Exception as e:
				logger.warning(f"Failed to send to user {user_id}: {e}")
				disconnected.append(websocket)

		for ws in disconnected:
			self.disconnect(ws, user_id)
		return delivered

	async def broadcast(self, message: str):
		for user_id in self.connected_users:
			await self.send_to_user(user_id, message)


# Global connection manager instance
manager = ConnectionManager()
