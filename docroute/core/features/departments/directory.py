# (c) Copyright Datacraft, 2026
"""Department lookups needed by routing."""
import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from .db import api as db_api


class DepartmentDirectory(Protocol):
	async def exists(self, department_id: uuid.UUID) -> bool:
		...

	async def active_user_ids(self, department_id: uuid.UUID) -> list[uuid.UUID]:
		...


class DbDepartmentDirectory:
	"""Directory backed by the departments tables."""

	def __init__(self, session: AsyncSession):
		self.session = session

	async def exists(self, department_id: uuid.UUID) -> bool:
		return await db_api.get_department(self.session, department_id) is not None

	async def active_user_ids(self, department_id: uuid.UUID) -> list[uuid.UUID]:
		return await db_api.get_active_user_ids(self.session, department_id)
