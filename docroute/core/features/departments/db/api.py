# (c) Copyright Datacraft, 2026
"""Departments database API."""
import uuid

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .orm import Department, DepartmentMember


async def get_department(
	session: AsyncSession,
	department_id: uuid.UUID,
) -> Department | None:
	return await session.get(Department, department_id)


async def get_active_user_ids(
	session: AsyncSession,
	department_id: uuid.UUID,
) -> list[uuid.UUID]:
	"""Get users with an active membership in an active department."""
	stmt = (
		select(DepartmentMember.user_id)
		.join(Department, Department.id == DepartmentMember.department_id)
		.where(
			and_(
				DepartmentMember.department_id == department_id,
				DepartmentMember.is_active.is_(True),
				Department.is_active.is_(True),
			)
		)
		.order_by(DepartmentMember.user_id)
	)
	result = await session.execute(stmt)
	return list(result.scalars().all())
