# (c) Copyright Datacraft, 2026
"""Departments ORM models."""
import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docroute.core.db.base import Base


class Department(Base):
	"""Organizational unit that documents are routed between."""
	__tablename__ = "departments"

	id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	code: Mapped[str | None] = mapped_column(String(50), nullable=True, unique=True)
	is_active: Mapped[bool] = mapped_column(default=True)
	created_at: Mapped[datetime] = mapped_column(server_default=func.now())

	members: Mapped[list["DepartmentMember"]] = relationship(
		back_populates="department",
		cascade="all, delete-orphan",
	)

	def __repr__(self) -> str:
		return f"Department({self.id=}, {self.name=}, {self.code=})"


class DepartmentMember(Base):
	"""User membership in a department."""
	__tablename__ = "department_members"

	id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
	department_id: Mapped[uuid.UUID] = mapped_column(
		ForeignKey("departments.id", ondelete="CASCADE"),
		nullable=False,
		index=True,
	)
	user_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
	is_active: Mapped[bool] = mapped_column(default=True)

	department: Mapped[Department] = relationship(back_populates="members")

	__table_args__ = (
		UniqueConstraint("department_id", "user_id", name="uq_department_member"),
	)
