# (c) Copyright Datacraft, 2026
import uuid

from pydantic import BaseModel


class Actor(BaseModel):
	"""Identity of the user performing an operation."""
	user_id: uuid.UUID
	department_id: uuid.UUID | None = None
	email: str | None = None
	name: str | None = None

	@property
	def display_name(self) -> str:
		return self.name or self.email or str(self.user_id)
