# (c) Copyright Datacraft, 2026
"""Routing request schemas."""
import uuid

from pydantic import BaseModel, Field


class ReleaseRequest(BaseModel):
	to_department: uuid.UUID
	from_department: uuid.UUID | None = None
	action: str | list[str] | None = None
	remarks: str | None = None


class ReceiveRequest(BaseModel):
	department: uuid.UUID | None = Field(
		default=None,
		description="Receiving department, defaults to the actor's department",
	)
	remarks: str | None = None


class FinishRequest(BaseModel):
	remarks: str | None = None
