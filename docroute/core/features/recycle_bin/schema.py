# (c) Copyright Datacraft, 2026
import uuid

from pydantic import BaseModel, Field


class DeleteRequest(BaseModel):
	remarks: str | None = None


class PurgeRequest(BaseModel):
	document_ids: list[uuid.UUID] = Field(min_length=1)


class PurgeResult(BaseModel):
	purged: int
