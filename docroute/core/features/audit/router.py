# (c) Copyright Datacraft, 2026
"""Audit trail API router."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.db.engine import get_db
from docroute.core.features.documents.db import api as documents_api

from .db import api as db_api
from .schema import AuditSearchParams, AuditSearchResult, AuditTrailEntry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("/documents/{document_id}", response_model=list[AuditTrailEntry])
async def get_document_trail(
	document_id: uuid.UUID,
	session: Annotated[AsyncSession, Depends(get_db)],
):
	"""Audit trail of one document, oldest first. Kept after a purge."""
	entries = await db_api.get_document_trail(session, document_id)
	if not entries:
		await documents_api.get_document(session, document_id)
	return [AuditTrailEntry.model_validate(e) for e in entries]


@router.get("", response_model=AuditSearchResult)
async def search_audit_trail(
	params: Annotated[AuditSearchParams, Depends()],
	session: Annotated[AsyncSession, Depends(get_db)],
):
	entries, total = await db_api.search_entries(
		session,
		user_id=params.user_id,
		department_id=params.department_id,
		status=params.status,
		date_from=params.date_from,
		date_to=params.date_to,
		page_number=params.page_number,
		page_size=params.page_size,
	)
	return AuditSearchResult(
		items=[AuditTrailEntry.model_validate(e) for e in entries],
		total=total,
		page_number=params.page_number,
		page_size=params.page_size,
	)
