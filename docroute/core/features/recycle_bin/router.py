# (c) Copyright Datacraft, 2026
"""Recycle bin API router."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from docroute.core.config import get_settings
from docroute.core.dependencies import get_recycle_bin_service
from docroute.core.features.auth.dependencies import get_actor
from docroute.core.features.auth.schema import Actor
from docroute.core.features.documents.schema import DocumentPage, OperationResult

from .schema import DeleteRequest, PurgeRequest, PurgeResult
from .service import RecycleBinService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recycle-bin", tags=["Recycle Bin"])


@router.get("", response_model=DocumentPage)
async def list_deleted_documents(
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RecycleBinService, Depends(get_recycle_bin_service)],
	department_id: uuid.UUID | None = None,
	page: Annotated[int, Query(ge=1)] = 1,
	limit: Annotated[int | None, Query(ge=1)] = None,
):
	settings = get_settings()
	return await service.list_deleted(
		department_id or actor.department_id,
		page,
		min(limit or settings.default_page_size, settings.max_page_size),
	)


@router.post("/{document_id}/delete", response_model=OperationResult)
async def delete_document(
	document_id: uuid.UUID,
	data: DeleteRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RecycleBinService, Depends(get_recycle_bin_service)],
):
	return await service.delete_document(
		document_id, actor_id=actor.user_id, remarks=data.remarks
	)


@router.post("/{document_id}/restore", response_model=OperationResult)
async def restore_document(
	document_id: uuid.UUID,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RecycleBinService, Depends(get_recycle_bin_service)],
):
	return await service.restore_document(document_id, actor_id=actor.user_id)


@router.post("/purge", response_model=PurgeResult)
async def purge_documents(
	data: PurgeRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RecycleBinService, Depends(get_recycle_bin_service)],
):
	"""Permanently remove deleted documents with their files and audit trail."""
	purged = await service.bulk_purge(data.document_ids, actor_id=actor.user_id)
	return PurgeResult(purged=purged)
