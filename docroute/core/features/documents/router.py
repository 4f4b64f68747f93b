# (c) Copyright Datacraft, 2026
"""Documents API router."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status

from docroute.core.dependencies import get_document_service
from docroute.core.features.auth.dependencies import get_actor
from docroute.core.features.auth.schema import Actor

from . import schema
from .service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post(
	"",
	response_model=schema.DocumentDetails,
	status_code=status.HTTP_201_CREATED,
)
async def create_document(
	data: schema.DocumentCreate,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[DocumentService, Depends(get_document_service)],
):
	"""Create a document in its originating department."""
	return await service.create_document(data, actor.user_id)


@router.get("/{document_id}", response_model=schema.DocumentDetails)
async def get_document(
	document_id: uuid.UUID,
	service: Annotated[DocumentService, Depends(get_document_service)],
):
	"""Document with its routing chain, acknowledgments and signing state."""
	return await service.get_document(document_id)


@router.post("/{document_id}/share", response_model=schema.OperationResult)
async def share_document(
	document_id: uuid.UUID,
	data: schema.ShareRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[DocumentService, Depends(get_document_service)],
):
	return await service.share_document(
		document_id, actor.user_id, data.user_ids, remarks=data.remarks
	)
