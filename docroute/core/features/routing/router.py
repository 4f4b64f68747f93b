# (c) Copyright Datacraft, 2026
"""Routing API router."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.config import get_settings
from docroute.core.db.engine import get_db
from docroute.core.dependencies import get_routing_service
from docroute.core.exceptions import ValidationError
from docroute.core.features.auth.dependencies import get_actor
from docroute.core.features.auth.schema import Actor
from docroute.core.features.documents.schema import DocumentPage, OperationResult

from . import intransit
from .schema import FinishRequest, ReceiveRequest, ReleaseRequest
from .service import RoutingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Routing"])


def _page_size(limit: int | None) -> int:
	settings = get_settings()
	return min(limit or settings.default_page_size, settings.max_page_size)


def _department(actor: Actor, department_id: uuid.UUID | None) -> uuid.UUID:
	department_id = department_id or actor.department_id
	if department_id is None:
		raise ValidationError(
			"department_id is required when X-Actor-Department is not set",
			field="department_id",
		)
	return department_id


@router.get("/in-transit/incoming", response_model=DocumentPage)
async def incoming_documents(
	actor: Annotated[Actor, Depends(get_actor)],
	session: Annotated[AsyncSession, Depends(get_db)],
	department_id: uuid.UUID | None = None,
	page: Annotated[int, Query(ge=1)] = 1,
	limit: Annotated[int | None, Query(ge=1)] = None,
):
	"""Documents routed to the department and not received yet."""
	return await intransit.incoming(
		session, _department(actor, department_id), page, _page_size(limit)
	)


@router.get("/in-transit/outgoing", response_model=DocumentPage)
async def outgoing_documents(
	actor: Annotated[Actor, Depends(get_actor)],
	session: Annotated[AsyncSession, Depends(get_db)],
	department_id: uuid.UUID | None = None,
	page: Annotated[int, Query(ge=1)] = 1,
	limit: Annotated[int | None, Query(ge=1)] = None,
):
	"""Documents the department originated and routed onwards."""
	return await intransit.outgoing(
		session, _department(actor, department_id), page, _page_size(limit)
	)


@router.post("/{document_id}/release", response_model=OperationResult)
async def release_document(
	document_id: uuid.UUID,
	data: ReleaseRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RoutingService, Depends(get_routing_service)],
):
	return await service.release(
		document_id,
		data.to_department,
		actor_id=actor.user_id,
		from_department=data.from_department or actor.department_id,
		action=data.action,
		remarks=data.remarks,
	)


@router.post("/{document_id}/receive", response_model=OperationResult)
async def receive_document(
	document_id: uuid.UUID,
	data: ReceiveRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RoutingService, Depends(get_routing_service)],
):
	return await service.receive(
		document_id,
		_department(actor, data.department),
		actor_id=actor.user_id,
		remarks=data.remarks,
	)


@router.post("/{document_id}/complete", response_model=OperationResult)
async def complete_document(
	document_id: uuid.UUID,
	data: FinishRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RoutingService, Depends(get_routing_service)],
):
	return await service.complete_document(
		document_id, actor_id=actor.user_id, remarks=data.remarks
	)


@router.post("/{document_id}/cancel", response_model=OperationResult)
async def cancel_document(
	document_id: uuid.UUID,
	data: FinishRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	service: Annotated[RoutingService, Depends(get_routing_service)],
):
	return await service.cancel_document(
		document_id,
		actor_id=actor.user_id,
		actor_name=actor.display_name,
		remarks=data.remarks,
	)
