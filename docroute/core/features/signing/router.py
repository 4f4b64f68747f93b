# (c) Copyright Datacraft, 2026
"""Blockchain signing API router."""
import logging
import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from docroute.core.dependencies import get_signing_client, get_signing_orchestrator
from docroute.core.features.auth.dependencies import get_actor
from docroute.core.features.auth.schema import Actor

from .client import SigningProviderClient
from .orchestrator import SigningOrchestrator
from .schema import PassportView, SignRequest, SignResult, SigningState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/signing", tags=["Signing"])


@router.post("/documents/{document_id}/submit", response_model=SignResult)
async def submit_document(
	document_id: uuid.UUID,
	data: SignRequest,
	actor: Annotated[Actor, Depends(get_actor)],
	orchestrator: Annotated[SigningOrchestrator, Depends(get_signing_orchestrator)],
):
	"""
	Create a signing project for the document.

	The primary signer defaults to the calling actor. With
	``send_immediately`` the project is sent to its signers right away,
	otherwise it stays a draft until dispatched.
	"""
	return await orchestrator.submit(document_id, actor, data)


@router.post("/documents/{document_id}/dispatch", response_model=SigningState)
async def dispatch_document(
	document_id: uuid.UUID,
	actor: Annotated[Actor, Depends(get_actor)],
	orchestrator: Annotated[SigningOrchestrator, Depends(get_signing_orchestrator)],
):
	return await orchestrator.dispatch(document_id)


@router.post("/documents/{document_id}/sync", response_model=SigningState)
async def sync_document(
	document_id: uuid.UUID,
	actor: Annotated[Actor, Depends(get_actor)],
	orchestrator: Annotated[SigningOrchestrator, Depends(get_signing_orchestrator)],
):
	return await orchestrator.sync_status(document_id)


@router.get("/documents/{document_id}/passport")
async def get_passport(
	document_id: uuid.UUID,
	actor: Annotated[Actor, Depends(get_actor)],
	orchestrator: Annotated[SigningOrchestrator, Depends(get_signing_orchestrator)],
	view: PassportView = "history",
) -> Any:
	return await orchestrator.passport(document_id, view)


@router.get("/metrics")
async def get_metrics(
	actor: Annotated[Actor, Depends(get_actor)],
	orchestrator: Annotated[SigningOrchestrator, Depends(get_signing_orchestrator)],
) -> Any:
	return await orchestrator.metrics()


@router.post("/token/verify")
async def verify_token(
	actor: Annotated[Actor, Depends(get_actor)],
	client: Annotated[SigningProviderClient, Depends(get_signing_client)],
) -> Any:
	return await client.verify_token()


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
	actor: Annotated[Actor, Depends(get_actor)],
	client: Annotated[SigningProviderClient, Depends(get_signing_client)],
):
	await client.logout()
