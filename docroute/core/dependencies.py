# (c) Copyright Datacraft, 2026
"""FastAPI dependencies wiring services to the request session."""
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.config import get_settings
from docroute.core.db.engine import get_db
from docroute.core.features.audit.recorder import AuditTrailRecorder
from docroute.core.features.departments.directory import DbDepartmentDirectory
from docroute.core.features.documents.service import DocumentService
from docroute.core.features.events.sink import BroadcastEventSink
from docroute.core.features.events.websocket import manager
from docroute.core.features.notifications.notifier import InAppNotifier
from docroute.core.features.recycle_bin.service import RecycleBinService
from docroute.core.features.routing.service import RoutingService
from docroute.core.features.signing.client import SigningProviderClient
from docroute.core.features.signing.orchestrator import SigningOrchestrator
from docroute.core.storage import FileStore, LocalFileStore


@lru_cache
def get_file_store() -> FileStore:
	return LocalFileStore(get_settings().media_root)


def get_notifier() -> InAppNotifier:
	return InAppNotifier(manager)


def get_event_sink() -> BroadcastEventSink:
	return BroadcastEventSink(manager)


def get_signing_client() -> SigningProviderClient:
	return SigningProviderClient()


def get_recorder(
	session: Annotated[AsyncSession, Depends(get_db)],
) -> AuditTrailRecorder:
	return AuditTrailRecorder(session, get_notifier(), DbDepartmentDirectory(session))


def get_document_service(
	session: Annotated[AsyncSession, Depends(get_db)],
	recorder: Annotated[AuditTrailRecorder, Depends(get_recorder)],
) -> DocumentService:
	return DocumentService(
		session,
		recorder,
		recorder.directory,
		get_notifier(),
		get_event_sink(),
	)


def get_routing_service(
	session: Annotated[AsyncSession, Depends(get_db)],
	recorder: Annotated[AuditTrailRecorder, Depends(get_recorder)],
) -> RoutingService:
	return RoutingService(session, recorder, recorder.directory, get_event_sink())


def get_recycle_bin_service(
	session: Annotated[AsyncSession, Depends(get_db)],
	recorder: Annotated[AuditTrailRecorder, Depends(get_recorder)],
) -> RecycleBinService:
	return RecycleBinService(session, recorder, get_file_store(), get_event_sink())


def get_signing_orchestrator(
	session: Annotated[AsyncSession, Depends(get_db)],
) -> SigningOrchestrator:
	return SigningOrchestrator(
		session,
		get_signing_client(),
		get_file_store(),
		get_event_sink(),
	)
