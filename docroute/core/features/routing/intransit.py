# (c) Copyright Datacraft, 2026
"""Department inbox and outbox of documents on the move."""
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from docroute.core.features.documents.db import api as db_api
from docroute.core.features.documents.db.orm import Document
from docroute.core.features.documents.schema import (
	DocumentDetails,
	DocumentPage,
	Pagination,
)
from docroute.core.features.documents.states import DocumentStatus


def paginate(documents: list[Document], page: int, limit: int) -> DocumentPage:
	start = (page - 1) * limit
	items = documents[start:start + limit]
	return DocumentPage(
		items=[DocumentDetails.from_orm_document(d) for d in items],
		pagination=Pagination.build(page, limit, len(documents)),
	)


def is_incoming(document: Document, department_id: uuid.UUID) -> bool:
	chain = document.ledger.chain
	return (
		department_id in chain[1:]
		and department_id not in document.ledger.acknowledged
	)


async def incoming(
	session: AsyncSession,
	department_id: uuid.UUID,
	page: int = 1,
	limit: int = 10,
) -> DocumentPage:
	"""Documents routed to the department that it has not received yet."""
	candidates = await db_api.list_documents_by_status(
		session, [DocumentStatus.INTRANSIT, DocumentStatus.DISPATCH]
	)
	documents = [d for d in candidates if is_incoming(d, department_id)]
	return paginate(documents, page, limit)


async def outgoing(
	session: AsyncSession,
	department_id: uuid.UUID,
	page: int = 1,
	limit: int = 10,
) -> DocumentPage:
	"""Documents that originated in the department and were routed onwards."""
	candidates = await db_api.list_documents_by_status(
		session,
		[s for s in DocumentStatus if s != DocumentStatus.DELETED],
		origin=department_id,
	)
	documents = [
		d for d in candidates
		if len(d.ledger.chain) > 1 and d.ledger.chain[0] == department_id
	]
	return paginate(documents, page, limit)
