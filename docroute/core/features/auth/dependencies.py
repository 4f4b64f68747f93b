# (c) Copyright Datacraft, 2026
"""Actor identity taken from request headers set by the gateway."""
from typing import Annotated

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from docroute.core.utils.ids import parse_uuid

from .schema import Actor

actor_id_header = APIKeyHeader(name="X-Actor-Id", auto_error=False)
actor_department_header = APIKeyHeader(name="X-Actor-Department", auto_error=False)
actor_email_header = APIKeyHeader(name="X-Actor-Email", auto_error=False)
actor_name_header = APIKeyHeader(name="X-Actor-Name", auto_error=False)


async def get_actor(
	actor_id: Annotated[str | None, Security(actor_id_header)],
	department_id: Annotated[str | None, Security(actor_department_header)],
	email: Annotated[str | None, Security(actor_email_header)],
	name: Annotated[str | None, Security(actor_name_header)],
) -> Actor:
	if not actor_id:
		raise HTTPException(
			status_code=status.HTTP_401_UNAUTHORIZED,
			detail="Missing X-Actor-Id header",
		)
	return Actor(
		user_id=parse_uuid(actor_id, "X-Actor-Id"),
		department_id=(
			parse_uuid(department_id, "X-Actor-Department") if department_id else None
		),
		email=email or None,
		name=name or None,
	)
