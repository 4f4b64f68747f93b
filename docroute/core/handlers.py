# (c) Copyright Datacraft, 2026
"""Render domain errors as structured JSON responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from docroute.core.exceptions import (
	DocrouteError,
	InvalidTransition,
	NotFound,
	PermissionDenied,
	ProviderError,
	SigningFailed,
	StorageUnavailable,
	ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_PROVIDER_MESSAGE = "The signing provider could not complete the request"

STATUS_CODES: list[tuple[type[DocrouteError], int]] = [
	(ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
	(NotFound, status.HTTP_404_NOT_FOUND),
	(PermissionDenied, status.HTTP_403_FORBIDDEN),
	(InvalidTransition, status.HTTP_409_CONFLICT),
	(ProviderError, status.HTTP_502_BAD_GATEWAY),
	(SigningFailed, status.HTTP_502_BAD_GATEWAY),
	(StorageUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(exc: DocrouteError) -> int:
	for exc_class, code in STATUS_CODES:
		if isinstance(exc, exc_class):
			return code
	return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(exc: DocrouteError) -> dict:
	if isinstance(exc, ProviderError):
		return {
			"kind": "provider_failed",
			"detail": exc.message or GENERIC_PROVIDER_MESSAGE,
			"code": exc.provider_code or exc.code,
			"provider_status": exc.status,
		}
	if isinstance(exc, SigningFailed):
		cause = exc.cause
		return {
			"kind": "provider_failed",
			"detail": GENERIC_PROVIDER_MESSAGE,
			"code": exc.code,
			"project_id": exc.project_id,
			"cause": type(cause).__name__ if cause else None,
		}
	body = {"kind": "rejected", "detail": exc.message, "code": exc.code}
	if isinstance(exc, ValidationError) and exc.field:
		body["field"] = exc.field
	return body


async def docroute_error_handler(request: Request, exc: DocrouteError) -> JSONResponse:
	code = status_code_for(exc)
	if code >= 500:
		logger.warning(f"{request.method} {request.url.path} failed: {exc}")
	return JSONResponse(status_code=code, content=error_body(exc))


def install(app: FastAPI) -> None:
	app.add_exception_handler(DocrouteError, docroute_error_handler)
