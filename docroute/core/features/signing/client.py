# (c) Copyright Datacraft, 2026
"""HTTP client for the blockchain signing provider."""
import logging
from datetime import datetime, timedelta
from typing import Any

import httpx

from docroute.core.config import SigningProviderSettings, get_signing_settings
from docroute.core.exceptions import ProviderError
from docroute.core.utils.tz import utc_now

from .schema import PassportView, RemoteProject

logger = logging.getLogger(__name__)


def unwrap_data(payload: Any) -> Any:
	"""Return the ``data`` member of an envelope, or the payload itself."""
	if isinstance(payload, dict) and payload.get("data") is not None:
		return payload["data"]
	return payload


def _error_from_response(response: httpx.Response) -> ProviderError:
	try:
		body = response.json()
	except ValueError:
		body = response.text or None

	message = None
	code = None
	if isinstance(body, dict):
		error = body.get("error") if isinstance(body.get("error"), dict) else {}
		message = body.get("message") or error.get("message")
		code = error.get("code")
	return ProviderError(
		message or f"Signing provider request failed with HTTP {response.status_code}",
		status=response.status_code,
		code=code,
		details=body,
	)


class SigningProviderClient:
	"""
	Thin async client for the signing provider REST API.

	The bearer token is cached on the class so every client instance in
	the process shares it. It is refreshed lazily when absent or expired;
	concurrent refreshes are harmless because the exchange is idempotent.
	"""

	_token: str | None = None
	_token_expiry: datetime | None = None

	def __init__(
		self,
		settings: SigningProviderSettings | None = None,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.settings = settings or get_signing_settings()
		self._transport = transport

	@classmethod
	def clear_token_cache(cls) -> None:
		SigningProviderClient._token = None
		SigningProviderClient._token_expiry = None

	@property
	def cached_token(self) -> str | None:
		return SigningProviderClient._token

	def _client(self) -> httpx.AsyncClient:
		return httpx.AsyncClient(
			base_url=self.settings.base_url,
			timeout=httpx.Timeout(self.settings.timeout),
			headers={"accept": "application/json"},
			transport=self._transport,
		)

	async def _send(self, method: str, path: str, **kwargs) -> Any:
		try:
			async with self._client() as client:
				response = await client.request(method, path, **kwargs)
		except httpx.TimeoutException as e:
			raise ProviderError(
				f"Signing provider timed out: {method} {path}",
				code="timeout",
			) from e
		except httpx.HTTPError as e:
			raise ProviderError(
				str(e) or "Signing provider request failed",
				code=type(e).__name__,
			) from e

		if response.is_error:
			raise _error_from_response(response)

		if not response.content:
			return None
		try:
			body = response.json()
		except ValueError:
			return response.text

		if isinstance(body, dict) and body.get("success") is False:
			raise ProviderError(
				body.get("message") or "Signing provider reported failure",
				status=response.status_code,
				details=body,
			)
		return body

	async def _call(
		self,
		method: str,
		path: str,
		*,
		params: dict[str, Any] | None = None,
		**kwargs,
	) -> Any:
		token = await self.ensure_token()
		query = {"user_type": self.settings.user_type}
		query.update(params or {})
		logger.debug(f"Signing provider {method} {path}")
		return await self._send(
			method,
			path,
			params=query,
			headers={"Authorization": f"Bearer {token}"},
			**kwargs,
		)

	async def ensure_token(self) -> str:
		token = SigningProviderClient._token
		expiry = SigningProviderClient._token_expiry
		if token and expiry and utc_now() < expiry:
			return token
		return await self.generate_token()

	async def generate_token(self) -> str:
		"""Exchange client credentials for a bearer token and cache it."""
		if not self.settings.credentials_configured:
			raise ProviderError("Signing provider credentials are not configured")

		form = {
			"client_key": self.settings.client_key,
			"client_secret": self.settings.client_secret,
		}
		if self.settings.client_email:
			form["email"] = self.settings.client_email

		payload = unwrap_data(await self._send("POST", "/api/v2/generate/token", data=form))
		if not isinstance(payload, dict) or not payload.get("token"):
			raise ProviderError(
				"Signing provider token response did not include a token",
				details=payload,
			)

		expires_in = (
			payload.get("expires_in")
			or payload.get("expires")
			or self.settings.default_token_ttl
		)
		SigningProviderClient._token = payload["token"]
		SigningProviderClient._token_expiry = utc_now() + timedelta(seconds=int(expires_in))
		logger.info(f"Signing provider token refreshed, valid for {expires_in}s")
		return payload["token"]

	async def verify_token(self, token: str | None = None) -> Any:
		token = token or await self.ensure_token()
		return await self._send(
			"POST",
			"/api/v2/auth/verify",
			params={"user_type": self.settings.user_type},
			headers={"Authorization": f"Bearer {token}"},
			json={},
		)

	async def logout(self) -> None:
		"""Invalidate the remote session and drop the cached token."""
		token = await self.ensure_token()
		await self._send(
			"POST",
			"/api/v2/api_generation/logout",
			headers={"Authorization": f"Bearer {token}"},
			json={},
		)
		self.clear_token_cache()

	async def create_project(
		self,
		file_bytes: bytes,
		file_name: str,
		project_name: str | None = None,
		description: str | None = None,
		user_list_editable: bool | None = None,
		email_subject: str | None = None,
		email_message: str | None = None,
	) -> RemoteProject:
		if user_list_editable is None:
			user_list_editable = self.settings.user_list_editable
		form = {"user_list_editable": str(user_list_editable).lower()}
		optional = {
			"project_name": project_name,
			"description": description,
			"email_subject": email_subject,
			"email_message": email_message,
		}
		form.update({k: v for k, v in optional.items() if v})

		raw = await self._call(
			"POST",
			"/api/v2/projects",
			data=form,
			files={"file": (file_name, file_bytes, "application/pdf")},
		)
		data = unwrap_data(raw)
		if not isinstance(data, dict):
			raise ProviderError("Project creation returned no data", details=raw)

		project_id = data.get("project_uuid") or data.get("uuid")
		if not project_id:
			raise ProviderError(
				"Project creation response did not include a project identifier",
				details=raw,
			)
		return RemoteProject(
			project_id=str(project_id),
			tx_hash=data.get("transaction_hash"),
			redirect_url=data.get("redirect_url") or data.get("redirect_to"),
			status=data.get("status"),
		)

	async def get_project(self, project_id: str) -> Any:
		return await self._call("GET", f"/my/projects/{project_id}")

	async def add_signer(self, project_id: str, payload: dict[str, Any]) -> Any:
		return await self._call("POST", f"/projects/{project_id}/signers", json=payload)

	async def update_signer(
		self,
		project_id: str,
		signer_id: int | str,
		payload: dict[str, Any],
	) -> Any:
		return await self._call(
			"PUT", f"/projects/{project_id}/signers/{signer_id}", json=payload
		)

	async def remove_signer(self, project_id: str, signer_id: int | str) -> Any:
		return await self._call("DELETE", f"/projects/{project_id}/signers/{signer_id}")

	async def add_signer_mark(
		self,
		project_id: str,
		signer_id: int | str,
		payload: dict[str, Any],
	) -> Any:
		return await self._call(
			"POST",
			f"/projects/{project_id}/signers/{signer_id}/properties",
			json=payload,
		)

	async def update_signer_mark(
		self,
		signer_id: int | str,
		property_id: int | str,
		payload: dict[str, Any],
	) -> Any:
		return await self._call(
			"PUT",
			f"/projects/signers/{signer_id}/properties/{property_id}",
			json=payload,
		)

	async def remove_signer_mark(self, signer_id: int | str, property_id: int | str) -> Any:
		return await self._call(
			"DELETE", f"/projects/signers/{signer_id}/properties/{property_id}"
		)

	async def send_project(self, project_id: str) -> Any:
		return await self._call("POST", f"/my/projects/{project_id}/send", json={})

	async def get_passport(self, project_id: str, view: PassportView) -> Any:
		return await self._call(
			"GET",
			f"/api/v2/projects/{project_id}/passport",
			params={"view": view},
		)

	async def get_metrics(self) -> Any:
		return await self._call("GET", "/api/v2/projects/processing/all-files")
