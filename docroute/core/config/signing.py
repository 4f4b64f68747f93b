# (c) Copyright Datacraft, 2026
"""Blockchain signing provider configuration."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SigningProviderSettings(BaseSettings):
	"""
	Configuration for the remote signing provider.

	Environment variables are prefixed with DOCROUTE_SIGNING_.
	"""

	base_url: str = Field(
		default="https://stg-api2.doconchain.com",
		description="Signing provider API base URL",
	)
	client_key: str = Field(
		default="",
		description="Client key used for the token exchange",
	)
	client_secret: str = Field(
		default="",
		description="Client secret used for the token exchange",
	)
	client_email: str | None = Field(
		default=None,
		description="Optional account email sent with the token exchange",
	)
	user_type: str = Field(
		default="ENTERPRISE_API",
		description="Value of the user_type query parameter on every call",
	)
	default_token_ttl: int = Field(
		default=3300,
		gt=0,
		description="Token lifetime in seconds when the provider omits expires_in",
	)
	timeout: float = Field(
		default=30.0,
		gt=0,
		description="Per-request timeout in seconds",
	)
	user_list_editable: bool = Field(
		default=True,
		description="Whether recipients may edit the signer list of a project",
	)

	model_config = SettingsConfigDict(env_prefix="docroute_signing_")

	@property
	def credentials_configured(self) -> bool:
		return bool(self.client_key and self.client_secret)


@lru_cache
def get_signing_settings() -> SigningProviderSettings:
	"""Get cached signing provider settings."""
	return SigningProviderSettings()
