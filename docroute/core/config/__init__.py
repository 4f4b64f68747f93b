# (c) Copyright Datacraft, 2026
"""Configuration module for docroute."""
from .signing import (
	SigningProviderSettings,
	get_signing_settings,
)
from .settings import Settings, get_settings

__all__ = [
	'SigningProviderSettings',
	'get_signing_settings',
	'Settings',
	'get_settings',
]
