# (c) Copyright Datacraft, 2026
"""Async engine and session factory."""
import logging
import ssl
from functools import lru_cache
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
	AsyncEngine,
	AsyncSession,
	async_sessionmaker,
	create_async_engine,
)
from sqlalchemy.pool import NullPool

from docroute.core.config import get_settings

logger = logging.getLogger(__name__)


def _connect_args() -> dict:
	settings = get_settings()
	if not settings.db_ssl:
		return {}
	# asyncpg requires an SSL context, not sslmode
	ssl_context = ssl.create_default_context()
	ssl_context.check_hostname = False
	ssl_context.verify_mode = ssl.CERT_NONE
	return {"ssl": ssl_context}


@lru_cache
def get_engine() -> AsyncEngine:
	settings = get_settings()
	logger.debug("Creating async engine")
	return create_async_engine(
		settings.async_db_url,
		poolclass=NullPool,
		connect_args=_connect_args(),
	)


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
	return async_sessionmaker(get_engine(), expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
	async with get_session_factory()() as session:
		yield session


async def dispose_engine() -> None:
	if get_engine.cache_info().currsize:
		await get_engine().dispose()
