# (c) Copyright Datacraft, 2026
"""Local filesystem file store."""
import hashlib
import logging
from pathlib import Path

import aiofiles
import aiofiles.os

from .base import FileStore, StoredFile

logger = logging.getLogger(__name__)


class LocalFileStore(FileStore):
	"""Stores document bytes below a base directory."""

	def __init__(self, base_path: str | Path):
		self.base_path = Path(base_path)
		self.base_path.mkdir(parents=True, exist_ok=True)

	def _full_path(self, path: str) -> Path:
		full = (self.base_path / path.lstrip("/")).resolve()
		if not full.is_relative_to(self.base_path.resolve()):
			raise ValueError(f"Path escapes storage root: {path}")
		return full

	async def read(self, path: str) -> bytes:
		full = self._full_path(path)
		if not full.is_file():
			raise FileNotFoundError(path)
		async with aiofiles.open(full, "rb") as f:
			return await f.read()

	async def put(self, path: str, data: bytes) -> StoredFile:
		full = self._full_path(path)
		full.parent.mkdir(parents=True, exist_ok=True)
		async with aiofiles.open(full, "wb") as f:
			await f.write(data)
		logger.debug(f"Stored {len(data)} bytes at {path}")
		return StoredFile(
			path=path,
			size=len(data),
			checksum=hashlib.sha256(data).hexdigest(),
		)

	async def delete(self, path: str) -> bool:
		full = self._full_path(path)
		if not full.exists():
			return False
		await aiofiles.os.remove(full)
		return True

	async def exists(self, path: str) -> bool:
		return self._full_path(path).is_file()
