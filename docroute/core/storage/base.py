# (c) Copyright Datacraft, 2026
"""File store interface used by the signing orchestrator and bulk purge."""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class StoredFile:
	"""Result of writing bytes to the file store."""
	path: str
	size: int
	checksum: str


class FileStore(ABC):
	"""Abstract byte store addressed by relative path."""

	@abstractmethod
	async def read(self, path: str) -> bytes:
		"""Read the bytes stored at path.

		Raises:
			FileNotFoundError: if nothing is stored at path
		"""
		...

	@abstractmethod
	async def put(self, path: str, data: bytes) -> StoredFile:
		"""Store bytes at path, replacing any previous content."""
		...

	@abstractmethod
	async def delete(self, path: str) -> bool:
		"""Delete the bytes at path.

		Returns:
			True if something was deleted, False if nothing was there
		"""
		...

	@abstractmethod
	async def exists(self, path: str) -> bool:
		...
