# (c) Copyright Datacraft, 2026
from .base import FileStore, StoredFile
from .local import LocalFileStore

__all__ = ["FileStore", "StoredFile", "LocalFileStore"]
