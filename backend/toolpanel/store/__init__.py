"""In-memory file record store for the toolbox backend."""

from .records import FileRecordNotFound, FileStore, StoredFile

__all__ = ['FileRecordNotFound', 'FileStore', 'StoredFile']
