"""Shared FastAPI dependencies for services."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from .core.settings import Settings, get_settings
from .store import FileStore


def get_file_store(
    request: Request,
    settings: Settings = Depends(get_settings),  # noqa: ARG001 - ensures settings loaded
) -> FileStore:
    store: FileStore | None = getattr(request.app.state, 'file_store', None)
    if store is None:
        raise HTTPException(status_code=503, detail='File store not initialized.')
    return store
