from typing import List
from pydantic import BaseModel, Field

from .files import FileMetadata, SelectionRequest


class CompressRequest(SelectionRequest):
    quality: int | None = Field(default=None, ge=1, le=100, description='JPEG quality, 1-100.')


class CompressedFile(BaseModel):
    source_id: int
    source_name: str
    width: int
    height: int
    original_size: int
    compressed_size: int
    file: FileMetadata


class CompressResponse(BaseModel):
    message: str
    quality: int
    skipped_files: int
    total_original_size: int
    total_compressed_size: int
    saved_bytes: int
    saved_percent: float
    results: List[CompressedFile] = Field(default_factory=list)
