from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class FileMetadata(BaseModel):
    id: int
    name: str
    size: int
    type: str
    status: str
    folder: Optional[str] = None
    created_at: datetime
    download_url: str


class FileListResponse(BaseModel):
    files: List[FileMetadata] = Field(default_factory=list)


class UploadResponse(BaseModel):
    accepted_files: int
    message: str
    files: List[FileMetadata] = Field(default_factory=list)


class SelectionRequest(BaseModel):
    ids: List[int] = Field(default_factory=list, description='Selected file record ids.')


class RenameRequest(SelectionRequest):
    prefix: str = Field(..., description='New name prefix; records become <prefix>-<id>.<ext>.')


class MoveRequest(SelectionRequest):
    folder: str = Field(..., description='Target folder name.')


class ConvertRequest(BaseModel):
    target_format: str = Field(..., description='Output extension such as pdf, docx, txt or md.')


class OperationResponse(BaseModel):
    message: str
    affected: int
    files: List[FileMetadata] = Field(default_factory=list)


def to_metadata(record) -> FileMetadata:
    return FileMetadata(
        id=record.id,
        name=record.name,
        size=record.size,
        type=record.type,
        status=record.status,
        folder=record.folder,
        created_at=record.created_at,
        download_url=f'/files/{record.id}/download',
    )
