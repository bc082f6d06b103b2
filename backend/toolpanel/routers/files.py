from typing import List, Literal, Optional, Sequence

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import PlainTextResponse, Response

from ..core.logging_config import get_logger
from ..core.settings import Settings, get_settings
from ..dependencies import get_file_store
from ..ingest.loaders import load_document_bytes
from ..models.files import (
    ConvertRequest,
    FileListResponse,
    FileMetadata,
    MoveRequest,
    OperationResponse,
    RenameRequest,
    SelectionRequest,
    UploadResponse,
    to_metadata,
)
from ..services.conversion import UnsupportedFormatError, convert_document
from ..store import FileRecordNotFound, FileStore, StoredFile
from ..utils.files import content_disposition, document_extensions, has_control_chars, target_formats

router = APIRouter(prefix='/files', tags=['files'])
logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


def _attachment(content: bytes, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={'Content-Disposition': content_disposition(filename)},
    )


def _require_selection(store: FileStore, file_ids: Sequence[int]) -> List[StoredFile]:
    if not file_ids:
        logger.info('⚠️ require_selection empty_selection')
        raise HTTPException(status_code=400, detail='No files selected.')
    try:
        return store.require(file_ids)
    except FileRecordNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _get_record(store: FileStore, file_id: int) -> StoredFile:
    try:
        return store.get(file_id)
    except FileRecordNotFound as exc:
        logger.info('⚠️ get_record missing_file file_id=%s', file_id)
        raise HTTPException(status_code=404, detail='Requested file does not exist.') from exc


async def _read_upload(upload_file: UploadFile, max_bytes: int) -> bytes:
    buffer = bytearray()
    while True:
        chunk = await upload_file.read(CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            logger.info('⚠️ read_upload too_large filename=%s', upload_file.filename)
            raise HTTPException(status_code=413, detail=f'File {upload_file.filename} exceeds the upload limit.')
    await upload_file.close()
    return bytes(buffer)


@router.post('/upload', response_model=UploadResponse)
async def upload(
    files: Optional[List[UploadFile]] = File(default=None),
    settings: Settings = Depends(get_settings),
    store: FileStore = Depends(get_file_store),
) -> UploadResponse:
    logger.info('📤 upload_request starting...')
    if not files:
        logger.info('⚠️ upload_request empty_files')
        raise HTTPException(status_code=400, detail='No files were uploaded.')
    max_bytes = settings.max_upload_mb * 1024 * 1024
    uploads = []
    for upload_file in files:
        payload = await _read_upload(upload_file, max_bytes)
        uploads.append((upload_file.filename or 'unnamed', upload_file.content_type, payload))
    records = store.add_many(uploads)
    response = UploadResponse(
        accepted_files=len(records),
        message=f'Uploaded {len(records)} files',
        files=[to_metadata(record) for record in records],
    )
    logger.info('✅ 📤 upload_request done.')
    return response


@router.get('', response_model=FileListResponse)
async def list_files(
    kind: Optional[Literal['document', 'image']] = Query(default=None, description='Filter by document or image.'),
    settings: Settings = Depends(get_settings),
    store: FileStore = Depends(get_file_store),
) -> FileListResponse:
    logger.info('🗂️ file_listing starting...')
    records = store.list(kind=kind, document_exts=document_extensions(settings))
    response = FileListResponse(files=[to_metadata(record) for record in records])
    logger.info('✅ 🗂️ file_listing done.')
    return response


@router.get('/{file_id}', response_model=FileMetadata)
async def get_file(file_id: int, store: FileStore = Depends(get_file_store)) -> FileMetadata:
    return to_metadata(_get_record(store, file_id))


@router.get('/{file_id}/download')
async def download_file(file_id: int, store: FileStore = Depends(get_file_store)) -> Response:
    logger.info('📦 file_download starting file_id=%s', file_id)
    record = _get_record(store, file_id)
    response = _attachment(record.payload, record.name, record.type or 'application/octet-stream')
    logger.info('✅ 📦 file_download done file_id=%s', file_id)
    return response


@router.get('/{file_id}/text')
async def preview_text(file_id: int, store: FileStore = Depends(get_file_store)) -> PlainTextResponse:
    logger.info('📝 preview_text starting file_id=%s', file_id)
    record = _get_record(store, file_id)
    extracted_text = load_document_bytes(record.name, record.payload)
    if not extracted_text:
        logger.info('⚠️ preview_text extraction_failed file_id=%s', file_id)
        raise HTTPException(status_code=400, detail='Unable to extract text from file.')
    logger.info('✅ 📝 preview_text done file_id=%s', file_id)
    return PlainTextResponse(content=extracted_text)


@router.post('/{file_id}/convert')
async def convert_file(
    file_id: int,
    request: ConvertRequest,
    settings: Settings = Depends(get_settings),
    store: FileStore = Depends(get_file_store),
) -> Response:
    logger.info('🔄 convert_file starting file_id=%s', file_id)
    record = _get_record(store, file_id)
    try:
        result = convert_document(
            record.payload,
            request.target_format,
            allowed_formats=target_formats(settings),
            source_name=record.name,
        )
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.info('✅ 🔄 convert_file done file_id=%s', file_id)
    return _attachment(result.content, result.filename, result.media_type)


@router.post('/rename', response_model=OperationResponse)
async def rename_files(request: RenameRequest, store: FileStore = Depends(get_file_store)) -> OperationResponse:
    logger.info('✏️ rename_request starting...')
    prefix = request.prefix.strip()
    if not prefix:
        raise HTTPException(status_code=400, detail='A new name prefix is required.')
    if has_control_chars(prefix):
        logger.info('⚠️ rename_request control_chars')
        raise HTTPException(status_code=400, detail='The name prefix contains control characters.')
    _require_selection(store, request.ids)
    records = store.rename(request.ids, prefix)
    logger.info('✅ ✏️ rename_request done.')
    return OperationResponse(
        message=f'Renamed {len(records)} files',
        affected=len(records),
        files=[to_metadata(record) for record in records],
    )


@router.post('/delete', response_model=OperationResponse)
async def delete_files(request: SelectionRequest, store: FileStore = Depends(get_file_store)) -> OperationResponse:
    logger.info('🗑️ delete_request starting...')
    _require_selection(store, request.ids)
    records = store.delete(request.ids)
    logger.info('✅ 🗑️ delete_request done.')
    return OperationResponse(
        message=f'Deleted {len(records)} files',
        affected=len(records),
        files=[to_metadata(record) for record in records],
    )


@router.post('/copy', response_model=OperationResponse)
async def copy_files(request: SelectionRequest, store: FileStore = Depends(get_file_store)) -> OperationResponse:
    logger.info('📋 copy_request starting...')
    _require_selection(store, request.ids)
    copies = store.copy(request.ids)
    logger.info('✅ 📋 copy_request done.')
    return OperationResponse(
        message=f'Copied {len(copies)} files',
        affected=len(copies),
        files=[to_metadata(record) for record in copies],
    )


@router.post('/move', response_model=OperationResponse)
async def move_files(request: MoveRequest, store: FileStore = Depends(get_file_store)) -> OperationResponse:
    logger.info('📦 move_request starting...')
    folder = request.folder.strip()
    if not folder:
        raise HTTPException(status_code=400, detail='A target folder is required.')
    if has_control_chars(folder):
        logger.info('⚠️ move_request control_chars')
        raise HTTPException(status_code=400, detail='The folder name contains control characters.')
    _require_selection(store, request.ids)
    records = store.move(request.ids, folder)
    logger.info('✅ 📦 move_request done.')
    return OperationResponse(
        message=f'Moved {len(records)} files to {folder}',
        affected=len(records),
        files=[to_metadata(record) for record in records],
    )
