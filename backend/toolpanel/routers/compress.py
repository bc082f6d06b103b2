from fastapi import APIRouter, Depends, HTTPException

from ..core.logging_config import get_logger
from ..core.settings import Settings, get_settings
from ..dependencies import get_file_store
from ..models.compress import CompressedFile, CompressRequest, CompressResponse
from ..models.files import to_metadata
from ..services.compression import ImageCompressionError, JPEG_MEDIA_TYPE, compress_image, compressed_name, summarize
from ..store import FileRecordNotFound, FileStore
from ..store.records import STATUS_COMPRESSED

router = APIRouter(prefix='/files', tags=['compress'])
logger = get_logger(__name__)


@router.post('/compress', response_model=CompressResponse)
async def compress_files(
    request: CompressRequest,
    settings: Settings = Depends(get_settings),
    store: FileStore = Depends(get_file_store),
) -> CompressResponse:
    logger.info('🗜️ compress_request starting...')
    if not request.ids:
        raise HTTPException(status_code=400, detail='No files selected.')
    try:
        records = store.require(request.ids)
    except FileRecordNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    quality = request.quality or settings.default_quality
    images = [record for record in records if record.is_image]
    skipped_files = len(records) - len(images)
    compressed = []
    for record in images:
        try:
            compressed.append((record, compress_image(record.payload, quality, settings.max_image_side)))
        except ImageCompressionError as exc:
            logger.info('⚠️ compress_request failed file_id=%s', record.id)
            raise HTTPException(status_code=400, detail=f'Compression failed: {exc}') from exc

    results = []
    for record, image in compressed:
        output = store.add(compressed_name(record.name), JPEG_MEDIA_TYPE, image.content, status=STATUS_COMPRESSED)
        results.append(
            CompressedFile(
                source_id=record.id,
                source_name=record.name,
                width=image.width,
                height=image.height,
                original_size=image.original_size,
                compressed_size=image.size,
                file=to_metadata(output),
            )
        )
    summary = summarize([image for _, image in compressed])
    logger.debug('📊 compress_request summary=%s skipped=%s', summary, skipped_files)
    logger.info('✅ 🗜️ compress_request done.')
    return CompressResponse(quality=quality, skipped_files=skipped_files, results=results, **summary)
