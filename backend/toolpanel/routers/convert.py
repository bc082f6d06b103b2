from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from ..core.logging_config import get_logger
from ..core.settings import Settings, get_settings
from ..services.conversion import UnsupportedFormatError, convert_document
from ..utils.files import content_disposition, target_formats

router = APIRouter(prefix='/api', tags=['convert'])
logger = get_logger(__name__)


@router.post('/convert')
async def convert(
    file: Optional[UploadFile] = File(default=None),
    target_format: Optional[str] = Form(default=None, alias='targetFormat'),
    settings: Settings = Depends(get_settings),
) -> Response:
    logger.info('🔄 convert_request starting...')
    if file is None or not (target_format or '').strip():
        logger.info('⚠️ convert_request missing_part file=%s target=%s', file is not None, target_format)
        raise HTTPException(status_code=400, detail='Missing file or target format.')
    try:
        payload = await file.read()
    finally:
        await file.close()
    if not payload:
        logger.info('⚠️ convert_request empty_file filename=%s', file.filename)
        raise HTTPException(status_code=400, detail='Uploaded file is empty.')
    try:
        result = convert_document(payload, target_format, allowed_formats=target_formats(settings))
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception('💥 convert_request error exc=%s', exc)
        raise HTTPException(status_code=500, detail=f'Conversion failed: {exc}') from exc
    logger.info('✅ 🔄 convert_request done.')
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={'Content-Disposition': content_disposition(result.filename)},
    )
