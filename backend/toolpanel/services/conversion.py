"""Document conversion.

Conversion is a relabel: the payload is returned unchanged under the requested
extension. A real converter would plug in here behind the same result type.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable

from ..core.logging_config import get_logger
from ..utils.files import file_stem, normalize_format

logger = get_logger(__name__)

OCTET_STREAM = 'application/octet-stream'


class UnsupportedFormatError(ValueError):
    pass


@dataclass(frozen=True)
class ConversionResult:
    content: bytes
    filename: str
    media_type: str = OCTET_STREAM


def convert_document(
    payload: bytes,
    target_format: str,
    allowed_formats: Iterable[str],
    source_name: str | None = None,
) -> ConversionResult:
    logger.info('🔄 convert_document starting...')
    fmt = normalize_format(target_format)
    allowed = set(allowed_formats)
    if fmt not in allowed:
        logger.info('⚠️ convert_document unsupported_format=%s', target_format)
        raise UnsupportedFormatError(f'Unsupported target format: {target_format}')
    if source_name:
        filename = f'converted-{file_stem(source_name)}.{fmt}'
    else:
        filename = f'converted-{int(time.time() * 1000)}.{fmt}'
    logger.debug('📄 convert_document filename=%s size=%s', filename, len(payload))
    logger.info('✅ 🔄 convert_document done.')
    return ConversionResult(content=payload, filename=filename)
