"""Image shrink-and-recompress to JPEG."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Dict, Sequence

from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.logging_config import get_logger
from ..utils.files import file_stem, format_file_size

logger = get_logger(__name__)

DEFAULT_MAX_SIDE = 1920
JPEG_MEDIA_TYPE = 'image/jpeg'


class ImageCompressionError(ValueError):
    pass


@dataclass(frozen=True)
class CompressedImage:
    content: bytes
    width: int
    height: int
    original_size: int

    @property
    def size(self) -> int:
        return len(self.content)


def fit_within(width: int, height: int, max_side: int) -> tuple[int, int]:
    """Scale (width, height) so neither side exceeds max_side, keeping aspect."""
    if width <= max_side and height <= max_side:
        return width, height
    if width >= height:
        return max_side, max(1, height * max_side // width)
    return max(1, width * max_side // height), max_side


def _flatten(image: Image.Image) -> Image.Image:
    if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
        rgba = image.convert('RGBA')
        background = Image.new('RGB', rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel('A'))
        return background
    if image.mode != 'RGB':
        return image.convert('RGB')
    return image


def compress_image(payload: bytes, quality: int, max_side: int = DEFAULT_MAX_SIDE) -> CompressedImage:
    logger.info('🗜️ compress_image starting...')
    if not 1 <= quality <= 100:
        raise ImageCompressionError(f'Quality must be between 1 and 100, got {quality}')
    try:
        with Image.open(io.BytesIO(payload)) as source:
            image = _flatten(ImageOps.exif_transpose(source))
            width, height = fit_within(image.width, image.height, max_side)
            if (width, height) != image.size:
                image = image.resize((width, height), Image.Resampling.LANCZOS)
            output = io.BytesIO()
            image.save(output, format='JPEG', quality=quality)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        logger.info('⚠️ compress_image decode_failed exc=%s', exc)
        raise ImageCompressionError(f'Unable to decode image: {exc}') from exc
    result = CompressedImage(
        content=output.getvalue(),
        width=width,
        height=height,
        original_size=len(payload),
    )
    logger.debug('📐 compress_image size=%sx%s bytes=%s->%s', width, height, len(payload), result.size)
    logger.info('✅ 🗜️ compress_image done.')
    return result


def compressed_name(name: str) -> str:
    return f'compressed-{file_stem(name)}.jpg'


def summarize(results: Sequence[CompressedImage]) -> Dict[str, Any]:
    total_original = sum(result.original_size for result in results)
    total_compressed = sum(result.size for result in results)
    saved_bytes = total_original - total_compressed
    saved_percent = round(saved_bytes / total_original * 100, 1) if total_original else 0.0
    return {
        'total_original_size': total_original,
        'total_compressed_size': total_compressed,
        'saved_bytes': saved_bytes,
        'saved_percent': saved_percent,
        'message': f'Compression finished. Saved {format_file_size(saved_bytes)} ({saved_percent}%)',
    }
