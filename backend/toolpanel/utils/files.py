"""Filename and size helpers for the toolbox backend."""

from __future__ import annotations

from urllib.parse import quote

from ..core.logging_config import get_logger
from ..core.settings import Settings

logger = get_logger(__name__)

SIZE_UNITS = ('Bytes', 'KB', 'MB', 'GB')


def document_extensions(settings: Settings) -> set[str]:
    logger.info('🧾 document_extensions starting...')
    extensions = {ext.strip().lower() for ext in settings.document_exts.split(',') if ext.strip()}
    logger.debug(f'📎 {extensions = }')
    logger.info('✅ 🧾 document_extensions done.')
    return extensions


def target_formats(settings: Settings) -> set[str]:
    logger.info('🎯 target_formats starting...')
    formats = {normalize_format(fmt) for fmt in settings.target_formats.split(',') if fmt.strip()}
    logger.debug(f'📎 {formats = }')
    logger.info('✅ 🎯 target_formats done.')
    return formats


def normalize_format(value: str | None) -> str:
    return (value or '').strip().lower().lstrip('.')


def file_extension(name: str) -> str | None:
    """Return the text after the last dot, or None when the name has no dot."""
    if '.' not in name:
        return None
    return name.rsplit('.', 1)[-1]


def file_stem(name: str) -> str:
    """Return the name up to its first dot."""
    return name.split('.', 1)[0]


def format_file_size(size_bytes: int) -> str:
    if size_bytes == 0:
        return '0 Bytes'
    index = 0
    while abs(size_bytes) >= 1024 ** (index + 1) and index < len(SIZE_UNITS) - 1:
        index += 1
    value = round(size_bytes / 1024 ** index, 2)
    if value == int(value):
        value = int(value)
    return f'{value} {SIZE_UNITS[index]}'


def content_disposition(filename: str) -> str:
    """Build an attachment header, falling back to RFC 5987 for non-ASCII or unprintable names."""
    if filename.isascii() and filename.isprintable() and '"' not in filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=utf-8''{quote(filename)}"


def has_control_chars(value: str) -> bool:
    return any(not char.isprintable() for char in value)
