"""Text extraction helpers per extension, used for document previews."""

from __future__ import annotations

import io
from pathlib import PurePath
from typing import Optional

import docx2txt
from pypdf import PdfReader

from ..core.logging_config import get_logger

logger = get_logger(__name__)

TEXT_SUFFIXES = {'.md', '.txt'}


def load_document_bytes(name: str, payload: bytes) -> Optional[str]:
    logger.info('📚 load_document_bytes starting...')
    suffix = PurePath(name).suffix.lower()
    try:
        if suffix == '.pdf':
            return _load_pdf(payload)
        if suffix == '.docx':
            return docx2txt.process(io.BytesIO(payload))
        if suffix in TEXT_SUFFIXES:
            return payload.decode('utf-8', errors='ignore')
    except Exception as exc:
        logger.exception('💥 load_document_bytes error name=%s exc=%s', name, exc)
        return None
    logger.warning('⚠️ unsupported_extension name=%s', name)
    return None


def _load_pdf(payload: bytes) -> str:
    reader = PdfReader(io.BytesIO(payload))
    output = io.StringIO()
    for page in reader.pages:
        text = page.extract_text() or ''
        output.write(text)
        output.write('\n')
    return output.getvalue()
