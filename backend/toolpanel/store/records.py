"""Session-lifetime list of uploaded file records."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

from ..core.logging_config import get_logger
from ..utils.files import file_extension

logger = get_logger(__name__)

STATUS_READY = 'ready'
STATUS_COPIED = 'copied'
STATUS_MOVED = 'moved'
STATUS_COMPRESSED = 'compressed'


class FileRecordNotFound(KeyError):
    def __init__(self, missing_ids: Sequence[int]) -> None:
        super().__init__(missing_ids)
        self.missing_ids = list(missing_ids)

    def __str__(self) -> str:
        joined = ', '.join(str(file_id) for file_id in self.missing_ids)
        return f'Unknown file id(s): {joined}'


@dataclass
class StoredFile:
    id: int
    name: str
    size: int
    type: str
    payload: bytes = field(repr=False)
    status: str = STATUS_READY
    folder: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_image(self) -> bool:
        return self.type.startswith('image/')

    def is_document(self, document_exts: Iterable[str]) -> bool:
        if 'document' in self.type:
            return True
        lowered = self.name.lower()
        return any(lowered.endswith(ext) for ext in document_exts)


class FileStore:
    """Ordered list of file records, mutated only by request handlers."""

    def __init__(self) -> None:
        self._records: List[StoredFile] = []
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._records)

    def _next_id(self, offset: int = 0) -> int:
        candidate = int(time.time() * 1000) + offset
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def add(self, name: str, content_type: str | None, payload: bytes, status: str = STATUS_READY) -> StoredFile:
        return self.add_many([(name, content_type, payload)], status=status)[0]

    def add_many(
        self,
        uploads: Iterable[Tuple[str, str | None, bytes]],
        status: str = STATUS_READY,
    ) -> List[StoredFile]:
        logger.info('📥 store_add starting...')
        created: List[StoredFile] = []
        for index, (name, content_type, payload) in enumerate(uploads):
            record = StoredFile(
                id=self._next_id(index),
                name=name,
                size=len(payload),
                type=content_type or '',
                payload=payload,
                status=status,
            )
            created.append(record)
        self._records.extend(created)
        logger.debug('🗂️ store_add created=%s total=%s', len(created), len(self._records))
        logger.info('✅ 📥 store_add done.')
        return created

    def list(self, kind: str | None = None, document_exts: Iterable[str] = ()) -> List[StoredFile]:
        if kind == 'image':
            return [record for record in self._records if record.is_image]
        if kind == 'document':
            exts = [ext.lower() for ext in document_exts]
            return [record for record in self._records if record.is_document(exts)]
        return list(self._records)

    def get(self, file_id: int) -> StoredFile:
        for record in self._records:
            if record.id == file_id:
                return record
        raise FileRecordNotFound([file_id])

    def require(self, file_ids: Sequence[int]) -> List[StoredFile]:
        by_id = {record.id: record for record in self._records}
        missing = [file_id for file_id in file_ids if file_id not in by_id]
        if missing:
            logger.info('⚠️ store_require missing=%s', missing)
            raise FileRecordNotFound(missing)
        return [by_id[file_id] for file_id in dict.fromkeys(file_ids)]

    def rename(self, file_ids: Sequence[int], prefix: str) -> List[StoredFile]:
        logger.info('✏️ store_rename starting...')
        records = self.require(file_ids)
        for record in records:
            extension = file_extension(record.name)
            record.name = f'{prefix}-{record.id}.{extension}' if extension else f'{prefix}-{record.id}'
        logger.info('✅ ✏️ store_rename done.')
        return records

    def delete(self, file_ids: Sequence[int]) -> List[StoredFile]:
        logger.info('🗑️ store_delete starting...')
        records = self.require(file_ids)
        doomed = {record.id for record in records}
        self._records = [record for record in self._records if record.id not in doomed]
        logger.info('✅ 🗑️ store_delete done.')
        return records

    def copy(self, file_ids: Sequence[int]) -> List[StoredFile]:
        logger.info('📋 store_copy starting...')
        records = self.require(file_ids)
        copies = [
            replace(record, id=self._next_id(index), status=STATUS_COPIED, created_at=datetime.utcnow())
            for index, record in enumerate(records)
        ]
        self._records.extend(copies)
        logger.info('✅ 📋 store_copy done.')
        return copies

    def move(self, file_ids: Sequence[int], folder: str) -> List[StoredFile]:
        logger.info('📦 store_move starting...')
        records = self.require(file_ids)
        for record in records:
            record.folder = folder
            record.status = STATUS_MOVED
        logger.info('✅ 📦 store_move done.')
        return records

    def clear(self) -> None:
        self._records.clear()
