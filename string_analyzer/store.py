import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from string_analyzer.analyzer import analyze, compute_hash
from string_analyzer.errors import DuplicateContentError
from string_analyzer.models import AnalyzedString

logger = logging.getLogger("string_analyzer.store")


class ReadWriteLock:
    """Many concurrent readers, or exactly one writer.

    New readers wait while a writer is queued, so a steady stream of reads
    cannot starve writes. Read sections must not be nested.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ContentStore:
    """In-memory collection of analyzed strings keyed by content hash.

    Lookups and deletes accept either a record id or a raw value. The token
    is always tried as a literal id first, then hashed and tried again.
    """

    def __init__(self) -> None:
        self._records: Dict[str, AnalyzedString] = {}
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)

    def create(self, value: str) -> AnalyzedString:
        props = analyze(value)
        with self._lock.write():
            if props.sha256_hash in self._records:
                logger.warning("Rejected duplicate string %s", props.sha256_hash)
                raise DuplicateContentError("String already exists in the system")
            record = AnalyzedString(
                id=props.sha256_hash,
                value=value,
                properties=props,
                created_at=datetime.now(timezone.utc),
            )
            self._records[record.id] = record
        logger.info("Stored string %s (length=%d)", record.id, props.length)
        return record

    def _resolve(self, token: str) -> Optional[str]:
        # Caller must hold the lock.
        if token in self._records:
            return token
        hashed = compute_hash(token)
        if hashed in self._records:
            return hashed
        return None

    def get(self, token: str) -> Optional[AnalyzedString]:
        with self._lock.read():
            key = self._resolve(token)
            return self._records[key] if key is not None else None

    def delete(self, token: str) -> bool:
        with self._lock.write():
            key = self._resolve(token)
            if key is None:
                return False
            del self._records[key]
        logger.info("Deleted string %s", key)
        return True

    def snapshot(self) -> List[AnalyzedString]:
        """Point-in-time copy of all records, in no particular order."""
        with self._lock.read():
            return list(self._records.values())
