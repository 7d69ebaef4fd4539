# SPDX-License-Identifier: MIT
"""
Finding persistence.

Stores only know how to load and save the whole findings collection.
``FindingRepository`` wraps a store and runs every read-modify-write cycle
under a re-entrant thread lock plus the store's own lock. For
``JsonFileFindingStore`` that is an exclusive lock on a sidecar
``<file>.lock``, so concurrent updates from threads or from separate
processes sharing the file never overwrite each other's changes.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Callable, ContextManager, Iterator, List, Optional, Protocol

from filelock import FileLock, Timeout

from jsleak.core.exceptions import FindingStoreError
from jsleak.core.findings import Finding

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 60.0


class FindingStore(Protocol):
    """Durable storage for the complete findings collection."""

    def retrieve_findings(self) -> List[Finding]:
        ...

    def store_findings(self, findings: List[Finding]) -> None:
        ...

    def lock(self) -> ContextManager[object]:
        """Exclusive access to the underlying storage."""
        ...


class InMemoryFindingStore:
    """Store that keeps serialized findings in memory."""

    def __init__(self, findings: Optional[List[Finding]] = None):
        self._data = [f.to_dict() for f in findings or []]

    def retrieve_findings(self) -> List[Finding]:
        # Return fresh objects so callers cannot mutate the stored state
        return [Finding.from_dict(d) for d in self._data]

    def store_findings(self, findings: List[Finding]) -> None:
        self._data = [f.to_dict() for f in findings]

    def lock(self) -> ContextManager[object]:
        return nullcontext()


class JsonFileFindingStore:
    """Store that persists findings as a JSON list on disk."""

    def __init__(self, path: str, lock_timeout: float = DEFAULT_LOCK_TIMEOUT):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.lock_timeout = lock_timeout
        self._file_lock = FileLock(str(self.lock_path))

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the sidecar lock file; re-entrant within a thread."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._file_lock.acquire(timeout=self.lock_timeout)
        except Timeout:
            raise FindingStoreError(
                f"Timed out waiting for lock {self.lock_path}", store_path=str(self.path)
            )
        try:
            yield
        finally:
            self._file_lock.release()

    def retrieve_findings(self) -> List[Finding]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise FindingStoreError(f"Failed to read findings: {e}", store_path=str(self.path))

        if not isinstance(data, list):
            raise FindingStoreError("Findings file must contain a list", store_path=str(self.path))
        try:
            return [Finding.from_dict(d) for d in data]
        except (KeyError, ValueError, TypeError) as e:
            raise FindingStoreError(f"Malformed finding record: {e}", store_path=str(self.path))

    def store_findings(self, findings: List[Finding]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=".findings-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([finding.to_dict() for finding in findings], f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise FindingStoreError(f"Failed to write findings: {e}", store_path=str(self.path))


class FindingRepository:
    """Serialized access to a FindingStore."""

    def __init__(self, store: FindingStore):
        self.store = store
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[List[Finding]]:
        """
        Yield the current findings and write them back on clean exit.

        The whole read-modify-write cycle holds the repository lock and the
        store's lock. If the block raises, nothing is written.
        """
        with self._lock, self.store.lock():
            findings = self.store.retrieve_findings()
            yield findings
            self.store.store_findings(findings)

    def all(self) -> List[Finding]:
        with self._lock:
            return self.store.retrieve_findings()

    def get(self, fingerprint: str) -> Optional[Finding]:
        for finding in self.all():
            if finding.fingerprint == fingerprint:
                return finding
        return None

    def update(self, fingerprint: str, mutate: Callable[[Finding], None]) -> Optional[Finding]:
        """Apply ``mutate`` to the stored finding with this fingerprint."""
        with self.transaction() as findings:
            for finding in findings:
                if finding.fingerprint == fingerprint:
                    mutate(finding)
                    return finding
        logger.debug("No stored finding for fingerprint %s", fingerprint[:12])
        return None

    def contains_value(self, value: str) -> bool:
        """Whether any stored finding already holds this secret value."""
        return any(finding.contains_value(value) for finding in self.all())
