"""
Connection cache.

Maps a cache key derived from repository URL and credentials to the
resolved ConnectionHandle. Entries are never evicted; they are replaced on
forced refresh or removed explicitly.
"""

import hashlib
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from gitlab_connector.connection import ConnectionHandle
from gitlab_connector.descriptor import RepositoryDescriptor


def password_hash(password: str) -> str:
    """Return the SHA256 hex digest of a password."""
    # Lone surrogates are valid in a str but not in UTF-8.
    return hashlib.sha256(password.encode("utf-8", errors="surrogatepass")).hexdigest()


def cache_key(descriptor: RepositoryDescriptor) -> str:
    """
    Compute the cache key for a repository descriptor.

    The key is ``url?username=<username>&password_hash=<sha256>``. It is
    identical for identical (url, username, password) triples and never
    contains the password itself. Keys are for lookup only; do not log them.

    Args:
        descriptor: The repository descriptor

    Returns:
        Cache key string
    """
    return (
        f"{descriptor.url}?username={descriptor.username}"
        f"&password_hash={password_hash(descriptor.password)}"
    )


@dataclass
class _KeyLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class ConnectionCache:
    """
    Thread-safe map from cache key to ConnectionHandle.

    Create one cache at startup and pass it to every resolver that should
    share connections. Besides the map itself the cache serializes
    resolution of the same key through ``locked(key)``, while different
    repositories resolve in parallel. A key's lock lives only while some
    caller holds or waits for it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handles: dict[str, ConnectionHandle] = {}
        self._key_locks: dict[str, _KeyLock] = {}

    @contextmanager
    def locked(self, key: str) -> Iterator[None]:
        """
        Hold the lock serializing resolution of ``key``.

        Usage:
            with cache.locked(key):
                ...
        """
        with self._lock:
            entry = self._key_locks.get(key)
            if entry is None:
                entry = self._key_locks[key] = _KeyLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._key_locks[key]

    def pending_keys(self) -> int:
        """Number of keys currently being resolved or waited on."""
        with self._lock:
            return len(self._key_locks)

    def get(self, key: str) -> ConnectionHandle | None:
        with self._lock:
            return self._handles.get(key)

    def put(self, key: str, handle: ConnectionHandle) -> None:
        """Store ``handle`` under ``key``, replacing any previous entry."""
        with self._lock:
            self._handles[key] = handle

    def remove(self, key: str) -> ConnectionHandle | None:
        with self._lock:
            return self._handles.pop(key, None)

    def clear(self) -> None:
        """Drop all cached connections."""
        with self._lock:
            self._handles.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._handles

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)
