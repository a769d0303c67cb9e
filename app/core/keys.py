"""In-memory registry of API keys."""

import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

from .errors import InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "rapi_"
MIN_KEY_BYTES = 16


@dataclass(frozen=True)
class ApiKeyRecord:
    """An API key and the owner it was issued to."""
    key: str
    owner: str
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class KeyStore:
    """Thread-safe mapping of key string to :class:`ApiKeyRecord`.

    Lookups and issuance both hold the same lock, so a key issued by one
    thread is visible to every lookup that starts after ``issue`` returns.
    """

    def __init__(self, prefix: str = DEFAULT_KEY_PREFIX, key_bytes: int = MIN_KEY_BYTES):
        if key_bytes < MIN_KEY_BYTES:
            raise ValueError(f"key_bytes must be at least {MIN_KEY_BYTES}")
        self.prefix = prefix
        self.key_bytes = key_bytes
        self._keys: Dict[str, ApiKeyRecord] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_seed(cls, seed: Mapping[str, str], **kwargs) -> "KeyStore":
        """Build a store pre-populated with ``{key: owner}`` entries."""
        store = cls(**kwargs)
        for key, owner in seed.items():
            store.add(ApiKeyRecord(key=key, owner=owner))
        return store

    def add(self, record: ApiKeyRecord) -> ApiKeyRecord:
        with self._lock:
            if record.key in self._keys:
                raise ValueError(f"API key already registered for {self._keys[record.key].owner!r}")
            self._keys[record.key] = record
        return record

    def lookup(self, key: str) -> Optional[ApiKeyRecord]:
        with self._lock:
            return self._keys.get(key)

    def issue(self, owner: Optional[str]) -> ApiKeyRecord:
        """Mint a new active key for ``owner``."""
        if not isinstance(owner, str) or not owner.strip():
            raise InvalidInput("Name is required to generate API key")

        with self._lock:
            key = self._new_key()
            while key in self._keys:
                key = self._new_key()
            record = ApiKeyRecord(key=key, owner=owner)
            self._keys[key] = record

        logger.info(f"Issued API key for {owner!r}")
        return record

    def _new_key(self) -> str:
        return self.prefix + secrets.token_hex(self.key_bytes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys
