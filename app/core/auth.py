"""API key authentication gate."""

from dataclasses import dataclass
from typing import Optional

from .errors import Forbidden, Unauthenticated
from .keys import KeyStore


@dataclass(frozen=True)
class AuthContext:
    """Identity attached to an authorized request."""
    key: str
    owner: str


def extract_api_key(header: Optional[str], query: Optional[str]) -> Optional[str]:
    """Pick the candidate key; the header wins over the query parameter.

    Empty values count as absent.
    """
    if header:
        return header
    if query:
        return query
    return None


class AuthGate:
    """Validates candidate keys against a :class:`KeyStore`."""

    def __init__(self, key_store: KeyStore):
        self.key_store = key_store

    def authenticate(self, candidate: Optional[str]) -> AuthContext:
        if not candidate:
            raise Unauthenticated(
                'API key required. Include in header as "x-api-key" '
                'or query parameter "api_key"'
            )

        record = self.key_store.lookup(candidate)
        if record is None or not record.active:
            raise Forbidden("Invalid or inactive API key")

        return AuthContext(key=record.key, owner=record.owner)
