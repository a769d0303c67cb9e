"""Typed query parameters, parsed and validated before reaching the engine.

Each ``parse`` classmethod takes the raw value as it arrived on the wire
(usually a string or ``None``) and either returns a parameter object or
raises :class:`InvalidInput`. The engine only ever sees parsed objects, so
validation happens before any scan of the catalog.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from .errors import InvalidInput

INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)


def _parse_int(raw: Any, label: str) -> int:
    if isinstance(raw, bool):
        raise InvalidInput(f"{label} must be an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and INTEGER_RE.fullmatch(raw.strip()):
        return int(raw.strip())
    raise InvalidInput(f"{label} must be an integer")


@dataclass(frozen=True)
class NameQuery:
    """Non-empty search term for name or ingredient search."""
    term: str

    @classmethod
    def parse(cls, raw: Optional[str], label: str = "Name") -> "NameQuery":
        if not isinstance(raw, str) or raw == "":
            raise InvalidInput(f"{label} parameter is required")
        return cls(term=raw)

    @property
    def folded(self) -> str:
        return self.term.casefold()


@dataclass(frozen=True)
class CuisineQuery:
    cuisine: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "CuisineQuery":
        if not isinstance(raw, str) or raw == "":
            raise InvalidInput("Cuisine parameter is required")
        return cls(cuisine=raw)

    @property
    def folded(self) -> str:
        return self.cuisine.casefold()


@dataclass(frozen=True)
class MaxTimeQuery:
    """Upper bound on cooking time, in minutes; must be positive."""
    max_minutes: int

    @classmethod
    def parse(cls, raw: Any) -> "MaxTimeQuery":
        if raw is None or raw == "":
            raise InvalidInput("Valid max parameter is required")
        try:
            value = _parse_int(raw, "max")
        except InvalidInput:
            raise InvalidInput("Valid max parameter is required") from None
        if value <= 0:
            raise InvalidInput("Valid max parameter is required")
        return cls(max_minutes=value)


@dataclass(frozen=True)
class SampleQuery:
    """Requested random sample size. Zero or negative means an empty sample."""
    count: int

    @classmethod
    def parse(cls, raw: Any, default: int = 3) -> "SampleQuery":
        if raw is None or raw == "":
            return cls(count=default)
        return cls(count=_parse_int(raw, "count"))
