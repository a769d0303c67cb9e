"""Core application modules."""

from .auth import AuthContext, AuthGate, extract_api_key
from .catalog import Catalog, Recipe
from .errors import Forbidden, InvalidInput, NotFound, RecipeAPIError, Unauthenticated
from .keys import ApiKeyRecord, KeyStore
from .queries import QueryEngine

__all__ = [
    "AuthContext",
    "AuthGate",
    "extract_api_key",
    "Catalog",
    "Recipe",
    "Forbidden",
    "InvalidInput",
    "NotFound",
    "RecipeAPIError",
    "Unauthenticated",
    "ApiKeyRecord",
    "KeyStore",
    "QueryEngine",
]
