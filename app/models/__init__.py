"""API models for the Recipe API service."""

from .schemas import (
    RecipeOut,
    RecipeListResponse,
    RecipeResponse,
    CuisineListResponse,
    GenerateKeyRequest,
    GenerateKeyResponse,
    ErrorResponse,
    HealthResponse,
    ServiceInfo
)

__all__ = [
    "RecipeOut",
    "RecipeListResponse",
    "RecipeResponse",
    "CuisineListResponse",
    "GenerateKeyRequest",
    "GenerateKeyResponse",
    "ErrorResponse",
    "HealthResponse",
    "ServiceInfo"
]
