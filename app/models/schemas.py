"""Pydantic models for API request/response schemas."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from app.core.catalog import Recipe


class RecipeOut(BaseModel):
    """A single recipe as rendered on the wire."""
    id: str = Field(description="Unique identifier for the recipe")
    name: str = Field(description="Recipe name")
    cuisine: str = Field(description="Cuisine the recipe belongs to")
    cookingTime: int = Field(ge=0, description="Cooking time in minutes")
    ingredients: List[str] = Field(default_factory=list, description="Ordered ingredient list")

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeOut":
        return cls(**recipe.to_dict())


class RecipeListResponse(BaseModel):
    """Envelope for multi-result recipe queries."""
    success: bool = True
    count: int = Field(description="Number of recipes in data")
    query: Optional[str] = Field(default=None, description="Echoed name search term")
    cuisine: Optional[str] = Field(default=None, description="Echoed cuisine filter")
    maxTime: Optional[int] = Field(default=None, description="Echoed cooking time limit")
    ingredient: Optional[str] = Field(default=None, description="Echoed ingredient search term")
    data: List[RecipeOut]


class RecipeResponse(BaseModel):
    """Envelope for a single recipe lookup."""
    success: bool = True
    data: RecipeOut


class CuisineListResponse(BaseModel):
    """Envelope for the distinct cuisine listing."""
    success: bool = True
    count: int
    data: List[str]


class GenerateKeyRequest(BaseModel):
    """Request body for /api/generate-key."""
    name: Optional[str] = Field(default=None, description="Owner of the new key")


class GenerateKeyResponse(BaseModel):
    """Response body for /api/generate-key."""
    success: bool = True
    message: str = "API key generated successfully"
    api_key: str = Field(description="The newly issued key")
    name: str = Field(description="Owner of the key")


class ErrorResponse(BaseModel):
    """Body rendered for every failed request."""
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Response body for the /health endpoint."""
    status: str = Field(description="Service status")
    version: str = Field(description="API version")
    recipes_loaded: int = Field(description="Number of recipes in the catalog")
    api_keys: int = Field(description="Number of registered API keys")


class ServiceInfo(BaseModel):
    """Response body for the service index."""
    message: str
    version: str
    documentation: str
    endpoints: Dict[str, str]
    authentication: str
    demo_keys: List[str]
