"""FastAPI application for the Recipe API."""

import logging
import random
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request, Security
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader, APIKeyQuery
from starlette.exceptions import HTTPException as StarletteHTTPException
from cachetools import TTLCache

from app.models.schemas import (
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
from app.core.auth import AuthContext, AuthGate, extract_api_key
from app.core.catalog import Catalog
from app.core.errors import RecipeAPIError, Unauthenticated
from app.core.keys import KeyStore
from app.core.params import CuisineQuery, MaxTimeQuery, NameQuery, SampleQuery
from app.core.queries import QueryEngine
from config.settings import (
    API_KEY_HEADER,
    API_KEY_QUERY_PARAM,
    ENDPOINTS,
    Settings,
    get_settings
)

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)
api_key_query = APIKeyQuery(name=API_KEY_QUERY_PARAM, auto_error=False)


def get_engine(request: Request) -> QueryEngine:
    return request.app.state.engine


def get_key_store(request: Request) -> KeyStore:
    return request.app.state.key_store


def get_query_cache(request: Request) -> TTLCache:
    return request.app.state.query_cache


def require_api_key(
    request: Request,
    header_key: Optional[str] = Security(api_key_header),
    query_key: Optional[str] = Security(api_key_query)
) -> AuthContext:
    """Dependency that rejects requests without a valid, active key."""
    candidate = extract_api_key(header_key, query_key)
    return request.app.state.auth_gate.authenticate(candidate)


def _recipe_list(recipes, **context) -> RecipeListResponse:
    return RecipeListResponse(
        count=len(recipes),
        data=[RecipeOut.from_recipe(r) for r in recipes],
        **context
    )


def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers
    )


def create_app(
    settings: Optional[Settings] = None,
    catalog: Optional[Catalog] = None,
    key_store: Optional[KeyStore] = None,
    rng: Optional[random.Random] = None
) -> FastAPI:
    """Build the application.

    Collaborators that are not passed in are created from ``settings`` when
    the application starts: the catalog is read from ``settings.recipes_path``
    and the key store is seeded from ``settings.seed_api_keys``.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)
    logging.getLogger("app").setLevel(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info(f"Starting {settings.app_name}...")

        loaded = catalog if catalog is not None else Catalog.load(settings.recipes_path)
        logger.info(f"Catalog ready with {len(loaded)} recipes")

        store = key_store
        if store is None:
            store = KeyStore.from_seed(
                settings.seed_api_keys,
                prefix=settings.api_key_prefix,
                key_bytes=settings.api_key_bytes
            )
            logger.info(f"Seeded {len(store)} API keys")

        source = rng
        if source is None and settings.random_seed is not None:
            source = random.Random(settings.random_seed)

        app.state.catalog = loaded
        app.state.engine = QueryEngine(loaded, rng=source)
        app.state.key_store = store
        app.state.auth_gate = AuthGate(store)
        app.state.query_cache = TTLCache(maxsize=settings.cache_maxsize, ttl=settings.cache_ttl)

        yield

        logger.info(f"Shutting down {settings.app_name}...")

    app = FastAPI(
        title=settings.app_name,
        description="Query a fixed recipe catalog with an API key",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RecipeAPIError)
    async def recipe_error_handler(request: Request, exc: RecipeAPIError):
        headers = {"WWW-Authenticate": "ApiKey"} if isinstance(exc, Unauthenticated) else None
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return _error(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return _error(exc.status_code, message, getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def fault_handler(request: Request, exc: Exception):
        logger.exception(f"Server error on {request.method} {request.url.path}")
        return _error(500, "Internal server error")

    @app.get("/", response_model=ServiceInfo, tags=["Info"])
    async def index():
        """Describe the service and how to authenticate."""
        return ServiceInfo(
            message=settings.app_name,
            version=settings.app_version,
            documentation="Use /api endpoints with valid API key",
            endpoints=ENDPOINTS,
            authentication=(
                f'Include API key in header "{API_KEY_HEADER}" '
                f'or query parameter "{API_KEY_QUERY_PARAM}"'
            ),
            demo_keys=list(settings.seed_api_keys)
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Check service health and status."""
        return HealthResponse(
            status="healthy",
            version=settings.app_version,
            recipes_loaded=len(request.app.state.catalog),
            api_keys=len(request.app.state.key_store)
        )

    @app.get(
        "/api/recipes",
        response_model=RecipeListResponse,
        response_model_exclude_none=True,
        tags=["Recipes"]
    )
    async def list_recipes(
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine)
    ):
        """Get all recipes in catalog order."""
        return _recipe_list(engine.list_all())

    @app.get(
        "/api/recipes/search",
        response_model=RecipeListResponse,
        response_model_exclude_none=True,
        tags=["Recipes"]
    )
    async def search_recipes(
        name: Optional[str] = Query(None, description="Substring of the recipe name"),
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine),
        cache: TTLCache = Depends(get_query_cache)
    ):
        """Search recipes by name."""
        query = NameQuery.parse(name, label="Name")

        cache_key = ("name", query.folded)
        if cache_key not in cache:
            cache[cache_key] = engine.search_by_name(query)
        return _recipe_list(cache[cache_key], query=query.term)

    @app.get(
        "/api/recipes/cuisine/{cuisine}",
        response_model=RecipeListResponse,
        response_model_exclude_none=True,
        tags=["Recipes"]
    )
    async def recipes_by_cuisine(
        cuisine: str,
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine),
        cache: TTLCache = Depends(get_query_cache)
    ):
        """Filter recipes by cuisine, ignoring case."""
        query = CuisineQuery.parse(cuisine)

        cache_key = ("cuisine", query.folded)
        if cache_key not in cache:
            cache[cache_key] = engine.filter_by_cuisine(query)
        return _recipe_list(cache[cache_key], cuisine=query.cuisine)

    @app.get(
        "/api/recipes/time",
        response_model=RecipeListResponse,
        response_model_exclude_none=True,
        tags=["Recipes"]
    )
    async def recipes_by_time(
        max_time: Optional[str] = Query(None, alias="max", description="Maximum cooking time in minutes"),
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine),
        cache: TTLCache = Depends(get_query_cache)
    ):
        """Filter recipes by maximum cooking time."""
        query = MaxTimeQuery.parse(max_time)

        cache_key = ("time", query.max_minutes)
        if cache_key not in cache:
            cache[cache_key] = engine.filter_by_max_time(query)
        return _recipe_list(cache[cache_key], maxTime=query.max_minutes)

    @app.get(
        "/api/recipes/ingredient",
        response_model=RecipeListResponse,
        response_model_exclude_none=True,
        tags=["Recipes"]
    )
    async def recipes_by_ingredient(
        name: Optional[str] = Query(None, description="Substring of an ingredient"),
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine),
        cache: TTLCache = Depends(get_query_cache)
    ):
        """Search recipes by ingredient."""
        query = NameQuery.parse(name, label="Ingredient name")

        cache_key = ("ingredient", query.folded)
        if cache_key not in cache:
            cache[cache_key] = engine.search_by_ingredient(query)
        return _recipe_list(cache[cache_key], ingredient=query.term)

    @app.get("/api/recipes/{recipe_id}", response_model=RecipeResponse, tags=["Recipes"])
    async def get_recipe(
        recipe_id: str,
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine)
    ):
        """Get a specific recipe by ID."""
        return RecipeResponse(data=RecipeOut.from_recipe(engine.get_by_id(recipe_id)))

    @app.get(
        "/api/random",
        response_model=RecipeListResponse,
        response_model_exclude_none=True,
        tags=["Recipes"]
    )
    async def random_recipes(
        count: Optional[str] = Query(None, description="Number of recipes to sample"),
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine)
    ):
        """Get a random sample of recipes."""
        query = SampleQuery.parse(count, default=settings.random_sample_default)
        return _recipe_list(engine.random_sample(query))

    @app.get("/api/cuisines", response_model=CuisineListResponse, tags=["Cuisines"])
    async def list_cuisines(
        auth: AuthContext = Depends(require_api_key),
        engine: QueryEngine = Depends(get_engine)
    ):
        """List all available cuisines."""
        cuisines = engine.distinct_cuisines()
        return CuisineListResponse(count=len(cuisines), data=cuisines)

    @app.post("/api/generate-key", response_model=GenerateKeyResponse, tags=["Keys"])
    async def generate_key(
        body: Optional[GenerateKeyRequest] = None,
        key_store: KeyStore = Depends(get_key_store)
    ):
        """Issue a new API key. No existing key is required."""
        record = key_store.issue(body.name if body else None)
        return GenerateKeyResponse(api_key=record.key, name=record.owner)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug
    )
