"""EV charging infrastructure API: FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL, TOKEN_CACHE_MAXSIZE, TOKEN_CACHE_TTL_S

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
from fastapi.middleware.cors import CORSMiddleware

from api.charging_station_types import router as charging_station_types_router
from api.charging_stations import router as charging_stations_router
from api.connectors import router as connectors_router
from api.tokens import router as tokens_router
from auth.token_cache import TokenCache
from db import session_scope
from repositories.charging_station_type_repository import seed_default_charging_station_types
from schemas.health import HealthResponse
from utils.errors import ApiError

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="EV Charging Infrastructure API",
    description="Charging station types, charging stations and connectors behind short-lived bearer tokens",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One cache per process, shared by every request.
app.state.token_cache = TokenCache(default_ttl=TOKEN_CACHE_TTL_S, maxsize=TOKEN_CACHE_MAXSIZE)

app.include_router(tokens_router, prefix=API_PREFIX)
app.include_router(charging_station_types_router, prefix=API_PREFIX)
app.include_router(charging_stations_router, prefix=API_PREFIX)
app.include_router(connectors_router, prefix=API_PREFIX)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> Response:
    """Categorized errors become {"error": message}; not-found is an empty 404."""
    LOG.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Wrong types or missing fields in body or query are format errors (400)."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    LOG.warning("%s %s -> 400 %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.get(f"{API_PREFIX}/health", response_model=HealthResponse)
def api_health() -> HealthResponse:
    """Health check; no token required."""
    return HealthResponse()


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations and seed default charging station types."""
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    _seed_charging_station_types_if_empty()


def _seed_charging_station_types_if_empty() -> None:
    """Insert the default types on first start; later starts leave the table alone."""
    with session_scope() as db:
        seed_default_charging_station_types(db)


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "ev-charging-api", "docs": "/docs", "health": f"{API_PREFIX}/health"}
