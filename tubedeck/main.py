import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .api import register_routes
from .logging import configure_logging
from .config import get_settings
from .database.init_db import init_database
from .exceptions import ValidationError, UpstreamError, StateStoreCorruptedError
from .middleware.logging import RequestLoggingMiddleware
from .middleware.security import SecurityHeadersMiddleware
from .sentry import init_sentry

settings = get_settings()

configure_logging(settings.app.log_level)
init_sentry()

logger = logging.getLogger(__name__)

app = FastAPI(title="YouTube Automation Dashboard")

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,  # Use CORS origins from settings
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(StateStoreCorruptedError)
async def state_store_error_handler(request: Request, exc: StateStoreCorruptedError) -> JSONResponse:
    logger.error(f"Refusing to serve dashboard: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": f"Stored state is corrupted (slot: {exc.slot})"}
    )


# The slot table is the whole schema, so it is created on every start
if not init_database():
    logger.error("State slot table could not be created; dashboard requests will fail")

register_routes(app)
