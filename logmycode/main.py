import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from logmycode.api.router import api_router
from logmycode.config import settings
from logmycode.core.database import create_database
from logmycode.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: owns the database handle."""
    # Startup
    setup_logging()
    logger.info("LogMyCode API starting up")
    database = create_database(settings.database_url)
    app.state.database = database
    if not settings.summaries_enabled:
        logger.warning("ANTHROPIC_API_KEY not set; summaries will use fallback text")
    if settings.debug:
        await database.create_all()
    yield
    # Shutdown
    await database.dispose()
    logger.info("LogMyCode API shutting down")


app = FastAPI(
    title="LogMyCode API",
    description="Daily work summaries from git commits",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    """Malformed body or query: 400 with the validation details."""
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"error": "Invalid payload", "details": exc.errors()}),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": detail}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log failed requests and summary generation, skipping OPTIONS preflight."""
    # Skip OPTIONS (CORS preflight) and health checks
    if request.method == "OPTIONS" or request.url.path == "/health":
        return await call_next(request)

    response = await call_next(request)

    # Only log non-2xx or summary generation
    path = request.url.path
    if response.status_code >= 400 or path.endswith("/commits"):
        logger.info(f"{request.method} {path} → {response.status_code}")

    return response


# Include API routes
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
