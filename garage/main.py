import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware
from starlette.staticfiles import StaticFiles

# Load environment variables as early as possible
load_dotenv()

from .config import Settings, get_settings
from .database import build_engine, create_db_and_tables
from .exceptions import (
    GarageError,
    garage_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .infrastructure.storage.local_storage import LocalStorageRepository
from .middleware import ErrorHandlingMiddleware, LoggingMiddleware, RequestSizeLimitMiddleware, SecurityMiddleware
from .routers import catalog_router, motorcycles_router, uploads_router
from .schemas.common.common import DatabaseStatus, HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {app.state.settings.APP_NAME}...")
    app.state.db_init_ok = True
    app.state.db_init_error = None
    app.state.storage.ensure_dir()
    try:
        create_db_and_tables(app.state.engine)
        logger.info("Database initialized successfully")
    except Exception as e:
        # Do not crash the app; report via health endpoint
        app.state.db_init_ok = False
        app.state.db_init_error = str(e)
        logger.exception("Database initialization failed")
    yield
    # Shutdown
    logger.info(f"Shutting down {app.state.settings.APP_NAME}...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=("/docs" if settings.DOCS_ENABLED else None),
        redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
        openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None),
    )

    # Process-wide resources, injected into handlers through app.state
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.storage = LocalStorageRepository(settings.UPLOAD_DIR)

    app.add_exception_handler(GarageError, garage_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Last added runs outermost; the size cap sits inside logging and security headers
    app.add_middleware(ErrorHandlingMiddleware, debug=settings.DEBUG)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(motorcycles_router.router)
    app.include_router(uploads_router.router)
    app.include_router(catalog_router.router)

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        return HealthResponse(
            status="healthy" if getattr(app.state, "db_init_ok", True) else "degraded",
            service=settings.APP_NAME,
            version=settings.APP_VERSION,
            timestamp=datetime.now(timezone.utc).isoformat(),
            database=DatabaseStatus(
                ok=getattr(app.state, "db_init_ok", True),
                error=getattr(app.state, "db_init_error", None),
            ),
        )

    # Mount static files for uploaded images
    app.mount("/uploads", StaticFiles(directory=app.state.storage.upload_dir, check_dir=False), name="uploads")

    # Built gallery front-end last, so it never shadows the API
    if settings.FRONTEND_DIR and os.path.isdir(settings.FRONTEND_DIR):
        app.mount("/", StaticFiles(directory=settings.FRONTEND_DIR, html=True), name="frontend")

    return app


app = create_app()


# ------------------------
# Run with correct PORT in local/production
# ------------------------
if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "garage.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
