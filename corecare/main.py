from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from prometheus_fastapi_instrumentator import Instrumentator
import uvicorn
import logging
import sys

from corecare.core.config import settings
from corecare.core.database_utils import check_connection, find_missing_tables
from corecare.middleware.performance import PerformanceMiddleware
from corecare.middleware.api_auth import APIKeyMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting up CoreCare Backend...")

    try:
        missing_tables = find_missing_tables()
        if missing_tables:
            logger.warning(f"Missing database tables: {missing_tables}")
            logger.warning("Run `alembic upgrade head` or `python scripts/setup_database.py` before serving traffic")
        else:
            logger.info("All required database tables exist")
    except Exception as e:
        logger.warning(f"Could not check database tables: {e}")

    yield

    logger.info("Shutting down CoreCare Backend...")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request data"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if not loc:
        return "Invalid request data"
    return f"Invalid value for {'.'.join(loc)}: {first.get('msg', 'invalid')}"


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    logger.info(f"Creating application for {settings.ENVIRONMENT.value} environment")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="CoreCare - heart rate, blood pressure, BMI and wellness tracking",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    # API key gate reads settings per request so it can be toggled without a restart
    app.add_middleware(APIKeyMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS configured with origins: {settings.CORS_ORIGINS}")

    app.add_middleware(PerformanceMiddleware)

    from corecare.api.v1.api import api_router
    app.include_router(api_router, prefix=settings.API_V1_STR)

    if settings.METRICS_ENABLED:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")
        logger.info("Prometheus metrics exposed at /metrics")

    register_exception_handlers(app)
    register_system_routes(app)
    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render every HTTP error in the app's response envelope"""
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code}: {exc.detail} - {request.url}")
        else:
            logger.info(f"HTTP {exc.status_code}: {exc.detail} - {request.url.path}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info(f"HTTP 400: {message} - {request.url.path}")
        return JSONResponse(status_code=400, content={"status": "error", "message": message})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled exceptions"""
        logger.exception(f"Unhandled exception: {exc} - {request.url}")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Internal server error"},
        )


def register_system_routes(app: FastAPI) -> None:
    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint that redirects to API documentation"""
        return RedirectResponse(url=f"{settings.API_V1_STR}/docs")

    @app.get("/health", tags=["Health Check"])
    def health_check():
        """Health check endpoint"""
        db_status = "healthy" if check_connection() else "unhealthy"
        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "version": settings.VERSION,
            "project": settings.PROJECT_NAME,
            "environment": settings.ENVIRONMENT.value,
            "database": db_status,
        }


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    uvicorn.run(
        "corecare.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
