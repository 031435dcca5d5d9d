from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
import sentry_sdk
import logging
from cloudspace.config import Settings, get_settings
from cloudspace.api.v1 import workspaces, folders, texts, files
from cloudspace.core.errors import CloudSpaceError, InternalError
from cloudspace.core.monitoring import setup_logging, PerformanceMiddleware
from cloudspace.core.rate_limit import configure_limiter
from cloudspace.db.session import Database
from cloudspace.services.naming import NamingAssistant
from cloudspace.services.storage import StorageService, create_storage_service

logger = logging.getLogger(__name__)

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = str(first["loc"][-1]) if first.get("loc") else "request"
    if first.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"

def register_exception_handlers(app: FastAPI):
    @app.exception_handler(CloudSpaceError)
    async def cloudspace_exception_handler(request: Request, exc: CloudSpaceError):
        if isinstance(exc, InternalError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
            return _error(exc.status_code, InternalError.default_message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error(exc.status_code, "Not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {str(exc)}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)

def create_app(
    settings: Settings | None = None,
    storage: StorageService | None = None,
    naming: NamingAssistant | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    setup_logging(logging.DEBUG if settings.DEBUG else logging.INFO)

    # Initialize Sentry for error tracking
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
            traces_sample_rate=1.0 if settings.ENVIRONMENT == "development" else 0.1,
        )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="CloudSpace - password protected workspaces for sharing texts and files.",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.state.settings = settings
    app.state.db = Database(settings)
    app.state.storage = storage or create_storage_service(settings)
    app.state.naming = naming or NamingAssistant(settings)
    app.state.limiter = configure_limiter(settings)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Initializing database...")
        try:
            await app.state.db.create_all()
            logger.info("Database initialized successfully")
        except SQLAlchemyError as e:
            logger.error(f"Database initialization failed: {e}")

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.db.dispose()

    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PerformanceMiddleware)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        }

    @app.get(settings.API_PREFIX)
    async def root():
        return {"message": f"{settings.APP_NAME} API"}

    app.include_router(workspaces.router, prefix=f"{settings.API_PREFIX}/workspace", tags=["Workspaces"])
    app.include_router(folders.router, prefix=f"{settings.API_PREFIX}/folder", tags=["Folders"])
    app.include_router(texts.router, prefix=f"{settings.API_PREFIX}/text", tags=["Texts"])
    app.include_router(files.router, prefix=f"{settings.API_PREFIX}/file", tags=["Files"])

    if settings.STORAGE_BACKEND == "local":
        storage_dir = Path(settings.LOCAL_STORAGE_DIR)
        storage_dir.mkdir(parents=True, exist_ok=True)
        app.mount(settings.LOCAL_STORAGE_URL_PATH, StaticFiles(directory=storage_dir), name="files")

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cloudspace.main:app",
        host=app.state.settings.HOST,
        port=app.state.settings.PORT,
        reload=app.state.settings.DEBUG,
        log_level="info"
    )
