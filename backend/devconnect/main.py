import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from devconnect.core.config import settings
from devconnect.core.database import init_db
from devconnect.core.errors import AppError, Conflict, InternalError
from devconnect.core.logging_config import configure_logging
from devconnect.api.routes import auth, posts, profile, users
from devconnect.api.validation import format_validation_errors

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: configure logging and create missing tables
    """
    configure_logging()
    # In production, use migrations instead of create_all
    init_db()
    logger.info("DevConnect API started")
    yield


def register_exception_handlers(app: FastAPI) -> None:
    """Render errors as {"msg": ...} or {"errors": [...]} bodies"""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"errors": format_validation_errors(exc.errors())},
        )

    @app.exception_handler(StaleDataError)
    async def handle_stale_write(request: Request, exc: StaleDataError):
        logger.warning("Concurrent write rejected on %s %s", request.method, request.url.path)
        error = Conflict()
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Never leak internals to the client
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_body())


app = FastAPI(
    title="DevConnect API",
    description="Developer profiles, posts, likes and comments",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# The web client calls everything under /api
app.include_router(users.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(posts.router, prefix="/api")


@app.get("/")
async def root():
    """Service name and version"""
    return {"message": "DevConnect API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Liveness check"""
    return {"status": "healthy"}
