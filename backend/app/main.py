"""
Memory Box Backend - FastAPI Application

Accounts, per-account photo collections and self-service password reset,
persisted in a single JSON document.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.core.exceptions import StoreUnavailableError
from app.core.security import get_credential_verifier
from app.database.connections import (
    close_redis_client,
    create_document_store,
    create_redis_client,
)
from app.routers import auth, health, photos, users
from app.routers.errors import register_exception_handlers
from app.services.mailer import Mailer, create_mailer
from app.services.password_reset_service import PasswordResetService
from app.services.photo_service import PhotoService
from app.services.reset_codes import (
    InMemoryResetCodeStore,
    RedisResetCodeStore,
    ResetCodeRegistry,
)
from app.services.user_service import UserService

logger = logging.getLogger("memorybox")


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(
    settings: Optional[Settings] = None,
    *,
    mailer: Optional[Mailer] = None,
    reset_registry: Optional[ResetCodeRegistry] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to environment settings)
        mailer: Mailer to use instead of the configured backend
        reset_registry: Registry to use instead of building one from settings
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Startup:
        - Load the document store (creating the data file if needed)
        - Build the reset code registry, mailer and services

        Shutdown:
        - Close the Redis connection if one was opened
        """
        configure_logging(settings.log_level)
        logger.info("Starting up Memory Box backend...")

        store = create_document_store(settings)
        try:
            document = store.load()
            logger.info(
                "✓ Document store loaded from %s (%d users)",
                settings.data_file,
                len(document.users),
            )
        except StoreUnavailableError as e:
            logger.warning("⚠ Document store initialization warning: %s", e)

        redis_client = None
        registry = reset_registry
        if registry is None:
            if settings.reset_store_backend == "redis":
                redis_client = create_redis_client(settings)
                code_store = RedisResetCodeStore(redis_client)
            else:
                code_store = InMemoryResetCodeStore()
            registry = ResetCodeRegistry(code_store, ttl_seconds=settings.reset_code_ttl_seconds)

        user_service = UserService(
            store,
            get_credential_verifier(settings),
            min_password_length=settings.min_password_length,
        )
        app.state.settings = settings
        app.state.document_store = store
        app.state.reset_registry = registry
        app.state.user_service = user_service
        app.state.photo_service = PhotoService(store)
        app.state.password_reset_service = PasswordResetService(
            user_service,
            registry,
            mailer or create_mailer(settings),
        )

        yield

        logger.info("Shutting down Memory Box backend...")
        close_redis_client(redis_client)

    app = FastAPI(
        title="Memory Box API",
        description="""
## Memory Box API

Personal photo boxes backed by a single JSON document.

### Features
- **Accounts**: Signup and login by email or username
- **Photos**: Ordered per-account photo collections
- **Password reset**: Emailed 6-digit codes with a short validity
        """,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(photos.router)
    app.include_router(users.router)

    @app.get("/", tags=["Root"])
    def root():
        """Root endpoint with API information."""
        return {
            "name": "Memory Box API",
            "version": "0.1.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
