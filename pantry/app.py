"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pantry.api.client_files import SinglePageFiles
from pantry.api.contracts import HealthResponse
from pantry.api.http_setup import register_exception_handlers, register_http_middleware
from pantry.auth.middleware import create_session_middleware
from pantry.auth.repository import AuthRepository
from pantry.auth.router import create_auth_router, create_validation_router
from pantry.auth.service import AuthService
from pantry.core.config import AppConfig
from pantry.core.logging import setup_logging
from pantry.core.mongo import MongoConnection
from pantry.core.mongo_migrations import apply_mongo_migrations
from pantry.recipes.repository import RecipeRepository
from pantry.recipes.router import create_recipe_router
from pantry.todos.repository import TodoRepository
from pantry.todos.router import create_todo_router

LOGGER = logging.getLogger(__name__)

APP_ROOT = Path(__file__).resolve().parent.parent


def create_app(config: AppConfig | None = None, app_root: Path = APP_ROOT) -> FastAPI:
    """Build the API app, connecting storage and wiring routers."""
    config = config or AppConfig.from_env()
    setup_logging(config.logging.level)
    LOGGER.info("Starting pantry API for %s environment", config.environment)

    mongo = MongoConnection(config.database)
    db = mongo.connect()
    apply_mongo_migrations(db)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            yield
        finally:
            mongo.close()

    app = FastAPI(title="Pantry API", version="1.0.0", lifespan=lifespan)
    app.state.config = config

    auth_service = AuthService(
        AuthRepository(app_root, db), config.session, config.auth
    )
    auth_service.bootstrap_admin_user()

    # Starlette runs the last registered middleware first: sessions are
    # restored inside the logging/size-limit layers and CORS wraps them all.
    app.middleware("http")(create_session_middleware(auth_service))
    register_http_middleware(app, config=config, logger=LOGGER)
    register_exception_handlers(app, logger=LOGGER)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.security.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    @app.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    app.include_router(create_auth_router(auth_service))
    app.include_router(create_validation_router(auth_service))
    app.include_router(create_todo_router(TodoRepository(app_root, db)))
    app.include_router(create_recipe_router(RecipeRepository(app_root, db)))

    client_dir = Path(config.server.client_dist_dir)
    if not client_dir.is_absolute():
        client_dir = app_root / client_dir
    if client_dir.is_dir():
        app.mount("/", SinglePageFiles(directory=str(client_dir)), name="client")
    else:
        LOGGER.info("Client directory %s not found, static serving disabled", client_dir)

    return app

