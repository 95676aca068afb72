import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from househunt.api.routers import (
    admin as admin_router,
    auth as auth_router,
    bookings as bookings_router,
    owner as owner_router,
    properties as properties_router,
    users as users_router,
)
from househunt.core.config import Settings, get_settings
from househunt.core.errors import register_exception_handlers
from househunt.core.security import TokenService
from househunt.db.base import Base
from househunt.db.session import build_engine, build_session_factory
from househunt.utils.images import ImageStore

logger = logging.getLogger("househunt")


def configure_logging(level: str) -> None:
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application. Engine, secret and upload dir all come from
    `settings`; nothing is shared between two apps built here.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    engine = build_engine(settings)
    image_store = ImageStore.from_settings(settings)
    image_store.ensure_dir()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database ready")
        yield
        await engine.dispose()

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    app.state.image_store = image_store

    # ---------------------------
    # CORS
    # ---------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Request logging
    # ---------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %s (%.1fms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    register_exception_handlers(app)

    # ---------------------------
    # Static files
    # ---------------------------
    app.mount(
        settings.STATIC_URL_PREFIX,
        StaticFiles(directory=str(image_store.upload_dir)),
        name="uploads",
    )

    # ---------------------------
    # Routers
    # ---------------------------
    app.include_router(auth_router.router, prefix="/api/auth", tags=["auth"])
    app.include_router(users_router.router, prefix="/api/users", tags=["users"])
    app.include_router(properties_router.router, prefix="/api/property", tags=["properties"])
    app.include_router(properties_router.public_router, prefix="/api", tags=["properties"])
    app.include_router(bookings_router.router, prefix="/api/bookings", tags=["bookings"])
    app.include_router(owner_router.router, prefix="/api/owner", tags=["owner"])
    app.include_router(admin_router.router, prefix="/api/admin", tags=["admin"])

    # ---------------------------
    # Health check
    # ---------------------------
    @app.get("/ping")
    async def ping():
        return {"status": "ok"}

    return app


# ---------------------------
# Run
# ---------------------------
if __name__ == "__main__":
    uvicorn.run("househunt.main:create_app", factory=True, host="0.0.0.0", port=5000, reload=True)
