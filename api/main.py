import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from auth import security
from core import db, errors, log_config, settings
from core.log_route import LoggingRoute
from core.middleware import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process, if a database is configured.
    if db.is_configured():
        await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


def create_app() -> FastAPI:
    log_config.configure_logging()

    app = FastAPI(title=settings.app_name(), lifespan=lifespan)
    # Routes declared on the app itself get entry/exit logging too.
    app.router.route_class = LoggingRoute

    # Middleware added last runs first: CORS -> login -> request context.
    app.add_middleware(RequestContextMiddleware, username_resolver=security.resolve_username)
    security.install_security(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    errors.install_exception_handlers(app)

    app.include_router(auth_router.router, tags=["auth"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/health/db")
    async def health_db() -> dict:
        if not db.is_configured():
            return {"status": "disabled"}
        try:
            ok = await db.ping()
        except Exception as exc:
            logger.exception("db_health_check_failed")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database check failed.",
            ) from exc
        if not ok:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database check failed.",
            )
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": f"{settings.app_name()} api"}

    return app


app = create_app()
