"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from invoice_registry import __version__
from invoice_registry.api.access import require_open, unguarded_routes
from invoice_registry.api.v1 import router as v1_router
from invoice_registry.core.config import Settings, get_settings
from invoice_registry.core.database import SessionLocal
from invoice_registry.core.tokens import TokenCodec
from invoice_registry.middleware import RequestAuthenticatorMiddleware
from invoice_registry.services.credentials import SqlCredentialStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def check_role_seed(session_factory: sessionmaker[Session], role_name: str) -> bool:
    """Log a configuration error if the default role has not been seeded."""
    db = session_factory()
    try:
        if SqlCredentialStore(db).find_role(role_name) is None:
            logger.error(
                "Default role is missing; run the database migrations to seed roles",
                extra={"role_name": role_name},
            )
            return False
        return True
    except SQLAlchemyError as e:
        logger.warning("Could not check role seed at startup: %s", e)
        return False
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    check_role_seed(app.state.session_factory, app.state.settings.DEFAULT_ROLE_NAME)
    yield


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
    token_codec: TokenCodec | None = None,
) -> FastAPI:
    """Build the application; collaborators default to the process-wide ones."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Invoice Registry API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory or SessionLocal
    app.state.token_codec = token_codec or TokenCodec.from_settings(settings)

    # Added first so CORS (outermost) answers preflight before authentication runs.
    app.add_middleware(RequestAuthenticatorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS
        if settings.APP_ENV == "dev"
        else [o for o in settings.CORS_ALLOW_ORIGINS if o != "*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/", dependencies=[Depends(require_open)])
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Invoice Registry API"}

    unguarded = unguarded_routes(app)
    if unguarded:
        raise RuntimeError(f"Routes without an access rule: {', '.join(unguarded)}")
    return app


configure_logging(get_settings())
app = create_app()
