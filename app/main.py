"""
Blog API application factory.

Run with:
    uvicorn app.main:create_app --factory
"""
import logging
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI, Request

from apps.accounts.main import auth_router, authors_router
from apps.blog.main import router as posts_router
from apps.shared.config import Settings, setup_logging
from apps.shared.cors import setup_cors
from apps.shared.database import check_db_connection, create_db_engine, create_session_factory, init_db
from apps.shared.errors import setup_error_handlers
from apps.shared.security_headers import setup_security_headers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API.

    Without explicit settings, reads them from the environment (and a .env
    file). Missing DATABASE_URL or JWT_SECRET raises RuntimeError, so the
    server never starts half-configured.
    """
    if settings is None:
        load_dotenv(find_dotenv(usecwd=True))
        settings = Settings.from_env()

    setup_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(
        title="Blog API",
        version="1.0.0",
        description="Multi-user blog: accounts, posts and authors",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    setup_cors(app, settings)
    setup_security_headers(app)
    setup_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(authors_router)
    app.include_router(posts_router)

    @app.get("/health", tags=["health"])
    def health(request: Request):
        """Health check endpoint - returns service status and database connectivity"""
        db_connected = check_db_connection(request.app.state.engine)
        return {
            "status": "ok" if db_connected else "degraded",
            "service": "blog",
            "database": "connected" if db_connected else "disconnected",
        }

    logger.info(f"Blog API ready ({settings.environment})")
    return app
