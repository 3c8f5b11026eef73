import logging
from datetime import timedelta

from fastapi import FastAPI

from task_system import __version__
from task_system.auth_routes import legacy_router, router as auth_router
from task_system.config import DEV_SIGNING_KEY, Config
from task_system.database import build_engine, init_db, make_session_factory
from task_system.handlers import register_exception_handlers
from task_system.security import make_password_context
from task_system.task_routes import router as task_router
from task_system.token_service import TokenService

logger = logging.getLogger(__name__)


def create_app(config=Config) -> FastAPI:
    """Build the API. Everything process-wide (engine, signing key) hangs off app.state."""
    if config.TOKEN_SIGNING_KEY == DEV_SIGNING_KEY:
        logger.warning("Using the development token signing key; set TOKEN_SIGNING_KEY")

    engine = build_engine(config.DATABASE_URL)
    init_db(engine)

    app = FastAPI(
        title="Task System API",
        description="Task management system",
        version=__version__,
    )
    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.token_service = TokenService(
        config.TOKEN_SIGNING_KEY, timedelta(minutes=config.TOKEN_EXPIRE_MINUTES)
    )
    app.state.pwd_context = make_password_context(config.BCRYPT_ROUNDS)

    register_exception_handlers(app)
    app.include_router(auth_router)
    app.include_router(legacy_router)
    app.include_router(task_router)
    return app
