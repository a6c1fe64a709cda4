import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# -------------------------------------------------------
# ⚙️ Core Imports
# -------------------------------------------------------
from . import __version__
from .core.bootstrap import wait_for_database
from .core.config import Settings, get_settings
from .core.db import Database
from .core.logging_config import configure_logging
from .core.security import PasswordHasher
from .routers import router as api_router
from .services.accounts import AccountService
from .services.storage import UploadStorage

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    # -------------------------------------------------------
    # 🚀 FastAPI Initialization
    # -------------------------------------------------------
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=__version__,
        description="User accounts: signup, login and password-reset stub",
    )

    database = Database(settings)
    storage = UploadStorage(settings.UPLOADS_DIR)
    hasher = PasswordHasher(settings.BCRYPT_ROUNDS)

    app.state.settings = settings
    app.state.database = database
    app.state.storage = storage
    app.state.accounts = AccountService(database, hasher, storage)

    # -------------------------------------------------------
    # 🗂️ Uploaded profile images
    # -------------------------------------------------------
    app.mount("/uploads", StaticFiles(directory=str(storage.root)), name="uploads")

    # -------------------------------------------------------
    # 🌐 CORS Middleware
    # -------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    # -------------------------------------------------------
    # 🏁 Startup / Shutdown
    # -------------------------------------------------------
    @app.on_event("startup")
    def on_startup():
        """Wait for the store, then make sure the schema exists."""
        logger.info("Environment: %s", settings.ENVIRONMENT)
        logger.info("Database: %s", settings.safe_database_url)
        logger.info("Uploads dir: %s", storage.root)
        logger.info("bcrypt rounds: %s", settings.BCRYPT_ROUNDS)

        # UpstreamUnavailable propagates: the server refuses to start
        wait_for_database(
            database,
            attempts=settings.DB_CONNECT_ATTEMPTS,
            base_delay=settings.DB_RETRY_BASE_DELAY,
            max_delay=settings.DB_RETRY_MAX_DELAY,
        )
        database.create_all()
        logger.info("✅ Database ready.")

    @app.on_event("shutdown")
    def on_shutdown():
        database.dispose()

    # -------------------------------------------------------
    # 🔗 Router Registration
    # -------------------------------------------------------
    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
