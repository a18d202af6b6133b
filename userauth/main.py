import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from userauth.core.config import settings
from userauth.core.database import init_db
from userauth.api.middleware import register_middleware
from userauth.api.routes import users

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: create the users table if it does not exist
    """
    init_db()
    logger.info("Database ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="UserAuth API",
        description="User registration, login and account management",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware - allows browser frontends to call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middleware(app)

    app.include_router(users.router)

    @app.get("/")
    async def root():
        """Root endpoint - API information"""
        return {"message": "UserAuth API", "version": "1.0.0"}

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    return app


app = create_app()
