from contextlib import asynccontextmanager
from typing import Any, Optional
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from forumflow.core.config import settings
from forumflow.core.errors import register_exception_handlers
from forumflow.db.documents import utcnow
from forumflow.db.init_db import create_indexes
from forumflow.db.session import MongoGateway, get_gateway
from forumflow.deps import TokenVerifier
from forumflow.middleware.auth_logging import AuthLoggingMiddleware
from forumflow.middleware.request_logging import RequestLoggingMiddleware
from forumflow.modules.announcements.api.router import router as announcements_router
from forumflow.modules.auth.api.router import router as auth_router
from forumflow.modules.auth.services.firebase_auth import FirebaseTokenVerifier
from forumflow.modules.dashboard.api.router import router as dashboard_router
from forumflow.modules.posts.api.router import router as posts_router
from forumflow.modules.posts.comments.api.router import router as comments_router
from forumflow.modules.posts.votes.api.router import router as votes_router
from forumflow.modules.reports.api.router import router as reports_router
from forumflow.modules.tags.api.router import router as tags_router
from forumflow.modules.user_management.api.router import router as users_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("forumflow")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENVIRONMENT} mode")

    gateway: MongoGateway = app.state.gateway
    try:
        db = gateway.connect()
        create_indexes(db)
    except Exception as e:
        # No partial-service mode: the process exits when the database is unreachable
        logger.critical(f"Failed to connect to MongoDB: {e}")
        raise

    # Retry delays must not block the event loop
    if not await run_in_threadpool(app.state.verifier.initialize):
        logger.warning("Firebase not initialized; each authenticated request makes one more attempt")

    logger.info(f"Server {settings.PROJECT_NAME} is running")
    yield

    logger.info("Shutting down, releasing database connection")
    gateway.close()
    logger.info("Shutdown complete")


def create_app(gateway: Optional[MongoGateway] = None, verifier: Optional[TokenVerifier] = None) -> FastAPI:
    """Build the application with its persistence gateway and token verifier"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Forum backend: posts, comments, votes, tags, announcements and moderation",
        version=settings.VERSION,
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.gateway = gateway or MongoGateway(uri=settings.mongodb_uri, db_name=settings.DB_NAME)
    app.state.verifier = verifier or FirebaseTokenVerifier(settings)

    register_exception_handlers(app)

    # Add middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(AuthLoggingMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    app.include_router(auth_router, prefix="/api", tags=["authentication"])
    app.include_router(votes_router, prefix="/api/posts", tags=["votes"])
    app.include_router(comments_router, prefix="/api/posts", tags=["comments"])
    app.include_router(posts_router, prefix="/api/posts", tags=["posts"])
    app.include_router(tags_router, prefix="/api/tags", tags=["tags"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(announcements_router, prefix="/api/announcements", tags=["announcements"])
    app.include_router(reports_router, prefix="/api/reports", tags=["reports"])

    @app.get("/", tags=["system"])
    async def root() -> Any:
        return {
            "message": "Hello from ForumFlow!",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "documentation": "/docs" if settings.DEBUG else None,
        }

    @app.get("/api/test", tags=["system"])
    async def test_route() -> Any:
        return {"message": "This is a test API route"}

    @app.get("/api/health", tags=["system"])
    def health_check(gateway: MongoGateway = Depends(get_gateway)) -> Any:
        try:
            gateway.ping()
            database = "connected"
        except (PyMongoError, RuntimeError) as e:
            logger.error(f"Health check database ping failed: {e}")
            database = "disconnected"
        return {
            "status": "ok" if database == "connected" else "degraded",
            "database": database,
            "timestamp": utcnow(),
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "forumflow.main:app",
        host=settings.HOST,
        port=settings.PORT,
        timeout_graceful_shutdown=settings.SHUTDOWN_GRACE_SECONDS,
    )
