"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkwell.core.backend import close_backend, init_backend
from inkwell.core.logging_config import get_logger, setup_logging
from inkwell.core.monitoring import initialize_logfire

from .api.v1 import auth, authors, books, comments, follows, health, likes, media, posts, users
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the shared backend client on startup and releases its realtime
    channels on shutdown. A startup failure is logged; endpoints then answer 503.
    """
    try:
        logger.info("Starting up Inkwell Server...")
        await init_backend()
        logger.info("Backend client initialized successfully")
    except Exception as e:
        logger.error(f"Backend initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Inkwell Server...")
    await close_backend()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Inkwell Server API

    Backend for a social reading platform: authors publish posts, books and videos;
    readers follow authors, like content and comment on author pages.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth")
app.include_router(authors.router, prefix=f"{constant.API_V1_STR}/authors")
app.include_router(follows.router, prefix=f"{constant.API_V1_STR}/follows")
app.include_router(likes.router, prefix=f"{constant.API_V1_STR}/likes")
app.include_router(comments.router, prefix=f"{constant.API_V1_STR}/comments")
app.include_router(posts.router, prefix=f"{constant.API_V1_STR}/posts")
app.include_router(books.router, prefix=f"{constant.API_V1_STR}/books")
app.include_router(media.router, prefix=f"{constant.API_V1_STR}/media")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
