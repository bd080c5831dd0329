from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from catalog_admin.config import CorsPolicy, get_settings
from catalog_admin.database import engine, Base
from catalog_admin.api import health, images, products, variants

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info("Starting up application...")

    # Create database tables
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")


def create_app(cors: Optional[CorsPolicy] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        cors: Cross-origin policy; defaults to the one derived from settings
    """
    cors = cors or CorsPolicy.from_settings(settings)

    application = FastAPI(
        title=settings.APP_NAME,
        description="""
        Administrative backend for the product catalog:

        - **Products**: create, replace and delete products with their variants
        - **Variants**: list, inspect, adjust stock and delete
        - **Images**: upload, replace, serve and delete product images

        Deleting a product always removes its database row; removing its image
        file is best-effort.
        """,
        version=API_VERSION,
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors.allow_origins),
        allow_credentials=cors.allow_credentials,
        allow_methods=list(cors.allow_methods),
        allow_headers=list(cors.allow_headers),
    )

    # Fixed-segment routes go before the /{product_id} routes
    application.include_router(health.router, prefix="/api")
    application.include_router(variants.router, prefix="/api")
    application.include_router(images.router, prefix="/api")
    application.include_router(products.router, prefix="/api")

    @application.get("/", tags=["Root"])
    def root():
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": API_VERSION,
            "docs": "/docs",
            "redoc": "/redoc",
            "health": "/api/health"
        }

    return application


app = create_app()
