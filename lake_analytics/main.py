"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from lake_analytics.config import settings
from lake_analytics.api.rate_limit import limiter
from lake_analytics.middleware.error_handler import ErrorHandlerMiddleware
from lake_analytics.api.v1.routers import lakes

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Data directory: {settings.data_dir}, "
                f"Bhuvan source: {settings.bhuvan_base_url or 'local files'}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    from lake_analytics.infrastructure.bhuvan_client import get_bhuvan_client
    logger.info("Shutting down application...")
    client = get_bhuvan_client()
    await client.close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Lake Analytics API for Hyderabad water bodies

    This API turns irregular environmental time series into descriptive
    analytics per lake.

    ## Features

    - **Surface-Area Aggregation**: Monthly and yearly rollups of ISRO Bhuvan
      WBIS water-surface-area observations, with seasonal means and a
      first-to-last-year trend
    - **Water-Quality Trends**: Polarity-aware trend classification for pH,
      dissolved oxygen, BOD, COD, turbidity, temperature and total coliform
    - **Quality Verdict**: Good/Moderate/Poor verdict for the latest reading
      based on ideal parameter bounds
    - **Rate Limiting**: Protects the API from abuse
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(lakes.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
