from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from sqlalchemy import text

from clipkeeper.config import settings
from clipkeeper.logger import app_logger, db_logger, redis_logger
from clipkeeper.routers import (
    analytics,
    auth,
    custom_tabs,
    links,
    recommendations,
    tags,
    users,
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production else None,
    openapi_url=f"{settings.api_prefix}/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["*"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

if settings.is_production:
    # Extract hostnames from CORS origins for trusted hosts
    trusted_hosts = [
        origin.replace("https://", "").replace("http://", "")
        for origin in settings.cors_origins
    ]
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)

# Include routers
app.include_router(auth.router, prefix=settings.api_prefix, tags=["Authentication"])
app.include_router(users.router, prefix=settings.api_prefix, tags=["Users"])
app.include_router(links.router, prefix=settings.api_prefix, tags=["Links"])
app.include_router(tags.router, prefix=settings.api_prefix, tags=["Tags"])
app.include_router(
    custom_tabs.router, prefix=settings.api_prefix, tags=["Custom Tabs"]
)
app.include_router(analytics.router, prefix=settings.api_prefix, tags=["Analytics"])
app.include_router(
    recommendations.router, prefix=settings.api_prefix, tags=["Recommendations"]
)


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    app_logger.info(f"Starting {settings.app_name}")
    app_logger.info(f"Environment: {settings.environment}")
    app_logger.info(f"Platform profile: {settings.platform_profile}")

    if not settings.openai_api_key:
        app_logger.warning("OPENAI_API_KEY not set, links will be saved uncategorized")

    # Test database connection
    try:
        from clipkeeper.database import engine

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_logger.info("Database connection successful")
    except Exception as e:
        db_logger.error(f"Database connection failed: {e}")

    from clipkeeper.redis_client import redis_client

    if redis_client.client:
        redis_logger.info("Redis connection successful")
    else:
        redis_logger.warning("Redis not available (caching disabled)")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    app_logger.info("Shutting down application")

    from clipkeeper.redis_client import redis_client

    redis_client.close()


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
    }


@app.get("/health")
async def health_check():
    """Detailed health check endpoint."""
    # Test database
    db_status = "connected"
    try:
        from clipkeeper.database import engine

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = f"error: {str(e)}"

    # Test Redis
    redis_status = "connected"
    try:
        from clipkeeper.redis_client import redis_client

        if not redis_client.client or not redis_client.client.ping():
            redis_status = "disconnected"
    except Exception as e:
        redis_status = f"error: {str(e)}"

    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": "1.0.0",
        "environment": settings.environment,
        "database": db_status,
        "redis": redis_status,
    }
