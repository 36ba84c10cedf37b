"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fin_health.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fin_health.api.v1 import score, stats, insights, categories
from fin_health.infrastructure.observability.logging import setup_logging
from fin_health.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Financial Health Score",
        description="Behavioural financial health score and spending insights",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(score.router, prefix="/v1", tags=["score"])
    app.include_router(stats.router, prefix="/v1", tags=["stats"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])
    app.include_router(categories.router, prefix="/v1", tags=["categories"])

    return app


app = create_app()
