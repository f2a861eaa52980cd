"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from debtpilot.api.middleware import RequestIDMiddleware, MetricsMiddleware
from debtpilot.api.v1 import dashboard, finance, insights, simulation, stress, suggestions
from debtpilot.infrastructure.observability.logging import setup_logging
from debtpilot.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="DebtPilot",
        description="Loan amortization, debt stress scoring and payoff simulation service",
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
    app.include_router(finance.router, prefix="/v1", tags=["finance"])
    app.include_router(simulation.router, prefix="/v1", tags=["simulation"])
    app.include_router(stress.router, prefix="/v1", tags=["stress"])
    app.include_router(suggestions.router, prefix="/v1", tags=["suggestions"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])

    return app


app = create_app()
