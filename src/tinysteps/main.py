"""
TinySteps FastAPI Application

Parent/child early-learning backend: daily lessons, sessions, rewards and
progress for children aged 3 to 5.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tinysteps.config import settings
from tinysteps.core.database import Store
from tinysteps.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from tinysteps.curriculum import CURRICULUM_UNITS

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Startup:
    - Create the in-memory schema

    Shutdown:
    - Close database connections
    """
    store: Store = app.state.store

    logger.info("TinySteps starting...")
    await store.initialize()
    logger.info(f"Store ready, {len(CURRICULUM_UNITS)} curriculum units loaded")

    yield

    logger.info("TinySteps shutting down...")
    await store.dispose()


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400, like core validation failures."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(store: Store | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store: State owner for this app (a fresh in-memory Store by default)

    Returns:
        Configured FastAPI app instance
    """
    configure_logging()

    app = FastAPI(
        title="TinySteps",
        description="Daily lessons, sessions and progress for young learners",
        version=VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.store = store or Store()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_local else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Domain errors
    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NotFoundError, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ForbiddenError, forbidden_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]

    # Health check endpoints
    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "TinySteps",
            "status": "operational",
            "version": VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health"], response_model=None)
    async def health_check() -> JSONResponse:
        """Health check endpoint for load balancers.

        Returns:
            - status: healthy/unhealthy
            - checks: Individual health checks
        """
        checks: dict[str, dict[str, Any]] = {}

        # Store health
        try:
            await app.state.store.ping()
            checks["store"] = {"status": "healthy"}
        except Exception as e:
            checks["store"] = {"status": "unhealthy", "error": str(e)}

        checks["curriculum"] = {"status": "healthy", "units": len(CURRICULUM_UNITS)}

        # Overall status
        all_healthy = all(check["status"] == "healthy" for check in checks.values())
        status_code = 200 if all_healthy else 503

        return JSONResponse(
            status_code=status_code,
            content={
                "status": "healthy" if all_healthy else "unhealthy",
                "environment": settings.ENVIRONMENT,
                "checks": checks,
            },
        )

    @app.get("/health/ready", tags=["Health"], response_model=None)
    async def readiness_check() -> dict[str, str] | JSONResponse:
        """Readiness check for Kubernetes.

        Returns 200 when app is ready to serve traffic.
        """
        try:
            await app.state.store.ping()
            return {"status": "ready"}
        except Exception:
            return JSONResponse(
                status_code=503,
                content={"status": "not_ready"},
            )

    @app.get("/health/live", tags=["Health"])
    async def liveness_check() -> dict[str, str]:
        """Liveness check for Kubernetes.

        Returns 200 if app is alive (even if not fully functional).
        """
        return {"status": "alive"}

    # Register API routers
    from tinysteps.api.v1 import analytics, children, parents

    app.include_router(parents.router, prefix="/api/v1", tags=["Parents"])
    app.include_router(children.router, prefix="/api/v1/children", tags=["Children"])
    app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["Analytics"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tinysteps.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for containerized deployment
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
