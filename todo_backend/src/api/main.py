from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..infrastructure.container import build_container
from ..infrastructure.observability import setup_logging
from ..infrastructure.settings import Settings, get_settings
from .errors import register_error_handlers
from .routers import todo_service

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "TodoService RPCs: create, read, update, start, complete and delete todos.",
    },
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    This is the composition root: settings are read (from the environment
    unless given), logging is configured, the persistence backend is built
    and its use cases are attached to app.state.container.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    container = build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Todo service started, backend={settings.persistence_backend}")
        yield
        container.close()
        logger.info("Todo service shutting down")

    app = FastAPI(
        title="Todo Backend",
        description="Todo service exposed as unary JSON RPCs over a layered domain/application/infrastructure core.",
        version="0.2.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.container = container

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=7200,
    )

    @app.middleware("http")
    async def log_rpc(request: Request, call_next):
        if not request.url.path.startswith(f"/{todo_service.SERVICE_NAME}/"):
            return await call_next(request)
        procedure = request.url.path
        start = time.perf_counter()
        logger.info("RPC start", extra={"procedure": procedure})
        try:
            response = await call_next(request)
        except Exception:
            # unhandled errors are answered by the outermost error handler
            logger.error(
                "RPC failed",
                extra={
                    "procedure": procedure,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    "error_code": "internal",
                },
            )
            raise
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        if response.status_code >= 400:
            logger.warning(
                f"RPC error status={response.status_code}",
                extra={"procedure": procedure, "duration_ms": duration_ms},
            )
        else:
            logger.info("RPC success", extra={"procedure": procedure, "duration_ms": duration_ms})
        return response

    register_error_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the active backend.
        """
        healthy = container.health_check()
        return {
            "message": "Healthy" if healthy else "Unhealthy",
            "backend": settings.persistence_backend,
        }

    app.include_router(todo_service.router)
    return app


def main() -> None:
    """Run the RPC server on the configured port."""
    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
