from __future__ import annotations

from fastapi import FastAPI

from protodoc.api.routes.health import router as health_router
from protodoc.api.routes.render import router as render_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="protodoc API",
        description="Generate API documentation from protobuf schemas.",
        version="0.1.0",
    )

    app.include_router(health_router, include_in_schema=False)
    app.include_router(render_router)

    return app
