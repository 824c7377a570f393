"""FastAPI application serving the resource listing and API declarations."""

from __future__ import annotations

from typing import Any, Callable, Dict

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..orchestrator import ApiDocuments


class HealthResponse(BaseModel):
    status: str
    resources: int


def create_app(documents_factory: Callable[[], ApiDocuments]) -> FastAPI:
    """Create the application; documents are produced once, at creation time."""
    documents = documents_factory()
    app = FastAPI(title="goapidoc", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", resources=len(documents.api_declarations))

    @app.get("/api-docs")
    async def resource_listing() -> Dict[str, Any]:
        return documents.resource_listing

    @app.get("/api-docs/{resource:path}")
    async def api_declaration(resource: str) -> Dict[str, Any]:
        declaration = documents.api_declarations.get(resource.strip("/"))
        if declaration is None:
            raise HTTPException(status_code=404, detail=f"Unknown resource {resource}")
        return declaration

    return app


def run_service(
    documents_factory: Callable[[], ApiDocuments],
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(documents_factory)
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
