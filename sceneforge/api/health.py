"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from sceneforge import __version__
from sceneforge.dependencies import get_catalog
from sceneforge.engine.catalog import MotifCatalog
from sceneforge.engine.registry import get_registry
from sceneforge.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(catalog: MotifCatalog = Depends(get_catalog)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        templates_registered=get_registry().count,
        motifs_loaded=len(catalog),
    )
