"""POST /api/render — validated scene document to static SVG."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from sceneforge.errors import SchemaViolation
from sceneforge.lint.schema import parse_scene
from sceneforge.models.requests import SceneRequest
from sceneforge.models.responses import RenderResponse
from sceneforge.svg.parser import read_layers
from sceneforge.svg.serializer import render_scene

router = APIRouter()


@router.post("/render", response_model=RenderResponse)
async def render(req: SceneRequest) -> RenderResponse:
    try:
        scene = parse_scene(req.scene)
    except SchemaViolation as e:
        raise HTTPException(status_code=422, detail=e.issues) from e

    svg = render_scene(scene)
    return RenderResponse(svg=svg, layers=read_layers(svg))
