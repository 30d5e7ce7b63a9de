"""POST /api/generate — best-scoring scene for a domain/style/seed."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from sceneforge.config import Settings
from sceneforge.dependencies import get_catalog, get_settings
from sceneforge.engine.autofill import auto_fill, detect_domain, detect_style, resolve_seed
from sceneforge.engine.catalog import MotifCatalog
from sceneforge.engine.config import GenerationConfig
from sceneforge.engine.selector import CandidateSelector
from sceneforge.models.brief import Brief
from sceneforge.models.requests import GenerateRequest
from sceneforge.models.responses import GenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GenerateResponse)
def generate(
    req: GenerateRequest,
    catalog: MotifCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> GenerateResponse:
    try:
        brief = Brief.model_validate(req.brief)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"invalid brief: {e.error_count()} error(s)") from e

    selector = CandidateSelector(
        catalog=catalog,
        config=GenerationConfig(default_candidates=settings.default_candidates),
    )

    if req.motifs is not None:
        domain = detect_domain(brief, req.domain)
        style = detect_style(brief, req.style)
        seed = resolve_seed(brief, req.seed)
        motifs = sorted(set(req.motifs))
        best = selector.generate(domain, style, seed, motifs, req.candidates)
    else:
        result = auto_fill(
            brief,
            catalog,
            domain=req.domain,
            style=req.style,
            seed=req.seed,
            candidates=req.candidates,
            selector=selector,
        )
        domain, style, seed, motifs, best = result.domain, result.style, result.seed, result.motifs, result.best

    return GenerateResponse(
        scene=best.scene.to_document(),
        domain=domain,
        style=style,
        seed=seed,
        score=best.score,
        candidates=best.scene.meta.auto.candidates,
        motifs=motifs,
    )
