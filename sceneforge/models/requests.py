"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    domain: str | None = Field(default=None, description="payments, portal or booking; detected from the brief if omitted")
    style: str | None = Field(default=None, description="glass, paper or glow; detected from the brief if omitted")
    seed: int | None = Field(default=None, description="Caller seed; falls back to brief.meta.seed, then 1")
    candidates: int | None = Field(default=None, description="Candidate layouts to score (clamped to 1..200)")
    motifs: list[str] | None = Field(
        default=None,
        description="Explicit motif universe; picked from the catalog if omitted",
    )
    brief: dict[str, Any] = Field(default_factory=dict, description="Optional brief document")


class SceneRequest(BaseModel):
    scene: dict[str, Any] = Field(..., description="Scene document (JSON)")
