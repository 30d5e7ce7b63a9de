"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    templates_registered: int = 0
    motifs_loaded: int = 0


class GenerateResponse(BaseModel):
    scene: dict[str, Any]
    domain: str
    style: str
    seed: int
    score: float
    candidates: int
    motifs: list[str] = Field(default_factory=list)


class LintIssue(BaseModel):
    kind: str
    message: str
    node_id: str = ""


class LintResponse(BaseModel):
    valid: bool
    issues: list[LintIssue] = Field(default_factory=list)


class RenderResponse(BaseModel):
    svg: str
    layers: dict[str, list[str]] = Field(default_factory=dict)
