"""POST /api/lint — schema issues, then geometry rules for a valid document."""

from __future__ import annotations

from fastapi import APIRouter

from sceneforge.lint.schema import parse_scene, validate_document
from sceneforge.lint.visual import GeometryValidator
from sceneforge.models.requests import SceneRequest
from sceneforge.models.responses import LintIssue, LintResponse

router = APIRouter()


@router.post("/lint", response_model=LintResponse)
async def lint(req: SceneRequest) -> LintResponse:
    issues = validate_document(req.scene)
    if issues:
        return LintResponse(valid=False, issues=[LintIssue(kind="schema", message=i) for i in issues])

    violations = GeometryValidator().validate(parse_scene(req.scene))
    return LintResponse(
        valid=not violations,
        issues=[LintIssue(kind=v.rule, message=v.message, node_id=v.node_id) for v in violations],
    )
