"""sceneforge command line: one subcommand per pipeline step.

Exit codes: 0 success, 1 schema/geometry validation, 2 usage, 3 resource error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from sceneforge.compose import compose_scene, inject_motifs
from sceneforge.config import settings
from sceneforge.engine.autofill import auto_fill
from sceneforge.engine.catalog import MotifCatalog
from sceneforge.engine.config import GenerationConfig
from sceneforge.engine.selector import CandidateSelector
from sceneforge.errors import EXIT_OK, ResourceError, SceneForgeError, SchemaViolation, UsageError
from sceneforge.io import read_json, write_json, write_text
from sceneforge.lint.schema import parse_scene, validate_document
from sceneforge.lint.visual import GeometryValidator
from sceneforge.models.brief import Brief
from sceneforge.models.motifs import MotifManifest
from sceneforge.svg.serializer import render_scene
from sceneforge.svg.symbols import build_library

logger = logging.getLogger("sceneforge.cli")


def _load_brief(path: str) -> Brief:
    try:
        return Brief.model_validate(read_json(path))
    except ValidationError as e:
        raise ResourceError(f"invalid brief {path}: {e.error_count()} error(s)") from e


def _load_manifest(path: str) -> MotifManifest:
    try:
        return MotifManifest.model_validate(read_json(path))
    except ValidationError as e:
        raise ResourceError(f"invalid motif manifest {path}: {e.error_count()} error(s)") from e


# -- steps --


def cmd_autofill(args: argparse.Namespace) -> int:
    brief = _load_brief(args.brief)
    catalog = MotifCatalog.from_file(args.meta or settings.motif_meta_path or None)
    config = GenerationConfig(default_candidates=settings.default_candidates)
    result = auto_fill(
        brief,
        catalog,
        domain=args.domain,
        style=args.style,
        seed=args.seed,
        candidates=args.candidates,
        selector=CandidateSelector(catalog=catalog, config=config),
    )
    write_json(args.out, result.best.scene.to_document())
    auto = result.best.scene.meta.auto
    print(
        f"OK: auto-filled scene mother ({result.domain}/{result.style}) "
        f"candidates={auto.candidates} score={auto.score:.1f} -> {args.out}"
    )
    return EXIT_OK


def cmd_compose(args: argparse.Namespace) -> int:
    brief = _load_brief(args.brief)
    scene = read_json(args.scene)
    if not isinstance(scene, dict):
        raise ResourceError(f"scene {args.scene} must be a JSON object")
    write_json(args.out, compose_scene(brief, scene))
    print(f"OK: wrote {args.out}")
    return EXIT_OK


def cmd_inject(args: argparse.Namespace) -> int:
    scene = read_json(args.scene)
    if not isinstance(scene, dict):
        raise ResourceError(f"scene {args.scene} must be a JSON object")
    manifest_path = args.manifest or settings.motif_manifest_path
    if not manifest_path:
        raise UsageError("no motif manifest: pass --manifest or set MOTIF_MANIFEST_PATH")
    manifest = _load_manifest(manifest_path)
    out = inject_motifs(scene, manifest, base_dir=Path.cwd())
    write_json(args.out, out)
    count = len(out.get("defs", {}).get("motifs") or [])
    print(f"OK: wrote {args.out} (motifs: {count})")
    return EXIT_OK


def cmd_lint(args: argparse.Namespace) -> int:
    issues = validate_document(read_json(args.scene))
    if issues:
        raise SchemaViolation(issues)
    print(f"OK: {args.scene}")
    return EXIT_OK


def cmd_visual_lint(args: argparse.Namespace) -> int:
    scene = parse_scene(read_json(args.scene))
    GeometryValidator().check(scene)
    print(f"OK: {args.scene}")
    return EXIT_OK


def cmd_render(args: argparse.Namespace) -> int:
    scene = parse_scene(read_json(args.scene))
    write_text(args.out, render_scene(scene))
    print(f"OK: wrote {args.out}")
    return EXIT_OK


def cmd_pipeline(args: argparse.Namespace) -> int:
    """compose -> inject -> lint -> visual-lint -> render; stops at the first failing step."""
    steps: list[tuple[str, Callable[[argparse.Namespace], int], argparse.Namespace]] = [
        ("compose", cmd_compose, argparse.Namespace(brief=args.brief, scene=args.scene, out=args.out_scene)),
        ("inject", cmd_inject, argparse.Namespace(scene=args.out_scene, out=args.out_scene, manifest=args.manifest)),
        ("lint", cmd_lint, argparse.Namespace(scene=args.out_scene)),
        ("visual-lint", cmd_visual_lint, argparse.Namespace(scene=args.out_scene)),
        ("render", cmd_render, argparse.Namespace(scene=args.out_scene, out=args.out_svg)),
    ]
    for name, fn, step_args in steps:
        code = _run(name, fn, step_args)
        if code != EXIT_OK:
            logger.info("Pipeline stopped at %s (exit %d)", name, code)
            return code
    return EXIT_OK


def cmd_symbols(args: argparse.Namespace) -> int:
    sources: list[Path] = []
    for raw in args.inputs:
        p = Path(raw)
        if p.is_dir():
            sources.extend(sorted(p.glob("*.svg")))
        elif p.is_file():
            sources.append(p)
        else:
            raise ResourceError(f"no such file or directory: {raw}")
    if not sources:
        raise ResourceError("no .svg files found in inputs")

    library, entries = build_library(sources, flip=args.flip)
    write_text(args.out, library)
    if args.manifest:
        for entry in entries:
            entry.path = str(args.out)
        manifest = MotifManifest(version=1, motifs=entries)
        write_json(args.manifest, manifest.model_dump(mode="json", by_alias=True))
    print(f"OK: wrote {args.out} ({len(entries)} symbols)")
    return EXIT_OK


# -- wiring --


def _run(command: str, fn: Callable[[argparse.Namespace], int], args: argparse.Namespace) -> int:
    try:
        return fn(args)
    except SchemaViolation as e:
        for issue in e.issues:
            print(f"{command}: {issue}", file=sys.stderr)
        return e.exit_code
    except SceneForgeError as e:
        print(f"{command}: {e}", file=sys.stderr)
        return e.exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sceneforge", description="Procedural SVG scene generation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("autofill", help="Generate a scene mother from a brief")
    p.add_argument("--brief", required=True)
    p.add_argument("--out", required=True)
    p.add_argument("--domain", help="Force domain (payments, portal, booking)")
    p.add_argument("--style", help="Force style (glass, paper, glow)")
    p.add_argument("--seed", type=int)
    p.add_argument("--candidates", type=int, help="Candidate layouts to score (1-200)")
    p.add_argument("--meta", help="Motif meta JSON (default: packaged catalog)")
    p.set_defaults(func=cmd_autofill)

    p = sub.add_parser("compose", help="Fill {{slot:*}} placeholders from a brief")
    p.add_argument("--brief", required=True)
    p.add_argument("--scene", required=True)
    p.add_argument("--out", required=True)
    p.set_defaults(func=cmd_compose)

    p = sub.add_parser("inject", help="Copy motif <symbol> defs into the scene")
    p.add_argument("--scene", required=True)
    p.add_argument("--out", required=True)
    p.add_argument("--manifest")
    p.set_defaults(func=cmd_inject)

    p = sub.add_parser("lint", help="Validate the scene document shape")
    p.add_argument("--scene", required=True)
    p.set_defaults(func=cmd_lint)

    p = sub.add_parser("visual-lint", help="Check visual layout rules")
    p.add_argument("--scene", required=True)
    p.set_defaults(func=cmd_visual_lint)

    p = sub.add_parser("render", help="Render the scene to static SVG")
    p.add_argument("--scene", required=True)
    p.add_argument("--out", required=True)
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("pipeline", help="compose, inject, lint, visual-lint, render")
    p.add_argument("--brief", required=True)
    p.add_argument("--scene", required=True)
    p.add_argument("--out-scene", required=True)
    p.add_argument("--out-svg", required=True)
    p.add_argument("--manifest")
    p.set_defaults(func=cmd_pipeline)

    p = sub.add_parser("symbols", help="Wrap SVG files into a <symbol> library")
    p.add_argument("inputs", nargs="+", help="SVG files or folders of SVGs")
    p.add_argument("--out", required=True)
    p.add_argument("--flip", action=argparse.BooleanOptionalAction, default=True,
                   help="Also emit mirrored _flip symbols")
    p.add_argument("--manifest", help="Also write a motif manifest for the library")
    p.set_defaults(func=cmd_symbols)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, settings.sceneforge_log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    return _run(args.command, args.func, args)


if __name__ == "__main__":
    sys.exit(main())
