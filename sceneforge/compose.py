"""Document-level steps between a scene mother and a renderable scene.

Both steps work on the raw JSON document, so they run before (and independent
of) schema validation.
"""

from __future__ import annotations

import copy
import logging
import re
from pathlib import Path
from typing import Any

from sceneforge.errors import ResourceError
from sceneforge.io import read_text
from sceneforge.models.brief import Brief
from sceneforge.models.motifs import MotifManifest
from sceneforge.svg.symbols import extract_symbol

logger = logging.getLogger(__name__)

SLOT_RE = re.compile(r"\{\{\s*slot:([a-zA-Z0-9_-]+)\s*\}\}")


def fill_slots(value: Any, brief: Brief) -> Any:
    """Replace ``{{slot:key}}`` placeholders in a string; other values pass through."""
    if not isinstance(value, str):
        return value
    return SLOT_RE.sub(lambda m: brief.layout.slot_text(m.group(1)), value)


def _fill_node(node: Any, brief: Brief) -> None:
    if not isinstance(node, dict):
        return
    if node.get("type") == "text":
        node["text"] = fill_slots(node.get("text"), brief)
    for key in ("attrs", "style"):
        mapping = node.get(key)
        if isinstance(mapping, dict):
            for name, value in mapping.items():
                mapping[name] = fill_slots(value, brief)
    children = node.get("children")
    if isinstance(children, list):
        for child in children:
            _fill_node(child, brief)


def compose_scene(brief: Brief, scene: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``scene`` with the brief's slots and meta applied. Animations are untouched."""
    out = copy.deepcopy(scene)

    meta = out.setdefault("meta", {})
    if brief.meta.title and not meta.get("title"):
        meta["title"] = brief.meta.title
    if brief.meta.lang:
        meta["lang"] = brief.meta.lang
    if brief.meta.seed is not None:
        meta["seed"] = brief.meta.seed

    a11y = out.get("a11y")
    headline = brief.layout.slot_text("headline")
    if isinstance(a11y, dict) and headline and not a11y.get("title"):
        a11y["title"] = headline

    nodes = out.get("nodes")
    if isinstance(nodes, list):
        for node in nodes:
            _fill_node(node, brief)
    return out


def inject_motifs(
    scene: dict[str, Any],
    manifest: MotifManifest,
    base_dir: str | Path = ".",
) -> dict[str, Any]:
    """Copy of ``scene`` whose ``defs.raw`` carries the symbols of every listed motif.

    Source files are read once each; a symbol shared by several motif ids is
    emitted once.
    """
    out = copy.deepcopy(scene)
    defs = out.setdefault("defs", {})
    raw_ids = defs.get("motifs")
    motif_ids = [m for m in raw_ids if isinstance(m, str) and m.strip()] if isinstance(raw_ids, list) else []
    if not motif_ids:
        logger.info("No motifs to inject")
        return out

    by_id = {entry.id: entry for entry in manifest.motifs}
    missing = [m for m in motif_ids if m not in by_id or not by_id[m].path or not by_id[m].symbol_id]
    if missing:
        raise ResourceError(f"missing motif ids: {', '.join(missing)}")

    base = Path(base_dir)
    files: dict[Path, str] = {}
    symbols: dict[str, str] = {}
    for motif_id in motif_ids:
        entry = by_id[motif_id]
        src = (base / entry.path).resolve()
        if src not in files:
            files[src] = read_text(src)
        symbol = extract_symbol(files[src], entry.symbol_id)
        if symbol is None:
            raise ResourceError(f'failed to extract symbolId="{entry.symbol_id}" from {entry.path}')
        symbols.setdefault(entry.symbol_id, symbol.strip())

    user_raw = defs.get("raw").strip() if isinstance(defs.get("raw"), str) else ""
    defs["raw"] = "\n".join(part for part in (user_raw, "\n".join(symbols.values())) if part)
    logger.info("Injected %d symbols from %d files", len(symbols), len(files))
    return out
