"""<symbol> helpers: pull one out of a motif file, or wrap an SVG document as one."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from sceneforge.errors import ResourceError
from sceneforge.io import read_text
from sceneforge.models.motifs import ManifestEntry
from sceneforge.svg.serializer import format_value

logger = logging.getLogger(__name__)

SYMBOL_PREFIX = "motif_"

_PROLOG_RE = re.compile(r"^\s*(?:<\?xml[^>]*\?>\s*|<!--.*?-->\s*|<!DOCTYPE[^>]*>\s*)*", re.DOTALL | re.IGNORECASE)
_SVG_OPEN_RE = re.compile(r"^<svg\b([^>]*)>", re.IGNORECASE)
_SVG_CLOSE_RE = re.compile(r"</svg>\s*$", re.IGNORECASE)
_VIEWBOX_RE = re.compile(r"""\bviewBox=("[^"]+"|'[^']+')""", re.IGNORECASE)

_SYMBOL_CLOSE = "</symbol>"


def extract_symbol(svg_text: str, symbol_id: str) -> str | None:
    """The ``<symbol>...</symbol>`` element with the given id, or None."""
    if not svg_text or not symbol_id:
        return None
    start = svg_text.find(f'<symbol id="{symbol_id}"')
    if start == -1:
        start = svg_text.find(f"<symbol id='{symbol_id}'")
    if start == -1:
        # id attribute not first: find it, then walk back to the opening tag
        hit = svg_text.find(f'id="{symbol_id}"')
        if hit == -1:
            hit = svg_text.find(f"id='{symbol_id}'")
        if hit != -1:
            start = svg_text.rfind("<symbol", 0, hit)
    if start == -1:
        return None
    end = svg_text.find(_SYMBOL_CLOSE, start)
    if end == -1:
        return None
    return svg_text[start:end + len(_SYMBOL_CLOSE)]


def parse_view_box(view_box: str) -> tuple[float, float, float, float]:
    parts = view_box.split()
    if len(parts) != 4:
        raise ResourceError(f"invalid viewBox: {view_box!r}")
    try:
        min_x, min_y, width, height = (float(p) for p in parts)
    except ValueError as e:
        raise ResourceError(f"invalid viewBox: {view_box!r}") from e
    return min_x, min_y, width, height


def svg_to_symbol(svg_markup: str, symbol_id: str) -> tuple[str, str]:
    """Wrap an SVG document's content in a ``<symbol>``. Returns (markup, viewBox)."""
    body = _PROLOG_RE.sub("", svg_markup, count=1)
    m = _SVG_OPEN_RE.match(body)
    if not m:
        raise ResourceError("expected an <svg> root element")
    vb = _VIEWBOX_RE.search(m.group(1))
    if not vb:
        raise ResourceError("SVG root has no viewBox")
    view_box = vb.group(1)[1:-1]
    inner = _SVG_CLOSE_RE.sub("", body[m.end():]).strip()
    return f'<symbol id="{symbol_id}" viewBox="{view_box}">{inner}</symbol>', view_box


def make_flip_symbol(base_id: str, view_box: str) -> str:
    """Horizontally mirrored ``<base_id>_flip`` symbol referencing the original."""
    min_x, _, width, _ = parse_view_box(view_box)
    tx = format_value(2 * min_x + width)
    return (
        f'<symbol id="{base_id}_flip" viewBox="{view_box}">'
        f'<g transform="translate({tx} 0) scale(-1 1)"><use href="#{base_id}" /></g></symbol>'
    )


def build_library(sources: Iterable[Path], flip: bool = True) -> tuple[str, list[ManifestEntry]]:
    """Symbol library document for a set of SVG files, plus manifest entries for it.

    Each file becomes ``motif_<stem>`` (and ``motif_<stem>_flip`` when ``flip``).
    The manifest entries carry no path; the caller fills in where the library lands.
    """
    symbols: list[str] = []
    entries: list[ManifestEntry] = []
    seen: set[str] = set()
    for src in sorted(Path(s) for s in sources):
        motif_id = src.stem.replace("-", "_")
        if motif_id in seen:
            logger.warning("Skipping %s: motif id %s already built", src, motif_id)
            continue
        seen.add(motif_id)
        base_id = f"{SYMBOL_PREFIX}{motif_id}"
        symbol, view_box = svg_to_symbol(read_text(src), base_id)
        symbols.append(symbol)
        entries.append(ManifestEntry(id=motif_id, path="", symbolId=base_id))
        if flip:
            symbols.append(make_flip_symbol(base_id, view_box))
            entries.append(ManifestEntry(id=f"{motif_id}_flip", path="", symbolId=f"{base_id}_flip"))
    header = "<!-- Generated by sceneforge symbols -->"
    library = f'<svg xmlns="http://www.w3.org/2000/svg" style="display:none">\n{header}\n' + "\n".join(symbols) + "\n</svg>\n"
    logger.info("Built %d symbols from %d files", len(symbols), len(seen))
    return library, entries
