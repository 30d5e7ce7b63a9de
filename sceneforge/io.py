"""File helpers for the command surface. All failures surface as ResourceError."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from sceneforge.errors import ResourceError

logger = logging.getLogger(__name__)


def read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ResourceError(f"cannot read {path}: {e.strerror or e}") from e


def read_json(path: str | Path) -> Any:
    raw = read_text(path)
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResourceError(f"invalid JSON in {path}: {e.msg} (line {e.lineno})") from e


def write_text(path: str | Path, text: str) -> None:
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ResourceError(f"cannot write {path}: {e.strerror or e}") from e
    logger.debug("Wrote %s (%d bytes)", p, len(text))


def write_json(path: str | Path, value: Any) -> None:
    write_text(path, json.dumps(value, indent=2, ensure_ascii=False) + "\n")
