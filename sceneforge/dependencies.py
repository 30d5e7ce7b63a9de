"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from sceneforge.config import settings
from sceneforge.engine.catalog import MotifCatalog


def get_settings():
    return settings


@lru_cache(maxsize=1)
def get_catalog() -> MotifCatalog:
    return MotifCatalog.from_file(settings.motif_meta_path or None)
