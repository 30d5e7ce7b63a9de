"""Motif catalog (meta) and symbol manifest documents."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MotifCategory = Literal["person", "prop_real", "prop_ui", "decor"]


class MotifCatalogEntry(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str
    category: MotifCategory = "prop_ui"
    domain_tags: frozenset[str] = Field(default_factory=frozenset, alias="domainTags")
    style_tags: frozenset[str] = Field(default_factory=frozenset, alias="styleTags")


class MotifMeta(BaseModel):
    motifs: list[MotifCatalogEntry] = Field(default_factory=list)


class ManifestEntry(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    path: str
    symbol_id: str = Field(..., alias="symbolId")


class MotifManifest(BaseModel):
    version: str | int | None = None
    motifs: list[ManifestEntry] = Field(default_factory=list)
