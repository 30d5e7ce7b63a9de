"""MotifCatalog — read-only index of motif ids to category/domain/style tags."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from sceneforge.engine.rng import Mulberry32, layout_seed
from sceneforge.errors import ResourceError
from sceneforge.io import read_json
from sceneforge.models.motifs import MotifCatalogEntry, MotifMeta

logger = logging.getLogger(__name__)

DEFAULT_META_PATH = Path(__file__).resolve().parent.parent / "data" / "motifs.meta.json"

# Person silhouettes generated from the Open Peeps effigy set share this prefix.
PERSON_PREFIX = "opeeps_effigy_"

# Real-world anchors each domain always wants when the catalog has them.
REQUIRED_BY_DOMAIN: dict[str, tuple[str, ...]] = {
    "payments": (
        "credit_card_handdrawn",
        "receipt_handdrawn",
        "invoice_handdrawn",
        "lucide_shield_check",
        "lucide_lock",
        "lucide_wallet",
    ),
    "portal": (
        "phone_handdrawn",
        "chat_bubble_handdrawn",
        "receipt_handdrawn",
        "lucide_user",
        "lucide_file_text",
        "lucide_message_circle",
    ),
    "booking": (
        "calendar_handdrawn",
        "lucide_calendar_clock",
        "lucide_timer",
        "lucide_map",
        "lucide_badge",
    ),
}

# The paper template cannot be drawn without its frame, shading and tape.
PAPER_REQUIRED: tuple[str, ...] = ("paper_frame", "pencil_shade_bl", "tape_strip", "doodle_sparkles")


class MotifCatalog:
    """Lookup and filtering over motif meta entries. Never mutated after load."""

    def __init__(self, entries: Iterable[MotifCatalogEntry] = ()) -> None:
        self._by_id: dict[str, MotifCatalogEntry] = {}
        for entry in entries:
            self._by_id[entry.id] = entry

    @classmethod
    def from_document(cls, data: Any) -> MotifCatalog:
        try:
            meta = MotifMeta.model_validate(data)
        except ValidationError as e:
            raise ResourceError(f"invalid motif meta document: {e.error_count()} error(s)") from e
        return cls(meta.motifs)

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> MotifCatalog:
        target = Path(path) if path else DEFAULT_META_PATH
        catalog = cls.from_document(read_json(target))
        logger.info("Loaded motif catalog: %d entries from %s", len(catalog), target)
        return catalog

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, motif_id: object) -> bool:
        return motif_id in self._by_id

    def __iter__(self) -> Iterator[MotifCatalogEntry]:
        return iter(self._by_id.values())

    def lookup(self, motif_id: str) -> MotifCatalogEntry | None:
        return self._by_id.get(motif_id)

    def filter(self, domain: str, style: str) -> list[str]:
        """Ids tagged with both ``domain`` and ``style``, sorted lexicographically."""
        return sorted(
            e.id for e in self._by_id.values() if domain in e.domain_tags and style in e.style_tags
        )

    def is_person(self, motif_id: str) -> bool:
        entry = self._by_id.get(motif_id)
        if entry is not None:
            return entry.category == "person"
        return motif_id.startswith(PERSON_PREFIX)


def pick_motifs(catalog: MotifCatalog, domain: str, style: str, seed: int) -> list[str]:
    """Choose the motif universe for one scene: anchors, one person, a few props and decor."""
    by_category: dict[str, list[str]] = {"person": [], "prop_real": [], "prop_ui": [], "decor": []}
    for motif_id in catalog.filter(domain, style):
        entry = catalog.lookup(motif_id)
        by_category[entry.category].append(motif_id)

    rand = Mulberry32(layout_seed(seed, domain, style))

    picked: set[str] = {m for m in REQUIRED_BY_DOMAIN.get(domain, ()) if m in catalog}

    person = rand.pick_one(by_category["person"])
    if person is not None:
        picked.add(person)

    picked.update(rand.pick_some([m for m in by_category["prop_real"] if m not in picked], rand.randint(1, 3)))
    picked.update(rand.pick_some([m for m in by_category["prop_ui"] if m not in picked], rand.randint(2, 4)))

    want_decor = rand.randint(2, 3) if style == "paper" else rand.randint(1, 2)
    picked.update(rand.pick_some([m for m in by_category["decor"] if m not in picked], want_decor))

    if style == "paper":
        picked.update(PAPER_REQUIRED)

    return sorted(picked)
