"""Brief document (BriefSpec v0.1): the copy and intent a scene is generated for.

Every section is optional; unknown keys are kept so briefs can carry more than
the generator reads.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _BriefModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class BriefMeta(_BriefModel):
    title: str | None = None
    lang: str | None = None
    seed: int | None = None


class BriefIntent(_BriefModel):
    primary_goal: str | None = Field(default=None, alias="primaryGoal")
    audience: str | None = None
    tone: str | None = None
    keywords: list[str] = Field(default_factory=list)


class StoryBeat(_BriefModel):
    text: str | None = None


class BriefStory(_BriefModel):
    beats: list[StoryBeat] = Field(default_factory=list)


class BriefStyle(_BriefModel):
    illustration_style: str | None = Field(default=None, alias="illustrationStyle")
    palette_hint: str | None = Field(default=None, alias="paletteHint")


class BriefLayout(_BriefModel):
    # Non-string values are kept but substitute as empty text
    slots: dict[str, Any] = Field(default_factory=dict)

    def slot_text(self, key: str) -> str:
        value = self.slots.get(key)
        return value if isinstance(value, str) else ""


class Brief(_BriefModel):
    meta: BriefMeta = Field(default_factory=BriefMeta)
    intent: BriefIntent = Field(default_factory=BriefIntent)
    story: BriefStory = Field(default_factory=BriefStory)
    style: BriefStyle = Field(default_factory=BriefStyle)
    layout: BriefLayout = Field(default_factory=BriefLayout)
