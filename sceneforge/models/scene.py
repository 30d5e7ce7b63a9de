"""Scene document model (SceneSpec v0.1)."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from sceneforge.models.tags import (
    DecorType,
    Layer,
    Role,
    resolve_decor_type,
    resolve_layer,
    resolve_prop_kind,
    resolve_role,
)

SCENE_VERSION = "0.1"

NodeType = Literal["group", "rect", "circle", "ellipse", "line", "path", "text", "image", "use"]
# bool first so JSON true stays a bool; None marks an attribute to skip
Scalar = Union[bool, int, float, str, None]


class SceneModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Node(SceneModel):
    id: str = Field(..., min_length=1)
    type: NodeType
    attrs: dict[str, Scalar] = Field(default_factory=dict)
    style: dict[str, Scalar] | None = None
    text: str | None = None
    children: list[Node] | None = None

    _role: Role = PrivateAttr(default=Role.UNKNOWN)
    _layer: Layer = PrivateAttr(default=Layer.FG)
    _decor_type: DecorType | None = PrivateAttr(default=None)
    _prop_kind: str = PrivateAttr(default="default")

    @model_validator(mode="after")
    def _text_required(self) -> Node:
        if self.type == "text" and not self.text:
            raise ValueError(f"text node must include non-empty 'text': {self.id}")
        return self

    def model_post_init(self, __context: Any) -> None:
        self._role = resolve_role(self.type, self.attrs)
        self._decor_type = resolve_decor_type(self.attrs)
        self._layer = resolve_layer(self._role, self._decor_type, self.attrs)
        self._prop_kind = resolve_prop_kind(self.attrs)

    @property
    def role(self) -> Role:
        return self._role

    @property
    def layer(self) -> Layer:
        return self._layer

    @property
    def decor_type(self) -> DecorType | None:
        return self._decor_type

    @property
    def prop_kind(self) -> str:
        return self._prop_kind

    def walk(self) -> Iterator[Node]:
        """Depth-first: this node, then its descendants in authoring order."""
        yield self
        for child in self.children or []:
            yield from child.walk()


Node.model_rebuild()


class Canvas(SceneModel):
    width: float = Field(..., strict=True)
    height: float = Field(..., strict=True)
    view_box: str = Field(..., alias="viewBox")
    bg: str | None = None


class Palette(SceneModel):
    bg: str
    fg: str
    primary: str
    accent: str
    muted: str


class Typography(SceneModel):
    font_family: str = Field(..., alias="fontFamily")
    base_size: float | None = Field(default=None, alias="baseSize")


class Theme(SceneModel):
    palette: Palette
    typography: Typography


class Defs(SceneModel):
    motifs: list[str] = Field(default_factory=list)
    raw: str = ""


class Keyframe(SceneModel):
    t: float = Field(..., strict=True, ge=0.0, le=1.0)
    value: Any


class Track(SceneModel):
    target: str = Field(..., min_length=1)
    property: str
    keyframes: list[Keyframe] = Field(..., min_length=2)


class Animation(SceneModel):
    id: str | None = None
    type: Literal["timeline"]
    tracks: list[Track] = Field(..., min_length=1)


class ReducedMotion(SceneModel):
    strategy: str


class A11y(SceneModel):
    title: str = ""
    desc: str = ""
    reduced_motion: ReducedMotion = Field(..., alias="reducedMotion")


class AutoMeta(SceneModel):
    """Provenance of an auto-generated scene: the winning candidate."""

    domain: str
    style: str
    seed: int
    candidates: int
    score: float
    layout: dict[str, Any] = Field(default_factory=dict)


class Meta(SceneModel):
    version: Literal["0.1"]
    title: str = ""
    lang: str = "en"
    seed: int | None = None
    auto: AutoMeta | None = None


class Scene(SceneModel):
    meta: Meta
    canvas: Canvas
    theme: Theme
    defs: Defs = Field(default_factory=Defs)
    nodes: list[Node] = Field(..., min_length=1)
    animations: list[Animation]
    a11y: A11y

    def iter_nodes(self) -> Iterator[Node]:
        """Every node of the tree, nested children included."""
        for node in self.nodes:
            yield from node.walk()

    def top_level(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
