"""Pydantic models for the Figma scene graph and variable store.

Scene nodes form a closed tagged union keyed by the Figma ``type`` string:
one model per supported kind plus ``OtherNode`` for everything else. Field
names are snake_case; camelCase Figma keys are accepted through aliases.

All models are frozen: the scene tree is a read-only snapshot.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

# Figma types for the document root container (plugin API / REST API)
ROOT_CONTAINER_TYPES = frozenset({"PAGE", "CANVAS"})


class FigmaModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# =====================================================================
# Paints
# =====================================================================


class Color(FigmaModel):
    """Normalized RGBA color, each channel in [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class ColorStop(FigmaModel):
    color: Color
    position: float


class VariableAlias(FigmaModel):
    """Reference from a node property to a Figma variable."""

    id: str
    type: str = "VARIABLE_ALIAS"


def _first_alias(value: Any) -> Any:
    # Text properties bind per character range; Figma sends a list.
    if isinstance(value, list):
        return value[0] if value else None
    return value


class PaintBoundVariables(FigmaModel):
    color: Optional[VariableAlias] = None


class Paint(FigmaModel):
    """A fill or stroke.

    ``type`` is kept as the raw Figma string (SOLID, GRADIENT_LINEAR,
    GRADIENT_RADIAL, IMAGE, ...) so unknown paints survive parsing.
    """

    type: str
    visible: bool = True
    opacity: float = 1.0
    color: Optional[Color] = None
    gradient_stops: Optional[List[ColorStop]] = None
    gradient_transform: Optional[List[List[float]]] = None
    bound_variables: PaintBoundVariables = Field(default_factory=PaintBoundVariables)


# =====================================================================
# Variable bindings
# =====================================================================


class BoundVariables(FigmaModel):
    """Per-property variable bindings of a node."""

    x: Optional[VariableAlias] = None
    y: Optional[VariableAlias] = None
    width: Optional[VariableAlias] = None
    height: Optional[VariableAlias] = None
    min_width: Optional[VariableAlias] = None
    max_width: Optional[VariableAlias] = None
    min_height: Optional[VariableAlias] = None
    max_height: Optional[VariableAlias] = None
    item_spacing: Optional[VariableAlias] = None
    padding_left: Optional[VariableAlias] = None
    padding_right: Optional[VariableAlias] = None
    padding_top: Optional[VariableAlias] = None
    padding_bottom: Optional[VariableAlias] = None
    corner_radius: Optional[VariableAlias] = None
    top_left_radius: Optional[VariableAlias] = None
    top_right_radius: Optional[VariableAlias] = None
    bottom_left_radius: Optional[VariableAlias] = None
    bottom_right_radius: Optional[VariableAlias] = None
    stroke_weight: Optional[VariableAlias] = None
    characters: Optional[VariableAlias] = None
    font_size: Optional[VariableAlias] = None
    font_weight: Optional[VariableAlias] = None

    @field_validator("*", mode="before")
    @classmethod
    def _unwrap_lists(cls, value: Any) -> Any:
        return _first_alias(value)


# =====================================================================
# Scene nodes
# =====================================================================


class BaseSceneNode(FigmaModel):
    """Fields every scene node carries."""

    type: str
    id: str = ""
    name: str = ""
    parent_type: Optional[str] = None

    # None when the source gives no position (no x/y line is emitted)
    x: Optional[float] = None
    y: Optional[float] = None
    width: float = 0.0
    height: float = 0.0
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None

    item_spacing: Optional[float] = None
    layout_align: Optional[str] = None
    padding_left: Optional[float] = None
    padding_right: Optional[float] = None
    padding_top: Optional[float] = None
    padding_bottom: Optional[float] = None

    opacity: float = 1.0
    bound_variables: BoundVariables = Field(default_factory=BoundVariables)
    children: List[BaseSceneNode] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def _parse_children(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return []
        parent_type = info.data.get("type")
        children = []
        for child in value:
            if isinstance(child, dict):
                if "parent_type" not in child and "parentType" not in child:
                    child = {**child, "parent_type": parent_type}
                child = parse_node(child)
            children.append(child)
        return children

    @property
    def is_root_child(self) -> bool:
        """True when the parent is the document root container (a page)."""
        return self.parent_type in ROOT_CONTAINER_TYPES


class PaintedNode(BaseSceneNode):
    fills: List[Paint] = Field(default_factory=list)
    strokes: List[Paint] = Field(default_factory=list)
    stroke_weight: Optional[float] = None


class FrameNode(BaseSceneNode):
    type: Literal["FRAME"] = "FRAME"
    layout_mode: str = "NONE"


class RectangleLikeNode(PaintedNode):
    """Nodes rendered as a Slint ``Rectangle``."""

    corner_radius: Optional[float] = None
    top_left_radius: Optional[float] = None
    top_right_radius: Optional[float] = None
    bottom_left_radius: Optional[float] = None
    bottom_right_radius: Optional[float] = None


class RectangleNode(RectangleLikeNode):
    type: Literal["RECTANGLE"] = "RECTANGLE"


class EllipseNode(RectangleLikeNode):
    type: Literal["ELLIPSE"] = "ELLIPSE"


class GroupNode(RectangleLikeNode):
    type: Literal["GROUP"] = "GROUP"


class ComponentNode(RectangleLikeNode):
    type: Literal["COMPONENT"] = "COMPONENT"


class InstanceNode(BaseSceneNode):
    type: Literal["INSTANCE"] = "INSTANCE"
    component_id: Optional[str] = None


class TextNode(BaseSceneNode):
    type: Literal["TEXT"] = "TEXT"
    characters: str = ""
    fills: List[Paint] = Field(default_factory=list)
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[float] = None
    text_align_horizontal: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_typography(cls, data: Any) -> Any:
        """Accept both the REST ``style`` object and the plugin ``fontName``."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        style = data.pop("style", None) or {}
        for key in ("fontFamily", "fontSize", "fontWeight", "textAlignHorizontal"):
            if key in style and key not in data:
                data[key] = style[key]
        font_name = data.pop("fontName", None)
        if isinstance(font_name, dict) and "fontFamily" not in data:
            data["fontFamily"] = font_name.get("family")
        return data


class PathNode(PaintedNode):
    """Nodes rendered as a Slint ``Path``."""


class LineNode(PathNode):
    type: Literal["LINE"] = "LINE"


class VectorNode(PathNode):
    type: Literal["VECTOR"] = "VECTOR"


class OtherNode(BaseSceneNode):
    """Any Figma node type without a dedicated model."""


SceneNode = Union[
    FrameNode,
    RectangleNode,
    EllipseNode,
    GroupNode,
    ComponentNode,
    InstanceNode,
    TextNode,
    LineNode,
    VectorNode,
    OtherNode,
]

NODE_TYPES: Dict[str, Type[BaseSceneNode]] = {
    "FRAME": FrameNode,
    "RECTANGLE": RectangleNode,
    "ELLIPSE": EllipseNode,
    "GROUP": GroupNode,
    "COMPONENT": ComponentNode,
    "INSTANCE": InstanceNode,
    "TEXT": TextNode,
    "LINE": LineNode,
    "VECTOR": VectorNode,
}


def parse_node(data: Dict[str, Any]) -> BaseSceneNode:
    """Build the scene model matching ``data["type"]`` (recursively)."""
    model = NODE_TYPES.get(data.get("type", ""), OtherNode)
    return model.model_validate(data)


# =====================================================================
# Variable store / components
# =====================================================================


class Variable(FigmaModel):
    id: str
    name: str
    variable_collection_id: str


class VariableMode(FigmaModel):
    mode_id: str
    name: str = ""


class VariableCollection(FigmaModel):
    id: str
    name: str
    modes: List[VariableMode] = Field(default_factory=list)

    @property
    def mode_count(self) -> int:
        return len(self.modes)


class MainComponent(FigmaModel):
    """Definition an instance points at."""

    id: str
    name: str
    component_set_name: Optional[str] = None

    @property
    def declared_name(self) -> str:
        # Variants live in a component set; the set carries the public name.
        return self.component_set_name or self.name
