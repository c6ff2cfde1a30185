"""Per-property resolution: variable reference, literal value, or nothing.

Each Slint property a node can carry is produced by one handler. Handlers
return the property lines for one node (usually zero or one line; per-corner
radii and failed SVG extraction produce several). A fault inside a handler
is contained to that property and rendered as a ``//`` comment.

Resolution order for a bindable property:
1. Variables enabled and the node binds the property → ``Global.path``
2. Literal attribute, rounded to 3 decimals; a rounded zero emits nothing
   (x/y emit an explicit ``0px``)
3. Node kind lacks the property → nothing
"""

from __future__ import annotations

import logging
import re
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .colors import resolve_paint
from .formatting import escape_string, format_px, round_half_away, round_number, single_line
from .host import DesignHost
from .models import (
    BaseSceneNode,
    EllipseNode,
    LineNode,
    PaintedNode,
    Paint,
    PathNode,
    RectangleLikeNode,
    TextNode,
    VariableAlias,
)
from .variables import VariableResolver

logger = logging.getLogger("figma_inspector.snippet.properties")

SHARED_PROPERTIES = (
    "x",
    "y",
    "width",
    "height",
    "max-width",
    "max-height",
    "min-width",
    "min-height",
    "spacing",
    "alignment",
    "padding-left",
    "padding-right",
    "padding-top",
    "padding-bottom",
    "opacity",
)

RECTANGLE_PROPERTIES = (
    "border-radius",
    "border-width",
    "border-color",
    "background",
)

TEXT_PROPERTIES = (
    "text",
    "color",
    "font-family",
    "font-size",
    "font-weight",
    "horizontal-alignment",
)

PATH_PROPERTIES = (
    "commands",
    "fill",
    "stroke",
    "stroke-width",
)

# Slint property → node attribute (same name on BoundVariables)
_LENGTH_ATTRIBUTES = {
    "width": "width",
    "height": "height",
    "max-width": "max_width",
    "max-height": "max_height",
    "min-width": "min_width",
    "min-height": "min_height",
    "spacing": "item_spacing",
    "padding-left": "padding_left",
    "padding-right": "padding_right",
    "padding-top": "padding_top",
    "padding-bottom": "padding_bottom",
}

_LAYOUT_ALIGNMENT = {
    "MIN": "start",
    "CENTER": "center",
    "MAX": "end",
    "STRETCH": "stretch",
}

_TEXT_ALIGNMENT = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "left",
}

JUSTIFIED_NOTE = "// Note: The value was justified in Figma, but this isn't supported right now"

# (node attribute, Slint property), in emission order
_CORNERS = (
    ("top_left_radius", "border-top-left-radius"),
    ("top_right_radius", "border-top-right-radius"),
    ("bottom_left_radius", "border-bottom-left-radius"),
    ("bottom_right_radius", "border-bottom-right-radius"),
)

_SVG_PATH_RE = re.compile(r"<path[^>]*\bd=([\"'])(.*?)\1", re.DOTALL)
_SVG_LINE_RE = re.compile(
    r"<line[^>]*y1=([\"'])(.*?)\1[^>]*x2=([\"'])(.*?)\3[^>]*y2=([\"'])(.*?)\5",
    re.DOTALL,
)

Handler = Callable[[BaseSceneNode, str], Awaitable[List[str]]]


def _first_visible(paints: Sequence[Paint]) -> Optional[Paint]:
    return next((paint for paint in paints if paint.visible), None)


def extract_path_commands(svg: str, node: PathNode) -> Optional[str]:
    """Pull Slint path commands out of a node's SVG export.

    Vectors use the first ``<path d=...>``. Figma exports lines as a
    ``<line>`` primitive instead; its start x is forced to 0 because the
    node's local coordinates start at its own origin.
    """
    if isinstance(node, LineNode):
        match = _SVG_LINE_RE.search(svg)
        if match and match.group(2) and match.group(4) and match.group(6):
            return f"M0 {match.group(2)}L{match.group(4)} {match.group(6)}"
        return None

    match = _SVG_PATH_RE.search(svg)
    if match and match.group(2):
        return match.group(2)
    return None


class PropertyExtractor:
    """Resolves the Slint property lines of single nodes.

    Args:
        host: Design host used for variable lookups and SVG export.
        use_variables: When False every property uses its literal value,
            whatever bindings the node declares.
    """

    def __init__(self, host: DesignHost, use_variables: bool):
        self._host = host
        self._use_variables = use_variables
        self._resolver = VariableResolver(host)

        self._shared: Dict[str, Handler] = {
            "x": self._position,
            "y": self._position,
            "alignment": self._alignment,
            "opacity": self._opacity,
        }
        for name in _LENGTH_ATTRIBUTES:
            self._shared[name] = self._length

        self._rectangle: Dict[str, Handler] = {
            "border-radius": self._border_radius,
            "border-width": self._border_width,
            "border-color": self._border_color,
            "background": self._fill,
        }
        self._text: Dict[str, Handler] = {
            "text": self._text_content,
            "color": self._fill,
            "font-family": self._font_family,
            "font-size": self._font_size,
            "font-weight": self._font_weight,
            "horizontal-alignment": self._horizontal_alignment,
        }
        self._path: Dict[str, Handler] = {
            "commands": self._commands,
            "fill": self._fill,
            "stroke": self._stroke,
            "stroke-width": self._stroke_width,
        }

    # ------------------------------------------------------------------
    # Property groups
    # ------------------------------------------------------------------

    async def shared_properties(self, node: BaseSceneNode) -> List[str]:
        return await self._collect(node, SHARED_PROPERTIES, self._shared)

    async def rectangle_properties(self, node: RectangleLikeNode) -> List[str]:
        return await self._collect(node, RECTANGLE_PROPERTIES, self._rectangle)

    async def text_properties(self, node: TextNode) -> List[str]:
        return await self._collect(node, TEXT_PROPERTIES, self._text)

    async def path_properties(self, node: PathNode) -> List[str]:
        return await self._collect(node, PATH_PROPERTIES, self._path)

    async def _collect(
        self,
        node: BaseSceneNode,
        names: Sequence[str],
        handlers: Dict[str, Handler],
    ) -> List[str]:
        lines: List[str] = []
        for name in names:
            try:
                lines.extend(await handlers[name](node, name))
            except Exception as e:
                logger.error(f'Error processing property "{name}" on node "{node.name}" ({node.id}): {e}')
                lines.append(f"// Error processing {name}: {e}")
        return lines

    async def _variable_path(self, binding: Optional[VariableAlias]) -> Optional[str]:
        if not self._use_variables or binding is None:
            return None
        return await self._resolver.resolve(binding.id)

    # ------------------------------------------------------------------
    # Shared
    # ------------------------------------------------------------------

    async def _position(self, node: BaseSceneNode, name: str) -> List[str]:
        # Top-level frames are positioned by the page, not by Slint.
        if node.is_root_child:
            return []

        value = await self._variable_path(getattr(node.bound_variables, name))
        if value is None:
            literal = getattr(node, name)
            if literal is None:
                return []
            value = format_px(literal) or "0px"
        return [f"{name}: {value};"]

    async def _length(self, node: BaseSceneNode, name: str) -> List[str]:
        attribute = _LENGTH_ATTRIBUTES[name]
        value = await self._variable_path(getattr(node.bound_variables, attribute))
        if value is None:
            value = format_px(getattr(node, attribute))
        return [f"{name}: {value};"] if value else []

    async def _alignment(self, node: BaseSceneNode, name: str) -> List[str]:
        if node.layout_align is None:
            return []
        return [f"alignment: {_LAYOUT_ALIGNMENT.get(node.layout_align, 'space-between')};"]

    async def _opacity(self, node: BaseSceneNode, name: str) -> List[str]:
        if node.opacity == 1:
            return []
        return [f"opacity: {round_half_away(node.opacity * 100)}%;"]

    # ------------------------------------------------------------------
    # Rectangle-like
    # ------------------------------------------------------------------

    async def _border_radius(self, node: RectangleLikeNode, name: str) -> List[str]:
        if isinstance(node, EllipseNode):
            return ["border-radius: self.width/2;"]

        bound = await self._bound_border_radius(node)
        if bound:
            return bound

        if node.corner_radius is not None:
            radius = format_px(node.corner_radius)
            return [f"border-radius: {radius};"] if radius else []

        lines = []
        for attribute, slint_name in _CORNERS:
            value = getattr(node, attribute)
            if value is not None and value > 0:
                lines.append(f"{slint_name}: {format_px(value)};")
        return lines

    async def _bound_border_radius(self, node: RectangleLikeNode) -> List[str]:
        if not self._use_variables:
            return []

        bindings = node.bound_variables
        path = await self._variable_path(bindings.corner_radius)
        if path:
            return [f"border-radius: {path};"]

        bound_corners: List[Tuple[str, str, VariableAlias]] = [
            (attribute, slint_name, getattr(bindings, attribute))
            for attribute, slint_name in _CORNERS
            if getattr(bindings, attribute) is not None
        ]
        if not bound_corners:
            return []

        ids = {alias.id for _, _, alias in bound_corners}
        if len(bound_corners) == len(_CORNERS) and len(ids) == 1:
            path = await self._variable_path(bound_corners[0][2])
            return [f"border-radius: {path};"] if path else []

        lines = []
        for _, slint_name, alias in bound_corners:
            path = await self._variable_path(alias)
            if path:
                lines.append(f"{slint_name}: {path};")

        if lines:
            bound_attributes = {attribute for attribute, _, _ in bound_corners}
            dropped = [
                attribute
                for attribute, _ in _CORNERS
                if attribute not in bound_attributes and (getattr(node, attribute) or 0) > 0
            ]
            if dropped:
                logger.warning(
                    f'Node "{node.name}" ({node.id}): only some corners are bound to variables; '
                    f"literal radii not emitted for {', '.join(dropped)}"
                )
        return lines

    async def _border_width(self, node: RectangleLikeNode, name: str) -> List[str]:
        if not node.strokes:
            return []
        value = await self._variable_path(node.bound_variables.stroke_weight)
        if value is None:
            value = format_px(node.stroke_weight)
        return [f"border-width: {value};"] if value else []

    async def _border_color(self, node: RectangleLikeNode, name: str) -> List[str]:
        if not node.strokes:
            return []
        value = await self._brush(node.strokes[0])
        return [f"border-color: {value};"] if value else []

    # ------------------------------------------------------------------
    # Paint
    # ------------------------------------------------------------------

    async def _brush(self, paint: Paint) -> Optional[str]:
        path = await self._variable_path(paint.bound_variables.color)
        return path or resolve_paint(paint)

    async def fill_value(self, node: Union[PaintedNode, TextNode]) -> Optional[str]:
        """Brush for the node's first visible fill, or None."""
        paint = _first_visible(node.fills)
        if paint is None:
            return None
        if paint.type == "SOLID":
            path = await self._variable_path(paint.bound_variables.color)
            if path:
                return path
        return resolve_paint(paint)

    async def _fill(self, node: Union[PaintedNode, TextNode], name: str) -> List[str]:
        value = await self.fill_value(node)
        return [f"{name}: {value};"] if value else []

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    async def _text_content(self, node: TextNode, name: str) -> List[str]:
        value = await self._variable_path(node.bound_variables.characters)
        if value is None:
            value = escape_string(node.characters)
        return [f"text: {value};"]

    async def _font_family(self, node: TextNode, name: str) -> List[str]:
        # Bound font families are not resolved; FontName variables are strings
        # with no Slint counterpart.
        if not node.font_family:
            return []
        return [f"font-family: {escape_string(node.font_family)};"]

    async def _font_size(self, node: TextNode, name: str) -> List[str]:
        value = await self._variable_path(node.bound_variables.font_size)
        if value is None:
            value = format_px(node.font_size)
        return [f"font-size: {value};"] if value else []

    async def _font_weight(self, node: TextNode, name: str) -> List[str]:
        path = await self._variable_path(node.bound_variables.font_weight)
        if path:
            # Figma number variables are exported as lengths; font-weight is unitless.
            return [f"font-weight: {path} / 1px;"]
        if node.font_weight is None:
            return []
        return [f"font-weight: {round_number(node.font_weight) or 0};"]

    async def _horizontal_alignment(self, node: TextNode, name: str) -> List[str]:
        alignment = _TEXT_ALIGNMENT.get(node.text_align_horizontal or "")
        if alignment is None:
            return []
        line = f"horizontal-alignment: {alignment};"
        if node.text_align_horizontal == "JUSTIFIED":
            line = f"{line} {JUSTIFIED_NOTE}"
        return [line]

    # ------------------------------------------------------------------
    # Path
    # ------------------------------------------------------------------

    async def _commands(self, node: PathNode, name: str) -> List[str]:
        try:
            svg = await self._host.export_svg(node)
        except Exception as e:
            logger.error(f'Error exporting SVG for node "{node.name}" ({node.id}): {e}')
            return [f"// Error exporting SVG: {e}"]

        commands = extract_path_commands(svg, node)
        if commands is None:
            logger.warning(f'Could not extract path commands from SVG for node "{node.name}" ({node.id})')
            return [
                "// Could not extract path commands from SVG",
                f"// {single_line(svg)}",
            ]
        return [f"commands: {escape_string(commands)};"]

    async def _stroke(self, node: PaintedNode, name: str) -> List[str]:
        if not node.strokes or not node.strokes[0].visible:
            return []
        value = await self._brush(node.strokes[0])
        return [f"stroke: {value};"] if value else []

    async def _stroke_width(self, node: PaintedNode, name: str) -> List[str]:
        if not any(stroke.visible for stroke in node.strokes):
            return []
        value = await self._variable_path(node.bound_variables.stroke_weight)
        if value is None and node.stroke_weight is not None:
            value = format_px(node.stroke_weight) or "0px"
        return [f"stroke-width: {value};"] if value else []
