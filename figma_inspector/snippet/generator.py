"""Recursive Slint snippet generation.

Walks the scene tree depth-first, one node at a time, and builds a
``MarkupBlock`` per node. Children are awaited strictly in sibling order so
the output order matches the design regardless of lookup latency.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, List, Type

from .host import DesignHost
from .markup import MarkupBlock
from .models import (
    BaseSceneNode,
    ComponentNode,
    EllipseNode,
    FrameNode,
    GroupNode,
    InstanceNode,
    LineNode,
    PathNode,
    RectangleLikeNode,
    RectangleNode,
    TextNode,
    VectorNode,
)
from .naming import format_struct_name, sanitize_property_name
from .properties import PropertyExtractor

logger = logging.getLogger("figma_inspector.snippet.generator")

FRAME_LAYOUTS = {
    "HORIZONTAL": "HorizontalLayout",
    "VERTICAL": "VerticalLayout",
}


class SnippetGenerator:
    """Builds Slint markup for a scene node and its descendants.

    Args:
        host: Design host for variables, main components and SVG export.
        use_variables: Emit variable references for bound properties.
    """

    def __init__(self, host: DesignHost, use_variables: bool = True):
        self._host = host
        self._properties = PropertyExtractor(host, use_variables)
        self._dispatch: Dict[Type[BaseSceneNode], Callable[..., Awaitable[MarkupBlock]]] = {
            FrameNode: self._frame,
            RectangleNode: self._rectangle,
            EllipseNode: self._rectangle,
            GroupNode: self._rectangle,
            ComponentNode: self._rectangle,
            InstanceNode: self._instance,
            TextNode: self._text,
            LineNode: self._path,
            VectorNode: self._path,
        }

    async def generate(self, node: BaseSceneNode) -> MarkupBlock:
        handler = self._dispatch.get(type(node), self._unsupported)
        return await handler(node)

    async def _children(self, node: BaseSceneNode) -> List[MarkupBlock]:
        blocks = []
        for child in node.children:
            blocks.append(await self.generate(child))
        return blocks

    async def _frame(self, node: FrameNode) -> MarkupBlock:
        return MarkupBlock(
            keyword=FRAME_LAYOUTS.get(node.layout_mode, "Rectangle"),
            identifier=sanitize_property_name(node.name),
            properties=await self._properties.shared_properties(node),
            children=await self._children(node),
        )

    async def _rectangle(self, node: RectangleLikeNode) -> MarkupBlock:
        properties = await self._properties.shared_properties(node)
        properties += await self._properties.rectangle_properties(node)
        return MarkupBlock(
            keyword="Rectangle",
            identifier=sanitize_property_name(node.name),
            properties=properties,
            children=await self._children(node),
        )

    async def _instance(self, node: InstanceNode) -> MarkupBlock:
        node_id = sanitize_property_name(node.name)
        try:
            component = await self._host.get_main_component(node)
        except Exception as e:
            logger.error(f'Error looking up main component for instance "{node.name}" ({node.id}): {e}')
            component = None

        if component is None:
            return MarkupBlock(keyword=None, comment=f"Main component not found for instance: {node_id}")
        return MarkupBlock(keyword=format_struct_name(component.declared_name), identifier=node_id)

    async def _text(self, node: TextNode) -> MarkupBlock:
        properties = await self._properties.shared_properties(node)
        properties += await self._properties.text_properties(node)
        return MarkupBlock(
            keyword="Text",
            identifier=sanitize_property_name(node.name),
            properties=properties,
            children=await self._children(node),
        )

    async def _path(self, node: PathNode) -> MarkupBlock:
        properties = await self._properties.shared_properties(node)
        properties += await self._properties.path_properties(node)
        return MarkupBlock(
            keyword="Path",
            identifier=sanitize_property_name(node.name),
            properties=properties,
            children=await self._children(node),
        )

    async def _unsupported(self, node: BaseSceneNode) -> MarkupBlock:
        return MarkupBlock(
            keyword="Rectangle",
            identifier=sanitize_property_name(node.name),
            comment=f"Unsupported type: {node.type}",
            properties=await self._properties.shared_properties(node),
            children=await self._children(node),
        )


async def generate_slint_snippet(
    node: BaseSceneNode,
    host: DesignHost,
    use_variables: bool = True,
) -> str:
    """Render ``node`` and its subtree as Slint markup text."""
    block = await SnippetGenerator(host, use_variables).generate(node)
    return block.render()
