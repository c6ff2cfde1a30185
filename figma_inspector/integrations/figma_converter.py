"""Figma REST API response → scene models.

The REST API describes nodes differently from the plugin API the snippet
engine is modelled on:

- positions are absolute (``absoluteBoundingBox``) rather than parent-relative
- text typography lives in a ``style`` object
- mixed corner radii come as ``rectangleCornerRadii`` [tl, tr, br, bl]
- gradients carry handle positions instead of a transform matrix

This module normalizes those differences before validation, so the scene
models only ever see plugin-style fields.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..snippet.models import (
    BaseSceneNode,
    MainComponent,
    Variable,
    VariableCollection,
    parse_node,
)

logger = logging.getLogger("figma_inspector.integrations.figma")

_CORNER_KEYS = ("topLeftRadius", "topRightRadius", "bottomRightRadius", "bottomLeftRadius")


def convert_node(
    raw: Dict[str, Any],
    parent: Optional[Dict[str, Any]] = None,
    parent_type: Optional[str] = None,
) -> BaseSceneNode:
    """Convert a REST node (and its subtree) into a scene model.

    Args:
        raw: Node dict from GET /v1/files/:key/nodes (``document`` entry)
        parent: Raw parent node, used for relative positioning
        parent_type: Parent type for the root when ``parent`` is unknown
            (e.g. "CANVAS" for a frame sitting directly on a page)
    """
    data = dict(raw)
    data["parentType"] = parent["type"] if parent else parent_type

    position = _relative_position(raw, parent)
    if position is not None:
        data.setdefault("x", position[0])
        data.setdefault("y", position[1])
    width, height = _size(raw)
    data.setdefault("width", width)
    data.setdefault("height", height)

    radii = raw.get("rectangleCornerRadii")
    if isinstance(radii, list) and len(radii) == 4:
        for key, value in zip(_CORNER_KEYS, radii):
            data.setdefault(key, value)

    for key in ("fills", "strokes"):
        if isinstance(raw.get(key), list):
            data[key] = [_convert_paint(paint) for paint in raw[key]]

    data["children"] = [convert_node(child, parent=raw) for child in raw.get("children", [])]
    return parse_node(data)


def _relative_position(
    raw: Dict[str, Any],
    parent: Optional[Dict[str, Any]],
) -> Optional[Tuple[float, float]]:
    """Parent-relative x/y: relativeTransform first, then bounding-box delta.

    Returns None when neither source is available (e.g. a nested node fetched
    on its own, without its parent's bounding box).
    """
    transform = raw.get("relativeTransform")
    if isinstance(transform, list) and len(transform) == 2:
        return transform[0][2], transform[1][2]

    bbox = raw.get("absoluteBoundingBox") or {}
    parent_bbox = (parent or {}).get("absoluteBoundingBox") or {}
    if not bbox or not parent_bbox:
        return None
    return (
        bbox.get("x", 0) - parent_bbox.get("x", 0),
        bbox.get("y", 0) - parent_bbox.get("y", 0),
    )


def _size(raw: Dict[str, Any]) -> Tuple[float, float]:
    size = raw.get("size")
    if isinstance(size, dict):
        return size.get("x", 0), size.get("y", 0)
    bbox = raw.get("absoluteBoundingBox") or {}
    return bbox.get("width", 0), bbox.get("height", 0)


def _convert_paint(paint: Dict[str, Any]) -> Dict[str, Any]:
    """Derive ``gradientTransform`` from ``gradientHandlePositions``.

    Only the rotation is used downstream, and its first row must point along
    the gradient axis: [dx, dy, start_x] for handles start → end.
    """
    if "gradientTransform" in paint:
        return paint
    handles = paint.get("gradientHandlePositions")
    if not isinstance(handles, list) or len(handles) < 2:
        return paint

    start, end = handles[0], handles[1]
    dx = end.get("x", 0) - start.get("x", 0)
    dy = end.get("y", 0) - start.get("y", 0)
    return {
        **paint,
        "gradientTransform": [
            [dx, dy, start.get("x", 0)],
            [-dy, dx, start.get("y", 0)],
        ],
    }


def parse_variables_response(
    vars_resp: Dict[str, Any],
) -> Tuple[Dict[str, Variable], Dict[str, VariableCollection]]:
    """Parse GET /v1/files/:key/variables/local into lookup tables."""
    meta = vars_resp.get("meta", {})

    variables: Dict[str, Variable] = {}
    for var_id, var_data in meta.get("variables", {}).items():
        variables[var_id] = Variable(
            id=var_data.get("id", var_id),
            name=var_data.get("name", ""),
            variable_collection_id=var_data.get("variableCollectionId", ""),
        )

    collections: Dict[str, VariableCollection] = {}
    for coll_id, coll_data in meta.get("variableCollections", {}).items():
        collections[coll_id] = VariableCollection.model_validate(
            {"id": coll_id, **coll_data}
        )

    logger.info(
        f"parse_variables_response: {len(variables)} variables, "
        f"{len(collections)} collections"
    )
    return variables, collections


def parse_component_meta(node_entry: Dict[str, Any]) -> Dict[str, MainComponent]:
    """Build component id → MainComponent from a nodes-response entry.

    Uses the ``components`` and ``componentSets`` maps Figma returns next to
    each requested ``document``.
    """
    component_sets: Dict[str, Any] = node_entry.get("componentSets", {})
    components: Dict[str, MainComponent] = {}
    for comp_id, meta in node_entry.get("components", {}).items():
        set_id = meta.get("componentSetId")
        set_name: Optional[str] = None
        if set_id and set_id in component_sets:
            set_name = component_sets[set_id].get("name")
        components[comp_id] = MainComponent(
            id=comp_id,
            name=meta.get("name", ""),
            component_set_name=set_name,
        )
    return components


def collect_node_ids(node: BaseSceneNode, types: Tuple[str, ...]) -> List[str]:
    """Ids of all nodes in the subtree whose type is in ``types`` (pre-order)."""
    ids = [node.id] if node.type in types else []
    for child in node.children:
        ids.extend(collect_node_ids(child, types))
    return ids
