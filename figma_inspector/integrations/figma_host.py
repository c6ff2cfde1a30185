"""Design host backed by the Figma REST API.

``load_snapshot`` fetches everything the generator may ask for up front:
the node tree, local variables, component metadata and SVG renders of
every path node. Generation then runs against an immutable in-memory host.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from ..snippet.host import StaticDesignHost
from ..snippet.models import BaseSceneNode, Variable, VariableCollection
from .figma_client import FigmaClient, FigmaClientError
from .figma_converter import (
    collect_node_ids,
    convert_node,
    parse_component_meta,
    parse_variables_response,
)

logger = logging.getLogger("figma_inspector.integrations.figma")

PATH_NODE_TYPES = ("LINE", "VECTOR")


async def load_snapshot(
    client: FigmaClient,
    file_key: str,
    node_id: str,
    use_variables: bool = True,
) -> Tuple[BaseSceneNode, StaticDesignHost]:
    """Fetch ``node_id`` and its lookups from Figma.

    Variables are skipped when ``use_variables`` is False. A failing
    variables or SVG request is logged and the snapshot continues without
    that data; the affected properties then fall back to literals or
    comments during generation.

    Raises:
        FigmaClientError if the node itself cannot be fetched
    """
    nodes_resp = await client.get_file_nodes(file_key, [node_id])
    entry = (nodes_resp.get("nodes") or {}).get(node_id)
    if not entry or not entry.get("document"):
        raise FigmaClientError(f"Node {node_id} not found in file {file_key}")

    parent_type = await client.get_parent_type(file_key, node_id)
    node = convert_node(entry["document"], parent_type=parent_type)
    components = parse_component_meta(entry)

    variables: Dict[str, Variable] = {}
    collections: Dict[str, VariableCollection] = {}
    if use_variables:
        try:
            vars_resp = await client.get_file_variables(file_key)
        except FigmaClientError as e:
            logger.warning(f"load_snapshot: variables unavailable, emitting literals: {e}")
        else:
            variables, collections = parse_variables_response(vars_resp)

    svgs: Dict[str, str] = {}
    path_ids = collect_node_ids(node, PATH_NODE_TYPES)
    if path_ids:
        try:
            svgs = await client.export_svgs(file_key, path_ids)
        except FigmaClientError as e:
            logger.warning(f"load_snapshot: SVG export failed: {e}")

    logger.info(
        f"load_snapshot: file={file_key}, node={node_id}, type={node.type}, "
        f"variables={len(variables)}, components={len(components)}, svgs={len(svgs)}/{len(path_ids)}"
    )
    return node, StaticDesignHost(variables, collections, components, svgs)
