"""Design host: the lookup interface the generator talks to.

Snippet generation never reaches into Figma directly. Everything it needs
beyond the scene tree itself — variables, collections, main components and
vector exports — comes through a ``DesignHost``.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol

from .models import BaseSceneNode, InstanceNode, MainComponent, Variable, VariableCollection


class DesignHostError(Exception):
    """Raised when a host cannot serve a request that is allowed to fault."""


class DesignHost(Protocol):
    """Async lookup interface. Lookups return None on a miss."""

    async def get_variable(self, variable_id: str) -> Optional[Variable]:
        ...

    async def get_variable_collection(self, collection_id: str) -> Optional[VariableCollection]:
        ...

    async def get_main_component(self, node: InstanceNode) -> Optional[MainComponent]:
        ...

    async def export_svg(self, node: BaseSceneNode) -> str:
        """Return the node as SVG markup. May raise."""
        ...


class StaticDesignHost:
    """In-memory design host over prefetched lookup tables.

    Args:
        variables: variable id → Variable
        collections: collection id → VariableCollection
        components: component id → MainComponent
        svgs: node id → SVG markup
    """

    def __init__(
        self,
        variables: Optional[Dict[str, Variable]] = None,
        collections: Optional[Dict[str, VariableCollection]] = None,
        components: Optional[Dict[str, MainComponent]] = None,
        svgs: Optional[Dict[str, str]] = None,
    ):
        self._variables = dict(variables or {})
        self._collections = dict(collections or {})
        self._components = dict(components or {})
        self._svgs = dict(svgs or {})

    async def get_variable(self, variable_id: str) -> Optional[Variable]:
        return self._variables.get(variable_id)

    async def get_variable_collection(self, collection_id: str) -> Optional[VariableCollection]:
        return self._collections.get(collection_id)

    async def get_main_component(self, node: InstanceNode) -> Optional[MainComponent]:
        if not node.component_id:
            return None
        return self._components.get(node.component_id)

    async def export_svg(self, node: BaseSceneNode) -> str:
        try:
            return self._svgs[node.id]
        except KeyError:
            raise DesignHostError(f"No SVG export available for node {node.id}") from None
