"""Variable binding → Slint global reference path.

A Figma variable ``spacing/large`` in collection ``Theme`` becomes
``Theme.spacing.large``; when the collection has several modes (light/dark)
the value is read through the mode-switching ``current`` struct:
``Theme.current.spacing.large``.
"""

from __future__ import annotations

import logging
from typing import Optional

from .host import DesignHost
from .naming import extract_hierarchy, format_struct_name, sanitize_property_name

logger = logging.getLogger("figma_inspector.snippet.variables")


class VariableResolver:
    """Resolves variable ids through a design host."""

    def __init__(self, host: DesignHost):
        self._host = host

    async def resolve(self, variable_id: str) -> Optional[str]:
        """Return the dotted reference path, or None when it cannot be resolved."""
        variable = await self._host.get_variable(variable_id)
        if variable is None:
            return None

        collection = await self._host.get_variable_collection(variable.variable_collection_id)
        if collection is None:
            logger.warning(f"Collection not found for variable ID: {variable_id}")
            return None

        global_name = format_struct_name(collection.name)
        slint_path = ".".join(sanitize_property_name(part) for part in extract_hierarchy(variable.name))
        if collection.mode_count > 1:
            return f"{global_name}.current.{slint_path}"
        return f"{global_name}.{slint_path}"
