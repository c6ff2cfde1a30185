"""Figma inspector: turn Figma scene graphs into Slint markup.

Subpackages:
- snippet: Scene models, property resolution and recursive markup generation
- integrations: Figma REST API client, node converter and design host
"""

from .snippet import generate_slint_snippet

__all__ = ["generate_slint_snippet"]
