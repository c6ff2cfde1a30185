"""Figma name → Slint identifier conversion.

Slint identifiers match ``[a-zA-Z_][a-zA-Z0-9_-]*``. Figma layer, variable
and collection names are free text ("Brand Colors", "spacing/Large (2x)",
"图层 1"), so every name that reaches the markup goes through here.
"""

from __future__ import annotations

import re
from typing import List

_INVALID_CHARS_RE = re.compile(r"[^a-zA-Z0-9_-]+")
_SEPARATORS_RE = re.compile(r"[-_\s/]+")


def sanitize_property_name(name: str) -> str:
    """Convert a Figma name to a kebab-case Slint identifier.

    'Primary Button' → 'primary-button'
    'Text&Icon'      → 'text-and-icon'
    '2x Large'       → '_2x-large'
    '图层'           → 'unnamed'
    """
    cleaned = name.strip().replace("&", "-and-")
    cleaned = _INVALID_CHARS_RE.sub("-", cleaned)
    cleaned = re.sub(r"-{2,}", "-", cleaned).strip("-").lower()
    if not cleaned:
        return "unnamed"
    if cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    return cleaned


def format_struct_name(name: str) -> str:
    """Convert a Figma collection/component name to a PascalCase Slint name.

    'brand colors'   → 'BrandColors'
    'ui-kit/Button'  → 'UiKitButton'
    '3d Effects'     → '_3dEffects'
    """
    name = re.sub(r"[^\x00-\x7f]", " ", name).replace("&", " and ")
    parts = _SEPARATORS_RE.split(name)
    pascal = "".join(
        part[0].upper() + part[1:]
        for part in (re.sub(r"[^a-zA-Z0-9]", "", p) for p in parts)
        if part
    )
    if not pascal:
        return "Unnamed"
    if pascal[0].isdigit():
        pascal = f"_{pascal}"
    return pascal


def extract_hierarchy(name: str) -> List[str]:
    """Split a slash-grouped variable name into its path segments.

    'colors/brand/primary' → ['colors', 'brand', 'primary']
    """
    return [part.strip() for part in name.split("/") if part.strip()]
