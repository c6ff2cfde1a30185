"""Runtime settings — tunable parameters for snippet generation and Figma I/O.

All values read from environment variables with sensible defaults.
Import from here instead of hardcoding.

Infrastructure config (API base, tokens) stays in figma_inspector/config.py.
"""

from __future__ import annotations

import os


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _bool(key: str, default: bool) -> bool:
    return os.getenv(key, str(default)).lower() in ("true", "1", "yes")


# =====================================================================
# HTTP Clients (Figma API)
# =====================================================================

FIGMA_HTTP_TIMEOUT = _float("FIGMA_HTTP_TIMEOUT", 60.0)
FIGMA_HTTP_MAX_CONNECTIONS = _int("FIGMA_HTTP_MAX_CONNECTIONS", 5)
FIGMA_HTTP_MAX_KEEPALIVE = _int("FIGMA_HTTP_MAX_KEEPALIVE", 3)

# Rendered SVG payloads are downloaded from a separate CDN URL
FIGMA_SVG_DOWNLOAD_TIMEOUT = _float("FIGMA_SVG_DOWNLOAD_TIMEOUT", 60.0)


# =====================================================================
# Snippet Generation
# =====================================================================

# Emit variable references (theme globals) instead of literal values
SNIPPET_USE_VARIABLES = _bool("SNIPPET_USE_VARIABLES", True)
