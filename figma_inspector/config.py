"""Figma inspector configuration constants — single source of truth for env vars."""

import os

# Figma REST API: Personal Access Token for design file access
FIGMA_TOKEN = os.getenv("FIGMA_TOKEN", "")

# Figma REST API base URL (override for proxies / recorded fixtures)
FIGMA_API_BASE = os.getenv("FIGMA_API_BASE", "https://api.figma.com")
