"""Figma REST API integration: client, response conversion and snapshot host."""

from .figma_client import FigmaClient, FigmaClientError, parse_figma_url
from .figma_host import load_snapshot

__all__ = [
    "FigmaClient",
    "FigmaClientError",
    "load_snapshot",
    "parse_figma_url",
]
