"""Figma REST API client for the Slint inspector.

Fetches node trees, local variables and SVG renders from Figma files
using Personal Access Token (PAT) authentication.

Environment:
    FIGMA_TOKEN — Figma Personal Access Token (required)

Usage:
    client = FigmaClient()
    nodes = await client.get_file_nodes("6kGd851qaAX4TiL44vpIrO", ["16650:538"])
    svg = await client.export_svg("6kGd851qaAX4TiL44vpIrO", "16650:539")
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote

import httpx

from .. import config, settings

logger = logging.getLogger("figma_inspector.integrations.figma")


class FigmaClientError(Exception):
    """Raised when a Figma API call fails."""


def parse_figma_url(url: str) -> Tuple[str, str]:
    """Parse a Figma URL into (file_key, node_id).

    Supports:
        https://www.figma.com/design/{fileKey}/{name}?node-id={nodeId}
        https://www.figma.com/file/{fileKey}/{name}?node-id={nodeId}
        https://www.figma.com/design/{fileKey}?node-id={nodeId}

    Node ID format: URL uses '16650-538', API uses '16650:538'.

    Raises:
        FigmaClientError if the URL format is invalid
    """
    path_match = re.search(r"figma\.com/(?:design|file)/([a-zA-Z0-9]+)", url)
    if not path_match:
        raise FigmaClientError(
            "Invalid Figma URL. Expected format: "
            "https://www.figma.com/design/{fileKey}/...?node-id={nodeId}"
        )
    file_key = path_match.group(1)

    node_match = re.search(r"[?&]node-id=([^&#]+)", url)
    if not node_match:
        raise FigmaClientError("Figma URL must include a node-id parameter.")

    # Decode percent-encoding (e.g. %3A → :) then convert dashes to colons
    node_id = unquote(node_match.group(1)).replace("-", ":")
    return file_key, node_id


class FigmaClient:
    """Async Figma REST API client.

    Args:
        token: Figma PAT. Falls back to FIGMA_TOKEN env var.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = settings.FIGMA_HTTP_TIMEOUT,
    ):
        self._token = token or config.FIGMA_TOKEN
        if not self._token:
            raise FigmaClientError(
                "Figma token not configured. Set FIGMA_TOKEN environment variable "
                "or pass token= to FigmaClient()."
            )
        self._client: Optional[httpx.AsyncClient] = None
        self._timeout = timeout

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=config.FIGMA_API_BASE,
                headers={"X-FIGMA-TOKEN": self._token},
                timeout=self._timeout,
                limits=httpx.Limits(
                    max_connections=settings.FIGMA_HTTP_MAX_CONNECTIONS,
                    max_keepalive_connections=settings.FIGMA_HTTP_MAX_KEEPALIVE,
                ),
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FigmaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get(self, path: str, params: Optional[Dict] = None) -> Dict[str, Any]:
        """Make a GET request to the Figma API."""
        client = await self._get_client()
        try:
            resp = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise FigmaClientError(f"Figma API timeout: {path}") from e
        except httpx.ConnectError as e:
            raise FigmaClientError(f"Figma API connection error: {path}") from e

        if resp.status_code == 403:
            raise FigmaClientError(
                "Figma API returned 403 Forbidden. Check that FIGMA_TOKEN is valid "
                "and has file_content:read scope."
            )
        if resp.status_code == 404:
            raise FigmaClientError(f"Figma resource not found: {path}")
        if resp.status_code == 429:
            raise FigmaClientError("Figma API rate limit exceeded. Retry later.")
        if resp.status_code != 200:
            raise FigmaClientError(
                f"Figma API error {resp.status_code}: {resp.text[:200]}"
            )

        return resp.json()

    # ------------------------------------------------------------------
    # Core API methods
    # ------------------------------------------------------------------

    async def get_file_nodes(
        self,
        file_key: str,
        node_ids: List[str],
    ) -> Dict[str, Any]:
        """Fetch specific nodes from a Figma file.

        GET /v1/files/:key/nodes?ids=...&geometry=paths

        ``geometry=paths`` makes Figma include ``relativeTransform`` and
        ``size``, which give parent-relative positions for the requested root.
        """
        ids_param = ",".join(node_ids)
        data = await self._get(
            f"/v1/files/{file_key}/nodes",
            params={"ids": ids_param, "geometry": "paths"},
        )
        logger.info(
            f"get_file_nodes: file={file_key}, requested={len(node_ids)}, "
            f"returned={len(data.get('nodes', {}))}"
        )
        return data

    async def get_file_variables(
        self,
        file_key: str,
    ) -> Dict[str, Any]:
        """Fetch local variables and variable collections from a Figma file."""
        data = await self._get(f"/v1/files/{file_key}/variables/local")
        meta = data.get("meta", {})
        logger.info(
            f"get_file_variables: file={file_key}, "
            f"variables={len(meta.get('variables', {}))}, "
            f"collections={len(meta.get('variableCollections', {}))}"
        )
        return data

    async def get_node_images(
        self,
        file_key: str,
        node_ids: List[str],
        fmt: str = "png",
        scale: int = 1,
    ) -> Dict[str, Optional[str]]:
        """Render nodes via Figma's image export API.

        GET /v1/images/:key?ids=...&format=...&scale=...
        """
        params: Dict[str, str] = {
            "ids": ",".join(node_ids),
            "format": fmt,
            "scale": str(scale),
        }
        data = await self._get(f"/v1/images/{file_key}", params=params)

        if data.get("err"):
            raise FigmaClientError(f"Figma image render error: {data['err']}")

        images = data.get("images", {})
        logger.info(
            f"get_node_images: file={file_key}, format={fmt}, requested={len(node_ids)}, "
            f"rendered={sum(1 for v in images.values() if v)}"
        )
        return images

    async def export_svgs(
        self,
        file_key: str,
        node_ids: List[str],
    ) -> Dict[str, str]:
        """Render nodes as SVG and download the markup.

        Nodes Figma could not render, or whose download fails, are logged and
        left out of the result.

        Returns:
            Dict mapping node_id → SVG text
        """
        if not node_ids:
            return {}
        images = await self.get_node_images(file_key, node_ids, fmt="svg")

        svgs: Dict[str, str] = {}
        async with httpx.AsyncClient(timeout=settings.FIGMA_SVG_DOWNLOAD_TIMEOUT) as dl_client:
            for node_id in node_ids:
                url = images.get(node_id)
                if not url:
                    logger.warning(f"export_svgs: no render URL for node {node_id}")
                    continue
                try:
                    resp = await dl_client.get(url)
                except httpx.HTTPError as e:
                    logger.warning(f"export_svgs: download failed for node {node_id}: {e}")
                    continue
                if resp.status_code != 200:
                    logger.warning(
                        f"export_svgs: download returned {resp.status_code} for node {node_id}"
                    )
                    continue
                svgs[node_id] = resp.text
        return svgs

    async def export_svg(self, file_key: str, node_id: str) -> str:
        """Render a single node as SVG.

        Raises:
            FigmaClientError if Figma returns no usable render
        """
        svgs = await self.export_svgs(file_key, [node_id])
        if node_id not in svgs:
            raise FigmaClientError(f"Figma returned no SVG render for node {node_id}")
        return svgs[node_id]

    async def get_parent_type(self, file_key: str, node_id: str) -> Optional[str]:
        """Return the page type when ``node_id`` sits directly on a page.

        GET /v1/files/:key (depth=2: document → pages → top-level nodes).
        Returns None for nested nodes or when the file structure is unavailable.
        """
        try:
            file_data = await self._get(f"/v1/files/{file_key}", params={"depth": "2"})
        except FigmaClientError as e:
            logger.warning(f"get_parent_type: failed to fetch file structure: {e}")
            return None

        for page in file_data.get("document", {}).get("children", []):
            for frame in page.get("children", []):
                if frame.get("id") == node_id:
                    return page.get("type", "CANVAS")
        return None
