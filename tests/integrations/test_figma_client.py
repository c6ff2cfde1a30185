"""Tests for figma_inspector.integrations.figma_client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from figma_inspector import config
from figma_inspector.integrations.figma_client import (
    FigmaClient,
    FigmaClientError,
    parse_figma_url,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    """Create a FigmaClient with a test token."""
    return FigmaClient(token="test-figma-token-123")


def _response(status_code=200, json_data=None, text=""):
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.json.return_value = json_data or {}
    mock_resp.text = text
    return mock_resp


def _mock_http(client, *responses):
    """Patch the client's shared httpx client to return ``responses`` in turn."""
    mock_http = AsyncMock()
    mock_http.get = AsyncMock(side_effect=list(responses))
    return patch.object(client, "_get_client", AsyncMock(return_value=mock_http)), mock_http


# ---------------------------------------------------------------------------
# Tests: URL parsing
# ---------------------------------------------------------------------------


class TestParseFigmaUrl:

    @pytest.mark.parametrize("url,expected", [
        (
            "https://www.figma.com/design/6kGd851qaAX4TiL44vpIrO/Mobile-App?node-id=16650-538",
            ("6kGd851qaAX4TiL44vpIrO", "16650:538"),
        ),
        (
            "https://www.figma.com/file/abc123/Name?type=design&node-id=1-2&mode=dev",
            ("abc123", "1:2"),
        ),
        (
            "https://www.figma.com/design/abc123?node-id=12%3A34",
            ("abc123", "12:34"),
        ),
    ])
    def test_parses(self, url, expected):
        assert parse_figma_url(url) == expected

    def test_rejects_non_figma_url(self):
        with pytest.raises(FigmaClientError, match="Invalid Figma URL"):
            parse_figma_url("https://example.com/design/abc?node-id=1-2")

    def test_requires_node_id(self):
        with pytest.raises(FigmaClientError, match="node-id"):
            parse_figma_url("https://www.figma.com/design/abc123/Name")


# ---------------------------------------------------------------------------
# Tests: Constructor & token validation
# ---------------------------------------------------------------------------


class TestFigmaClientInit:

    def test_creates_with_explicit_token(self):
        client = FigmaClient(token="my-token")
        assert client._token == "my-token"

    def test_reads_token_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "FIGMA_TOKEN", "env-token-abc")
        client = FigmaClient()
        assert client._token == "env-token-abc"

    def test_raises_without_token(self, monkeypatch):
        monkeypatch.setattr(config, "FIGMA_TOKEN", "")
        with pytest.raises(FigmaClientError, match="FIGMA_TOKEN"):
            FigmaClient()


# ---------------------------------------------------------------------------
# Tests: API methods (mocked HTTP)
# ---------------------------------------------------------------------------


class TestGet:

    @pytest.mark.asyncio
    async def test_returns_nodes(self, client):
        payload = {"nodes": {"1:2": {"document": {"id": "1:2", "type": "FRAME"}}}}
        patcher, mock_http = _mock_http(client, _response(json_data=payload))
        with patcher:
            result = await client.get_file_nodes("test_key", ["1:2"])

        assert result == payload
        mock_http.get.assert_awaited_once_with(
            "/v1/files/test_key/nodes", params={"ids": "1:2", "geometry": "paths"}
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,match", [
        (403, "403 Forbidden"),
        (404, "not found"),
        (429, "rate limit"),
        (500, "Figma API error 500"),
    ])
    async def test_status_errors(self, client, status, match):
        patcher, _ = _mock_http(client, _response(status_code=status, text="boom"))
        with patcher:
            with pytest.raises(FigmaClientError, match=match):
                await client.get_file_nodes("test_key", ["1:2"])

    @pytest.mark.asyncio
    async def test_timeout_raises(self, client):
        mock_http = AsyncMock()
        mock_http.get = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        with patch.object(client, "_get_client", AsyncMock(return_value=mock_http)):
            with pytest.raises(FigmaClientError, match="timeout"):
                await client.get_file_variables("test_key")


class TestGetNodeImages:

    @pytest.mark.asyncio
    async def test_returns_image_urls(self, client):
        payload = {"images": {"1:2": "https://cdn.example.com/a.svg", "1:3": None}}
        patcher, mock_http = _mock_http(client, _response(json_data=payload))
        with patcher:
            result = await client.get_node_images("test_key", ["1:2", "1:3"], fmt="svg")

        assert result["1:2"] == "https://cdn.example.com/a.svg"
        assert result["1:3"] is None
        _, kwargs = mock_http.get.call_args
        assert kwargs["params"]["format"] == "svg"

    @pytest.mark.asyncio
    async def test_error_field_raises(self, client):
        patcher, _ = _mock_http(client, _response(json_data={"err": "Invalid node IDs", "images": {}}))
        with patcher:
            with pytest.raises(FigmaClientError, match="image render error"):
                await client.get_node_images("test_key", ["bad:id"])


class TestExportSvgs:

    @pytest.mark.asyncio
    async def test_downloads_rendered_nodes_and_skips_failures(self, client):
        images = {
            "1:2": "https://cdn.example.com/ok.svg",
            "1:3": None,
            "1:4": "https://cdn.example.com/gone.svg",
        }
        dl_client = AsyncMock()
        dl_client.get = AsyncMock(side_effect=[
            _response(text="<svg>ok</svg>"),
            _response(status_code=404),
        ])
        with patch.object(client, "get_node_images", AsyncMock(return_value=images)), \
                patch("figma_inspector.integrations.figma_client.httpx.AsyncClient") as mock_cls:
            mock_cls.return_value.__aenter__.return_value = dl_client
            result = await client.export_svgs("test_key", ["1:2", "1:3", "1:4"])

        assert result == {"1:2": "<svg>ok</svg>"}
        assert dl_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_empty_ids_skip_request(self, client):
        with patch.object(client, "get_node_images", AsyncMock()) as mock_images:
            assert await client.export_svgs("test_key", []) == {}
        mock_images.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_single_export_raises_when_missing(self, client):
        with patch.object(client, "export_svgs", AsyncMock(return_value={})):
            with pytest.raises(FigmaClientError, match="no SVG render"):
                await client.export_svg("test_key", "1:2")

    @pytest.mark.asyncio
    async def test_single_export_returns_markup(self, client):
        with patch.object(client, "export_svgs", AsyncMock(return_value={"1:2": "<svg/>"})):
            assert await client.export_svg("test_key", "1:2") == "<svg/>"


class TestGetParentType:

    @pytest.mark.asyncio
    async def test_top_level_node_reports_page_type(self, client):
        file_data = {
            "document": {
                "children": [
                    {"id": "0:1", "type": "CANVAS", "children": [{"id": "1:2", "type": "FRAME"}]},
                ],
            },
        }
        patcher, _ = _mock_http(client, _response(json_data=file_data))
        with patcher:
            assert await client.get_parent_type("test_key", "1:2") == "CANVAS"

    @pytest.mark.asyncio
    async def test_nested_node_returns_none(self, client):
        file_data = {"document": {"children": [{"id": "0:1", "type": "CANVAS", "children": []}]}}
        patcher, _ = _mock_http(client, _response(json_data=file_data))
        with patcher:
            assert await client.get_parent_type("test_key", "1:2") is None

    @pytest.mark.asyncio
    async def test_fetch_failure_returns_none(self, client):
        patcher, _ = _mock_http(client, _response(status_code=500, text="down"))
        with patcher:
            assert await client.get_parent_type("test_key", "1:2") is None
