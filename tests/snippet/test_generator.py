"""Tests for figma_inspector.snippet.generator."""

import asyncio

import pytest

from conftest import alias, solid
from figma_inspector.snippet.generator import SnippetGenerator, generate_slint_snippet
from figma_inspector.snippet.host import StaticDesignHost
from figma_inspector.snippet.markup import MarkupBlock
from figma_inspector.snippet.models import (
    ComponentNode,
    EllipseNode,
    FrameNode,
    GroupNode,
    InstanceNode,
    OtherNode,
    RectangleNode,
    TextNode,
    VectorNode,
    parse_node,
)


class SlowVariableHost(StaticDesignHost):
    """Delays variable lookups per id and records how many run at once."""

    def __init__(self, delays, **kwargs):
        super().__init__(**kwargs)
        self._delays = delays
        self.in_flight = 0
        self.max_in_flight = 0
        self.order = []

    async def get_variable(self, variable_id):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delays.get(variable_id, 0))
            self.order.append(variable_id)
            return await super().get_variable(variable_id)
        finally:
            self.in_flight -= 1


class TestDispatch:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("layout_mode,keyword", [
        ("HORIZONTAL", "HorizontalLayout"),
        ("VERTICAL", "VerticalLayout"),
        ("NONE", "Rectangle"),
    ])
    async def test_frame_layouts(self, host, layout_mode, keyword):
        node = FrameNode(id="1:1", name="Row", parent_type="CANVAS", layout_mode=layout_mode, width=10)
        block = await SnippetGenerator(host).generate(node)
        assert block.keyword == keyword
        assert block.identifier == "row"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("model", [RectangleNode, EllipseNode, GroupNode, ComponentNode])
    async def test_rectangle_like_kinds(self, host, model):
        block = await SnippetGenerator(host).generate(model(id="1:1", name="Shape"))
        assert block.keyword == "Rectangle"

    @pytest.mark.asyncio
    async def test_text_and_path_keywords(self, host):
        generator = SnippetGenerator(host)
        assert (await generator.generate(TextNode(id="2:1", name="T"))).keyword == "Text"
        assert (await generator.generate(VectorNode(id="vector-1", name="V"))).keyword == "Path"

    @pytest.mark.asyncio
    async def test_frame_does_not_emit_rectangle_properties(self, host):
        node = FrameNode(
            id="1:1", name="Card", parent_type="CANVAS",
            width=100, fills=[{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0}}],
        )
        block = await SnippetGenerator(host).generate(node)
        assert block.properties == ["width: 100px;"]


class TestUnsupported:

    @pytest.mark.asyncio
    async def test_unknown_type_renders_comment_and_shared_properties(self, host):
        node = OtherNode(type="STAR", id="9:9", name="Star 1", x=2, y=3, width=10, height=10)
        snippet = await generate_slint_snippet(node, host)
        assert snippet == (
            "// Unsupported type: STAR\n"
            "star-1 := Rectangle {\n"
            "    x: 2px;\n"
            "    y: 3px;\n"
            "    width: 10px;\n"
            "    height: 10px;\n"
            "}"
        )

    @pytest.mark.asyncio
    async def test_unsupported_children_are_still_walked(self, host):
        node = parse_node({
            "type": "BOOLEAN_OPERATION",
            "id": "9:9",
            "name": "Union",
            "children": [{"type": "RECTANGLE", "id": "9:10", "name": "Part"}],
        })
        block = await SnippetGenerator(host).generate(node)
        assert block.comment == "Unsupported type: BOOLEAN_OPERATION"
        assert [child.identifier for child in block.children] == ["part"]


class TestInstances:

    @pytest.mark.asyncio
    async def test_plain_component(self, host):
        node = InstanceNode(id="3:1", name="Submit", component_id="comp-1", width=80)
        assert await generate_slint_snippet(node, host) == "submit := PrimaryButton {}"

    @pytest.mark.asyncio
    async def test_variant_uses_component_set_name(self, host):
        node = InstanceNode(id="3:1", name="Close", component_id="comp-2")
        assert await generate_slint_snippet(node, host) == "close := IconButton {}"

    @pytest.mark.asyncio
    async def test_missing_component_is_comment(self, host):
        node = InstanceNode(id="3:1", name="Ghost", component_id="comp-404")
        assert await generate_slint_snippet(node, host) == "// Main component not found for instance: ghost"

    @pytest.mark.asyncio
    async def test_lookup_fault_is_contained(self, host):
        class BrokenComponentHost(StaticDesignHost):
            async def get_main_component(self, node):
                raise RuntimeError("library unavailable")

        root = FrameNode(
            id="1:1", name="Toolbar", parent_type="CANVAS",
            children=[InstanceNode(id="3:1", name="Ghost", component_id="comp-1")],
        )
        snippet = await generate_slint_snippet(root, BrokenComponentHost())
        assert snippet == (
            "toolbar := Rectangle {\n"
            "    // Main component not found for instance: ghost\n"
            "}"
        )


class TestRendering:

    @pytest.mark.asyncio
    async def test_nested_tree(self, host):
        root = FrameNode(
            id="1:1", name="Card Row", parent_type="CANVAS", layout_mode="VERTICAL",
            width=200, height=100, item_spacing=8,
            children=[
                RectangleNode(id="1:2", name="Bg", x=0, y=0, width=200, height=100, corner_radius=4, fills=[solid(1, 0, 0)]),
                TextNode(id="1:3", name="Title", x=8, y=8, characters="Hello", font_size=16),
            ],
        )
        assert await generate_slint_snippet(root, host) == (
            "card-row := VerticalLayout {\n"
            "    width: 200px;\n"
            "    height: 100px;\n"
            "    spacing: 8px;\n"
            "    bg := Rectangle {\n"
            "        x: 0px;\n"
            "        y: 0px;\n"
            "        width: 200px;\n"
            "        height: 100px;\n"
            "        border-radius: 4px;\n"
            "        background: #ff0000;\n"
            "    }\n"
            "    title := Text {\n"
            "        x: 8px;\n"
            "        y: 8px;\n"
            "        text: \"Hello\";\n"
            "        font-size: 16px;\n"
            "    }\n"
            "}"
        )

    @pytest.mark.asyncio
    async def test_empty_block(self, host):
        node = GroupNode(id="1:1", name="Empty", parent_type="CANVAS")
        assert await generate_slint_snippet(node, host) == "empty := Rectangle {}"

    @pytest.mark.asyncio
    async def test_variables_toggle(self, host):
        node = RectangleNode(
            id="1:1", name="Box", parent_type="CANVAS", width=10,
            bound_variables={"width": alias("VariableID:1")},
        )
        with_vars = await generate_slint_snippet(node, host)
        without_vars = await generate_slint_snippet(node, host, use_variables=False)
        assert "width: Theme.current.spacing.large;" in with_vars
        assert "width: 10px;" in without_vars

    @pytest.mark.asyncio
    async def test_generation_is_repeatable(self, host):
        root = parse_node({
            "type": "FRAME",
            "id": "1:1",
            "name": "Screen",
            "parentType": "CANVAS",
            "layoutMode": "HORIZONTAL",
            "children": [
                {"type": "RECTANGLE", "id": "1:2", "name": "A", "width": 10,
                 "boundVariables": {"width": alias("VariableID:1")}},
                {"type": "INSTANCE", "id": "1:3", "name": "B", "componentId": "comp-2"},
                {"type": "LINE", "id": "line-1", "name": "C"},
            ],
        })
        first = await generate_slint_snippet(root, host)
        second = await generate_slint_snippet(root, host)
        assert first == second


class TestOrdering:

    @pytest.mark.asyncio
    async def test_children_keep_sibling_order_despite_latency(self, variables, collections):
        host = SlowVariableHost(
            {"VariableID:1": 0.05, "VariableID:3": 0},
            variables=variables,
            collections=collections,
        )
        root = FrameNode(
            id="1:1", name="Stack", parent_type="CANVAS",
            children=[
                RectangleNode(id="1:2", name="Slow", bound_variables={"width": alias("VariableID:1")}),
                RectangleNode(id="1:3", name="Fast", bound_variables={"width": alias("VariableID:3")}),
            ],
        )
        block = await SnippetGenerator(host).generate(root)

        assert [child.identifier for child in block.children] == ["slow", "fast"]
        assert host.order == ["VariableID:1", "VariableID:3"]
        assert host.max_in_flight == 1


class TestMarkupBlock:

    def test_comment_only_block(self):
        assert MarkupBlock(keyword=None, comment="note").render() == "// note"

    def test_header_without_identifier(self):
        block = MarkupBlock(keyword="Rectangle", properties=["width: 1px;"])
        assert block.render() == "Rectangle {\n    width: 1px;\n}"
