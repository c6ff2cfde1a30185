"""Shared fixtures for snippet and integration tests.

Provides:
- A StaticDesignHost with a themed (two-mode) collection and a single-mode
  brand collection
- Main components, one of them a variant inside a component set
- Small paint builders
"""

from __future__ import annotations

from typing import Dict

import pytest

from figma_inspector.snippet.host import StaticDesignHost
from figma_inspector.snippet.models import (
    Color,
    MainComponent,
    Paint,
    Variable,
    VariableCollection,
    VariableMode,
)


def solid(r: float, g: float, b: float, opacity: float = 1.0, visible: bool = True, var: str = None) -> Paint:
    """SOLID paint; ``var`` binds the color to a variable id."""
    data: Dict = {
        "type": "SOLID",
        "color": {"r": r, "g": g, "b": b, "a": 1},
        "opacity": opacity,
        "visible": visible,
    }
    if var:
        data["boundVariables"] = {"color": {"type": "VARIABLE_ALIAS", "id": var}}
    return Paint.model_validate(data)


def alias(variable_id: str) -> Dict[str, str]:
    return {"type": "VARIABLE_ALIAS", "id": variable_id}


@pytest.fixture
def collections():
    return {
        "col-theme": VariableCollection(
            id="col-theme",
            name="Theme",
            modes=[VariableMode(mode_id="1:0", name="Light"), VariableMode(mode_id="1:1", name="Dark")],
        ),
        "col-brand": VariableCollection(
            id="col-brand",
            name="Brand Colors",
            modes=[VariableMode(mode_id="2:0", name="Default")],
        ),
    }


@pytest.fixture
def variables():
    return {
        "VariableID:1": Variable(id="VariableID:1", name="spacing/large", variable_collection_id="col-theme"),
        "VariableID:2": Variable(id="VariableID:2", name="colors/Primary", variable_collection_id="col-brand"),
        "VariableID:3": Variable(id="VariableID:3", name="radius/md", variable_collection_id="col-brand"),
        "VariableID:4": Variable(id="VariableID:4", name="font/weight bold", variable_collection_id="col-brand"),
        "VariableID:orphan": Variable(id="VariableID:orphan", name="lost/value", variable_collection_id="col-gone"),
    }


@pytest.fixture
def components():
    return {
        "comp-1": MainComponent(id="comp-1", name="Primary Button"),
        "comp-2": MainComponent(id="comp-2", name="State=Hover", component_set_name="Icon Button"),
    }


@pytest.fixture
def host(variables, collections, components):
    return StaticDesignHost(
        variables=variables,
        collections=collections,
        components=components,
        svgs={
            "line-1": '<svg width="100" height="1"><line y1="0.5" x2="100" y2="0.5" stroke="black"/></svg>',
            "vector-1": '<svg width="10" height="10"><path d="M0 0L10 10Z" fill="#FF0000"/></svg>',
            "vector-bad": "<svg>\n  <rect width=\"10\"/>\n</svg>",
        },
    )


@pytest.fixture
def red():
    return Color(r=1, g=0, b=0)
