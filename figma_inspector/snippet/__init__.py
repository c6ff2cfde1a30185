"""Scene graph → Slint markup engine.

Modules:
- models: frozen pydantic scene graph (one model per node kind)
- host: DesignHost protocol and an in-memory implementation
- colors: hex / gradient brush encoding
- variables: variable binding → Slint global reference path
- properties: per-property resolution and formatting
- generator: recursive snippet generation
"""

from .generator import SnippetGenerator, generate_slint_snippet
from .host import DesignHost, DesignHostError, StaticDesignHost
from .markup import MarkupBlock
from .models import SceneNode, parse_node
from .properties import PropertyExtractor
from .variables import VariableResolver

__all__ = [
    "DesignHost",
    "DesignHostError",
    "MarkupBlock",
    "PropertyExtractor",
    "SceneNode",
    "SnippetGenerator",
    "StaticDesignHost",
    "VariableResolver",
    "generate_slint_snippet",
    "parse_node",
]
