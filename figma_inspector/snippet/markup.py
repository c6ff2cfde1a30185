"""Nested Slint markup blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

INDENTATION = "    "


@dataclass
class MarkupBlock:
    """One element declaration: ``identifier := Keyword { ... }``.

    Attributes:
        keyword: Slint element or component name (None for a comment-only block)
        identifier: Element id; omitted from the header when empty
        comment: Optional ``//`` line rendered above the header
        properties: Property and comment lines, without indentation
        children: Nested blocks, one per child node, in sibling order
    """

    keyword: Optional[str]
    identifier: Optional[str] = None
    comment: Optional[str] = None
    properties: List[str] = field(default_factory=list)
    children: List["MarkupBlock"] = field(default_factory=list)

    def lines(self, depth: int = 0) -> List[str]:
        indent = INDENTATION * depth
        out: List[str] = []
        if self.comment:
            out.append(f"{indent}// {self.comment}")
        if self.keyword is None:
            return out

        header = f"{self.identifier} := {self.keyword}" if self.identifier else self.keyword
        if not self.properties and not self.children:
            out.append(f"{indent}{header} {{}}")
            return out

        out.append(f"{indent}{header} {{")
        inner = INDENTATION * (depth + 1)
        out.extend(f"{inner}{line}" for line in self.properties)
        for child in self.children:
            out.extend(child.lines(depth + 1))
        out.append(f"{indent}}}")
        return out

    def render(self) -> str:
        return "\n".join(self.lines())
