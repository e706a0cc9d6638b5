"""
Minimal XML tree used for every manifest and SVG document in a .kra file.

Krita parses the manifests with a fixed schema, so the printer stays
deliberately small: attributes are sorted by name so the same tree always
renders to the same bytes, children are indented two spaces per level and a
node without text and children is written as a self-closing tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from xml.sax.saxutils import escape

# Attribute values are quoted with '"', so it has to be escaped as well.
_ATTR_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\t": "&#9;"}


def format_number(value: float | int) -> str:
    """Format a coordinate or size the way Krita writes numbers (50, not 50.0)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class XMLNode:
    """A single XML element with attributes, children and optional text."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list["XMLNode"] = field(default_factory=list)
    text: str = ""

    def append(self, child: "XMLNode") -> "XMLNode":
        """Append a child node and return it."""
        self.children.append(child)
        return child

    def sub(self, tag: str, attrs: dict[str, str] | None = None, text: str = "") -> "XMLNode":
        """Create, append and return a child node."""
        return self.append(XMLNode(tag, dict(attrs or {}), text=text))

    def to_string(self, indent: str = "") -> str:
        attrs = "".join(
            f' {key}="{escape(str(self.attrs[key]), _ATTR_ENTITIES)}"'
            for key in sorted(self.attrs)
        )
        inner = escape(self.text)
        for child in self.children:
            inner += "\n" + indent + "  " + child.to_string(indent + "  ")
        if not inner:
            return f"<{self.tag}{attrs}/>"
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"

    def __str__(self) -> str:
        return self.to_string()
