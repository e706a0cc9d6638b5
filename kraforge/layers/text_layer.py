"""
TextLayer - Layer with plain text written as an SVG text element.

Krita stores text as a shape layer whose ``content.svg`` holds one ``text``
element. Each line of the text becomes a ``tspan``; every line after the
first moves down by ``font_size * line_height``.
"""

from typing import Any, ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from kraforge.xml_node import format_number

from .base import BaseLayer


class TextStyle(BaseModel):
    """Typography settings of a text layer."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    font_family: str = Field(default='Segoe UI')
    font_size: int = Field(default=12)
    fill_color: str = Field(default='#000000')
    stroke_color: str = Field(default='#000000')
    stroke_width: int = Field(default=0)
    stroke_opacity: float = Field(default=0)
    letter_spacing: int = Field(default=0)
    word_spacing: int = Field(default=0)
    text_align: str = Field(default='start')  # start, end, center, justify
    text_align_last: str = Field(default='auto')
    line_height: float = Field(default=1.2)  # multiple of font size
    use_rich_text: bool = Field(default=False)
    text_rendering: str = Field(default='auto')
    dominant_baseline: str = Field(default='middle')
    text_anchor: str = Field(default='middle')
    paint_order: str = Field(default='stroke')
    stroke_linecap: str = Field(default='square')
    stroke_linejoin: str = Field(default='bevel')

    @property
    def line_advance(self) -> float:
        """Vertical distance between two lines."""
        return self.font_size * self.line_height


DEFAULT_TEXT_STYLE = TextStyle()


class TextSpan(BaseModel):
    """A single line of text."""

    text: str = Field(default='')
    x: float = Field(default=0)
    dy: Optional[float] = Field(default=None)  # offset from the previous line

    def get_svg_attributes(self) -> dict[str, str]:
        attrs = {'x': format_number(self.x)}
        if self.dy is not None:
            attrs['dy'] = format_number(self.dy)
        return attrs


def split_lines(text: str) -> list[str]:
    """Split text on newlines; ``\\r\\n`` and ``\\r`` count as one newline."""
    return text.replace('\r\n', '\n').replace('\r', '\n').split('\n')


class TextLayer(BaseLayer):
    """Text layer made of line spans sharing one TextStyle."""

    layer_type: Literal["text"] = Field(default="text", alias="type")

    name: str = Field(default='Text Layer')
    spans: list[TextSpan] = Field(default_factory=list)
    style: TextStyle = Field(default_factory=DEFAULT_TEXT_STYLE.model_copy)

    svg_tag: ClassVar[str] = 'text'

    @classmethod
    def from_text(cls, text: str, style: Optional[TextStyle] = None, **kwargs: Any) -> 'TextLayer':
        """Create a TextLayer from plain text, one span per line."""
        style = style if style is not None else DEFAULT_TEXT_STYLE.model_copy()
        spans = [
            TextSpan(text=line, x=0, dy=style.line_advance if index > 0 else None)
            for index, line in enumerate(split_lines(text))
        ]
        return cls(spans=spans, style=style, **kwargs)

    @property
    def text(self) -> str:
        """Plain text content, lines joined with newlines."""
        return '\n'.join(span.text for span in self.spans)

    def get_svg_attributes(self) -> dict[str, str]:
        """Attributes of the ``text`` element in content.svg."""
        style = self.style
        return {
            'id': 'shape0',
            'krita:useRichText': str(style.use_rich_text).lower(),
            'krita:textVersion': '3',
            'text-rendering': style.text_rendering,
            'transform': self.translate_transform(),
            'fill': style.fill_color,
            'stroke': style.stroke_color,
            'stroke-opacity': format_number(style.stroke_opacity),
            'stroke-width': format_number(style.stroke_width),
            'stroke-linecap': style.stroke_linecap,
            'stroke-linejoin': style.stroke_linejoin,
            'letter-spacing': format_number(style.letter_spacing),
            'word-spacing': format_number(style.word_spacing),
            'style': (
                f'text-align: {style.text_align};'
                f'text-align-last: {style.text_align_last};'
                f'font-family: {style.font_family};'
                f'font-size: {format_number(style.font_size)};'
                f'dominant-baseline: {style.dominant_baseline};'
                f'text-anchor: {style.text_anchor};'
                f'paint-order: {style.paint_order};'
            ),
        }

    def has_content(self) -> bool:
        """Check if layer has text content."""
        return bool(self.text.strip())
