"""
Vector primitives for shape layers.

Each primitive knows its SVG element tag and produces its own attribute set;
the manifest builder only assembles the resulting nodes into a layer's
``content.svg``. Nothing here rasterizes or measures geometry.
"""

from typing import ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from kraforge.xml_node import XMLNode, format_number


class ShapeStyle(BaseModel):
    """Fill and stroke options shared by all primitives."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    fill: str = Field(default='none')  # color or "none"
    stroke: str = Field(default='#000000')
    stroke_width: float = Field(default=1.0)
    stroke_opacity: float = Field(default=1.0)
    fill_opacity: float = Field(default=1.0)
    stroke_linecap: str = Field(default='butt')  # butt, round, square
    stroke_linejoin: str = Field(default='miter')  # miter, round, bevel
    stroke_dasharray: Optional[str] = Field(default=None)  # e.g. "5,5"


DEFAULT_SHAPE_STYLE = ShapeStyle()


class Shape(BaseModel):
    """Base class for all primitives."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    svg_tag: ClassVar[str] = ''

    style: ShapeStyle = Field(default_factory=DEFAULT_SHAPE_STYLE.model_copy)
    transform: str = Field(default='')

    def get_svg_attributes(self) -> dict[str, str]:
        """Common SVG attributes for the shape."""
        attrs = {
            'fill': self.style.fill,
            'stroke': self.style.stroke,
            'stroke-width': format_number(self.style.stroke_width),
            'stroke-opacity': format_number(self.style.stroke_opacity),
            'fill-opacity': format_number(self.style.fill_opacity),
            'stroke-linecap': self.style.stroke_linecap,
            'stroke-linejoin': self.style.stroke_linejoin,
        }
        if self.style.stroke_dasharray is not None:
            attrs['stroke-dasharray'] = self.style.stroke_dasharray
        if self.transform:
            attrs['transform'] = self.transform
        return attrs

    def geometry_attributes(self) -> dict[str, str]:
        return {}

    def to_svg_element(self) -> XMLNode:
        attrs = self.get_svg_attributes()
        attrs.update(self.geometry_attributes())
        return XMLNode(self.svg_tag, attrs)


class Rectangle(Shape):
    """Axis-aligned rectangle with optional rounded corners."""

    svg_tag: ClassVar[str] = 'rect'

    x: float = 0
    y: float = 0
    width: float = 100
    height: float = 100
    rx: Optional[float] = None
    ry: Optional[float] = None

    def geometry_attributes(self) -> dict[str, str]:
        attrs = {
            'x': format_number(self.x),
            'y': format_number(self.y),
            'width': format_number(self.width),
            'height': format_number(self.height),
        }
        if self.rx is not None:
            attrs['rx'] = format_number(self.rx)
        if self.ry is not None:
            attrs['ry'] = format_number(self.ry)
        return attrs


class Circle(Shape):
    svg_tag: ClassVar[str] = 'circle'

    cx: float = 0
    cy: float = 0
    r: float = 50

    def geometry_attributes(self) -> dict[str, str]:
        return {
            'cx': format_number(self.cx),
            'cy': format_number(self.cy),
            'r': format_number(self.r),
        }


class Ellipse(Shape):
    svg_tag: ClassVar[str] = 'ellipse'

    cx: float = 0
    cy: float = 0
    rx: float = 50
    ry: float = 30

    def geometry_attributes(self) -> dict[str, str]:
        return {
            'cx': format_number(self.cx),
            'cy': format_number(self.cy),
            'rx': format_number(self.rx),
            'ry': format_number(self.ry),
        }


class Line(Shape):
    svg_tag: ClassVar[str] = 'line'

    x1: float = 0
    y1: float = 0
    x2: float = 100
    y2: float = 100

    def geometry_attributes(self) -> dict[str, str]:
        return {
            'x1': format_number(self.x1),
            'y1': format_number(self.y1),
            'x2': format_number(self.x2),
            'y2': format_number(self.y2),
        }


class Path(Shape):
    svg_tag: ClassVar[str] = 'path'

    d: str = ''  # SVG path data

    def geometry_attributes(self) -> dict[str, str]:
        return {'d': self.d}


class ShapeGroup(BaseModel):
    """
    Group of primitives.

    A group only wraps its children in a ``g`` element; it has no style of
    its own and never owns pixels.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    svg_tag: ClassVar[str] = 'g'

    shapes: list[Union[Shape, 'ShapeGroup']] = Field(default_factory=list)
    transform: str = Field(default='')

    def get_svg_attributes(self) -> dict[str, str]:
        if self.transform:
            return {'transform': self.transform}
        return {}

    def to_svg_element(self) -> XMLNode:
        group = XMLNode(self.svg_tag, self.get_svg_attributes())
        for shape in self.shapes:
            group.append(shape.to_svg_element())
        return group


ShapeGroup.model_rebuild()

VectorShape = Union[Shape, ShapeGroup]
