"""
Tests for the document and layer models.
"""

import numpy as np
import pytest
from PIL import Image
from pydantic import TypeAdapter

from kraforge.exceptions import ImageDecodeError
from kraforge.layers import (
    Document,
    Layer,
    LayerStyle,
    LayerType,
    PaintLayer,
    Rectangle,
    ShapeLayer,
    ShapeStyle,
    StrokeEffect,
    TextLayer,
    TextStyle,
    split_lines,
)


class TestBaseLayer:
    def test_uuid_is_braced_and_stable(self):
        layer = ShapeLayer()
        assert layer.uuid.startswith("{") and layer.uuid.endswith("}")
        assert len(layer.uuid) == 38
        assert layer.uuid == layer.uuid
        assert ShapeLayer().uuid != layer.uuid

    def test_defaults(self):
        layer = PaintLayer()
        assert layer.visible is True
        assert layer.opacity == 255
        assert (layer.x, layer.y) == (0, 0)
        assert layer.is_paint() and not layer.is_vector()

    def test_opacity_not_range_checked(self):
        assert ShapeLayer(opacity=300).opacity == 300

    def test_type_checks(self):
        assert TextLayer().is_text() and TextLayer().is_vector()
        assert ShapeLayer().is_shape() and ShapeLayer().is_vector()
        assert ShapeLayer().layer_type == LayerType.SHAPE.value


class TestTextLayer:
    def test_split_lines(self):
        assert split_lines("a\nb") == ["a", "b"]
        assert split_lines("a\r\nb\rc") == ["a", "b", "c"]
        assert split_lines("") == [""]

    def test_from_text_line_advance(self):
        style = TextStyle(font_size=20, line_height=1.5)
        layer = TextLayer.from_text("one\ntwo\nthree", style=style)
        assert [span.text for span in layer.spans] == ["one", "two", "three"]
        assert layer.spans[0].dy is None
        assert layer.spans[1].dy == 30
        assert layer.spans[2].dy == 30
        assert layer.text == "one\ntwo\nthree"

    def test_empty_text_single_span(self):
        layer = TextLayer.from_text("")
        assert len(layer.spans) == 1
        assert not layer.has_content()

    def test_style_defaults(self):
        style = TextStyle()
        assert style.font_family == "Segoe UI"
        assert style.font_size == 12
        assert style.line_height == 1.2
        assert style.text_anchor == "middle"
        assert style.stroke_linejoin == "bevel"

    def test_svg_attributes(self):
        attrs = TextLayer.from_text("Hi", x=3, y=4).get_svg_attributes()
        assert attrs["id"] == "shape0"
        assert attrs["krita:useRichText"] == "false"
        assert attrs["transform"] == "translate(3, 4)"
        assert attrs["style"].startswith("text-align: start;")


class TestShapes:
    def test_shape_style_defaults(self):
        attrs = Rectangle().get_svg_attributes()
        assert attrs["fill"] == "none"
        assert attrs["stroke"] == "#000000"
        assert attrs["stroke-width"] == "1"
        assert "stroke-dasharray" not in attrs

    def test_dasharray_and_transform(self):
        rect = Rectangle(style=ShapeStyle(stroke_dasharray="5,5"), transform="rotate(10)")
        attrs = rect.get_svg_attributes()
        assert attrs["stroke-dasharray"] == "5,5"
        assert attrs["transform"] == "rotate(10)"

    def test_rounded_rectangle(self):
        element = Rectangle(x=1, y=2, width=3, height=4, rx=5).to_svg_element()
        assert element.tag == "rect"
        assert element.attrs["rx"] == "5"
        assert "ry" not in element.attrs


class TestLayerStyle:
    def test_stroke_hex_color(self):
        effect = StrokeEffect(size=3, color="#FF8000")
        assert effect.color == (255.0, 128.0, 0.0)

    def test_legacy_width(self):
        assert StrokeEffect(width=7).size == 7

    def test_input_dict_not_modified(self):
        data = {"width": 5, "color": "#010203"}
        effect = StrokeEffect.model_validate(data)
        assert effect.size == 5
        assert effect.color == (1.0, 2.0, 3.0)
        assert data == {"width": 5, "color": "#010203"}

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            StrokeEffect(color="#FFF")

    def test_references(self):
        style = LayerStyle(uuid="12345678-aaaa-bbbb-cccc-1234567890ab")
        assert style.manifest_reference() == "{12345678-aaaa-bbbb-cccc-1234567890ab}"
        assert style.asl_identifier() == "%12345678aaaabbbbcccc1234567890ab"
        assert not style.stroke_enabled
        assert LayerStyle(stroke=StrokeEffect()).stroke_enabled


class TestPaintLayer:
    def test_rgb_array_gets_alpha(self):
        layer = PaintLayer(image=np.full((2, 3, 3), 7, dtype=np.uint8))
        rgba = layer.to_rgba_array()
        assert rgba.shape == (2, 3, 4)
        assert rgba[0, 0].tolist() == [7, 7, 7, 255]

    def test_grayscale_array(self):
        rgba = PaintLayer(image=np.full((2, 2), 9, dtype=np.uint8)).to_rgba_array()
        assert rgba[1, 1].tolist() == [9, 9, 9, 255]

    def test_float_array(self):
        rgba = PaintLayer(image=np.ones((1, 1, 4), dtype=np.float32)).to_rgba_array()
        assert rgba.dtype == np.uint8
        assert rgba[0, 0].tolist() == [255, 255, 255, 255]

    def test_pil_image(self):
        image = Image.new("RGB", (4, 2), (10, 20, 30))
        rgba = PaintLayer(image=image).to_rgba_array()
        assert rgba.shape == (2, 4, 4)
        assert rgba[0, 0].tolist() == [10, 20, 30, 255]
        assert image.mode == "RGB"

    def test_unsupported_inputs(self):
        with pytest.raises(ImageDecodeError):
            PaintLayer().to_rgba_array()
        with pytest.raises(ImageDecodeError):
            PaintLayer(image="not an image").to_rgba_array()
        with pytest.raises(ImageDecodeError):
            PaintLayer(image=np.zeros((2, 2, 5), dtype=np.uint8)).to_rgba_array()

    def test_from_file(self, tmp_path):
        path = tmp_path / "dummy.png"
        Image.new("RGBA", (5, 6), (1, 2, 3, 4)).save(path)
        layer = PaintLayer.from_file(path)
        assert layer.name == "dummy"
        assert layer.image_path == str(path)
        assert layer.to_rgba_array().shape == (6, 5, 4)

    def test_from_invalid_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not a png")
        with pytest.raises(ImageDecodeError):
            PaintLayer.from_file(path)


class TestDocument:
    def test_add_layers_keeps_order(self, grey_image):
        doc = Document(width=100, height=80)
        text = doc.add_text_layer("Hi")
        shape = doc.add_shape_layer(Rectangle())
        paint = doc.add_image_layer(grey_image)
        assert [id(layer) for layer in doc.layers] == [id(text), id(shape), id(paint)]
        assert doc.paint_layers()[0] is paint
        assert doc.styled_layers() == []

    def test_shape_style_applied_to_unstyled_shapes(self):
        doc = Document()
        own = ShapeStyle(fill="#111111")
        layer = doc.add_shape_layer(
            [Rectangle(), Rectangle(style=own)],
            style=ShapeStyle(fill="#222222"),
        )
        assert layer.shapes[0].style.fill == "#222222"
        assert layer.shapes[1].style.fill == "#111111"

    def test_styled_layers(self):
        doc = Document()
        doc.add_shape_layer(Rectangle())
        styled = doc.add_shape_layer(Rectangle(), layer_style=LayerStyle(stroke=StrokeEffect()))
        assert [id(layer) for layer in doc.styled_layers()] == [id(styled)]
        assert styled.has_style()
        assert not doc.layers[0].has_style()

    def test_image_layer_from_path(self, tmp_path):
        path = tmp_path / "img.png"
        Image.new("RGB", (3, 3)).save(path)
        layer = Document().add_image_layer(path)
        assert isinstance(layer, PaintLayer)
        assert layer.image_path == str(path)

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError):
            Document(width=0, height=10)

    def test_discriminated_union(self):
        adapter = TypeAdapter(Layer)
        assert isinstance(adapter.validate_python({"type": "text", "spans": [{"text": "a"}]}), TextLayer)
        assert isinstance(adapter.validate_python({"type": "shape"}), ShapeLayer)
        assert isinstance(adapter.validate_python({"type": "paint"}), PaintLayer)
        with pytest.raises(ValueError):
            adapter.validate_python({"type": "group"})

    def test_document_from_dict(self):
        doc = Document.model_validate({
            "width": 32,
            "height": 32,
            "layers": [
                {"type": "text", "spans": [{"text": "Hello"}], "x": 4},
                {"type": "shape", "layerStyle": {"stroke": {"size": 2}}},
            ],
        })
        assert isinstance(doc.layers[0], TextLayer)
        assert doc.layers[1].layer_style.stroke.size == 2
