"""
Tests for maindoc.xml, documentinfo.xml, animation metadata and content.svg.
"""

import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from kraforge.config import Settings
from kraforge.formats.manifest import (
    LayerEntry,
    build_animation_metadata,
    build_document_info,
    build_main_doc,
    build_svg_content,
)
from kraforge.layers import (
    Circle,
    Document,
    LayerStyle,
    PaintLayer,
    Rectangle,
    ShapeGroup,
    ShapeLayer,
    ShapeStyle,
    StrokeEffect,
    TextLayer,
)

KRITA_NS = "{http://www.calligra.org/DTD/krita}"
SVG_NS = "{http://www.w3.org/2000/svg}"


def entries_for(doc: Document) -> list[LayerEntry]:
    return [
        LayerEntry(layer=layer, uuid=layer.uuid, filename=f"layer{index + 2}")
        for index, layer in enumerate(doc.layers)
    ]


def parse(xml: str) -> ET.Element:
    return ET.fromstring(xml.encode("utf-8"))


class TestMainDoc:
    def test_image_attributes(self, sample_document):
        settings = Settings(KRITA_VERSION="5.2.9", RESOLUTION=300)
        xml = build_main_doc(sample_document, entries_for(sample_document), settings)
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<!DOCTYPE DOC')

        root = parse(xml)
        assert root.get("kritaVersion") == "5.2.9"
        assert root.get("syntaxVersion") == "2.0"
        image = root.find(f"{KRITA_NS}IMAGE")
        assert image.get("width") == "100"
        assert image.get("height") == "80"
        assert image.get("x-res") == "300"
        assert image.get("colorspacename") == "RGBA"
        assert image.get("profile") == "sRGB-elle-V2-srgbtrc.icc"

    def test_layer_entries(self, sample_document):
        root = parse(build_main_doc(sample_document, entries_for(sample_document)))
        layers = root.findall(f"{KRITA_NS}IMAGE/{KRITA_NS}layers/{KRITA_NS}layer")

        assert [layer.get("filename") for layer in layers] == ["layer2", "layer3", "layer4"]
        assert [layer.get("nodetype") for layer in layers] == ["shapelayer", "shapelayer", "paintlayer"]
        assert [layer.get("uuid") for layer in layers] == [layer.uuid for layer in sample_document.layers]
        assert layers[0].get("x") == "10"
        assert layers[0].get("visible") == "1"
        assert layers[0].get("opacity") == "255"
        assert layers[2].get("colorspacename") == "RGBA"
        assert all(layer.get("layerstyle") is None for layer in layers)

    def test_hidden_layer(self):
        doc = Document(width=10, height=10)
        doc.add_layer(ShapeLayer(name="hidden", visible=False, opacity=128))
        layer = parse(build_main_doc(doc, entries_for(doc))).find(f".//{KRITA_NS}layer")
        assert layer.get("visible") == "0"
        assert layer.get("opacity") == "128"

    def test_layerstyle_reference(self, styled_document):
        layer = parse(build_main_doc(styled_document, entries_for(styled_document))).find(f".//{KRITA_NS}layer")
        style = styled_document.layers[0].layer_style
        assert layer.get("layerstyle") == "{" + style.uuid + "}"

    def test_escaped_layer_name(self):
        doc = Document(width=10, height=10)
        doc.add_layer(ShapeLayer(name='A & "B" <C>'))
        xml = build_main_doc(doc, entries_for(doc))
        assert 'name="A &amp; &quot;B&quot; &lt;C&gt;"' in xml
        assert parse(xml).find(f".//{KRITA_NS}layer").get("name") == 'A & "B" <C>'

    def test_deterministic(self, sample_document):
        entries = entries_for(sample_document)
        assert build_main_doc(sample_document, entries) == build_main_doc(sample_document, entries)


class TestDocumentInfo:
    def test_timestamps(self):
        xml = build_document_info(datetime(2024, 5, 6, 7, 8, 9))
        root = parse(xml)
        ns = "{http://www.calligra.org/DTD/document-info}"
        about = root.find(f"{ns}about")
        assert about.find(f"{ns}date").text == "2024-05-06T07:08:09"
        assert about.find(f"{ns}creation-date").text == "2024-05-06T07:08:09"
        assert root.find(f"{ns}author") is not None


class TestAnimationMetadata:
    def test_placeholder(self):
        root = parse(build_animation_metadata())
        assert root.find(f"{KRITA_NS}framerate").get("value") == "24"
        frame_range = root.find(f"{KRITA_NS}range")
        assert (frame_range.get("from"), frame_range.get("to")) == ("0", "100")


class TestSvgContent:
    def test_text_layer(self):
        layer = TextLayer.from_text("Hello\nWorld", x=10, y=20)
        svg = build_svg_content(layer, 100, 80)
        assert "<!-- Created using Krita: https://krita.org -->" in svg

        root = parse(svg)
        assert root.get("width") == "100"
        assert root.get("viewBox") == "0 0 100 80"
        text = root.find(f"{SVG_NS}text")
        assert text.get("transform") == "translate(10, 20)"
        assert "font-family: Segoe UI;" in text.get("style")

        spans = text.findall(f"{SVG_NS}tspan")
        assert [span.text for span in spans] == ["Hello", "World"]
        assert spans[0].get("dy") is None
        assert float(spans[1].get("dy")) == pytest.approx(14.4)

    def test_shape_layer(self):
        layer = ShapeLayer(
            x=5,
            shapes=[
                Rectangle(x=1, y=2, width=30, height=40, style=ShapeStyle(fill="#FF0000")),
                ShapeGroup(transform="rotate(45)", shapes=[Circle(cx=3, cy=4, r=5)]),
            ],
        )
        group = parse(build_svg_content(layer, 64, 64)).find(f"{SVG_NS}g")
        assert group.get("transform") == "translate(5, 0)"

        rect = group.find(f"{SVG_NS}rect")
        assert (rect.get("x"), rect.get("width"), rect.get("fill")) == ("1", "30", "#FF0000")
        inner = group.find(f"{SVG_NS}g")
        assert inner.get("transform") == "rotate(45)"
        assert inner.find(f"{SVG_NS}circle").get("r") == "5"

    def test_paint_layer_has_no_svg(self):
        with pytest.raises(TypeError):
            build_svg_content(PaintLayer(), 10, 10)


def test_styled_layer_entry_nodetype():
    layer = ShapeLayer(layer_style=LayerStyle(stroke=StrokeEffect()))
    entry = LayerEntry(layer=layer, uuid=layer.uuid, filename="layer2")
    assert entry.nodetype == "shapelayer"
    assert LayerEntry(layer=PaintLayer(), uuid="{x}", filename="layer3").nodetype == "paintlayer"
