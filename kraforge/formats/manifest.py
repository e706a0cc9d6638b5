"""
XML manifests of a .kra archive.

- documentinfo.xml: empty metadata skeleton with creation timestamps
- maindoc.xml: image attributes and one ``layer`` entry per layer
- animation/index.xml: static animation metadata placeholder
- layers/<file>.shapelayer/content.svg: vector and text layer content
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Union

from kraforge.config import Settings, settings as default_settings
from kraforge.layers import Document, PaintLayer, ShapeLayer, TextLayer
from kraforge.xml_node import XMLNode, format_number

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
MAINDOC_DOCTYPE = (
    "<!DOCTYPE DOC PUBLIC '-//KDE//DTD krita 2.0//EN' "
    "'http://www.calligra.org/DTD/krita-2.0.dtd'>\n"
)
SVG_PROLOG = (
    '<?xml version="1.0" standalone="no"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 20010904//EN" '
    '"http://www.w3.org/TR/2001/REC-SVG-20010904/DTD/svg10.dtd">\n'
    '<!-- Created using Krita: https://krita.org -->\n'
)

KRITA_NAMESPACE = "http://www.calligra.org/DTD/krita"
DOCUMENT_INFO_NAMESPACE = "http://www.calligra.org/DTD/document-info"
SVG_NAMESPACES = {
    'xmlns': 'http://www.w3.org/2000/svg',
    'xmlns:xlink': 'http://www.w3.org/1999/xlink',
    'xmlns:krita': 'http://krita.org/namespaces/svg/krita',
    'xmlns:sodipodi': 'http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd',
}

FRAME_RATE = 24
FRAME_RANGE = (0, 100)

AnyLayer = Union[TextLayer, ShapeLayer, PaintLayer]


@dataclass(frozen=True)
class LayerEntry:
    """A layer with the file name and identifier it is written under."""
    layer: AnyLayer
    uuid: str
    filename: str

    @property
    def nodetype(self) -> str:
        return 'paintlayer' if isinstance(self.layer, PaintLayer) else 'shapelayer'


def build_document_info(now: Optional[datetime] = None) -> str:
    """Build documentinfo.xml."""
    timestamp = (now or datetime.now()).strftime('%Y-%m-%dT%H:%M:%S')

    root = XMLNode('document-info', {'xmlns': DOCUMENT_INFO_NAMESPACE})
    about = root.sub('about')
    about.sub('title')
    about.sub('description')
    about.sub('subject')
    about.sub('abstract', text='\n')
    about.sub('keyword')
    about.sub('initial-creator', text='Unknown')
    about.sub('editing-cycles', text='1')
    about.sub('editing-time')
    about.sub('date', text=timestamp)
    about.sub('creation-date', text=timestamp)
    about.sub('language')
    about.sub('license')

    author = root.sub('author')
    for tag in ('full-name', 'creator-first-name', 'creator-last-name',
                'initial', 'author-title', 'position', 'company'):
        author.sub(tag)

    return XML_DECLARATION + root.to_string()


def _layer_attributes(entry: LayerEntry) -> dict[str, str]:
    layer = entry.layer
    attrs = {
        'name': layer.name,
        'filename': entry.filename,
        'uuid': entry.uuid,
        'nodetype': entry.nodetype,
        'x': format_number(layer.x),
        'y': format_number(layer.y),
        'opacity': str(layer.opacity),
        'visible': '1' if layer.visible else '0',
        'locked': '0',
        'collapsed': '0',
        'colorlabel': '0',
        'compositeop': 'normal',
        'intimeline': '0',
        'channelflags': '',
    }
    if isinstance(layer, PaintLayer):
        attrs['colorspacename'] = 'RGBA'
        attrs['channellockflags'] = ''
        attrs['onionskin'] = '0'
    elif isinstance(layer, ShapeLayer) and layer.layer_style is not None:
        attrs['layerstyle'] = layer.layer_style.manifest_reference()
    return attrs


def _add_value(parent: XMLNode, tag: str, value: str) -> XMLNode:
    return parent.sub(tag, {'type': 'value', 'value': value})


def _add_animation_settings(parent: XMLNode) -> None:
    _add_value(parent, 'framerate', str(FRAME_RATE))
    parent.sub('range', {
        'type': 'timerange',
        'from': str(FRAME_RANGE[0]),
        'to': str(FRAME_RANGE[1]),
    })
    _add_value(parent, 'currentTime', '0')


def build_main_doc(
    document: Document,
    entries: Sequence[LayerEntry],
    settings: Optional[Settings] = None,
) -> str:
    """
    Build maindoc.xml.

    Args:
        document: Document supplying the canvas size
        entries: Layers in document order with their file names and identifiers
        settings: Settings supplying version, resolution and profile name
    """
    settings = settings or default_settings

    root = XMLNode('DOC', {
        'xmlns': KRITA_NAMESPACE,
        'kritaVersion': settings.KRITA_VERSION,
        'syntaxVersion': '2.0',
        'editor': 'Krita',
    })
    image = root.sub('IMAGE', {
        'width': str(document.width),
        'height': str(document.height),
        'mime': 'application/x-kra',
        'description': '',
        'name': 'Unnamed',
        'x-res': str(settings.RESOLUTION),
        'y-res': str(settings.RESOLUTION),
        'colorspacename': 'RGBA',
        'profile': settings.PROFILE_NAME,
    })

    layers = image.sub('layers')
    for entry in entries:
        layers.sub('layer', _layer_attributes(entry))

    image.sub('ProjectionBackgroundColor', {'ColorData': 'AAAAAA=='})
    image.sub('GlobalAssistantsColor', {'SimpleColorData': '176,176,176,255'})

    mirror_axis = image.sub('MirrorAxis')
    for tag, value in (
        ('mirrorHorizontal', '0'),
        ('mirrorVertical', '0'),
        ('lockHorizontal', '0'),
        ('lockVertical', '0'),
        ('hideHorizontalDecoration', '0'),
        ('hideVerticalDecoration', '0'),
        ('handleSize', '32'),
        ('horizontalHandlePosition', '64'),
        ('verticalHandlePosition', '64'),
    ):
        _add_value(mirror_axis, tag, value)
    mirror_axis.sub('axisPosition', {
        'type': 'pointf',
        'x': str(document.width // 2),
        'y': str(document.height // 2),
    })

    image.sub('Palettes')
    image.sub('resources')
    _add_animation_settings(image.sub('animation'))

    return XML_DECLARATION + MAINDOC_DOCTYPE + root.to_string()


def build_animation_metadata() -> str:
    """Build animation/index.xml."""
    root = XMLNode('animation-metadata', {'xmlns': KRITA_NAMESPACE})
    _add_animation_settings(root)
    export = root.sub('export-settings')
    _add_value(export, 'sequenceFilePath', '')
    _add_value(export, 'sequenceBaseName', '')
    _add_value(export, 'sequenceInitialFrameNumber', '-1')
    return XML_DECLARATION + root.to_string()


def _text_element(layer: TextLayer) -> XMLNode:
    text = XMLNode(layer.svg_tag, layer.get_svg_attributes())
    for span in layer.spans:
        text.sub('tspan', span.get_svg_attributes(), text=span.text)
    return text


def _shape_group(layer: ShapeLayer) -> XMLNode:
    group = XMLNode(layer.svg_tag, layer.get_svg_attributes())
    for shape in layer.shapes:
        group.append(shape.to_svg_element())
    return group


def build_svg_content(layer: Union[TextLayer, ShapeLayer], width: int, height: int) -> str:
    """
    Build the content.svg of a text or shape layer.

    The SVG is sized to the canvas; element attributes come from the layer
    and its shapes.
    """
    svg = XMLNode('svg', dict(SVG_NAMESPACES))
    svg.attrs.update({
        'width': str(width),
        'height': str(height),
        'viewBox': f'0 0 {width} {height}',
    })

    if isinstance(layer, TextLayer):
        svg.append(_text_element(layer))
    elif isinstance(layer, ShapeLayer):
        svg.append(_shape_group(layer))
    else:
        raise TypeError(f"No SVG content for {type(layer).__name__}")

    return SVG_PROLOG + svg.to_string()
