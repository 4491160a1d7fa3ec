"""Raw markup tree: the generic text/element/comment nodes the template parser consumes."""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from lxml import etree, html

from wane.compiler.preprocessor import (
    REF_ATTRIBUTE,
    Position,
    PreprocessedTemplate,
    preprocess_template,
)

logger = logging.getLogger(__name__)

ROOT_TAG = "wane-root"


@dataclass(frozen=True)
class RawAttribute:
    key: str
    value: Optional[str] = None


@dataclass
class RawText:
    content: str
    position: Optional[Position] = None


@dataclass
class RawComment:
    content: str
    position: Optional[Position] = None


@dataclass
class RawElement:
    tag: str
    attributes: Tuple[RawAttribute, ...] = ()
    children: List["RawNode"] = field(default_factory=list)
    position: Optional[Position] = None

    def __str__(self) -> str:
        return f"RawElement(<{self.tag}>, attrs={len(self.attributes)}, children={len(self.children)})"


RawNode = Union[RawText, RawElement, RawComment]


def parse_markup(template: str) -> List[RawNode]:
    """Parse a template into raw nodes, preserving tag/attribute spelling and order."""
    if not template.strip():
        return [RawText(template, Position(1, 1))] if template else []

    prepared = preprocess_template(template)
    document = html.document_fromstring(
        f"<html><body><{ROOT_TAG}>{prepared.html}</{ROOT_TAG}></body></html>"
    )
    root = document.find(f".//{ROOT_TAG}")
    if root is None:
        # lxml closed our container early; fall back to everything in <body>
        logger.debug("Template container was restructured by lxml, using <body>")
        root = document.body

    return _map_children(root, prepared, Position(1, 1))


def _map_children(parent: etree._Element, prepared: PreprocessedTemplate,
                  position: Optional[Position]) -> List[RawNode]:
    nodes: List[RawNode] = []
    if parent.text:
        nodes.append(RawText(parent.text, position))

    for child in parent:
        child_position = position
        if isinstance(child, etree._Comment):
            nodes.append(RawComment(child.text or "", position))
        elif isinstance(child.tag, str):
            element = _map_element(child, prepared)
            child_position = element.position
            nodes.append(element)
        # processing instructions and entities carry no view content

        if child.tail:
            nodes.append(RawText(child.tail, child_position))

    return nodes


def _map_element(element: etree._Element, prepared: PreprocessedTemplate) -> RawElement:
    ref = element.get(REF_ATTRIBUTE)
    if ref is not None and int(ref) in prepared.tags:
        recorded = prepared.tags[int(ref)]
        tag = recorded.tag
        attributes = tuple(RawAttribute(key, value) for key, value in recorded.attributes)
        position = recorded.position
    else:
        # Element synthesized by lxml (implied by the HTML content model)
        tag = element.tag
        attributes = tuple(RawAttribute(key, value) for key, value in element.attrib.items())
        line = getattr(element, "sourceline", None) or 0
        position = Position(line, 0)

    return RawElement(
        tag=tag,
        attributes=attributes,
        children=_map_children(element, prepared, position),
        position=position,
    )
