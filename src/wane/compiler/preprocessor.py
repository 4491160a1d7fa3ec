"""Markup pre-pass run before handing a template to lxml.

lxml lower-cases tag and attribute names and rejects keys such as ``[value]``
or ``(click)``, so every start tag is recorded verbatim here and replaced by a
neutral ``<tag data-wane-ref="N">`` that lxml parses without loss.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from wane.compiler.exceptions import TemplateParseError

REF_ATTRIBUTE = "data-wane-ref"
PLACEHOLDER_TAG = "wane-element"

VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
}
RAW_TEXT_ELEMENTS = {"script", "style"}

_TAG_NAME = re.compile(r"[A-Za-z][^\s/>]*")
_END_TAG = re.compile(r"</([A-Za-z][^\s/>]*)\s*>")
_SAFE_TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9]*(?:-[A-Za-z0-9]+)*$")
_WHITESPACE = re.compile(r"\s*")
_ATTRIBUTE = re.compile(r"""([^\s=>/"']+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s>"']+))?""")


@dataclass(frozen=True)
class Position:
    """1-based line and column in the original template."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class RecordedTag:
    tag: str
    attributes: Tuple[Tuple[str, Optional[str]], ...]
    position: Position


@dataclass
class PreprocessedTemplate:
    html: str
    tags: Dict[int, RecordedTag] = field(default_factory=dict)


def position_at(text: str, offset: int) -> Position:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return Position(line, column)


def lxml_tag_name(tag: str) -> str:
    """Name lxml sees for a tag; anything lxml could mangle gets the placeholder name."""
    if _SAFE_TAG_NAME.match(tag):
        return tag.lower()
    return PLACEHOLDER_TAG


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _scan_start_tag(text: str, start: int) -> Tuple[str, List[Tuple[str, Optional[str]]], bool, int]:
    """Scan the start tag at text[start] == '<'. Returns (tag, attrs, self_closing, end)."""
    name_match = _TAG_NAME.match(text, start + 1)
    tag = name_match.group(0)
    pos = name_match.end()
    attributes: List[Tuple[str, Optional[str]]] = []

    while True:
        pos = _WHITESPACE.match(text, pos).end()
        if pos >= len(text):
            raise TemplateParseError.at(position_at(text, start), f"Unclosed start tag <{tag}>.")
        if text.startswith("/>", pos):
            return tag, attributes, True, pos + 2
        if text[pos] == ">":
            return tag, attributes, False, pos + 1
        if text[pos] == "/":
            pos += 1
            continue

        attr_match = _ATTRIBUTE.match(text, pos)
        if attr_match is None:
            raise TemplateParseError.at(
                position_at(text, pos), f"Malformed attribute in <{tag}>."
            )
        key, raw_value = attr_match.group(1), attr_match.group(2)
        attributes.append((key, None if raw_value is None else _unquote(raw_value)))
        pos = attr_match.end()


def preprocess_template(text: str) -> PreprocessedTemplate:
    """Rewrite start/end tags of a template so lxml keeps the original structure."""
    result = PreprocessedTemplate(html="")
    out: List[str] = []
    pos = 0
    last = 0

    while True:
        pos = text.find("<", pos)
        if pos == -1:
            break

        if text.startswith("<!--", pos):
            end = text.find("-->", pos + 4)
            pos = len(text) if end == -1 else end + 3
            continue

        if text.startswith("<!", pos) or text.startswith("<?", pos):
            end = text.find(">", pos)
            pos = len(text) if end == -1 else end + 1
            continue

        end_match = _END_TAG.match(text, pos)
        if end_match:
            out.append(text[last:pos])
            out.append(f"</{lxml_tag_name(end_match.group(1))}>")
            pos = last = end_match.end()
            continue

        if not _TAG_NAME.match(text, pos + 1):
            # A lone "<" in text content.
            pos += 1
            continue

        tag, attributes, self_closing, end = _scan_start_tag(text, pos)
        ref = len(result.tags)
        result.tags[ref] = RecordedTag(tag, tuple(attributes), position_at(text, pos))

        name = lxml_tag_name(tag)
        out.append(text[last:pos])
        out.append(f'<{name} {REF_ATTRIBUTE}="{ref}">')
        if self_closing and name not in VOID_ELEMENTS:
            out.append(f"</{name}>")
        pos = last = end

        if name in RAW_TEXT_ELEMENTS and not self_closing:
            close = re.compile(rf"</{name}\s*>", re.IGNORECASE).search(text, pos)
            pos = len(text) if close is None else close.start()

    out.append(text[last:])
    result.html = "".join(out)
    return result
