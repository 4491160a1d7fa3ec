import pytest

from wane.compiler.bound_values import ViewBoundConstant, ViewBoundPropertyAccess
from wane.compiler.interpolation import HandlebarsInterpolationParser
from wane.compiler.markup import RawText
from wane.compiler.parser import parse_template
from wane.compiler.template_nodes import InterpolationNode, TextNode


def summarize(values):
    result = []
    for value in values:
        if isinstance(value, TextNode):
            result.append(("text", value.binding.value.value))
        elif isinstance(value, InterpolationNode):
            result.append(("interpolation", value.binding.value))
        else:
            result.append(("element", value.tag_name))
    return result


@pytest.fixture
def interpolation_parser():
    return HandlebarsInterpolationParser()


def test_text_around_interpolation(interpolation_parser):
    nodes = interpolation_parser.parse(RawText("a{{ b }}c"))
    assert summarize(nodes) == [
        ("text", "'a'"),
        ("interpolation", ViewBoundPropertyAccess("b")),
        ("text", "'c'"),
    ]


def test_lone_interpolation_has_no_empty_text(interpolation_parser):
    nodes = interpolation_parser.parse(RawText("{{ b }}"))
    assert summarize(nodes) == [("interpolation", ViewBoundPropertyAccess("b"))]


def test_empty_text_between_interpolations_is_kept(interpolation_parser):
    nodes = interpolation_parser.parse(RawText("{{ a }}{{ b }}"))
    assert summarize(nodes) == [
        ("interpolation", ViewBoundPropertyAccess("a")),
        ("text", "''"),
        ("interpolation", ViewBoundPropertyAccess("b")),
    ]


def test_plain_text(interpolation_parser):
    assert summarize(interpolation_parser.parse(RawText("hello"))) == [("text", "'hello'")]


def test_interpolated_literal(interpolation_parser):
    nodes = interpolation_parser.parse(RawText("{{'hi'}}"))
    assert summarize(nodes) == [("interpolation", ViewBoundConstant("'hi'"))]


def test_text_is_escaped(interpolation_parser):
    nodes = interpolation_parser.parse(RawText("it's\nfine"))
    assert summarize(nodes) == [("text", "'it\\'s\\nfine'")]


def test_interpolation_inside_element():
    forest = parse_template("<p>Answer: {{ answer }}!</p>")
    paragraph = forest.roots[0]
    assert summarize([paragraph.value]) == [("element", "p")]
    assert summarize(child.value for child in paragraph.children) == [
        ("text", "'Answer: '"),
        ("interpolation", ViewBoundPropertyAccess("answer")),
        ("text", "'!'"),
    ]


def test_top_level_text():
    forest = parse_template("a{{ b }}c")
    assert len(forest) == 3
    assert str(forest.roots[1].value) == "[Interpolation] {{ PropertyAccess(b) }}"
