import pytest

from wane.compiler.exceptions import TemplateParseError
from wane.compiler.markup import RawComment, RawElement, RawText, parse_markup
from wane.compiler.preprocessor import Position, preprocess_template


def elements(nodes):
    return [node for node in nodes if isinstance(node, RawElement)]


def test_attributes_are_kept_verbatim():
    nodes = parse_markup("""<div [Value]="x" (Click)="go()" data-id='3' hidden></div>""")
    div = nodes[0]
    assert div.tag == "div"
    assert [(attr.key, attr.value) for attr in div.attributes] == [
        ("[Value]", "x"),
        ("(Click)", "go()"),
        ("data-id", "3"),
        ("hidden", None),
    ]


def test_tag_case_is_preserved():
    nodes = parse_markup("<Counter-Cmp></Counter-Cmp><W:IF a></W:IF>")
    assert [node.tag for node in nodes] == ["Counter-Cmp", "W:IF"]


def test_positions():
    nodes = parse_markup("<div>\n  <span></span>\n</div>")
    div = nodes[0]
    span = elements(div.children)[0]
    assert div.position == Position(1, 1)
    assert span.position == Position(2, 3)


def test_self_closing_custom_element():
    nodes = parse_markup('<x-item [a]="b" /><span>after</span>')
    assert [node.tag for node in nodes] == ["x-item", "span"]
    assert nodes[0].children == []
    assert nodes[1].children == [RawText("after", Position(1, 19))]


def test_void_elements_have_no_children():
    nodes = parse_markup("<input type='text'><span>x</span>")
    assert [node.tag for node in elements(nodes)] == ["input", "span"]
    assert nodes[0].children == []


def test_script_body_is_raw_text():
    nodes = parse_markup("<script>if (a < b) { go() }</script>")
    assert nodes[0].tag == "script"
    assert [child.content for child in nodes[0].children] == ["if (a < b) { go() }"]


def test_comment():
    nodes = parse_markup("<!-- note --><span>x</span>")
    assert isinstance(nodes[0], RawComment)
    assert nodes[0].content == " note "
    assert nodes[1].tag == "span"


def test_empty_template():
    assert parse_markup("") == []


def test_unclosed_start_tag():
    with pytest.raises(TemplateParseError) as exc_info:
        parse_markup("<div")
    assert (exc_info.value.line, exc_info.value.column) == (1, 1)
    assert "Unclosed start tag <div>" in exc_info.value.message


def test_preprocess_template():
    prepared = preprocess_template('<Foo-Bar [a]="1"/><w:if x></w:if>')
    assert prepared.html == (
        '<foo-bar data-wane-ref="0"></foo-bar>'
        '<wane-element data-wane-ref="1"></wane-element>'
    )
    assert prepared.tags[0].tag == "Foo-Bar"
    assert prepared.tags[0].attributes == (("[a]", "1"),)
    assert prepared.tags[1].position == Position(1, 19)
