import unittest

import pytest

from wane.compiler.attributes import PlainAttributeParser
from wane.compiler.bound_values import (
    ViewBoundConstant,
    ViewBoundMethodCall,
    ViewBoundPlaceholder,
    ViewBoundPropertyAccess,
)
from wane.compiler.exceptions import TemplateParseError
from wane.compiler.parser import TemplateParser, parse_template
from wane.compiler.template_nodes import ComponentNode, HtmlElementNode, TextNode
from wane.compiler.view_bindings import (
    AttributeBinding,
    BindingKind,
    HtmlElementEventBinding,
    HtmlElementPropBinding,
)


class TestTemplateParser(unittest.TestCase):
    def setUp(self):
        self.parser = TemplateParser()

    def test_parse_simple_html(self):
        forest = self.parser.parse("<div><span>Hello</span></div>")
        self.assertEqual(len(forest), 1)
        root = forest.roots[0]
        self.assertIsInstance(root.value, HtmlElementNode)
        self.assertEqual(root.value.tag_name, "div")
        self.assertEqual(len(root.children), 1)
        self.assertEqual(root.children[0].value.tag_name, "span")
        self.assertIsInstance(root.children[0].children[0].value, TextNode)

    def test_sibling_order_is_preserved(self):
        forest = self.parser.parse("<div></div><span></span>tail")
        kinds = [str(tree.value) for tree in forest]
        self.assertEqual(kinds, ["[Element] <div>", "[Element] <span>", "[Text] 'tail'"])

    def test_element_bindings(self):
        forest = self.parser.parse('<input [value]="answer" (input)="onInput(#)" type="text" disabled>')
        node = forest.roots[0].value
        self.assertEqual(node.tag_name, "input")
        self.assertEqual(
            node.get_binding(BindingKind.HTML_ELEMENT_PROP, "value"),
            HtmlElementPropBinding("value", ViewBoundPropertyAccess("answer")),
        )
        self.assertEqual(
            node.get_binding(BindingKind.HTML_ELEMENT_PROP, "type"),
            HtmlElementPropBinding("type", ViewBoundConstant("'text'")),
        )
        self.assertEqual(
            node.event_bindings,
            [HtmlElementEventBinding("input", ViewBoundMethodCall("onInput", (ViewBoundPlaceholder(),)))],
        )
        self.assertEqual(node.attribute_bindings, [AttributeBinding("disabled", ViewBoundConstant("''"))])
        self.assertEqual(len(forest.roots[0].children), 0)

    def test_component_bindings(self):
        forest = self.parser.parse(
            '<counter-cmp [value]="left" (valueChange)="onLeftChange(#)" data-role="counter"></counter-cmp>'
        )
        node = forest.roots[0].value
        self.assertIsInstance(node, ComponentNode)
        self.assertFalse(node.is_pure_dom)
        self.assertEqual(node.component_class_name, "CounterCmp")
        self.assertEqual(node.get_input_binding_by_name_or_fail("value").value, ViewBoundPropertyAccess("left"))
        self.assertEqual(
            node.get_output_binding_by_name_or_fail("valueChange").value,
            ViewBoundMethodCall("onLeftChange", (ViewBoundPlaceholder(),)),
        )
        self.assertEqual(node.get_attribute_binding_by_name_or_fail("data-role").value, ViewBoundConstant("'counter'"))

    def test_binding_names_keep_their_case(self):
        node = self.parser.parse('<my-cmp [someInput]="x"></my-cmp>').roots[0].value
        self.assertIsNotNone(node.get_binding(BindingKind.COMPONENT_INPUT, "someInput"))
        self.assertEqual(node.tag_name, "my-cmp")

    def test_self_closing_component(self):
        forest = self.parser.parse('<x-button [label]="a" /><span></span>')
        self.assertEqual([str(tree.value) for tree in forest], ["[Component] <x-button>", "[Element] <span>"])
        self.assertEqual(len(forest.roots[0].children), 0)

    def test_comments_produce_nothing(self):
        forest = self.parser.parse("<div><!-- note --></div>")
        self.assertEqual(len(forest.roots[0].children), 0)

    def test_duplicate_binding(self):
        with self.assertRaises(TemplateParseError) as ctx:
            self.parser.parse('<div [title]="a" title="b"></div>')
        self.assertIn("Duplicate", ctx.exception.message)

    def test_error_position(self):
        with self.assertRaises(TemplateParseError) as ctx:
            self.parser.parse("<div>\n  <span (click)></span>\n</div>")
        self.assertEqual((ctx.exception.line, ctx.exception.column), (2, 3))

    def test_unclosed_start_tag(self):
        with self.assertRaises(TemplateParseError):
            self.parser.parse("<div class='a'")

    def test_attribute_parsers_can_be_replaced(self):
        self.parser.attribute_parsers = [PlainAttributeParser()]
        node = self.parser.parse('<div [title]="a"></div>').roots[0].value
        self.assertEqual(node.prop_bindings, [HtmlElementPropBinding("[title]", ViewBoundConstant("'a'"))])

    def test_empty_template(self):
        self.assertEqual(len(self.parser.parse("")), 0)


def test_parse_file_reports_path(tmp_path):
    template = tmp_path / "broken.html"
    template.write_text("<button (click)>Go</button>", encoding="utf-8")

    with pytest.raises(TemplateParseError) as exc_info:
        TemplateParser().parse_file(template)
    assert str(exc_info.value).startswith(f"{template}: Parse Error (1:1)")


def test_parse_error_is_logged(caplog):
    with pytest.raises(TemplateParseError):
        parse_template("<w:if></w:if>")
    assert "Failed to parse template" in caplog.text


def test_forest_pretty():
    forest = parse_template("<div><w:if a><span>{{ b }}</span></w:if></div>")
    assert forest.pretty() == "\n".join([
        "[Element] <div>",
        "  [w:if] PropertyAccess(a)",
        "    [Element] <span>",
        "      [Interpolation] {{ PropertyAccess(b) }}",
    ])


def test_forest_pretty_lists_bindings():
    forest = parse_template('<counter-cmp [value]="left" (valueChange)="onChange(#)"></counter-cmp><input disabled>')
    assert forest.pretty().splitlines() == [
        "[Component] <counter-cmp> ComponentInputBinding(value=PropertyAccess(left)), "
        "ComponentOutputBinding(valueChange=MethodCall(onChange, [Placeholder(#)]))",
        "[Element] <input> AttributeBinding(disabled=Constant(''))",
    ]


if __name__ == '__main__':
    unittest.main()
