import dataclasses
import unittest

from wane.compiler.bound_values import ViewBoundConstant, ViewBoundPropertyAccess
from wane.compiler.template_nodes import (
    BindingSet,
    ComponentNode,
    ConditionalNode,
    Forest,
    HtmlElementNode,
    RepeatingNode,
    TemplateNodeValue,
    TextNode,
    TreeNode,
    pascal_case,
)
from wane.compiler.view_bindings import (
    AttributeBinding,
    BindingKind,
    ComponentInputBinding,
    ConditionalBinding,
    HtmlElementPropBinding,
    RepeatingBinding,
    TextBinding,
)


class TestBindingSet(unittest.TestCase):
    def test_same_name_different_kind(self):
        bindings = BindingSet([
            AttributeBinding("title", ViewBoundConstant("'a'")),
            HtmlElementPropBinding("title", ViewBoundPropertyAccess("b")),
        ])
        self.assertEqual(len(bindings), 2)
        self.assertIn((BindingKind.ATTRIBUTE, "title"), bindings)

    def test_duplicate_key(self):
        bindings = BindingSet([HtmlElementPropBinding("value", ViewBoundPropertyAccess("a"))])
        with self.assertRaises(ValueError) as ctx:
            bindings.add(HtmlElementPropBinding("value", ViewBoundPropertyAccess("b")))
        self.assertEqual(str(ctx.exception), "Duplicate html-element-prop 'value' binding")

    def test_of_kind_keeps_insertion_order(self):
        bindings = BindingSet([
            HtmlElementPropBinding("b", ViewBoundPropertyAccess("x")),
            AttributeBinding("z", ViewBoundConstant("''")),
            HtmlElementPropBinding("a", ViewBoundPropertyAccess("y")),
        ])
        names = [binding.name for binding in bindings.of_kind(BindingKind.HTML_ELEMENT_PROP)]
        self.assertEqual(names, ["b", "a"])


class TestNodes(unittest.TestCase):
    def test_pascal_case(self):
        self.assertEqual(pascal_case("counter-cmp"), "CounterCmp")
        self.assertEqual(pascal_case("my-fancy-list"), "MyFancyList")

    def test_component_lookup_failure(self):
        node = ComponentNode("counter-cmp", input_bindings=[ComponentInputBinding("value", ViewBoundPropertyAccess("a"))])
        self.assertEqual(node.get_input_binding_by_name_or_fail("value").value, ViewBoundPropertyAccess("a"))
        with self.assertRaises(KeyError):
            node.get_output_binding_by_name_or_fail("value")

    def test_dom_nodes_count(self):
        condition = ConditionalNode(ConditionalBinding(ViewBoundPropertyAccess("a")))
        loop = RepeatingNode(RepeatingBinding(ViewBoundPropertyAccess("items"), "item"))
        element = HtmlElementNode("div")
        self.assertEqual(condition.dom_nodes_count, 2)
        self.assertEqual(loop.dom_nodes_count, 2)
        self.assertEqual(element.dom_nodes_count, 1)
        self.assertTrue(element.is_pure_dom)
        self.assertFalse(ComponentNode("x-y").is_pure_dom)

    def test_print_dom_init(self):
        self.assertEqual(HtmlElementNode("span").print_dom_init(), ["util.__wane__createElement('span')"])
        text = TextNode(TextBinding(ViewBoundConstant("'hi'")))
        self.assertEqual(text.print_dom_init(), ["util.__wane__createTextNode('hi')"])
        condition = ConditionalNode(ConditionalBinding(ViewBoundPropertyAccess("a")))
        self.assertEqual(len(condition.print_dom_init()), condition.dom_nodes_count)

    def test_describe_loop(self):
        node = RepeatingNode(RepeatingBinding(ViewBoundPropertyAccess("items"), "item", "i", "item.id"))
        self.assertEqual(str(node), "[w:for] (item, i) of PropertyAccess(items); key: item.id")

    def test_base_node_is_abstract(self):
        with self.assertRaises(TypeError):
            TemplateNodeValue([])

    def test_text_binding_requires_constant(self):
        with self.assertRaises(TypeError):
            TextBinding(ViewBoundPropertyAccess("a"))


class TestForest(unittest.TestCase):
    def test_walk_is_pre_order(self):
        leaf = TreeNode(TextNode(TextBinding(ViewBoundConstant("'x'"))))
        forest = Forest([
            TreeNode(HtmlElementNode("div"), [TreeNode(HtmlElementNode("span"), [leaf])]),
            TreeNode(HtmlElementNode("p")),
        ])
        self.assertEqual(
            [str(value) for value in forest.values()],
            ["[Element] <div>", "[Element] <span>", "[Text] 'x'", "[Element] <p>"],
        )

    def test_tree_is_immutable(self):
        tree = TreeNode(HtmlElementNode("div"), [])
        self.assertIsInstance(tree.children, tuple)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            tree.children = ()


if __name__ == '__main__':
    unittest.main()
