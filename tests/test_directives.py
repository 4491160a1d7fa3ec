import unittest

from wane.compiler.bound_values import ViewBoundPropertyAccess
from wane.compiler.exceptions import TemplateParseError
from wane.compiler.parser import parse_template
from wane.compiler.template_nodes import ConditionalNode, HtmlElementNode, RepeatingNode


class TestConditionalDirective(unittest.TestCase):
    def test_condition(self):
        forest = parse_template("<w:if isShown><span>x</span></w:if>")
        self.assertEqual(len(forest), 1)
        root = forest.roots[0]
        self.assertIsInstance(root.value, ConditionalNode)
        self.assertFalse(root.value.binding.is_negated)
        self.assertEqual(root.value.binding.value, ViewBoundPropertyAccess("isShown"))

        # The wrapped subtree is the conditional's only child
        self.assertEqual(len(root.children), 1)
        self.assertIsInstance(root.children[0].value, HtmlElementNode)
        self.assertEqual(root.children[0].value.tag_name, "span")

    def test_negated_condition(self):
        binding = parse_template("<w:if !isHidden></w:if>").roots[0].value.binding
        self.assertTrue(binding.is_negated)
        self.assertEqual(binding.value, ViewBoundPropertyAccess("isHidden"))

    def test_dotted_path(self):
        binding = parse_template("<w:if !user.isAdmin></w:if>").roots[0].value.binding
        self.assertEqual(binding.value, ViewBoundPropertyAccess("user.isAdmin"))

    def test_prefix_is_case_insensitive(self):
        root = parse_template("<W:IF isShown></W:IF>").roots[0]
        self.assertIsInstance(root.value, ConditionalNode)

    def test_missing_condition(self):
        with self.assertRaises(TemplateParseError) as ctx:
            parse_template("<w:if></w:if>")
        self.assertIn("Must specify the condition", ctx.exception.message)

    def test_condition_must_be_a_path(self):
        for template in ["<w:if a.b()></w:if>", "<w:if a == b></w:if>", "<w:if count=1></w:if>"]:
            with self.subTest(template=template):
                with self.assertRaises(TemplateParseError):
                    parse_template(template)

    def test_dom_nodes_count(self):
        node = parse_template("<w:if a></w:if>").roots[0].value
        self.assertEqual(node.dom_nodes_count, 2)
        self.assertTrue(node.is_pure_dom)


class TestLoopDirective(unittest.TestCase):
    def test_item_index_and_key(self):
        root = parse_template("<w:for (item, i) of items; key: item.id><span></span></w:for>").roots[0]
        self.assertIsInstance(root.value, RepeatingNode)
        binding = root.value.binding
        self.assertEqual(binding.item_name, "item")
        self.assertEqual(binding.index_name, "i")
        self.assertEqual(binding.value, ViewBoundPropertyAccess("items"))
        self.assertEqual(binding.key_path, "item.id")
        self.assertEqual(len(root.children), 1)

    def test_bare_item(self):
        binding = parse_template("<w:for item of items></w:for>").roots[0].value.binding
        self.assertEqual(binding.item_name, "item")
        self.assertIsNone(binding.index_name)
        self.assertIsNone(binding.key_path)

    def test_dotted_source(self):
        binding = parse_template("<w:for row of table.rows></w:for>").roots[0].value.binding
        self.assertEqual(binding.value, ViewBoundPropertyAccess("table.rows"))

    def test_nested_directives(self):
        root = parse_template("<w:if a><w:for x of xs><b></b></w:for></w:if>").roots[0]
        self.assertIsInstance(root.value, ConditionalNode)
        self.assertIsInstance(root.children[0].value, RepeatingNode)
        self.assertEqual(root.children[0].children[0].value.tag_name, "b")

    def test_unsupported_key_clause(self):
        with self.assertRaises(TemplateParseError) as ctx:
            parse_template("<w:for item of items; id: item.id></w:for>")
        self.assertIn('Key "id" not supported', ctx.exception.message)

    def test_key_clause_without_colon(self):
        with self.assertRaises(TemplateParseError):
            parse_template("<w:for item of items; key item.id></w:for>")

    def test_key_must_be_simple_path(self):
        for key in ["!item.id", "item.id()", "item[0]"]:
            with self.subTest(key=key):
                with self.assertRaises(TemplateParseError):
                    parse_template(f"<w:for item of items; key: {key}></w:for>")

    def test_missing_of(self):
        for template in ["<w:for items></w:for>", "<w:for of items></w:for>", "<w:for item of></w:for>"]:
            with self.subTest(template=template):
                with self.assertRaises(TemplateParseError):
                    parse_template(template)


class TestUnknownDirective(unittest.TestCase):
    def test_unknown_directive(self):
        with self.assertRaises(TemplateParseError) as ctx:
            parse_template("<div>\n<w:switch x></w:switch></div>")
        self.assertIn("Unsupported directive", ctx.exception.message)
        self.assertEqual(ctx.exception.line, 2)


if __name__ == '__main__':
    unittest.main()
