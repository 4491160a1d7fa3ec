"""TypeScript source infrastructure for the rewrite passes."""
from wane.compiler.typescript.document import TemplateSource, TypeScriptDocument, extract_templates
from wane.compiler.typescript.range_edits import Edit, RangeEditor, TextRange
from wane.compiler.typescript.writer import CodeWriter

__all__ = [
    "CodeWriter",
    "Edit",
    "RangeEditor",
    "TemplateSource",
    "TextRange",
    "TypeScriptDocument",
    "extract_templates",
]
