"""Validation for component templates."""
from pathlib import Path
from typing import List

from wane.compiler.exceptions import TemplateParseError
from wane.compiler.parser import TemplateParser
from wane.compiler.typescript import TypeScriptDocument, extract_templates


def validate_project(templates_dir: Path) -> List[str]:
    """Parse every .html template and every @Template(...) literal in .ts sources."""
    errors = []
    parser = TemplateParser()

    if not templates_dir.exists():
        return [f"Templates directory not found: {templates_dir}"]

    for template_file in sorted(templates_dir.rglob("*.html")):
        try:
            parser.parse_file(template_file)
        except TemplateParseError as e:
            errors.append(str(e))

    for source_file in sorted(templates_dir.rglob("*.ts")):
        doc = TypeScriptDocument(source_file.read_text(encoding="utf-8"), str(source_file))
        for template in extract_templates(doc):
            try:
                parser.parse(template.text)
            except TemplateParseError as e:
                # Template positions are relative to the literal; report the literal's line too.
                errors.append(f"{source_file}:{template.line}: {e}")

    return errors
