"""Compiler exceptions."""
from typing import Optional


class WaneCompilerError(Exception):
    """Base for all errors raised by the Wane compiler core."""


class TemplateParseError(WaneCompilerError):
    """Raised when a template cannot be turned into a view forest."""

    def __init__(self, message: str, file_path: str = "", line: int = 0, column: int = 0):
        self.message = message
        self.file_path = file_path
        self.line = line
        self.column = column
        super().__init__(message)

    @classmethod
    def at(cls, position, message: str, file_path: str = "") -> "TemplateParseError":
        """Build an error tagged with a markup Position (or None)."""
        if position is None:
            return cls(message, file_path=file_path)
        return cls(message, file_path=file_path, line=position.line, column=position.column)

    def __str__(self) -> str:
        text = f"Parse Error ({self.line}:{self.column}): {self.message}"
        if self.file_path:
            return f"{self.file_path}: {text}"
        return text


class RewriteError(WaneCompilerError):
    """Raised when a class cannot be instrumented because its shape breaks an assumption."""

    def __init__(self, message: str, class_name: Optional[str] = None,
                 method_name: Optional[str] = None):
        self.message = message
        self.class_name = class_name
        self.method_name = method_name
        super().__init__(message)

    def __str__(self) -> str:
        if self.class_name and self.method_name:
            return f"{self.class_name}.{self.method_name}: {self.message}"
        if self.class_name:
            return f"{self.class_name}: {self.message}"
        return self.message
