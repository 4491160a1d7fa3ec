"""
Range-based text editing for source rewrites.

Edits are planned against the immutable original text and applied in one
pass. An edit that contains another renders after it and receives the inner
result as its current text, so rewrites compose without stale offsets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

Render = Callable[[str], str]


@dataclass(frozen=True)
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    @property
    def is_empty(self) -> bool:
        return self.start_char == self.end_char

    def overlaps(self, other: TextRange) -> bool:
        """Check if this range overlaps with another."""
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)

    def contains(self, other: TextRange) -> bool:
        """Check if this range completely contains another.

        A zero-width range on a boundary of a non-empty range is not contained:
        an insertion there belongs next to the edit, not inside it.
        """
        if other.is_empty and not self.is_empty:
            return self.start_char < other.start_char < self.end_char
        return self.start_char <= other.start_char and other.end_char <= self.end_char


@dataclass
class Edit:
    """A planned edit: the range it replaces and how to render its new text."""
    range: TextRange
    render: Render
    type: Optional[str]
    seq: int
    children: List[Edit] = field(default_factory=list)

    @property
    def is_insertion(self) -> bool:
        return self.range.is_empty


class RangeEditor:
    """
    Character-position editor over an immutable original text.

    Later edits on the same range wrap earlier ones. Partially overlapping
    edits are rejected when the edits are applied.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def add_edit(self, start_char: int, end_char: int, render: Render,
                 edit_type: Optional[str] = None) -> Edit:
        """Plan an edit whose new text is render(current text of the range)."""
        edit = Edit(TextRange(start_char, end_char), render, edit_type, len(self.edits))
        self.edits.append(edit)
        return edit

    def add_replacement(self, start_char: int, end_char: int, replacement: str,
                        edit_type: Optional[str] = None) -> Edit:
        return self.add_edit(start_char, end_char, lambda _current: replacement, edit_type)

    def add_insertion(self, position_char: int, content: str,
                      edit_type: Optional[str] = None) -> Edit:
        """Insert content at position; repeated insertions at one point keep their order."""
        return self.add_edit(position_char, position_char, lambda current: current + content, edit_type)

    def has_edit(self, start_char: int, end_char: int, edit_type: Optional[str] = None) -> bool:
        """Check if an edit of the given type is already planned for exactly this range."""
        target = TextRange(start_char, end_char)
        return any(
            edit.range == target and (edit_type is None or edit.type == edit_type)
            for edit in self.edits
        )

    def validate_edits(self) -> List[str]:
        """Validate that all edits are within bounds."""
        errors = []
        for i, edit in enumerate(self.edits):
            if edit.range.start_char < 0:
                errors.append(f"Edit {i}: start_char ({edit.range.start_char}) is negative")
            if edit.range.end_char > len(self.original_text):
                errors.append(
                    f"Edit {i}: end_char ({edit.range.end_char}) exceeds text length ({len(self.original_text)})"
                )
        return errors

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """
        Apply all edits and return the modified text and statistics.

        Returns:
            Tuple of (modified_text, statistics)
        """
        validation_errors = self.validate_edits()
        if validation_errors:
            raise ValueError(f"Edit validation failed: {'; '.join(validation_errors)}")

        stats = {"edits_applied": len(self.edits), "chars_removed": 0, "chars_added": 0}
        if not self.edits:
            return self.original_text, stats

        roots = self._build_tree()
        for edit in roots:
            stats["chars_removed"] += edit.range.length

        result_text = self._splice(0, len(self.original_text), roots)
        stats["chars_added"] = len(result_text) - len(self.original_text) + stats["chars_removed"]
        return result_text, stats

    def _build_tree(self) -> List[Edit]:
        for edit in self.edits:
            edit.children = []

        # Insertions before edits starting at the same point, then outer edits first.
        # On equal ranges the later edit is the outer one.
        ordered = sorted(
            self.edits,
            key=lambda e: (e.range.start_char, not e.is_insertion, -e.range.end_char, -e.seq),
        )
        roots: List[Edit] = []
        stack: List[Edit] = []

        for edit in ordered:
            while stack and not stack[-1].range.contains(edit.range):
                closed = stack.pop()
                if closed.range.overlaps(edit.range):
                    raise ValueError(
                        f"Overlapping edits: {closed.range} and {edit.range}"
                    )
            if stack:
                stack[-1].children.append(edit)
            else:
                roots.append(edit)
            stack.append(edit)

        return roots

    def _render(self, edit: Edit) -> str:
        current = self._splice(edit.range.start_char, edit.range.end_char, edit.children)
        return edit.render(current)

    def _splice(self, start: int, end: int, edits: List[Edit]) -> str:
        parts = []
        pos = start
        for edit in edits:
            parts.append(self.original_text[pos:edit.range.start_char])
            parts.append(self._render(edit))
            pos = edit.range.end_char
        parts.append(self.original_text[pos:end])
        return "".join(parts)
