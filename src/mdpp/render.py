"""Renderer — flattens an evaluated document back to text."""

from __future__ import annotations

from mdpp.ast import Call, Document


def render(doc: Document) -> str:
    """Concatenate the text of a fully evaluated document.

    A Call left in the document means evaluation was skipped or incomplete;
    that is a programming error, not a user error.
    """
    parts: list[str] = []
    for child in doc.children:
        if isinstance(child, Call):
            raise AssertionError(
                f"unexpanded call {child.function!r} from {child.origin} reached the renderer"
            )
        parts.append(child.content)
    return "".join(parts)
