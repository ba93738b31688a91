"""JSON reporter: SequenceDiagram → JSON string."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from interflow.domain.fragments import Alt, Arrow

if TYPE_CHECKING:
    from interflow.domain.diagram import SequenceDiagram
    from interflow.domain.fragments import AltSection, Fragment


class JsonReporter:
    """JSON reporter: outputs machine-readable JSON.

    Schema matches domain structure 1:1 with summary added.
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation. None for compact output.
        """
        self._indent = indent

    def report(self, diagram: SequenceDiagram) -> str:
        """Format diagram as JSON string.

        Args:
            diagram: Diagram to format.

        Returns:
            JSON string with participants, fragments and summary.
        """
        data = {
            "message": diagram.message,
            "participants": list(diagram.participants),
            "fragments": [fragment_to_dict(f) for f in diagram.fragments],
            "summary": _build_summary(diagram),
        }
        return json.dumps(data, indent=self._indent)


def fragment_to_dict(fragment: Fragment) -> dict[str, object]:
    """Convert fragment to JSON-serializable dict."""
    match fragment:
        case Arrow():
            return {
                "kind": "arrow",
                "source": fragment.source,
                "target": fragment.target,
                "label": fragment.label,
                "color": fragment.color.value,
            }
        case Alt(sections=sections):
            return {
                "kind": "alt",
                "sections": [_section_to_dict(s) for s in sections],
            }
    raise TypeError(f"unknown fragment: {fragment!r}")


def _section_to_dict(section: AltSection) -> dict[str, object]:
    return {
        "group_type": section.group_type.value if section.group_type is not None else None,
        "label": section.label,
        "fragments": [fragment_to_dict(f) for f in section.fragments],
    }


def _build_summary(diagram: SequenceDiagram) -> dict[str, int]:
    arrows = list(diagram.arrows())
    alts = _count_alts(diagram.fragments)
    return {
        "participants": len(diagram.participants),
        "arrows": len(arrows),
        "alts": alts,
    }


def _count_alts(fragments: tuple[Fragment, ...]) -> int:
    count = 0
    for fragment in fragments:
        if isinstance(fragment, Alt):
            count += 1
            for section in fragment.sections:
                count += _count_alts(section.fragments)
    return count
