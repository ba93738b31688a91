"""Domain layer: diagram fragments produced by interaction traversal.

Output IR consumed by an external renderer (PlantUML, Mermaid...).
Fragment = Arrow | Alt. Alt groups AltSections, each holding fragments.

Fragments are immutable. Interactions is the append-only builder that
collects them in source statement order.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

from interflow.domain.exceptions import InvalidFragmentError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class ArrowColor(Enum):
    """Arrow color keyed by message kind."""

    COMMAND = "DodgerBlue"
    EVENT = "ForestGreen"


class GroupType(Enum):
    """Tag of the first section of an Alt. Later sections are untagged."""

    IF = "if"
    CASE = "case"
    FOR_EACH = "forEach"


@dataclass(frozen=True, slots=True)
class Arrow:
    """Single interaction: source service sends a message to target service.

    Attributes:
        source: Sending participant
        target: Receiving participant
        label: Message simple name
        color: Command or event color
    """

    source: str
    target: str
    label: str
    color: ArrowColor

    def with_source(self, source: str) -> Arrow:
        """Copy with another source participant."""
        return replace(self, source=source)


@dataclass(frozen=True, slots=True)
class AltSection:
    """One alternative (branch, case group, loop body) of an Alt.

    Attributes:
        label: Condition, case labels or loop header
        fragments: Fragments inside this alternative, never empty
        group_type: Tag for the first section, None for the others
    """

    label: str
    fragments: tuple[Fragment, ...]
    group_type: GroupType | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.fragments:
            raise InvalidFragmentError("alt section must contain at least one fragment")


@dataclass(frozen=True, slots=True)
class Alt:
    """Group of alternative or repeated interactions.

    Attributes:
        sections: Ordered sections, never empty
    """

    sections: tuple[AltSection, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.sections:
            raise InvalidFragmentError("alt must contain at least one section")

    @property
    def group_type(self) -> GroupType | None:
        """Tag of the first section."""
        return self.sections[0].group_type


Fragment: TypeAlias = Arrow | Alt


@dataclass(slots=True)
class Interactions:
    """Ordered, append-only sequence of fragments.

    Mutable - filled during one traversal call. Fragments themselves
    are immutable; nothing is ever removed or reordered.
    """

    _fragments: list[Fragment] = field(default_factory=list)

    def add(self, fragment: Fragment) -> None:
        """Append one fragment."""
        self._fragments.append(fragment)

    def extend(self, fragments: Iterable[Fragment]) -> None:
        """Append fragments preserving their order."""
        self._fragments.extend(fragments)

    @property
    def fragments(self) -> tuple[Fragment, ...]:
        """Snapshot of collected fragments."""
        return tuple(self._fragments)

    def arrows(self) -> Iterator[Arrow]:
        """All arrows depth-first in diagram order, including nested ones."""
        yield from iter_arrows(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __bool__(self) -> bool:
        return bool(self._fragments)


def iter_arrows(fragments: Iterable[Fragment]) -> Iterator[Arrow]:
    """Yield arrows depth-first in diagram order."""
    for fragment in fragments:
        match fragment:
            case Arrow():
                yield fragment
            case Alt(sections=sections):
                for section in sections:
                    yield from iter_arrows(section.fragments)
