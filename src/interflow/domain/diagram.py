"""Sequence diagram: participants plus fragment tree of one message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from interflow.domain.fragments import iter_arrows

if TYPE_CHECKING:
    from collections.abc import Iterator

    from interflow.domain.fragments import Arrow, Fragment


@dataclass(frozen=True, slots=True)
class SequenceDiagram:
    """Renderer input for one originating message.

    Invariants (FAIL-FIRST):
        - participants are unique

    Attributes:
        message: Full name of the originating message
        participants: Services in first-seen order
        fragments: Top-level fragments in source order
    """

    message: str
    participants: tuple[str, ...]
    fragments: tuple[Fragment, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must not be empty")
        if len(set(self.participants)) != len(self.participants):
            raise ValueError(f"participants must be unique, got {self.participants}")

    @property
    def is_empty(self) -> bool:
        """True when nobody handles the message."""
        return not self.fragments

    def arrows(self) -> Iterator[Arrow]:
        """All arrows depth-first in diagram order."""
        return iter_arrows(self.fragments)
