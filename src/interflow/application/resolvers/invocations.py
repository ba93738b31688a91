"""Invocation resolution: invocation → invoked method body.

Interface calls are redirected to an implementing class.
LIMITATION: single-implementation assumption. Several implementers
resolve to the first one in graph order; the resolution reports this
as AMBIGUOUS instead of hiding it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from interflow.application.messages import matches_simple_name
from interflow.domain.statements import InvocationDescription

if TYPE_CHECKING:
    from interflow.domain.statements import Statement
    from interflow.domain.type_graph import MethodDescription, TypeGraph

logger = logging.getLogger(__name__)


class ResolutionStatus(Enum):
    """Outcome of interface-to-implementation resolution."""

    NOT_INTERFACE = auto()  # containing type is not an interface (or unknown)
    RESOLVED = auto()  # exactly one implementer
    AMBIGUOUS = auto()  # several implementers, first one chosen
    UNRESOLVED = auto()  # interface without implementer


@dataclass(frozen=True, slots=True)
class ImplementationResolution:
    """Result of redirecting an invocation to an implementation.

    Attributes:
        status: How the redirect went
        invocation: Invocation to resolve the body of (rewritten when
            RESOLVED or AMBIGUOUS, unchanged otherwise)
        candidates: Implementer full names in graph order
    """

    status: ResolutionStatus
    invocation: InvocationDescription
    candidates: tuple[str, ...] = ()

    @property
    def chosen(self) -> str | None:
        """Implementer used, None if no redirect happened."""
        if self.status in (ResolutionStatus.RESOLVED, ResolutionStatus.AMBIGUOUS):
            return self.candidates[0]
        return None


class InvocationResolver:
    """Resolves invocations to method bodies.

    Unresolved invocations are not errors: they have an empty body.
    Stateless - no state between calls.
    """

    def __init__(self, graph: TypeGraph) -> None:
        self._graph = graph

    def resolve_implementation(self, invocation: InvocationDescription) -> ImplementationResolution:
        """Redirect an interface invocation to the first implementing class.

        Arguments are preserved on the rewritten invocation.
        """
        containing = self._graph.find(invocation.containing_type)
        if containing is None or not containing.is_interface:
            return ImplementationResolution(ResolutionStatus.NOT_INTERFACE, invocation)

        candidates = tuple(t.full_name for t in self._graph.implementers_of(containing.full_name))
        if not candidates:
            logger.debug("No implementation of %s", containing.full_name)
            return ImplementationResolution(ResolutionStatus.UNRESOLVED, invocation)

        status = ResolutionStatus.RESOLVED
        if len(candidates) > 1:
            status = ResolutionStatus.AMBIGUOUS
            logger.debug(
                "Ambiguous implementation of %s: %s, using %s",
                containing.full_name,
                list(candidates),
                candidates[0],
            )

        rewritten = InvocationDescription(
            containing_type=candidates[0],
            name=invocation.name,
            arguments=invocation.arguments,
        )
        return ImplementationResolution(status, rewritten, candidates)

    def invoked_methods(self, invocation: InvocationDescription) -> tuple[MethodDescription, ...]:
        """Methods an invocation may target, after interface redirect.

        Same-named methods are narrowed to overloads whose parameters
        match the arguments. If none match, all same-named methods are
        returned in declaration order.
        """
        target = self.resolve_implementation(invocation).invocation
        containing = self._graph.find(target.containing_type)
        if containing is None:
            logger.debug("Unresolved invocation target %s.%s", target.containing_type, target.name)
            return ()

        named = containing.methods_named(target.name)
        if len(named) <= 1:
            return named

        matching = tuple(m for m in named if _arguments_match(m, target))
        return matching or named

    def resolve_body(self, invocation: InvocationDescription) -> tuple[Statement, ...]:
        """Statements executed by the invocation, empty when unresolved."""
        return tuple(s for m in self.invoked_methods(invocation) for s in m.statements)


def _arguments_match(method: MethodDescription, invocation: InvocationDescription) -> bool:
    if len(method.parameters) != len(invocation.arguments):
        return False
    return all(
        arg.type == param.type
        or matches_simple_name(arg.type, param.type.rpartition(".")[2])
        for param, arg in zip(method.parameters, invocation.arguments, strict=True)
    )
