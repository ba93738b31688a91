"""Sequence diagram builder: top-level extraction plus caller repair.

The traverser starts every diagram at the external actor. When exactly
one type in the graph constructs the entry message, that type's service
is the real caller: it becomes the first participant and the source of
the first arrow. Applied once, at the top level only.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from interflow.application.service_names import service_name
from interflow.application.traverser import InteractionTraverser
from interflow.domain.conventions import MessagingConventions
from interflow.domain.diagram import SequenceDiagram
from interflow.domain.fragments import Arrow
from interflow.domain.statements import invocations

if TYPE_CHECKING:
    from interflow.domain.fragments import Fragment
    from interflow.domain.type_graph import TypeDescription, TypeGraph

logger = logging.getLogger(__name__)


class DiagramBuilder:
    """Builds SequenceDiagram for originating messages.

    Every build() uses a fresh InteractionTraverser, so builds are
    independent and may run in parallel.
    """

    def __init__(
        self,
        graph: TypeGraph,
        conventions: MessagingConventions | None = None,
    ) -> None:
        self._graph = graph
        self._conventions = conventions or MessagingConventions()

    def build(self, message: TypeDescription) -> SequenceDiagram:
        """Extract interactions of message and repair the missing caller.

        Args:
            message: Originating message

        Returns:
            Diagram with participants in first-seen order
        """
        services: list[str] = []
        interactions = InteractionTraverser(self._graph, self._conventions).extract_consequences(
            message,
            services,
        )
        fragments = interactions.fragments

        originators = self.originators_of(message)
        if len(originators) == 1:
            caller = service_name(originators[0], self._conventions)
            if caller is not None:
                services = [caller, *(s for s in services if s != caller)]
                fragments = _with_first_arrow_source(fragments, caller)
        elif len(originators) > 1:
            logger.debug(
                "Several originators of %s: %s, caller left external",
                message.full_name,
                [o.full_name for o in originators],
            )

        return SequenceDiagram(
            message=message.full_name,
            participants=tuple(services),
            fragments=fragments,
        )

    def originators_of(self, message: TypeDescription) -> tuple[TypeDescription, ...]:
        """Types whose methods construct message, in graph order.

        A construction is an invocation named like the message whose
        containing type ends with that name. Matching by simple name
        finds callers holding their own copy of the message contract.
        Distinct constructing types are counted, not construction sites,
        and the caller service comes from the constructing type rather than
        from the constructed contract copy.
        """
        result: list[TypeDescription] = []
        for type_ in self._graph:
            if type_.full_name == message.full_name:
                continue
            if any(
                i.name == message.name and i.containing_type.endswith(message.name)
                for m in type_.methods
                for i in invocations(m.statements)
            ):
                result.append(type_)
        return tuple(result)


def _with_first_arrow_source(
    fragments: tuple[Fragment, ...],
    source: str,
) -> tuple[Fragment, ...]:
    for index, fragment in enumerate(fragments):
        if isinstance(fragment, Arrow):
            return (*fragments[:index], fragment.with_source(source), *fragments[index + 1 :])
    return fragments
