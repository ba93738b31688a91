"""Interaction traverser: message → ordered fragment tree.

Recursively follows one originating message through its handlers, their
bodies, local helper calls and the messages they publish in turn.

Activation state is per instance: create one traverser per top-level
extraction. Instances share no mutable state and may run in parallel.

Termination:
    - the flattener substitutes one level per call
    - a (handler, message) pair already being expanded is not expanded
      again: its arrow is emitted, its body is skipped
    - a local call target already being expanded contributes nothing
    - statement nesting beyond MessagingConventions.max_depth is cut off
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from interflow.application.flattener import ConsequenceFlattener
from interflow.application.messages import arrow_color, handling_method
from interflow.application.resolvers.handlers import HandlerResolver
from interflow.application.resolvers.invocations import InvocationResolver
from interflow.application.service_names import service_name
from interflow.domain.conventions import MessagingConventions
from interflow.domain.exceptions import GraphNotPopulatedError
from interflow.domain.fragments import Alt, AltSection, Arrow, GroupType, Interactions
from interflow.domain.statements import Block, ForEach, If, InvocationDescription, Switch

if TYPE_CHECKING:
    from interflow.domain.fragments import Fragment
    from interflow.domain.statements import Statement
    from interflow.domain.type_graph import TypeDescription, TypeGraph

logger = logging.getLogger(__name__)


class InteractionTraverser:
    """Builds the interaction fragment tree of one originating message.

    Attributes:
        _activations: Services currently holding diagrammatic control,
            bottom to top. Depth never exceeds the distinct services seen.
        _path: (handler, message) full names currently being expanded
        _calls: (containing type, method) of local calls currently being
            expanded, after interface redirect
        _depth: Current traverse_body nesting
    """

    def __init__(
        self,
        graph: TypeGraph,
        conventions: MessagingConventions | None = None,
    ) -> None:
        """Initialize traverser.

        Args:
            graph: Populated type graph
            conventions: Messaging conventions. Uses defaults if None.

        Raises:
            GraphNotPopulatedError: graph.populate() was not run
        """
        if not graph.populated:
            raise GraphNotPopulatedError

        self._graph = graph
        self._conventions = conventions or MessagingConventions()
        self._handlers = HandlerResolver(graph, self._conventions)
        self._invocations = InvocationResolver(graph)
        self._flattener = ConsequenceFlattener(self._invocations, self._conventions)

        self._activations: list[str] = []
        self._path: list[tuple[str, str]] = []
        self._calls: list[tuple[str, str]] = []
        self._depth = 0

    @property
    def activations(self) -> tuple[str, ...]:
        """Activation stack snapshot, bottom to top."""
        return tuple(self._activations)

    def extract_consequences(
        self,
        message: TypeDescription,
        services: list[str],
        previous_service: str | None = None,
        alt_flow_service: str | None = None,
    ) -> Interactions:
        """Extract all consequences of a message being handled.

        Keeps track of all services passed with interactions: each arrow
        target is appended to services on first sight.

        Args:
            message: Message type being sent
            services: Participant list, mutated in first-seen order
            previous_service: Sending service, None for the external actor
            alt_flow_service: Service pinned as the open alternative-flow
                context, its activation is not closed here

        Returns:
            Arrows and alts in source order. Empty if nobody handles message.
        """
        result = Interactions()
        conventions = self._conventions

        handlers = self._handlers.handlers_for(message)
        if not handlers:
            logger.debug("No handlers for %s", message.full_name)

        for handler in handlers:
            level_name = service_name(handler, conventions)

            target = level_name or conventions.unknown_service
            result.add(
                Arrow(
                    source=previous_service or conventions.external_actor,
                    target=target,
                    label=message.name,
                    color=arrow_color(message, conventions),
                ),
            )

            if target not in services:
                services.append(target)

            key = (handler.full_name, message.full_name)
            if key in self._path:
                logger.warning(
                    "Message cycle: %s already handling %s, not expanding again",
                    handler.full_name,
                    message.full_name,
                )
                continue

            if level_name is not None and level_name not in self._activations:
                self._activations.append(level_name)

            method = handling_method(handler, message, conventions)
            if method is None:
                logger.debug("No handling method on %s for %s", handler.full_name, message.full_name)
            else:
                self._path.append(key)
                try:
                    for statement in method.statements:
                        result.extend(
                            self.traverse_body(
                                services,
                                handler,
                                previous_service or level_name,
                                statement,
                                alt_flow_service or level_name,
                            ).fragments,
                        )
                finally:
                    self._path.pop()

            if (
                self._activations
                and self._activations[-1] == level_name
                and level_name != alt_flow_service
            ):
                self._activations.pop()

        return result

    def traverse_body(
        self,
        services: list[str],
        handler: TypeDescription,
        current_service: str | None,
        statement: Statement,
        alt_flow_service: str | None,
    ) -> Interactions:
        """Collect interactions caused by one statement of a handler body.

        Tracks flow over services, even if the same service becomes part
        of a different resulting message.

        Args:
            services: Participant list, mutated in first-seen order
            handler: Handler type whose body is traversed
            current_service: Service currently in control
            statement: Statement to traverse
            alt_flow_service: Pinned alternative-flow context

        Returns:
            Fragments caused by the statement, empty for plain statements
        """
        if self._depth >= self._conventions.max_depth:
            logger.warning(
                "Max depth %d reached in %s, skipping nested statements",
                self._conventions.max_depth,
                handler.full_name,
            )
            return Interactions()

        self._depth += 1
        try:
            return self._dispatch(services, handler, current_service, statement, alt_flow_service)
        finally:
            self._depth -= 1

    def _dispatch(
        self,
        services: list[str],
        handler: TypeDescription,
        current_service: str | None,
        statement: Statement,
        alt_flow_service: str | None,
    ) -> Interactions:
        def children(statements: tuple[Statement, ...]) -> list[Fragment]:
            fragments: list[Fragment] = []
            for child in statements:
                fragments.extend(
                    self.traverse_body(
                        services, handler, current_service, child, alt_flow_service
                    ).fragments,
                )
            return fragments

        result = Interactions()

        match statement:
            case InvocationDescription(name=name) if self._conventions.is_publish_operation(name):
                message = self._created_message(statement)
                if message is not None:
                    return self.extract_consequences(
                        message,
                        services,
                        service_name(handler, self._conventions),
                        alt_flow_service,
                    )

            case InvocationDescription():
                target = self._invocations.resolve_implementation(statement).invocation
                key = (target.containing_type, target.name)
                if key in self._calls:
                    logger.debug("Recursive call to %s.%s, not expanding again", *key)
                    return result

                self._calls.append(key)
                try:
                    for consequence in self._flattener.consequences(statement):
                        result.extend(
                            self.traverse_body(
                                services, handler, current_service, consequence, alt_flow_service
                            ).fragments,
                        )
                finally:
                    self._calls.pop()

            case ForEach(expression=expression, statements=body):
                fragments = children(body)
                if fragments:
                    section = AltSection(
                        label=expression,
                        fragments=tuple(fragments),
                        group_type=GroupType.FOR_EACH,
                    )
                    result.add(Alt(sections=(section,)))

            case Switch(sections=sections):
                alt_sections: list[AltSection] = []
                for section in sections:
                    fragments = children(section.statements)
                    if fragments:
                        alt_sections.append(
                            AltSection(
                                label="".join(section.labels),
                                fragments=tuple(fragments),
                                group_type=None if alt_sections else GroupType.CASE,
                            ),
                        )
                if alt_sections:
                    result.add(Alt(sections=tuple(alt_sections)))

            case If(sections=sections):
                alt_sections = []
                for branch in sections:
                    fragments = children(branch.statements)
                    if fragments:
                        alt_sections.append(
                            AltSection(
                                label=branch.condition,
                                fragments=tuple(fragments),
                                group_type=None if alt_sections else GroupType.IF,
                            ),
                        )
                if alt_sections:
                    result.add(Alt(sections=tuple(alt_sections)))

            case Block(statements=body):
                result.extend(children(body))

        return result

    def _created_message(self, invocation: InvocationDescription) -> TypeDescription | None:
        """Message type carried by a publish invocation, None if unknown."""
        index = self._conventions.publish_operations[invocation.name]
        if index >= len(invocation.arguments):
            logger.debug("%s has no argument at index %d", invocation.name, index)
            return None

        message_type = invocation.arguments[index].type
        message = self._graph.find(message_type)
        if message is None:
            logger.debug("Published message type %s not in graph", message_type)
        return message
