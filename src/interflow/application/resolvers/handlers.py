"""Handler resolution: which types handle a message."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from interflow.application.messages import accepts_message, binds_command

if TYPE_CHECKING:
    from interflow.domain.conventions import MessagingConventions
    from interflow.domain.type_graph import TypeDescription, TypeGraph

logger = logging.getLogger(__name__)


class HandlerResolver:
    """Finds handler types of a message in a type graph.

    Order is fixed: every event handler in graph order, then at most one
    command handler. Stateless - no state between calls.
    """

    def __init__(self, graph: TypeGraph, conventions: MessagingConventions) -> None:
        self._graph = graph
        self._conventions = conventions

    def handlers_for(self, message: TypeDescription) -> tuple[TypeDescription, ...]:
        """Event handlers followed by the command handler, if any."""
        event_handlers = self.event_handlers_for(message)
        command_handler = self.command_handler_for(message)

        if command_handler is None:
            return event_handlers

        return (*event_handlers, command_handler)

    def event_handlers_for(self, message: TypeDescription) -> tuple[TypeDescription, ...]:
        """Classes with the handler callback capability and a matching handle method."""
        conventions = self._conventions
        return tuple(
            t
            for t in self._graph
            if t.is_class
            and t.implements_type(conventions.handler_callback_type)
            and any(
                m.name == conventions.handle_method and accepts_message(m, message)
                for m in t.methods
            )
        )

    def command_handler_for(self, message: TypeDescription) -> TypeDescription | None:
        """First class with a method binding message from the request body.

        LIMITATION: several qualifying classes resolve to the first one in
        graph order.
        """
        candidates = [
            t
            for t in self._graph
            if t.is_class and any(binds_command(m, message, self._conventions) for m in t.methods)
        ]

        if not candidates:
            return None

        if len(candidates) > 1:
            logger.debug(
                "Ambiguous command handler for %s: %s, using %s",
                message.full_name,
                [c.full_name for c in candidates],
                candidates[0].full_name,
            )

        return candidates[0]
