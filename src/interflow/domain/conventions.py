"""Messaging conventions of the analyzed system.

User-provided configuration naming the types, markers and operations
that identify messages, handlers and publishing. Defaults match the
Pitstop reference application (.NET, RabbitMQ messaging).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from interflow.domain.exceptions import InvalidConventionsError


def _default_publish_operations() -> Mapping[str, int]:
    # PublishMessageAsync(messageType, message, routingKey), RaiseEvent(event)
    return MappingProxyType({"PublishMessageAsync": 1, "RaiseEvent": 0})


@dataclass(frozen=True, slots=True)
class MessagingConventions:
    """Configuration DTO for interaction extraction.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        event_type: Base type every event derives from
        command_type: Base type every command derives from
        handler_callback_type: Capability implemented by event handler classes
        body_marker: Marker on a parameter bound from the request body
            (identifies command handling endpoints)
        handle_method: Event handling method name
        handle_command_method: Alternative command handling method name
        publish_operations: Message-creating operation name → index of the
            argument carrying the message
        ignored_namespace_segments: Leading namespace segments skipped when
            deriving a service name (case-insensitive)
        external_actor: Arrow source when the message has no known sender
        unknown_service: Arrow target when the handler has no service
        max_depth: Maximum statement nesting followed by one traversal
    """

    event_type: str = "Pitstop.Infrastructure.Messaging.Event"
    command_type: str = "Pitstop.Infrastructure.Messaging.Command"
    handler_callback_type: str = "Pitstop.Infrastructure.Messaging.IMessageHandlerCallback"
    body_marker: str = "Microsoft.AspNetCore.Mvc.FromBodyAttribute"
    handle_method: str = "HandleAsync"
    handle_command_method: str = "HandleCommandAsync"
    publish_operations: Mapping[str, int] = field(default_factory=_default_publish_operations)
    ignored_namespace_segments: frozenset[str] = frozenset({"pitstop", "application"})
    external_actor: str = "A"
    unknown_service: str = "Q"
    max_depth: int = 64

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for name in (
            "event_type",
            "command_type",
            "handler_callback_type",
            "body_marker",
            "handle_method",
            "handle_command_method",
            "external_actor",
            "unknown_service",
        ):
            if not getattr(self, name):
                raise InvalidConventionsError(name, "must not be empty")

        if self.event_type == self.command_type:
            raise InvalidConventionsError("command_type", "must differ from event_type")

        if self.external_actor == self.unknown_service:
            raise InvalidConventionsError("unknown_service", "must differ from external_actor")

        if not self.publish_operations:
            raise InvalidConventionsError("publish_operations", "must not be empty")

        for operation, index in self.publish_operations.items():
            if index < 0:
                raise InvalidConventionsError(
                    "publish_operations", f"argument index of {operation} must be >= 0, got {index}"
                )

        if self.max_depth < 1:
            raise InvalidConventionsError("max_depth", f"must be >= 1, got {self.max_depth}")

        # Freeze caller-supplied containers
        object.__setattr__(self, "publish_operations", MappingProxyType(dict(self.publish_operations)))
        object.__setattr__(
            self,
            "ignored_namespace_segments",
            frozenset(s.lower() for s in self.ignored_namespace_segments),
        )

    def is_publish_operation(self, name: str) -> bool:
        """Check if invocation name creates a message."""
        return name in self.publish_operations
