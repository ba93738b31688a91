"""Message kind checks and handler method lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from interflow.domain.fragments import ArrowColor

if TYPE_CHECKING:
    from interflow.domain.conventions import MessagingConventions
    from interflow.domain.type_graph import MethodDescription, TypeDescription


def is_event(message: TypeDescription, conventions: MessagingConventions) -> bool:
    return message.implements_type(conventions.event_type)


def is_command(message: TypeDescription, conventions: MessagingConventions) -> bool:
    return message.implements_type(conventions.command_type)


def arrow_color(message: TypeDescription, conventions: MessagingConventions) -> ArrowColor:
    """Commands are COMMAND colored, everything else EVENT colored."""
    return ArrowColor.COMMAND if is_command(message, conventions) else ArrowColor.EVENT


def matches_simple_name(type_name: str, simple_name: str) -> bool:
    """Check if a full type name ends with the simple name as last segment.

    Examples:
        ("Pitstop.Events.CustomerRegistered", "CustomerRegistered") → True
        ("Pitstop.Events.VipCustomerRegistered", "CustomerRegistered") → False
    """
    return type_name == simple_name or type_name.endswith("." + simple_name)


def accepts_message(method: MethodDescription, message: TypeDescription) -> bool:
    """Check if any parameter type matches the message simple name."""
    return any(matches_simple_name(p.type, message.name) for p in method.parameters)


def binds_command(
    method: MethodDescription,
    message: TypeDescription,
    conventions: MessagingConventions,
) -> bool:
    """Check for a parameter typed exactly as message and bound from the body."""
    return any(
        p.type == message.full_name and p.has_marker(conventions.body_marker)
        for p in method.parameters
    )


def handling_method(
    handler: TypeDescription,
    message: TypeDescription,
    conventions: MessagingConventions,
) -> MethodDescription | None:
    """Return the method on handler that handles message.

    Event: method named handle_method with a parameter matching the
    message simple name.
    Command: method binding the message from the body, or named
    handle_command_method with a matching parameter.
    Neither event nor command: None.
    """
    if is_event(message, conventions):
        return next(
            (
                m
                for m in handler.methods
                if m.name == conventions.handle_method and accepts_message(m, message)
            ),
            None,
        )

    if is_command(message, conventions):
        return next(
            (
                m
                for m in handler.methods
                if binds_command(m, message, conventions)
                or (m.name == conventions.handle_command_method and accepts_message(m, message))
            ),
            None,
        )

    return None
