"""Message catalog: commands and events of a type graph.

Services often carry their own copy of a message contract, so messages
are grouped by simple name. Groups are ordered by name, members by
namespace.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from interflow.application.resolvers.handlers import HandlerResolver
from interflow.domain.conventions import MessagingConventions

if TYPE_CHECKING:
    from interflow.domain.type_graph import TypeDescription, TypeGraph


@dataclass(frozen=True, slots=True)
class MessageGroup:
    """Messages sharing a simple name.

    Attributes:
        name: Shared simple name
        messages: Message types ordered by namespace
    """

    name: str
    messages: tuple[TypeDescription, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.messages:
            raise ValueError(f"message group '{self.name}' must not be empty")
        for message in self.messages:
            if message.name != self.name:
                raise ValueError(f"message '{message.full_name}' does not belong to group '{self.name}'")


class MessageCatalog:
    """Lists commands and events, finds which commands are handled."""

    def __init__(
        self,
        graph: TypeGraph,
        conventions: MessagingConventions | None = None,
    ) -> None:
        self._graph = graph
        self._conventions = conventions or MessagingConventions()
        self._handlers = HandlerResolver(graph, self._conventions)

    def commands(self) -> tuple[MessageGroup, ...]:
        """Command types grouped by simple name."""
        return self._grouped(self._conventions.command_type)

    def events(self) -> tuple[MessageGroup, ...]:
        """Event types grouped by simple name."""
        return self._grouped(self._conventions.event_type)

    def handled_command(self, group: MessageGroup) -> TypeDescription | None:
        """First command of the group that has a command handler."""
        for command in group.messages:
            if self._handlers.command_handler_for(command) is not None:
                return command
        return None

    def derived_from(self, prefix: str) -> tuple[TypeDescription, ...]:
        """Classes with a base type starting with prefix, ordered by name.

        Example:
            derived_from("Pitstop.WorkshopManagementAPI.Domain.Core.AggregateRoot<")
        """
        return tuple(
            sorted(
                (t for t in self._graph if t.is_class and t.implements_type_starting_with(prefix)),
                key=lambda t: t.name,
            ),
        )

    def _grouped(self, base_type: str) -> tuple[MessageGroup, ...]:
        groups: dict[str, list[TypeDescription]] = {}
        for type_ in self._graph:
            if type_.full_name != base_type and type_.implements_type(base_type):
                groups.setdefault(type_.name, []).append(type_)

        return tuple(
            MessageGroup(name=name, messages=tuple(sorted(members, key=lambda t: t.namespace)))
            for name, members in sorted(groups.items())
        )
