"""Facade API for interaction extraction.

Entry point wiring the type graph, conventions and application services.

Example:
    flow = Interflow(TypeGraph.from_types(types))
    for group in flow.commands():
        command = flow.handled_command(group)
        if command is not None:
            print(flow.report(flow.diagram(command)))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from interflow.application.catalog import MessageCatalog
from interflow.application.diagram import DiagramBuilder
from interflow.application.reporters.console import ConsoleReporter
from interflow.application.reporters.json import JsonReporter
from interflow.domain.conventions import MessagingConventions
from interflow.domain.exceptions import GraphNotPopulatedError

if TYPE_CHECKING:
    from interflow.application.catalog import MessageGroup
    from interflow.application.reporters.console import ConsoleConfig
    from interflow.domain.diagram import SequenceDiagram
    from interflow.domain.type_graph import TypeDescription, TypeGraph


class Interflow:
    """Entry point for interaction analysis.

    Attributes:
        _graph: Populated type graph
        _conventions: Messaging conventions of the analyzed system
    """

    def __init__(
        self,
        graph: TypeGraph,
        conventions: MessagingConventions | None = None,
    ) -> None:
        """Initialize analysis.

        Args:
            graph: Populated type graph
            conventions: Messaging conventions. Uses defaults if None.

        Raises:
            TypeError: If graph is None
            GraphNotPopulatedError: If graph is not populated
        """
        if graph is None:
            raise TypeError("graph must not be None")
        if not graph.populated:
            raise GraphNotPopulatedError
        self._graph = graph
        self._conventions = conventions or MessagingConventions()
        self._catalog = MessageCatalog(graph, self._conventions)
        self._builder = DiagramBuilder(graph, self._conventions)

    @property
    def graph(self) -> TypeGraph:
        return self._graph

    @property
    def conventions(self) -> MessagingConventions:
        return self._conventions

    def commands(self) -> tuple[MessageGroup, ...]:
        """Command groups ordered by name."""
        return self._catalog.commands()

    def events(self) -> tuple[MessageGroup, ...]:
        """Event groups ordered by name."""
        return self._catalog.events()

    def handled_command(self, group: MessageGroup) -> TypeDescription | None:
        """Command of the group with a handler, None if unhandled."""
        return self._catalog.handled_command(group)

    def diagram(self, message: TypeDescription | str) -> SequenceDiagram:
        """Build the sequence diagram of a message.

        Args:
            message: Message type or its full name

        Raises:
            TypeNotFoundError: Full name not in graph
        """
        if isinstance(message, str):
            message = self._graph.get(message)
        return self._builder.build(message)

    def report(self, diagram: SequenceDiagram, config: ConsoleConfig | None = None) -> str:
        """Rich formatted text of a diagram."""
        return ConsoleReporter(config).report(diagram)

    def to_json(self, diagram: SequenceDiagram, *, indent: int | None = 2) -> str:
        """JSON text of a diagram."""
        return JsonReporter(indent=indent).report(diagram)
