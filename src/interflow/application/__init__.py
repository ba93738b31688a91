"""interflow application layer.

Resolvers, flattener and traverser over the domain type graph.
"""

from interflow.application.catalog import MessageCatalog, MessageGroup
from interflow.application.diagram import DiagramBuilder
from interflow.application.flattener import ConsequenceFlattener
from interflow.application.resolvers import (
    HandlerResolver,
    ImplementationResolution,
    InvocationResolver,
    ResolutionStatus,
)
from interflow.application.service_names import service_name
from interflow.application.traverser import InteractionTraverser

__all__ = [
    "HandlerResolver",
    "InvocationResolver",
    "ImplementationResolution",
    "ResolutionStatus",
    "ConsequenceFlattener",
    "InteractionTraverser",
    "DiagramBuilder",
    "MessageCatalog",
    "MessageGroup",
    "service_name",
]
