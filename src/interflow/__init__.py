"""interflow - message interaction extraction for sequence diagrams."""

__version__ = "0.1.0"

from interflow.domain.conventions import MessagingConventions
from interflow.domain.diagram import SequenceDiagram
from interflow.domain.type_graph import TypeGraph
from interflow.presentation.api import Interflow

__all__ = ["Interflow", "MessagingConventions", "SequenceDiagram", "TypeGraph", "__version__"]
