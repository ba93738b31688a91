"""interflow domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, enum, types, collections.abc
"""

from interflow.domain.conventions import MessagingConventions
from interflow.domain.diagram import SequenceDiagram
from interflow.domain.exceptions import (
    DuplicateTypeError,
    GraphNotPopulatedError,
    InterflowError,
    InvalidConventionsError,
    InvalidFragmentError,
    TypeNotFoundError,
)
from interflow.domain.fragments import (
    Alt,
    AltSection,
    Arrow,
    ArrowColor,
    Fragment,
    GroupType,
    Interactions,
)
from interflow.domain.statements import (
    Argument,
    Block,
    ForEach,
    If,
    IfElseSection,
    InvocationDescription,
    Statement,
    Switch,
    SwitchSection,
)
from interflow.domain.type_graph import (
    FieldDescription,
    MethodDescription,
    ParameterDescription,
    PropertyDescription,
    TypeDescription,
    TypeGraph,
    TypeKind,
)

__all__ = [
    # Exceptions
    "InterflowError",
    "TypeNotFoundError",
    "DuplicateTypeError",
    "GraphNotPopulatedError",
    "InvalidConventionsError",
    "InvalidFragmentError",
    # Configuration
    "MessagingConventions",
    # Type graph
    "TypeKind",
    "ParameterDescription",
    "MethodDescription",
    "FieldDescription",
    "PropertyDescription",
    "TypeDescription",
    "TypeGraph",
    # Statements
    "Statement",
    "Argument",
    "InvocationDescription",
    "If",
    "IfElseSection",
    "Switch",
    "SwitchSection",
    "ForEach",
    "Block",
    # Fragments
    "Fragment",
    "Arrow",
    "ArrowColor",
    "Alt",
    "AltSection",
    "GroupType",
    "Interactions",
    # Output
    "SequenceDiagram",
]
