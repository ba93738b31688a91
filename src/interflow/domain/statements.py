"""Domain layer: statement IR of method bodies.

Tagged union over Invocation, If, Switch, ForEach and Block.
Nested statement sequences are tuples of the same union at any depth.
Immutable: the analysis front end builds them, the core only reads them.

Identity matters: the flattener excludes the originating invocation by
identity (`is`), not by equality. Two structurally equal invocations at
different call sites are different statements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True, slots=True, eq=False)
class Argument:
    """Invocation argument.

    Examples:
        PublishMessageAsync("CustomerRegistered", e, "") →
            Argument("string", '"CustomerRegistered"'),
            Argument("Pitstop.Events.CustomerRegistered", "e"), ...

    Attributes:
        type: Resolved full type name of the argument expression
        text: Source text of the argument expression
    """

    type: str
    text: str = ""


@dataclass(frozen=True, slots=True, eq=False)
class InvocationDescription:
    """Method or constructor invocation.

    Constructor calls are invocations whose name equals the simple name
    of the containing type.

    Attributes:
        containing_type: Full name of the declaring type of the invoked member
        name: Invoked member name
        arguments: Ordered arguments with resolved types
    """

    containing_type: str
    name: str
    arguments: tuple[Argument, ...] = ()

    @property
    def statements(self) -> tuple[Statement, ...]:
        """Invocations have no child statements."""
        return ()


@dataclass(frozen=True, slots=True, eq=False)
class IfElseSection:
    """One branch of an if/else-if/else chain.

    Attributes:
        condition: Condition source text (empty for the final else)
        statements: Branch body
    """

    condition: str
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True, slots=True, eq=False)
class If:
    """If statement with ordered branches."""

    sections: tuple[IfElseSection, ...] = ()

    @property
    def statements(self) -> tuple[Statement, ...]:
        """All branch bodies in source order."""
        return tuple(s for section in self.sections for s in section.statements)


@dataclass(frozen=True, slots=True, eq=False)
class SwitchSection:
    """One case group of a switch.

    Attributes:
        labels: Case label texts sharing this body
        statements: Case body
    """

    labels: tuple[str, ...]
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True, slots=True, eq=False)
class Switch:
    """Switch statement.

    Attributes:
        expression: Switched expression text
        sections: Ordered case groups
    """

    expression: str = ""
    sections: tuple[SwitchSection, ...] = ()

    @property
    def statements(self) -> tuple[Statement, ...]:
        """All case bodies in source order."""
        return tuple(s for section in self.sections for s in section.statements)


@dataclass(frozen=True, slots=True, eq=False)
class ForEach:
    """Loop over a collection.

    Attributes:
        expression: Iteration header text, e.g. "var item in order.Items"
        statements: Loop body
    """

    expression: str = ""
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True, slots=True, eq=False)
class Block:
    """Generic statement block (using, try, lock, plain braces...)."""

    statements: tuple[Statement, ...] = ()


Statement: TypeAlias = InvocationDescription | If | Switch | ForEach | Block


def walk(statements: tuple[Statement, ...]) -> Iterator[Statement]:
    """Yield every statement depth-first in source order.

    Args:
        statements: Root statements

    Yields:
        Each statement followed by its descendants
    """
    for statement in statements:
        yield statement
        yield from walk(statement.statements)


def invocations(statements: tuple[Statement, ...]) -> Iterator[InvocationDescription]:
    """Yield every invocation reachable from statements, in source order."""
    for statement in walk(statements):
        if isinstance(statement, InvocationDescription):
            yield statement
