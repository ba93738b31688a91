"""Consequence flattener: one invocation → statements it executes.

Expansion is incremental: one substitution level per call, driven by the
traverser. Composite statements are rebuilt so branch and loop shape
survives. The originating invocation is excluded by identity at every
level, which removes the immediate self-loop at the call site.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from interflow.domain.statements import (
    Block,
    ForEach,
    If,
    IfElseSection,
    InvocationDescription,
    Switch,
    SwitchSection,
)

if TYPE_CHECKING:
    from interflow.application.resolvers.invocations import InvocationResolver
    from interflow.domain.conventions import MessagingConventions
    from interflow.domain.statements import Statement


class ConsequenceFlattener:
    """Expands invocations into their consequence statements.

    Top level of the invoked body:
        composite → rebuilt with children expanded one level
        leaf → returned as-is
    Inside composites:
        message-creating invocation → kept
        other invocation with a resolved body → replaced by that body
        other invocation without body → kept
    Substituted bodies are not expanded further.

    Stateless - no state between consequences() calls.
    """

    def __init__(self, resolver: InvocationResolver, conventions: MessagingConventions) -> None:
        self._resolver = resolver
        self._conventions = conventions

    def consequences(self, invocation: InvocationDescription) -> tuple[Statement, ...]:
        """Statements the invocation would execute, origin excluded.

        Args:
            invocation: Invocation to expand

        Returns:
            Consequence statements in source order, empty if unresolved
        """
        result: list[Statement] = []
        for statement in self._resolver.resolve_body(invocation):
            if statement is invocation:
                continue
            match statement:
                case If() | Switch() | ForEach() | Block():
                    result.append(self._rebuild(statement, invocation))
                case _:
                    result.append(statement)
        return tuple(result)

    def _rebuild(self, statement: Statement, origin: InvocationDescription) -> Statement:
        match statement:
            case ForEach(expression=expression, statements=children):
                return ForEach(expression=expression, statements=self._expand(children, origin))
            case Switch(expression=expression, sections=sections):
                return Switch(
                    expression=expression,
                    sections=tuple(
                        SwitchSection(labels=s.labels, statements=self._expand(s.statements, origin))
                        for s in sections
                    ),
                )
            case If(sections=sections):
                return If(
                    sections=tuple(
                        IfElseSection(
                            condition=s.condition,
                            statements=self._expand(s.statements, origin),
                        )
                        for s in sections
                    ),
                )
            case Block(statements=children):
                return Block(statements=self._expand(children, origin))
        return statement

    def _expand(
        self,
        statements: tuple[Statement, ...],
        origin: InvocationDescription,
    ) -> tuple[Statement, ...]:
        expanded: list[Statement] = []
        for statement in statements:
            if statement is origin:
                continue
            match statement:
                case InvocationDescription(name=name) if self._conventions.is_publish_operation(name):
                    expanded.append(statement)
                case InvocationDescription():
                    body = self._resolver.resolve_body(statement)
                    if body:
                        expanded.extend(s for s in body if s is not origin)
                    else:
                        expanded.append(statement)
                case If() | Switch() | ForEach() | Block():
                    expanded.append(self._rebuild(statement, origin))
                case _:
                    expanded.append(statement)
        return tuple(expanded)
