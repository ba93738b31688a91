"""Resolvers: message → handlers, invocation → method body."""

from interflow.application.resolvers.handlers import HandlerResolver
from interflow.application.resolvers.invocations import (
    ImplementationResolution,
    InvocationResolver,
    ResolutionStatus,
)

__all__ = [
    "HandlerResolver",
    "InvocationResolver",
    "ImplementationResolution",
    "ResolutionStatus",
]
