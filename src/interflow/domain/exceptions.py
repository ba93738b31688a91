"""Domain exceptions: all public errors of interflow.

Hexagonal architecture: all exceptions visible to users defined in domain.
Application code uses these, not its own public exceptions.

Traversal never raises for missing handlers, methods or implementers.
These errors signal programmer mistakes at construction time (FAIL-FIRST).
"""


class InterflowError(Exception):
    """Base for all interflow error exceptions.

    Allows: except InterflowError to catch all library errors.
    """


class TypeNotFoundError(InterflowError, KeyError):
    """Type lookup by full name failed.

    Inherits KeyError for semantic correctness (missing mapping key).

    Attributes:
        full_name: Full name that was looked up.
    """

    def __init__(self, full_name: str) -> None:
        """Initialize with missing full name."""
        self.full_name = full_name
        super().__init__(f"type not found: {full_name}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0])


class DuplicateTypeError(InterflowError, ValueError):
    """Two type descriptions share the same full name.

    Attributes:
        full_name: Conflicting full name.
    """

    def __init__(self, full_name: str) -> None:
        """Initialize with conflicting full name."""
        self.full_name = full_name
        super().__init__(f"duplicate type full name: {full_name}")


class GraphNotPopulatedError(InterflowError, RuntimeError):
    """Traversal requested on a type graph that was not populated.

    Base types and inherited members must be resolved before any lookup
    that depends on inheritance. Use TypeGraph.populate() first.
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("type graph must be populated before traversal")


class InvalidConventionsError(InterflowError, ValueError):
    """Messaging conventions are inconsistent.

    Attributes:
        field: Offending field name.
        reason: Why the value is invalid.
    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialize with field name and reason."""
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class InvalidFragmentError(InterflowError, ValueError):
    """Diagram fragment violates its structural invariants.

    Attributes:
        reason: Why the fragment is invalid.
    """

    def __init__(self, reason: str) -> None:
        """Initialize with reason."""
        self.reason = reason
        super().__init__(reason)
