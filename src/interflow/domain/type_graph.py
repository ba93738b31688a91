"""Domain layer: type graph of the analyzed codebase.

Immutable value objects describing types, members and method bodies.
Population is two-phase:
    1. raw descriptions as produced by the analysis front end
    2. TypeGraph.populate(): transitive base types, then inherited members

Traversal requires a populated graph. FAIL-FIRST: invalid input raises
immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from interflow.domain.exceptions import DuplicateTypeError, TypeNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from interflow.domain.statements import Statement


class TypeKind(Enum):
    """Kind of type declaration."""

    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class ParameterDescription:
    """Method parameter.

    Attributes:
        type: Resolved full type name
        name: Parameter name
        markers: Full names of attached attributes/annotations
    """

    type: str
    name: str
    markers: tuple[str, ...] = ()

    def has_marker(self, marker: str) -> bool:
        """Check if marker (full name) is attached."""
        return marker in self.markers


@dataclass(frozen=True, slots=True)
class MethodDescription:
    """Method with its body.

    Attributes:
        name: Method name
        parameters: Ordered parameters
        statements: Ordered top-level body statements
        is_private: Private members are not inherited
    """

    name: str
    parameters: tuple[ParameterDescription, ...] = ()
    statements: tuple[Statement, ...] = ()
    is_private: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("method name must not be empty")

    @property
    def signature(self) -> tuple[str, tuple[str, ...]]:
        """Name plus parameter types, identifies overloads."""
        return (self.name, tuple(p.type for p in self.parameters))


@dataclass(frozen=True, slots=True)
class FieldDescription:
    """Field of a type."""

    name: str
    type: str
    is_private: bool = False


@dataclass(frozen=True, slots=True)
class PropertyDescription:
    """Property of a type."""

    name: str
    type: str
    is_private: bool = False


@dataclass(frozen=True, slots=True)
class TypeDescription:
    """Type declaration.

    Examples:
        class CustomersController : Controller
            → TypeDescription("Pitstop.CustomerManagementAPI.Controllers.CustomersController",
                              TypeKind.CLASS, base_types=("Controller",), ...)

    Attributes:
        full_name: Namespace-qualified name, unique in a graph
        kind: Declaration kind
        base_types: Full names of base types (transitive after population)
        fields: Declared (and, after population, inherited) fields
        properties: Declared (and inherited) properties
        methods: Declared (and inherited) methods
    """

    full_name: str
    kind: TypeKind = TypeKind.CLASS
    base_types: tuple[str, ...] = ()
    fields: tuple[FieldDescription, ...] = ()
    properties: tuple[PropertyDescription, ...] = ()
    methods: tuple[MethodDescription, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.full_name:
            raise ValueError("full_name must not be empty")

    @property
    def name(self) -> str:
        """Simple name, last dotted segment."""
        return self.full_name.rpartition(".")[2]

    @property
    def namespace(self) -> str:
        """Namespace, everything before the simple name."""
        return self.full_name.rpartition(".")[0]

    @property
    def is_class(self) -> bool:
        return self.kind is TypeKind.CLASS

    @property
    def is_interface(self) -> bool:
        return self.kind is TypeKind.INTERFACE

    def implements_type(self, full_name: str) -> bool:
        """Check if type equals or derives from full_name."""
        return self.full_name == full_name or full_name in self.base_types

    def implements_type_starting_with(self, prefix: str) -> bool:
        """Check base types against a prefix, for generic bases like "AggregateRoot<"."""
        return any(base.startswith(prefix) for base in self.base_types)

    def methods_named(self, name: str) -> tuple[MethodDescription, ...]:
        """Methods with given name in declaration order."""
        return tuple(m for m in self.methods if m.name == name)


@dataclass(frozen=True, slots=True)
class TypeGraph:
    """Ordered collection of type descriptions.

    Graph order is the order types were supplied in. Every first-match
    heuristic (command handler, interface implementer) uses graph order.

    Invariants (FAIL-FIRST):
        - full names are unique

    Attributes:
        types: Types in graph order
        populated: Base types and inherited members resolved
    """

    types: tuple[TypeDescription, ...] = ()
    populated: bool = False
    _index: Mapping[str, TypeDescription] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Build lookup index. FAIL-FIRST on duplicates."""
        index: dict[str, TypeDescription] = {}
        for type_ in self.types:
            if type_.full_name in index:
                raise DuplicateTypeError(type_.full_name)
            index[type_.full_name] = type_
        object.__setattr__(self, "_index", MappingProxyType(index))

    def __iter__(self) -> Iterator[TypeDescription]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def __contains__(self, full_name: object) -> bool:
        return full_name in self._index

    def get(self, full_name: str) -> TypeDescription:
        """Look up type by full name.

        Raises:
            TypeNotFoundError: No type with that full name
        """
        try:
            return self._index[full_name]
        except KeyError:
            raise TypeNotFoundError(full_name) from None

    def find(self, full_name: str) -> TypeDescription | None:
        """Look up type by full name, None if absent."""
        return self._index.get(full_name)

    def implementers_of(self, interface: str) -> tuple[TypeDescription, ...]:
        """Classes implementing interface, in graph order."""
        return tuple(t for t in self.types if t.is_class and t.implements_type(interface))

    @classmethod
    def from_types(cls, types: Iterable[TypeDescription]) -> TypeGraph:
        """Build and populate a graph from raw descriptions."""
        return cls(types=tuple(types)).populate()

    @classmethod
    def empty(cls) -> TypeGraph:
        """Create empty populated graph."""
        return cls(types=(), populated=True)

    def populate(self) -> TypeGraph:
        """Resolve inheritance. Returns a new populated graph.

        Phase 1: base_types becomes the transitive closure, nearest first.
        Phase 2: non-private members of all bases are appended unless the
        derived type already declares them (methods by signature, fields
        and properties by name).

        Base types missing from the graph are kept as names only.
        Idempotent on an already populated graph.
        """
        if self.populated:
            return self

        with_bases = {t.full_name: replace(t, base_types=self._all_bases(t)) for t in self.types}
        resolved = tuple(_inherit_members(t, with_bases) for t in with_bases.values())
        return TypeGraph(types=resolved, populated=True)

    def _all_bases(self, type_: TypeDescription) -> tuple[str, ...]:
        result: list[str] = []
        pending = list(type_.base_types)
        while pending:
            base = pending.pop(0)
            if base in result or base == type_.full_name:
                continue
            result.append(base)
            parent = self._index.get(base)
            if parent is not None:
                pending.extend(parent.base_types)
        return tuple(result)


def _inherit_members(
    type_: TypeDescription,
    graph: Mapping[str, TypeDescription],
) -> TypeDescription:
    fields = list(type_.fields)
    properties = list(type_.properties)
    methods = list(type_.methods)

    field_names = {f.name for f in fields}
    property_names = {p.name for p in properties}
    signatures = {m.signature for m in methods}

    for base_name in type_.base_types:
        base = graph.get(base_name)
        if base is None:
            continue
        for f in base.fields:
            if not f.is_private and f.name not in field_names:
                fields.append(f)
                field_names.add(f.name)
        for p in base.properties:
            if not p.is_private and p.name not in property_names:
                properties.append(p)
                property_names.add(p.name)
        for m in base.methods:
            if not m.is_private and m.signature not in signatures:
                methods.append(m)
                signatures.add(m.signature)

    return replace(
        type_,
        fields=tuple(fields),
        properties=tuple(properties),
        methods=tuple(methods),
    )
