"""Service name derivation from namespaces.

Heuristic: the service is the first namespace segment that is not a
product or layer prefix. Kept as one pure function so an explicit
service registry can replace it without touching traversal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from interflow.domain.conventions import MessagingConventions
    from interflow.domain.type_graph import TypeDescription


def service_name(type_: TypeDescription, conventions: MessagingConventions) -> str | None:
    """Get the service a type belongs to.

    Examples (default conventions):
        Pitstop.CustomerManagementAPI.Controllers.CustomersController → "CustomerManagementAPI"
        Pitstop.Application.VehicleManagement.Commands.X → "VehicleManagement"
        Pitstop.Application (namespace only ignored segments) → None

    Args:
        type_: Type whose namespace is inspected
        conventions: Supplies the ignored leading segments

    Returns:
        Service name, None if no segment remains
    """
    for segment in type_.namespace.split("."):
        if not segment:
            continue
        if segment.lower() in conventions.ignored_namespace_segments:
            continue
        return segment
    return None
