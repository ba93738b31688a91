"""Tests for application/resolvers/handlers.py."""

import logging

import pytest

from interflow.application.resolvers.handlers import HandlerResolver
from interflow.domain.type_graph import ParameterDescription, TypeDescription, TypeKind
from tests.factories import (
    CONVENTIONS,
    HANDLER_CALLBACK,
    make_class,
    make_command,
    make_command_handler,
    make_event,
    make_event_handler,
    make_graph,
    make_method,
)

REGISTERED = make_event("Pitstop.CustomerManagementAPI.Events.CustomerRegistered")
REGISTER = make_command("Pitstop.CustomerManagementAPI.Commands.RegisterCustomer")


def _resolver(*types: TypeDescription) -> HandlerResolver:
    return HandlerResolver(make_graph(REGISTERED, REGISTER, *types), CONVENTIONS)


class TestEventHandlers:
    """Tests for event handler discovery."""

    def test_graph_order(self) -> None:
        second = make_event_handler("Pitstop.NotificationService.RegisteredHandler", REGISTERED)
        first = make_event_handler("Pitstop.AuditlogService.RegisteredHandler", REGISTERED)
        resolver = _resolver(second, first)
        assert resolver.event_handlers_for(REGISTERED) == (second, first)

    def test_requires_handler_callback_capability(self) -> None:
        handle = make_method("HandleAsync")
        plain = make_class("Pitstop.NotificationService.Plain", handle)
        assert _resolver(plain).event_handlers_for(REGISTERED) == ()

    def test_requires_matching_parameter(self) -> None:
        other = make_event("Pitstop.Events.CustomerRemoved")
        handler = make_event_handler("Pitstop.NotificationService.RemovedHandler", other)
        assert _resolver(other, handler).event_handlers_for(REGISTERED) == ()

    def test_contract_copy_matches_by_simple_name(self) -> None:
        copy = make_event("Pitstop.NotificationService.Events.CustomerRegistered")
        handler = make_event_handler("Pitstop.NotificationService.RegisteredHandler", copy)
        assert _resolver(copy, handler).event_handlers_for(REGISTERED) == (handler,)

    def test_interfaces_excluded(self) -> None:
        handle = make_method(
            "HandleAsync",
            parameters=(ParameterDescription(REGISTERED.full_name, "message"),),
        )
        iface = make_class(
            "Pitstop.NotificationService.IRegisteredHandler",
            handle,
            base_types=(HANDLER_CALLBACK,),
            kind=TypeKind.INTERFACE,
        )
        assert _resolver(iface).event_handlers_for(REGISTERED) == ()


class TestCommandHandler:
    """Tests for command handler discovery."""

    def test_body_bound_parameter(self) -> None:
        controller = make_command_handler(
            "Pitstop.CustomerManagementAPI.Controllers.CustomersController",
            REGISTER,
            method_name="RegisterAsync",
        )
        assert _resolver(controller).command_handler_for(REGISTER) == controller

    def test_none_when_unhandled(self) -> None:
        assert _resolver().command_handler_for(REGISTER) is None

    def test_several_candidates_first_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        first = make_command_handler("Pitstop.CustomerManagementAPI.Controllers.A", REGISTER)
        second = make_command_handler("Pitstop.CustomerManagementAPI.Controllers.B", REGISTER)
        with caplog.at_level(logging.DEBUG, logger="interflow"):
            assert _resolver(first, second).command_handler_for(REGISTER) == first
        assert "Ambiguous command handler" in caplog.text


class TestHandlersFor:
    """Tests for the combined handler order."""

    def test_event_handlers_then_command_handler(self) -> None:
        controller = make_command_handler("Pitstop.CustomerManagementAPI.Controllers.C", REGISTER)
        # a handler class that reacts to RegisterCustomer as if it were an event
        listener = make_event_handler("Pitstop.AuditlogService.Listener", REGISTER)
        assert _resolver(controller, listener).handlers_for(REGISTER) == (listener, controller)

    def test_empty_when_nobody_handles(self) -> None:
        assert _resolver().handlers_for(REGISTERED) == ()
