"""Tests for domain/conventions.py."""

import pytest

from interflow.domain.conventions import MessagingConventions
from interflow.domain.exceptions import InvalidConventionsError


class TestDefaults:
    """Default conventions describe the Pitstop reference system."""

    def test_default_values(self) -> None:
        conventions = MessagingConventions()
        assert conventions.event_type == "Pitstop.Infrastructure.Messaging.Event"
        assert conventions.command_type == "Pitstop.Infrastructure.Messaging.Command"
        assert conventions.handle_method == "HandleAsync"
        assert conventions.handle_command_method == "HandleCommandAsync"
        assert dict(conventions.publish_operations) == {"PublishMessageAsync": 1, "RaiseEvent": 0}
        assert conventions.external_actor == "A"
        assert conventions.unknown_service == "Q"
        assert conventions.max_depth == 64

    def test_is_publish_operation(self) -> None:
        conventions = MessagingConventions()
        assert conventions.is_publish_operation("PublishMessageAsync")
        assert conventions.is_publish_operation("RaiseEvent")
        assert not conventions.is_publish_operation("SaveAsync")

    def test_ignored_segments_lowercased(self) -> None:
        conventions = MessagingConventions(ignored_namespace_segments=frozenset({"Acme", "Apps"}))
        assert conventions.ignored_namespace_segments == frozenset({"acme", "apps"})

    def test_publish_operations_frozen(self) -> None:
        operations = {"Send": 0}
        conventions = MessagingConventions(publish_operations=operations)
        operations["Other"] = 1
        assert dict(conventions.publish_operations) == {"Send": 0}
        with pytest.raises(TypeError):
            conventions.publish_operations["X"] = 2  # type: ignore[index]


class TestValidation:
    """FAIL-FIRST validation."""

    @pytest.mark.parametrize(
        "field",
        ["event_type", "command_type", "handle_method", "body_marker", "external_actor"],
    )
    def test_empty_field_raises(self, field: str) -> None:
        with pytest.raises(InvalidConventionsError, match=field):
            MessagingConventions(**{field: ""})

    def test_same_event_and_command_raises(self) -> None:
        with pytest.raises(InvalidConventionsError, match="command_type"):
            MessagingConventions(event_type="Msg", command_type="Msg")

    def test_same_sentinels_raises(self) -> None:
        with pytest.raises(InvalidConventionsError, match="unknown_service"):
            MessagingConventions(external_actor="X", unknown_service="X")

    def test_negative_argument_index_raises(self) -> None:
        with pytest.raises(InvalidConventionsError, match="Send"):
            MessagingConventions(publish_operations={"Send": -1})

    def test_empty_publish_operations_raises(self) -> None:
        with pytest.raises(InvalidConventionsError, match="publish_operations"):
            MessagingConventions(publish_operations={})

    def test_max_depth_must_be_positive(self) -> None:
        with pytest.raises(InvalidConventionsError, match="max_depth"):
            MessagingConventions(max_depth=0)

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            MessagingConventions(max_depth=0)
