"""Tests for ConsoleReporter.

Tests:
- ConsoleConfig default values and validation
- Header and participants line
- Arrow and alt section rendering
- Empty diagram notice
"""

import pytest

from interflow.application.reporters.console import ConsoleConfig, ConsoleReporter
from interflow.domain.fragments import ArrowColor, GroupType
from tests.factories import make_alt, make_arrow, make_diagram

PLAIN = ConsoleConfig(show_colors=False)


class TestConsoleConfig:
    """Tests for ConsoleConfig."""

    def test_default_values(self) -> None:
        """Default values are set correctly."""
        config = ConsoleConfig()
        assert config.show_participants is True
        assert config.show_colors is True
        assert config.width == 120

    def test_narrow_width_rejected(self) -> None:
        """Width below 20 raises."""
        with pytest.raises(ValueError, match="width"):
            ConsoleConfig(width=10)


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_report_contains_header(self) -> None:
        """report() contains INTERACTIONS header and message name."""
        output = ConsoleReporter(PLAIN).report(make_diagram())
        assert "INTERACTIONS" in output
        assert "Pitstop.Events.CustomerRegistered" in output

    def test_report_lists_participants(self) -> None:
        """report() shows participants in diagram order."""
        diagram = make_diagram(
            participants=("CustomerManagementAPI", "NotificationService"),
            fragments=(make_arrow("A", "CustomerManagementAPI", "RegisterCustomer"),),
        )
        output = ConsoleReporter(PLAIN).report(diagram)
        assert "Participants: CustomerManagementAPI, NotificationService" in output

    def test_participants_hidden(self) -> None:
        """show_participants=False omits the participants line."""
        config = ConsoleConfig(show_participants=False, show_colors=False)
        output = ConsoleReporter(config).report(make_diagram(participants=("WebApp",)))
        assert "Participants:" not in output

    def test_report_renders_arrows(self) -> None:
        """Arrows render as source -> target: label."""
        diagram = make_diagram(
            participants=("CustomerManagementAPI",),
            fragments=(
                make_arrow("A", "CustomerManagementAPI", "RegisterCustomer", ArrowColor.COMMAND),
            ),
        )
        output = ConsoleReporter(PLAIN).report(diagram)
        assert "A -> CustomerManagementAPI: RegisterCustomer" in output

    def test_report_renders_alt_sections(self) -> None:
        """First section shows its group keyword, later sections show else."""
        alt = make_alt(
            ("customer.IsNew", (make_arrow("S1", "S2", "CustomerRegistered"),)),
            ("retry", (make_arrow("S1", "S3", "CustomerRetried"),)),
        )
        output = ConsoleReporter(PLAIN).report(make_diagram(participants=("S2", "S3"), fragments=(alt,)))
        assert "if customer.IsNew" in output
        assert "else retry" in output
        assert "S1 -> S3: CustomerRetried" in output

    def test_report_renders_for_each(self) -> None:
        """forEach sections show the loop header."""
        alt = make_alt(
            ("job in jobs", (make_arrow("S1", "S2", "JobPlanned"),)),
            group_type=GroupType.FOR_EACH,
        )
        output = ConsoleReporter(PLAIN).report(make_diagram(participants=("S2",), fragments=(alt,)))
        assert "forEach job in jobs" in output

    def test_markup_in_labels_is_escaped(self) -> None:
        """Square brackets in conditions are printed literally."""
        alt = make_alt(("items[0] != null", (make_arrow("S1", "S2", "E"),)))
        output = ConsoleReporter(PLAIN).report(make_diagram(participants=("S2",), fragments=(alt,)))
        assert "items[0] != null" in output

    def test_empty_diagram_notice(self) -> None:
        """Diagram without fragments reports no handlers."""
        output = ConsoleReporter(PLAIN).report(make_diagram())
        assert "No handlers found" in output
        assert "Participants: -" in output

    def test_colored_output_is_str(self) -> None:
        """Default config still returns str."""
        diagram = make_diagram(
            participants=("S2",),
            fragments=(make_arrow("A", "S2", "RegisterCustomer", ArrowColor.COMMAND),),
        )
        output = ConsoleReporter().report(diagram)
        assert isinstance(output, str)
        assert "RegisterCustomer" in output
