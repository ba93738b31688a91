"""Tests for domain/fragments.py."""

import pytest

from interflow.domain.exceptions import InvalidFragmentError
from interflow.domain.fragments import (
    Alt,
    AltSection,
    ArrowColor,
    GroupType,
    Interactions,
    iter_arrows,
)
from tests.factories import make_alt, make_arrow


class TestArrow:
    """Tests for Arrow."""

    def test_with_source_copies(self) -> None:
        arrow = make_arrow("A", "Billing", "InvoiceCreated")
        moved = arrow.with_source("WebApp")
        assert moved.source == "WebApp"
        assert moved.target == "Billing"
        assert arrow.source == "A"

    def test_color_values(self) -> None:
        assert ArrowColor.COMMAND.value == "DodgerBlue"
        assert ArrowColor.EVENT.value == "ForestGreen"


class TestAlt:
    """Tests for Alt and AltSection invariants."""

    def test_empty_section_raises(self) -> None:
        with pytest.raises(InvalidFragmentError, match="at least one fragment"):
            AltSection(label="x", fragments=())

    def test_empty_alt_raises(self) -> None:
        with pytest.raises(InvalidFragmentError, match="at least one section"):
            Alt(sections=())

    def test_group_type_from_first_section(self) -> None:
        alt = make_alt(
            ("a", (make_arrow("S", "T", "M"),)),
            ("b", (make_arrow("S", "T", "N"),)),
            group_type=GroupType.CASE,
        )
        assert alt.group_type is GroupType.CASE
        assert alt.sections[1].group_type is None

    def test_group_type_values(self) -> None:
        assert GroupType.IF.value == "if"
        assert GroupType.CASE.value == "case"
        assert GroupType.FOR_EACH.value == "forEach"


class TestInteractions:
    """Tests for Interactions builder."""

    def test_starts_empty(self) -> None:
        interactions = Interactions()
        assert interactions.fragments == ()
        assert len(interactions) == 0
        assert not interactions

    def test_append_only_order(self) -> None:
        first = make_arrow("A", "B", "M1")
        second = make_arrow("B", "C", "M2")
        third = make_arrow("C", "D", "M3")
        interactions = Interactions()
        interactions.add(first)
        interactions.extend((second, third))
        assert interactions.fragments == (first, second, third)
        assert interactions

    def test_fragments_is_snapshot(self) -> None:
        interactions = Interactions()
        snapshot = interactions.fragments
        interactions.add(make_arrow("A", "B", "M"))
        assert snapshot == ()

    def test_arrows_includes_nested(self) -> None:
        top = make_arrow("A", "B", "M1")
        nested = make_arrow("B", "C", "M2")
        deeper = make_arrow("C", "D", "M3")
        inner = make_alt(("loop", (deeper,)), group_type=GroupType.FOR_EACH)
        interactions = Interactions()
        interactions.extend((top, make_alt(("ok", (nested, inner)))))
        assert list(interactions.arrows()) == [top, nested, deeper]
        assert list(iter_arrows(interactions.fragments)) == [top, nested, deeper]
