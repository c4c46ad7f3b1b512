"""Tests for the button registry."""

from __future__ import annotations

import pytest

from btnify.button import Button
from btnify.registry import Registry


def test_ids_are_positions(sample_buttons: list[Button]) -> None:
    registry = Registry.build(sample_buttons)
    assert len(registry) == 4
    for idx, button in enumerate(sample_buttons):
        assert registry.lookup(idx) is button


def test_out_of_range_lookup_returns_none(sample_buttons: list[Button]) -> None:
    registry = Registry.build(sample_buttons)
    assert registry.lookup(4) is None
    assert registry.lookup(1000) is None
    assert registry.lookup(-1) is None


def test_duplicate_names_allowed() -> None:
    registry = Registry.build(
        [Button.basic("Same", lambda: "a"), Button.basic("Same", lambda: "b")],
    )
    first, second = registry.lookup(0), registry.lookup(1)
    assert first is not None and second is not None
    assert first.variant.handler() == "a"
    assert second.variant.handler() == "b"


def test_build_consumes_iterator() -> None:
    registry = Registry.build(Button.basic(f"B{i}", lambda: "x") for i in range(3))
    assert [b.name for b in registry] == ["B0", "B1", "B2"]


def test_empty_registry() -> None:
    registry = Registry.build([])
    assert len(registry) == 0
    assert registry.lookup(0) is None


def test_frozen_against_source_list(sample_buttons: list[Button]) -> None:
    registry = Registry.build(sample_buttons)
    sample_buttons.append(Button.basic("Late", lambda: "late"))
    assert len(registry) == 4


def test_non_button_rejected() -> None:
    with pytest.raises(TypeError, match="expected Button"):
        Registry.build([lambda: "x"])  # type: ignore[list-item]
