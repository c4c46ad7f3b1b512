"""Shared test fixtures."""

from __future__ import annotations

import threading

import pytest

from btnify.button import Button
from btnify.models import Answer


class Counter:
    """Shared state with its own lock, the way handlers are expected to mutate."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.count = 0

    def increment(self) -> int:
        with self.lock:
            self.count += 1
            return self.count


def _count(state: Counter) -> str:
    return f"The count is now: {state.increment()}"


def _greet(answers: list[Answer]) -> str:
    name = answers[0]
    return "you cancelled" if name is None else f"hello {name}"


def _rename(state: Counter, answers: list[Answer]) -> str:
    return f"{answers[0]}->{answers[1]} at {state.count}"


@pytest.fixture
def counter() -> Counter:
    return Counter()


@pytest.fixture
def sample_buttons() -> list[Button]:
    """One button of each handler shape, ids 0..3."""
    return [
        Button.basic("Ping", lambda: "pong"),
        Button.with_state("Count", _count),
        Button.with_prompts("Greet", _greet, ["name?"]),
        Button.with_state_and_prompts("Rename", _rename, ["from?", "to?"]),
    ]
