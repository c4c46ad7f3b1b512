"""Buttons and the closed set of handler shapes they can carry.

A button's handler has exactly one of four call shapes:

* ``basic``          -- ``handler()``
* ``state``          -- ``handler(state)``
* ``prompts``        -- ``handler(answers)``
* ``state_prompts``  -- ``handler(state, answers)``

``answers`` holds one entry per declared prompt, ``None`` where the user
cancelled.  Handlers receive the shared state read-only by convention; any
mutation must go through a lock or other primitive owned by the state itself.

Example::

    import threading

    class Counter:
        def __init__(self) -> None:
            self.lock = threading.Lock()
            self.count = 0

    def count_handler(state: Counter) -> str:
        with state.lock:
            state.count += 1
            return f"The count is now: {state.count}"

    buttons = [
        Button.basic("Ping", lambda: "pong"),
        Button.with_state("Count", count_handler),
        Button.with_prompts("Greet", lambda a: f"hello {a[0]}", ["name?"]),
    ]
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, get_args

from btnify.errors import ButtonError
from btnify.models import Answer, ClickResponse

HandlerResult = str | ClickResponse

BasicHandler = Callable[[], HandlerResult]
StateHandler = Callable[[Any], HandlerResult]
PromptsHandler = Callable[[list[Answer]], HandlerResult]
StatePromptsHandler = Callable[[Any, list[Answer]], HandlerResult]

HandlerKind = Literal["basic", "state", "prompts", "state_prompts"]

HANDLER_KINDS: tuple[str, ...] = get_args(HandlerKind)
PROMPT_KINDS = frozenset({"prompts", "state_prompts"})
STATE_KINDS = frozenset({"state", "state_prompts"})


@dataclass(frozen=True, slots=True)
class HandlerVariant:
    """Tagged handler: *kind* decides how *handler* is called."""

    kind: HandlerKind
    handler: Callable[..., HandlerResult]

    def __post_init__(self) -> None:
        if self.kind not in HANDLER_KINDS:
            msg = f"unknown handler kind {self.kind!r}"
            raise ButtonError(msg)
        if not callable(self.handler):
            msg = f"handler for kind {self.kind!r} is not callable"
            raise ButtonError(msg)

    @property
    def takes_prompts(self) -> bool:
        return self.kind in PROMPT_KINDS

    @property
    def takes_state(self) -> bool:
        return self.kind in STATE_KINDS


@dataclass(frozen=True, slots=True)
class Button:
    """A named, clickable action bound to exactly one handler variant.

    While registered, a button is identified by its position, not its name;
    several buttons may share a name.
    """

    name: str
    variant: HandlerVariant
    prompts: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if isinstance(self.prompts, str):
            msg = f"button {self.name!r}: prompts must be a sequence of strings, not a string"
            raise ButtonError(msg)
        object.__setattr__(self, "prompts", tuple(self.prompts))
        if self.prompts and not self.variant.takes_prompts:
            msg = f"button {self.name!r}: prompts given for a {self.variant.kind!r} handler"
            raise ButtonError(msg)

    @classmethod
    def basic(cls, name: str, handler: BasicHandler) -> Button:
        return cls(name, HandlerVariant("basic", handler))

    @classmethod
    def with_state(cls, name: str, handler: StateHandler) -> Button:
        return cls(name, HandlerVariant("state", handler))

    @classmethod
    def with_prompts(cls, name: str, handler: PromptsHandler, prompts: Sequence[str]) -> Button:
        return cls(name, HandlerVariant("prompts", handler), prompts)  # type: ignore[arg-type]

    @classmethod
    def with_state_and_prompts(
        cls,
        name: str,
        handler: StatePromptsHandler,
        prompts: Sequence[str],
    ) -> Button:
        variant = HandlerVariant("state_prompts", handler)
        return cls(name, variant, prompts)  # type: ignore[arg-type]
