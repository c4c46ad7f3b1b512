"""Registry: the frozen, index-addressed table of buttons."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from btnify.button import Button

logger = logging.getLogger(__name__)


class Registry:
    """Ordered, fixed-length button table built once at server start.

    A button's id is its 0-based position.  Duplicate names and duplicate
    handlers are allowed; the table never grows or shrinks after `build`.
    """

    __slots__ = ("_buttons",)

    def __init__(self, buttons: tuple[Button, ...]) -> None:
        self._buttons = buttons

    @classmethod
    def build(cls, buttons: Iterable[Button]) -> Registry:
        frozen = tuple(buttons)
        for idx, button in enumerate(frozen):
            if not isinstance(button, Button):
                msg = f"registry entry {idx} is {type(button).__name__}, expected Button"
                raise TypeError(msg)
        logger.debug("Registry built with %d buttons", len(frozen))
        return cls(frozen)

    def lookup(self, button_id: int) -> Button | None:
        """Return the button at *button_id*, or None when out of range."""
        if 0 <= button_id < len(self._buttons):
            return self._buttons[button_id]
        return None

    def __len__(self) -> int:
        return len(self._buttons)

    def __iter__(self) -> Iterator[Button]:
        return iter(self._buttons)
