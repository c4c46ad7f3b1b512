"""Dispatcher: resolve a click to its button and invoke the handler.

Every per-request failure (unknown id, wrong number of answers) becomes an
ordinary `ClickResponse` message; nothing here raises for bad client input.
The dispatcher holds no lock, so concurrent dispatches run fully in parallel.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from btnify.models import Answer, ClickResponse
from btnify.registry import Registry

logger = logging.getLogger(__name__)

UNKNOWN_BUTTON_MESSAGE = "Unknown button id"
ARITY_MISMATCH_MESSAGE = "answers length does not match prompts length"


class Dispatcher:
    """Routes ``(id, answers)`` pairs to the handlers in a `Registry`."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    @property
    def registry(self) -> Registry:
        return self._registry

    def dispatch(
        self,
        button_id: int,
        answers: Sequence[Answer],
        state: Any,
    ) -> ClickResponse:
        """Run the handler for *button_id* and wrap its result.

        Prompt-bearing handlers are only invoked when ``len(answers)`` equals
        the number of declared prompts, so handlers may index ``answers``
        freely.  Basic and state-only handlers ignore *answers* entirely.
        """
        button = self._registry.lookup(button_id)
        if button is None:
            logger.warning(
                "Click rejected: unknown id=%d (registry size %d)",
                button_id,
                len(self._registry),
            )
            return ClickResponse(message=UNKNOWN_BUTTON_MESSAGE)

        variant = button.variant
        if variant.takes_prompts and len(answers) != len(button.prompts):
            logger.warning(
                "Click rejected: id=%d expected %d answers, got %d",
                button_id,
                len(button.prompts),
                len(answers),
            )
            return ClickResponse(
                message=(
                    f"{ARITY_MISMATCH_MESSAGE} "
                    f"(expected {len(button.prompts)}, got {len(answers)})"
                ),
            )

        logger.debug("Dispatching id=%d name=%s kind=%s", button_id, button.name, variant.kind)
        kind = variant.kind
        if kind == "basic":
            result = variant.handler()
        elif kind == "state":
            result = variant.handler(state)
        elif kind == "prompts":
            result = variant.handler(list(answers))
        else:  # "state_prompts"
            result = variant.handler(state, list(answers))

        return ClickResponse.from_value(result)
