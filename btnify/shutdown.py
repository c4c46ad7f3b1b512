"""Shutdown coordination: race an external cancel event against SIGINT/SIGTERM.

State machine::

    running --(cancel event | interrupt | stop())--> stopping --(hook done)--> stopped

The terminal hook runs at most once, on entering ``stopping``.  Exceptions
raised by the hook propagate to the caller unchanged.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
import signal
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from btnify.log_context import set_log_context

logger = logging.getLogger(__name__)

ShutdownState = Literal["running", "stopping", "stopped"]
TerminalHook = Callable[[Any], object]

_INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@dataclass(frozen=True, slots=True)
class ShutdownConfig:
    """External shutdown trigger plus the hook to run once on the way down."""

    cancel: asyncio.Event
    hook: TerminalHook


class ShutdownCoordinator:
    """Blocks until shutdown is requested, then runs the terminal hook once.

    Without a `ShutdownConfig` the only trigger is an interrupt and no hook
    runs.
    """

    def __init__(
        self,
        state: Any,
        config: ShutdownConfig | None = None,
        *,
        install_signal_handlers: bool = True,
    ) -> None:
        self._state = state
        self._config = config
        self._install_signal_handlers = install_signal_handlers
        self._interrupted = asyncio.Event()
        self._stop_requested = asyncio.Event()
        self._phase: ShutdownState = "running"
        self._trigger: str | None = None
        self._hook_lock = asyncio.Lock()

    @property
    def state(self) -> ShutdownState:
        return self._phase

    @property
    def trigger(self) -> str | None:
        """``"cancel"``, ``"interrupt"`` or ``"stop"`` once shutdown started, else None."""
        return self._trigger

    def request_interrupt(self) -> None:
        """Signal the interrupt path, as SIGINT/SIGTERM would."""
        self._interrupted.set()

    async def wait(self) -> None:
        """Wait for the first trigger, then run the hook and mark stopped.

        Returns once the coordinator is past ``running``, including when
        `stop` was called directly before or during the wait.
        """
        if self._phase != "running":
            await self.stop()
            return
        installed = self._add_signal_handlers()
        try:
            await self._wait_for_trigger()
        finally:
            self._remove_signal_handlers(installed)
        await self.stop()

    async def stop(self) -> None:
        """Enter ``stopping``, run the hook if configured, enter ``stopped``.

        Idempotent: later calls return once the first has finished.
        """
        self._stop_requested.set()
        async with self._hook_lock:
            if self._phase != "running":
                return
            self._phase = "stopping"
            if self._trigger is None:
                self._trigger = "stop"
            set_log_context(operation="shutdown")
            logger.info("Shutdown started trigger=%s", self._trigger)
            if self._config is not None:
                result = self._config.hook(self._state)
                if inspect.isawaitable(result):
                    await result
                logger.debug("Terminal hook finished")
            self._phase = "stopped"
            logger.info("Shutdown complete")

    async def _wait_for_trigger(self) -> None:
        interrupt = asyncio.ensure_future(self._interrupted.wait())
        stopped = asyncio.ensure_future(self._stop_requested.wait())
        waiters: set[asyncio.Future[Any]] = {interrupt, stopped}
        cancel: asyncio.Future[Any] | None = None
        if self._config is not None:
            cancel = asyncio.ensure_future(self._config.cancel.wait())
            waiters.add(cancel)
        try:
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                waiter.cancel()
            for waiter in waiters:
                with contextlib.suppress(asyncio.CancelledError):
                    await waiter
        if self._trigger is not None:
            return
        if cancel is not None and cancel in done:
            self._trigger = "cancel"
        elif interrupt in done:
            self._trigger = "interrupt"
        else:
            self._trigger = "stop"

    def _add_signal_handlers(self) -> list[signal.Signals]:
        if not self._install_signal_handlers or sys.platform == "win32":
            return []
        loop = asyncio.get_running_loop()
        installed: list[signal.Signals] = []
        for sig in _INTERRUPT_SIGNALS:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except (NotImplementedError, RuntimeError, ValueError):
                # Not on the main thread, or the loop does not support signals.
                logger.debug("Cannot install handler for %s", sig.name)
                continue
            installed.append(sig)
        return installed

    def _remove_signal_handlers(self, installed: list[signal.Signals]) -> None:
        if not installed:
            return
        loop = asyncio.get_running_loop()
        for sig in installed:
            loop.remove_signal_handler(sig)

    def _on_signal(self, sig: signal.Signals) -> None:
        logger.info("Received %s", sig.name)
        self.request_interrupt()
