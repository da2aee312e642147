"""Per-file debouncing of diagnostic runs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from diaglsp.logging import get_logger


class DebounceManager:
    """
    Keeps at most one pending diagnostic run per key.

    Scheduling a run for a key that already has one pending cancels the
    older run, so bursts of open/save notifications collapse into one check.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._lock = asyncio.Lock()
        self._logger = logger if logger is not None else get_logger("diagnostics.debounce")

    async def schedule(
        self,
        key: str,
        func: Callable[[], Awaitable[None]],
        delay_ms: int = 400,
    ) -> None:
        """
        Run ``func`` after ``delay_ms`` unless rescheduled or cancelled first.

        Args:
            key: Identifies the debounced stream, usually a document URI.
            func: Coroutine factory to run.
            delay_ms: Quiet period in milliseconds.
        """
        async with self._lock:
            await self._cancel_locked(key)
            self._tasks[key] = asyncio.create_task(
                self._run_later(key, func, delay_ms)
            )

    async def cancel(self, key: str) -> None:
        """Drop the pending run for ``key``, if any."""
        async with self._lock:
            await self._cancel_locked(key)

    def pending(self, key: str) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    async def _cancel_locked(self, key: str) -> None:
        task = self._tasks.pop(key, None)
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run_later(
        self, key: str, func: Callable[[], Awaitable[None]], delay_ms: int
    ) -> None:
        try:
            await asyncio.sleep(delay_ms / 1000)
            await func()
        except asyncio.CancelledError:
            raise
        except Exception:
            self._logger.exception("Debounced diagnostic run failed for %s", key)
        finally:
            # a replacement task may already own the key
            if self._tasks.get(key) is asyncio.current_task():
                del self._tasks[key]
