"""Failure containment for LSP notification handlers.

Notifications have no response channel, so an exception escaping a
handler would only reach pygls' generic error path. Request handlers whose
failures must reach the client are left unwrapped.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec

P = ParamSpec("P")


def contain_notification_errors(
    *, logger: logging.Logger, method: str
) -> Callable[[Callable[P, Awaitable[None]]], Callable[P, Awaitable[None]]]:
    """
    Log and drop exceptions raised by a coroutine notification handler.

    ``asyncio.CancelledError`` passes through so that debounce and request
    cancellation keep working.

    Args:
        logger: Logger the traceback is written to.
        method: LSP method name, recorded with the traceback.
    """

    def decorator(
        handler: Callable[P, Awaitable[None]],
    ) -> Callable[P, Awaitable[None]]:
        @functools.wraps(handler)
        async def contained(*args: P.args, **kwargs: P.kwargs) -> None:
            try:
                await handler(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Unhandled error in %s notification", method)

        return contained

    return decorator
