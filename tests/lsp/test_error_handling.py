"""Tests for notification error containment."""

from __future__ import annotations

import asyncio
import logging

import pytest

from diaglsp.lsp.error_handling import contain_notification_errors


@pytest.fixture
def logger() -> logging.Logger:
    """Logger outside the diaglsp tree so caplog sees its records."""
    return logging.getLogger("tests.error_handling")


class TestContainNotificationErrors:
    """Tests for contain_notification_errors decorator."""

    @pytest.mark.asyncio
    async def test_runs_handler(self, logger: logging.Logger) -> None:
        calls: list[int] = []

        @contain_notification_errors(logger=logger, method="textDocument/didOpen")
        async def handler(value: int) -> None:
            calls.append(value)

        await handler(3)
        assert calls == [3]

    @pytest.mark.asyncio
    async def test_logs_and_drops_exception(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        @contain_notification_errors(logger=logger, method="textDocument/didSave")
        async def handler() -> None:
            raise ValueError("save handler exploded")

        with caplog.at_level(logging.ERROR, logger="tests.error_handling"):
            assert await handler() is None

        assert "textDocument/didSave" in caplog.text
        assert "save handler exploded" in caplog.text

    @pytest.mark.asyncio
    async def test_reraises_cancelled_error(self, logger: logging.Logger) -> None:
        @contain_notification_errors(logger=logger, method="textDocument/didOpen")
        async def handler() -> None:
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await handler()

    def test_preserves_function_metadata(self, logger: logging.Logger) -> None:
        @contain_notification_errors(logger=logger, method="textDocument/didClose")
        async def my_handler() -> None:
            """My docstring."""

        assert my_handler.__name__ == "my_handler"
        assert my_handler.__doc__ == "My docstring."
