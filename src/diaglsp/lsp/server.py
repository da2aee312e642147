"""diaglsp LSP server using pygls 2.0.

Publishes checker findings for open documents and exposes the project
refresh command through workspace/executeCommand.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from diaglsp.commands.refresh_file import (
    FILE_OPTION,
    PROJECT_OPTION,
    REFRESH_FILE_COMMAND,
    ProjectRefreshFileCommand,
)
from diaglsp.diagnostics.checker import DiagnosticsProvider
from diaglsp.diagnostics.collection import DiagnosticCollection
from diaglsp.diagnostics.debounce import DebounceManager
from diaglsp.diagnostics.record import DiagnosticRecord
from diaglsp.logging import get_logger
from diaglsp.lsp.adapter import (
    path_to_uri,
    record_to_lsp_diagnostic,
    same_file,
    uri_to_path,
)
from diaglsp.lsp.error_handling import contain_notification_errors
from diaglsp.project.types import ProjectService


def _refresh_options(arguments: Sequence[Any]) -> dict[str, str]:
    """
    Normalize executeCommand arguments for the refresh command.

    Accepts ``[project, file]``, ``[{"project": ..., "file": ...}]`` or the
    same pair nested in a single list.
    """
    if len(arguments) == 1 and isinstance(arguments[0], Mapping):
        return {str(key): str(value) for key, value in arguments[0].items()}
    if len(arguments) == 1 and isinstance(arguments[0], (list, tuple)):
        return _refresh_options(arguments[0])

    options: dict[str, str] = {}
    if len(arguments) > 0:
        options[PROJECT_OPTION] = str(arguments[0])
    if len(arguments) > 1:
        options[FILE_OPTION] = str(arguments[1])
    return options


def _records_for_path(
    records: Sequence[DiagnosticRecord], path: str
) -> list[DiagnosticRecord]:
    """Keep the records that belong to ``path``; unattributed ones are claimed."""
    selected: list[DiagnosticRecord] = []
    for record in records:
        if record.filename is None:
            selected.append(dataclasses.replace(record, filename=path))
        elif same_file(record.filename, path):
            selected.append(record)
    return selected


def create_server(
    *,
    project_service: ProjectService,
    get_diagnostics: DiagnosticsProvider | None = None,
    collection: DiagnosticCollection | None = None,
    logger: logging.Logger | None = None,
    debounce_ms: int = 400,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        project_service: Service the refresh command resolves files through.
        get_diagnostics: Provider that checks a file path. If None, no
            diagnostics are published.
        collection: Store for the latest records per file. A fresh one is
            created if None.
        logger: Optional logger instance. If None, uses the diaglsp.lsp logger.
        debounce_ms: Debounce delay in milliseconds for diagnostics. Default 400.

    Returns:
        Configured LanguageServer instance.
    """
    if logger is None:
        logger = get_logger("lsp")
    if collection is None:
        collection = DiagnosticCollection()

    server = LanguageServer("diaglsp", "v0.1.0")
    debounce_manager = DebounceManager(logger=logger)
    refresh_command = ProjectRefreshFileCommand(project_service)

    def _publish(uri: str, records: Sequence[DiagnosticRecord]) -> None:
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[record_to_lsp_diagnostic(record) for record in records],
                version=None,
            )
        )

    async def publish_document_diagnostics(uri: str) -> None:
        """Run the checker for ``uri`` and publish its findings."""
        path = uri_to_path(uri)
        if path is None or get_diagnostics is None:
            return

        # checkers are usually subprocesses; keep them off the event loop
        records = await asyncio.to_thread(get_diagnostics, path)
        current = _records_for_path(records, path)

        delta = collection.replace(path, current)
        logger.debug(
            "Checked %s: %d findings (%d new, %d resolved)",
            path,
            len(current),
            len(delta.added),
            len(delta.removed),
        )

        _publish(uri, collection.get(path))

    async def schedule_check(uri: str) -> None:
        await debounce_manager.schedule(
            uri,
            lambda: publish_document_diagnostics(uri),
            delay_ms=debounce_ms,
        )

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @contain_notification_errors(logger=logger, method=types.TEXT_DOCUMENT_DID_OPEN)
    async def did_open(params: types.DidOpenTextDocumentParams) -> None:
        """Handle textDocument/didOpen by scheduling a check."""
        uri = params.text_document.uri
        logger.debug("Document opened: %s", uri)
        await schedule_check(uri)

    @server.feature(types.TEXT_DOCUMENT_DID_SAVE)
    @contain_notification_errors(logger=logger, method=types.TEXT_DOCUMENT_DID_SAVE)
    async def did_save(params: types.DidSaveTextDocumentParams) -> None:
        """Handle textDocument/didSave by scheduling a check."""
        uri = params.text_document.uri
        logger.debug("Document saved: %s", uri)
        await schedule_check(uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @contain_notification_errors(logger=logger, method=types.TEXT_DOCUMENT_DID_CLOSE)
    async def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Handle textDocument/didClose by clearing diagnostics."""
        uri = params.text_document.uri
        logger.debug("Document closed: %s", uri)

        await debounce_manager.cancel(uri)

        path = uri_to_path(uri)
        if path is not None:
            collection.clear(path)
        _publish(uri, [])

    # Not wrapped: a failed refresh must reach the client as a JSON-RPC error.
    @server.command(REFRESH_FILE_COMMAND)
    async def refresh_file(*arguments: Any) -> str:
        """
        Handle the diaglsp.refreshFile command.

        Refreshes the file in its project, then re-checks it.
        """
        options = _refresh_options(arguments)
        logger.debug("Refresh requested: %s", options)

        # resolve() and stat() touch the filesystem
        handle = await asyncio.to_thread(refresh_command.refresh, options)

        uri = path_to_uri(handle.location)
        if uri is not None and get_diagnostics is not None:
            await schedule_check(uri)
        return ""

    return server
