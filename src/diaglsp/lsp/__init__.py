"""LSP surface of diaglsp."""

from diaglsp.lsp.adapter import record_to_lsp_diagnostic
from diaglsp.lsp.server import create_server

__all__ = [
    "create_server",
    "record_to_lsp_diagnostic",
]
