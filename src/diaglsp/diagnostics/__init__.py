"""Diagnostic records and the machinery that produces and tracks them."""

from diaglsp.diagnostics.collection import DiagnosticCollection, DiagnosticDelta
from diaglsp.diagnostics.debounce import DebounceManager
from diaglsp.diagnostics.parser import parse_compiler_output
from diaglsp.diagnostics.record import NO_POSITION, DiagnosticRecord

__all__ = [
    "DebounceManager",
    "DiagnosticCollection",
    "DiagnosticDelta",
    "DiagnosticRecord",
    "NO_POSITION",
    "parse_compiler_output",
]
