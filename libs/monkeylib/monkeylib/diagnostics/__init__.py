"""Monkey diagnostics subpackage (Layer 0 -- zero internal dependencies)."""

from monkeylib.diagnostics.collector import DiagnosticCollector
from monkeylib.diagnostics.diagnostic import Diagnostic
from monkeylib.diagnostics.severity import DiagnosticSeverity

__all__ = ["DiagnosticSeverity", "Diagnostic", "DiagnosticCollector"]
