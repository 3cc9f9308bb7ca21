"""Diagnostic message representation for Monkey."""

from __future__ import annotations

from dataclasses import dataclass

from monkeylib.diagnostics.severity import DiagnosticSeverity


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic message.

    Tokens carry no source positions, so a diagnostic is identified by its
    text alone.
    """

    severity: DiagnosticSeverity
    message: str

    def __str__(self) -> str:
        return f"{self.severity}: {self.message}"
