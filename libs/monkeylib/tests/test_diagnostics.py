from __future__ import annotations

import pytest

from monkeylib.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticSeverity,
)


class TestDiagnosticSeverity:
    def test_values_exist(self):
        assert list(DiagnosticSeverity) == [DiagnosticSeverity.ERROR]

    def test_str_representation(self):
        assert str(DiagnosticSeverity.ERROR) == "error"


class TestDiagnostic:
    def test_creation(self):
        diag = Diagnostic(DiagnosticSeverity.ERROR, "test error")
        assert diag.severity == DiagnosticSeverity.ERROR
        assert diag.message == "test error"

    def test_str_representation(self):
        diag = Diagnostic(DiagnosticSeverity.ERROR, "expected next token to be IDENT")
        assert str(diag) == "error: expected next token to be IDENT"

    def test_frozen(self):
        diag = Diagnostic(DiagnosticSeverity.ERROR, "test")
        with pytest.raises(Exception):  # FrozenInstanceError or AttributeError
            diag.message = "changed"


class TestDiagnosticCollector:
    def test_empty_collector(self):
        collector = DiagnosticCollector()
        assert not collector.has_errors()
        assert collector.get_all() == []
        assert len(collector) == 0

    def test_add_error(self):
        collector = DiagnosticCollector()
        collector.error("error message")

        assert collector.has_errors()
        diags = collector.get_all()
        assert len(diags) == 1
        assert diags[0].severity == DiagnosticSeverity.ERROR
        assert diags[0].message == "error message"

    def test_order_is_preserved(self):
        collector = DiagnosticCollector()
        collector.error("first")
        collector.error("second")
        collector.error("third")
        assert collector.messages() == ["first", "second", "third"]

    def test_get_all_returns_copy(self):
        collector = DiagnosticCollector()
        collector.error("error")
        collector.get_all().clear()
        assert len(collector) == 1

    def test_format_all(self):
        collector = DiagnosticCollector()
        collector.error("test error")
        collector.error("unexpected token")
        assert collector.format_all() == "error: test error\nerror: unexpected token"

    def test_format_all_empty(self):
        assert DiagnosticCollector().format_all() == ""
