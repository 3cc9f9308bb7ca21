"""
Conformance: diagnostics accumulate and parsing resumes after a bad statement
Language reference: error reporting
"""
import pytest


# Each test case is a tuple:
# (description, monkey_source, expected_diagnostic_count, surviving_rendering)

CASES = [
    ("single_bad_let", "let x 5;", 1, ""),
    ("bad_then_good", "let x 5; let y = 1;", 1, "let y = 1;"),
    ("good_bad_good", "let a = 1; let b 2; return a;", 1, "let a = 1;return a;"),
    ("three_bad", "let = 10;\nlet x 5;\nlet 838383;", 3, ""),
    ("bad_inside_block", "fn() { let = 1; x }; y", 1, "fn() xy"),
    ("illegal_then_good", "#; let z = 3;", 1, "let z = 3;"),
    ("stray_braces", "}; }; x", 2, "x"),
    ("error_at_closing_brace", "let f = fn() { x + }; let y = 1;", 1, "let f = fn() ;let y = 1;"),
    ("bad_params_skip_body", "let f = fn(x { x }; let y = 2;", 1, "let y = 2;"),
    ("bad_nested_block", "if (a) { if (b) { let = 1; } c }; d", 1, "ifa ifb cd"),
    ("unterminated_block", "let y = 1; if (x) { y", 1, "let y = 1;"),
]


@pytest.mark.parametrize(
    "description,source,count,rendered", CASES, ids=[c[0] for c in CASES]
)
def test_error_recovery(runner, description, source, count, rendered):
    """Each malformed statement yields one diagnostic and is dropped."""
    result = runner.validate(source)
    assert not result.valid
    assert len(result.diagnostics) == count, result.diagnostics
    assert result.rendered == rendered


@pytest.mark.parametrize("source", ["", " \n\t", ";", "}", "let", "let x", "let x =", "fn(", "if ("])
def test_parsing_always_terminates(runner, source):
    """Truncated and degenerate input still produces a result."""
    result = runner.validate(source)
    assert isinstance(result.diagnostics, list)
