"""
Conformance: Token registry well-formedness and cross-reference checks.
Language reference: Tokens (Normative) — spec/registry/tokens.yaml
"""
import json
import re
from pathlib import Path

import pytest
import yaml

from monkeylib.parser.lexer import Lexer
from monkeylib.parser.tokens import KEYWORDS, Token, TokenKind

REPO_ROOT = Path(__file__).resolve().parents[3]
REGISTRY_PATH = REPO_ROOT / "spec" / "registry" / "tokens.yaml"
SCHEMA_PATH = REPO_ROOT / "spec" / "registry" / "schema.json"


@pytest.fixture(scope="module")
def registry():
    with open(REGISTRY_PATH) as f:
        return yaml.safe_load(f)


@pytest.fixture(scope="module")
def schema():
    with open(SCHEMA_PATH) as f:
        return json.load(f)


@pytest.fixture(scope="module")
def token_items(registry):
    return list(registry["tokens"].items())


# ---------------------------------------------------------------------------
# Structure tests
# ---------------------------------------------------------------------------

def test_registry_loads(registry):
    """Registry YAML parses successfully."""
    assert registry is not None
    assert "version" in registry
    assert "tokens" in registry


def test_registry_version_format(registry):
    """Version follows MAJOR.MINOR format."""
    assert re.match(r"^\d+\.\d+$", registry["version"])


# ---------------------------------------------------------------------------
# Schema validation
# ---------------------------------------------------------------------------

def test_schema_validation(registry, schema):
    """Registry validates against JSON Schema."""
    jsonschema = pytest.importorskip("jsonschema")
    jsonschema.validate(registry, schema)


def test_schema_rejects_keyword_without_lexeme(schema):
    jsonschema = pytest.importorskip("jsonschema")
    bad = {"version": "1.0", "tokens": {"LET": {"category": "keyword"}}}
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(bad, schema)


# ---------------------------------------------------------------------------
# Cross-reference tests
# ---------------------------------------------------------------------------

def test_token_names_are_strings(registry):
    """Keys such as TRUE/FALSE must be quoted or YAML loads them as booleans."""
    for name in registry["tokens"]:
        assert isinstance(name, str), f"token name {name!r} loaded as {type(name).__name__}"


def test_validator_reports_non_string_names():
    from spec.registry.validate import check_token_kinds

    tokens = {kind.name: {} for kind in TokenKind if kind.name not in ("TRUE", "FALSE")}
    tokens[True] = {"category": "keyword", "lexeme": "true"}
    tokens[False] = {"category": "keyword", "lexeme": "false"}
    errors = check_token_kinds(tokens)
    assert "Registry token name True is a bool, not a string (quote it)" in errors
    assert "Registry token name False is a bool, not a string (quote it)" in errors
    assert "TokenKind.TRUE has no registry entry" in errors


def test_registry_matches_token_kinds(registry):
    """Every TokenKind has exactly one registry entry and vice versa."""
    assert set(registry["tokens"]) == {kind.name for kind in TokenKind}


def test_keywords_match_lexer_table(token_items):
    registered = {
        defn["lexeme"]: TokenKind[name]
        for name, defn in token_items
        if defn["category"] == "keyword"
    }
    assert registered == KEYWORDS


def test_lexemes_are_unique(token_items):
    lexemes = [defn["lexeme"] for _, defn in token_items if "lexeme" in defn]
    assert len(lexemes) == len(set(lexemes))


def test_fixed_lexemes_lex_to_their_kind(token_items):
    """Each registered spelling is scanned as a single token of its kind."""
    for name, defn in token_items:
        if "lexeme" not in defn:
            continue
        tokens = Lexer(defn["lexeme"]).tokenize()
        assert tokens == [Token(TokenKind[name], defn["lexeme"]), Token(TokenKind.EOF, "")], \
            f"{name}: {defn['lexeme']!r} lexed as {tokens}"
