"""Token definitions for the Monkey lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """All token types recognized by the Monkey lexer."""

    # === Special ===
    ILLEGAL = auto()
    EOF = auto()

    # === Identifiers and literals ===
    IDENT = auto()  # add, foobar, x, y
    INT = auto()  # 1234, 12.5 (fraction kept as text)

    # === Operators ===
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    BANG = auto()  # !
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    LT = auto()  # <
    GT = auto()  # >
    EQ = auto()  # ==
    NOT_EQ = auto()  # !=

    # === Delimiters ===
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }

    # === Keywords ===
    FUNCTION = auto()
    LET = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()


# Keyword string -> TokenKind mapping.
# Identifiers are checked against this table during lexing.
KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "return": TokenKind.RETURN,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
}


def lookup_ident(ident: str) -> TokenKind:
    """Return the keyword kind for *ident*, or ``IDENT`` for user names."""
    return KEYWORDS.get(ident, TokenKind.IDENT)


@dataclass(frozen=True)
class Token:
    """A single token produced by the Monkey lexer."""

    kind: TokenKind
    literal: str
