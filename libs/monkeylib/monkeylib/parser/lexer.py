"""Lexer (tokenizer) for Monkey source code."""

from __future__ import annotations

from collections.abc import Iterator

from monkeylib.parser.tokens import Token, TokenKind, lookup_ident

# Returned by the character helpers once the input is exhausted.
_END = ""

_WHITESPACE = (" ", "\t", "\r", "\n")


def _is_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Turn Monkey source into tokens, one ``next_token()`` call at a time.

    The lexer keeps a single character of lookahead: ``_ch`` is the character
    under examination at ``_position`` and ``_read_position`` points at the
    one after it.  It never fails; characters it does not recognize come back
    as ``ILLEGAL`` tokens for the parser to report.
    """

    # Single-character tokens that need no lookahead.
    _SINGLE_CHAR: dict[str, TokenKind] = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.ASTERISK,
        "/": TokenKind.SLASH,
        "<": TokenKind.LT,
        ">": TokenKind.GT,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMICOLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
    }

    # '=' and '!' become two-character tokens when followed by '='.
    _WITH_EQUALS: dict[str, tuple[TokenKind, TokenKind]] = {
        "=": (TokenKind.ASSIGN, TokenKind.EQ),
        "!": (TokenKind.BANG, TokenKind.NOT_EQ),
    }

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._read_position = 0
        self._ch = _END
        self._read_char()

    # ------------------------------------------------------------------
    # Character helpers
    # ------------------------------------------------------------------

    def _read_char(self) -> None:
        """Move one character forward; ``_ch`` becomes ``_END`` past the input."""
        if self._read_position >= len(self._source):
            self._ch = _END
        else:
            self._ch = self._source[self._read_position]
        self._position = self._read_position
        self._read_position += 1

    def _peek_char(self) -> str:
        """Return the character after ``_ch`` without consuming it."""
        if self._read_position >= len(self._source):
            return _END
        return self._source[self._read_position]

    def _skip_whitespace(self) -> None:
        while self._ch in _WHITESPACE:
            self._read_char()

    # ------------------------------------------------------------------
    # Lexeme readers (leave the lexer on the first character after)
    # ------------------------------------------------------------------

    def _read_identifier(self) -> str:
        begin = self._position
        while _is_letter(self._ch):
            self._read_char()
        return self._source[begin : self._position]

    def _read_number(self) -> str:
        """Read ``digit+`` with an optional ``.digit*`` tail, as plain text."""
        begin = self._position
        while _is_digit(self._ch):
            self._read_char()
        if self._ch == ".":
            self._read_char()
            while _is_digit(self._ch):
                self._read_char()
        return self._source[begin : self._position]

    # ------------------------------------------------------------------
    # Main entry points
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Scan and return the next token.

        Once the input is exhausted every call returns an ``EOF`` token.
        """
        self._skip_whitespace()
        ch = self._ch

        if ch == _END:
            return Token(TokenKind.EOF, "")

        if ch in self._WITH_EQUALS:
            single, double = self._WITH_EQUALS[ch]
            if self._peek_char() == "=":
                self._read_char()
                tok = Token(double, ch + self._ch)
            else:
                tok = Token(single, ch)
        elif ch in self._SINGLE_CHAR:
            tok = Token(self._SINGLE_CHAR[ch], ch)
        elif _is_letter(ch):
            literal = self._read_identifier()
            return Token(lookup_ident(literal), literal)
        elif _is_digit(ch):
            return Token(TokenKind.INT, self._read_number())
        else:
            tok = Token(TokenKind.ILLEGAL, ch)

        self._read_char()
        return tok

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily, ending with (and including) the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    def tokenize(self) -> list[Token]:
        """Tokenize the remaining source. Returns list ending with an EOF token."""
        return list(self)
