"""Pratt parser for Monkey source code.

Handles:
- ``let NAME = expr;``
- ``return expr;``
- expression statements, with or without a trailing ``;``
- Expressions: identifiers, integers, booleans, prefix ``!``/``-``, infix
  arithmetic and comparison, grouping, ``if``/``else``, ``fn`` literals and
  calls

Errors never propagate as exceptions.  Each malformed statement records one
diagnostic, is dropped from the program, and parsing resumes at the next
statement.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from monkeylib.diagnostics.collector import DiagnosticCollector
from monkeylib.parser.ast_nodes import (
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkeylib.parser.lexer import Lexer
from monkeylib.parser.tokens import Token, TokenKind

PrefixParseFn = Callable[[], "Expression | None"]
InfixParseFn = Callable[[Expression], "Expression | None"]

# Signed 64-bit range for integer literals.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


class Precedence(IntEnum):
    """Binding power of operators, weakest first."""

    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -x or !x
    CALL = 7  # fn(x)


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


class Parser:
    """Pratt parser for Monkey programs.

    Reads tokens from a :class:`Lexer` with one token of lookahead
    (``cur_token`` and ``peek_token``).  Expression parsing is driven by two
    tables keyed on token kind: prefix functions start an expression, infix
    functions extend one to the right.  New operators are added with
    :meth:`register_prefix` / :meth:`register_infix` and an entry in
    :data:`PRECEDENCES`; statement dispatch never changes.
    """

    def __init__(
        self,
        lexer: Lexer,
        diagnostics: DiagnosticCollector | None = None,
    ) -> None:
        self._lexer = lexer
        self._diag = diagnostics if diagnostics is not None else DiagnosticCollector()

        self._prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {}
        self._infix_parse_fns: dict[TokenKind, InfixParseFn] = {}

        self.register_prefix(TokenKind.IDENT, self._parse_identifier)
        self.register_prefix(TokenKind.INT, self._parse_integer_literal)
        self.register_prefix(TokenKind.TRUE, self._parse_boolean)
        self.register_prefix(TokenKind.FALSE, self._parse_boolean)
        self.register_prefix(TokenKind.BANG, self._parse_prefix_expression)
        self.register_prefix(TokenKind.MINUS, self._parse_prefix_expression)
        self.register_prefix(TokenKind.LPAREN, self._parse_grouped_expression)
        self.register_prefix(TokenKind.IF, self._parse_if_expression)
        self.register_prefix(TokenKind.FUNCTION, self._parse_function_literal)

        for kind in (
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.SLASH,
            TokenKind.ASTERISK,
            TokenKind.EQ,
            TokenKind.NOT_EQ,
            TokenKind.LT,
            TokenKind.GT,
        ):
            self.register_infix(kind, self._parse_infix_expression)
        self.register_infix(TokenKind.LPAREN, self._parse_call_expression)

        # Unclosed '{' tokens before cur_token; stray '}' never drive it below 0.
        self._brace_depth = 0

        # Fill cur_token and peek_token.
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    # ------------------------------------------------------------------
    # Registration and diagnostics
    # ------------------------------------------------------------------

    def register_prefix(self, kind: TokenKind, fn: PrefixParseFn) -> None:
        self._prefix_parse_fns[kind] = fn

    def register_infix(self, kind: TokenKind, fn: InfixParseFn) -> None:
        self._infix_parse_fns[kind] = fn

    @property
    def diagnostics(self) -> DiagnosticCollector:
        return self._diag

    def errors(self) -> list[str]:
        """Return every diagnostic message recorded so far, in order."""
        return self._diag.messages()

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _next_token(self) -> None:
        if self._cur_token_is(TokenKind.LBRACE):
            self._brace_depth += 1
        elif self._cur_token_is(TokenKind.RBRACE) and self._brace_depth > 0:
            self._brace_depth -= 1
        self.cur_token = self.peek_token
        self.peek_token = self._lexer.next_token()

    def _cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind == kind

    def _peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the next token is *kind*; otherwise report it and stay put."""
        if self._peek_token_is(kind):
            self._next_token()
            return True
        self._diag.error(
            f"expected next token to be {kind.name}, got {self.peek_token.kind.name} instead"
        )
        return False

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def _skip_statement(self, depth: int) -> None:
        """Advance to the end of a malformed statement (for error recovery).

        *depth* is the brace depth the statement started at.  Braces opened
        by the statement itself are skipped whole.  Stops on a ``;`` at that
        depth, on the ``}`` closing the enclosing block (left as the current
        token), or at EOF.
        """
        while not self._cur_token_is(TokenKind.EOF):
            if self._brace_depth == depth:
                if self._cur_token_is(TokenKind.SEMICOLON):
                    return
                if self._cur_token_is(TokenKind.RBRACE) and depth > 0:
                    return
            self._next_token()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        """Parse statements until EOF. Always returns a Program."""
        statements: list[Statement] = []
        while not self._cur_token_is(TokenKind.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self._next_token()
        return Program(statements=tuple(statements))

    def _parse_statement(self) -> Statement | None:
        depth = self._brace_depth
        kind = self.cur_token.kind
        if kind == TokenKind.LET:
            stmt: Statement | None = self._parse_let_statement()
        elif kind == TokenKind.RETURN:
            stmt = self._parse_return_statement()
        else:
            stmt = self._parse_expression_statement()
        if stmt is None:
            self._skip_statement(depth)
        return stmt

    def _parse_let_statement(self) -> LetStatement | None:
        """Parse ``let NAME = expr;`` (the ``;`` is optional)."""
        let_tok = self.cur_token
        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(token=self.cur_token, value=self.cur_token.literal)
        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        self._next_token()

        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self._peek_token_is(TokenKind.SEMICOLON):
            self._next_token()
        return LetStatement(token=let_tok, name=name, value=value)

    def _parse_return_statement(self) -> ReturnStatement | None:
        """Parse ``return expr;`` (the ``;`` is optional)."""
        return_tok = self.cur_token
        self._next_token()

        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self._peek_token_is(TokenKind.SEMICOLON):
            self._next_token()
        return ReturnStatement(token=return_tok, return_value=value)

    def _parse_expression_statement(self) -> ExpressionStatement | None:
        first_tok = self.cur_token
        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if self._peek_token_is(TokenKind.SEMICOLON):
            self._next_token()
        return ExpressionStatement(token=first_tok, expression=expression)

    def _parse_block_statement(self) -> BlockStatement | None:
        """Parse statements after ``{`` up to the matching ``}``."""
        brace_tok = self.cur_token
        statements: list[Statement] = []
        self._next_token()
        while not self._cur_token_is(TokenKind.RBRACE) and not self._cur_token_is(TokenKind.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                statements.append(stmt)
                self._next_token()
            elif not self._cur_token_is(TokenKind.RBRACE):
                # Recovery stopped on ';'; a '}' here closes this block.
                self._next_token()
        if self._cur_token_is(TokenKind.EOF):
            self._diag.error("expected next token to be RBRACE, got EOF instead")
            return None
        return BlockStatement(token=brace_tok, statements=tuple(statements))

    # ------------------------------------------------------------------
    # Expression parsing (precedence climbing)
    # ------------------------------------------------------------------

    def _parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self._prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self._diag.error(f"no prefix parse function for {self.cur_token.kind.name} found")
            return None
        left = prefix()

        while (
            left is not None
            and not self._peek_token_is(TokenKind.SEMICOLON)
            and precedence < self._peek_precedence()
        ):
            infix = self._infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)
        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(token=self.cur_token, value=self.cur_token.literal)

    def _parse_integer_literal(self) -> Expression | None:
        tok = self.cur_token
        try:
            value = int(tok.literal)
        except ValueError:
            self._diag.error(f"could not parse {tok.literal!r} as integer")
            return None
        if not _INT_MIN <= value <= _INT_MAX:
            self._diag.error(f"integer literal {tok.literal} out of 64-bit range")
            return None
        return IntegerLiteral(token=tok, value=value)

    def _parse_boolean(self) -> Expression:
        return Boolean(token=self.cur_token, value=self._cur_token_is(TokenKind.TRUE))

    def _parse_prefix_expression(self) -> Expression | None:
        tok = self.cur_token
        self._next_token()
        right = self._parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token=tok, operator=tok.literal, right=right)

    def _parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        precedence = self._cur_precedence()
        self._next_token()
        right = self._parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token=tok, left=left, operator=tok.literal, right=right)

    def _parse_grouped_expression(self) -> Expression | None:
        self._next_token()
        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def _parse_if_expression(self) -> Expression | None:
        """Parse ``if (cond) { ... }`` with an optional ``else { ... }``."""
        if_tok = self.cur_token
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self._parse_block_statement()
        if consequence is None:
            return None

        alternative: BlockStatement | None = None
        if self._peek_token_is(TokenKind.ELSE):
            self._next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self._parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(
            token=if_tok,
            condition=condition,
            consequence=consequence,
            alternative=alternative,
        )

    def _parse_function_literal(self) -> Expression | None:
        """Parse ``fn(a, b) { ... }``."""
        fn_tok = self.cur_token
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self._parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self._parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(token=fn_tok, parameters=parameters, body=body)

    def _parse_function_parameters(self) -> tuple[Identifier, ...] | None:
        """Parse ``a, b, c)`` after the opening parenthesis."""
        params: list[Identifier] = []
        if self._peek_token_is(TokenKind.RPAREN):
            self._next_token()
            return ()

        if not self.expect_peek(TokenKind.IDENT):
            return None
        params.append(Identifier(token=self.cur_token, value=self.cur_token.literal))
        while self._peek_token_is(TokenKind.COMMA):
            self._next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            params.append(Identifier(token=self.cur_token, value=self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(params)

    def _parse_call_expression(self, function: Expression) -> Expression | None:
        paren_tok = self.cur_token
        arguments = self._parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(token=paren_tok, function=function, arguments=arguments)

    def _parse_call_arguments(self) -> tuple[Expression, ...] | None:
        """Parse ``arg, arg)`` after the opening parenthesis."""
        args: list[Expression] = []
        if self._peek_token_is(TokenKind.RPAREN):
            self._next_token()
            return ()

        self._next_token()
        arg = self._parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)
        while self._peek_token_is(TokenKind.COMMA):
            self._next_token()
            self._next_token()
            arg = self._parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(args)


# ------------------------------------------------------------------
# Convenience function
# ------------------------------------------------------------------


def parse(source: str) -> tuple[Program, DiagnosticCollector]:
    """Parse Monkey source code.

    Returns:
        A ``(program_ast, diagnostics)`` tuple.
    """
    diag = DiagnosticCollector()
    parser = Parser(Lexer(source), diag)
    program = parser.parse_program()
    return program, diag
