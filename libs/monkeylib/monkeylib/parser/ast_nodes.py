"""AST node types for the Monkey parser.

Every node is a frozen dataclass holding the token that began its construct.
``token_literal()`` returns that token's text and ``str(node)`` renders the
node back to a canonical surface form (used by tests and debug output).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from monkeylib.parser.tokens import Token

__all__ = [
    # Base types
    "Node",
    "Statement",
    "Expression",
    # Expression nodes
    "Identifier",
    "IntegerLiteral",
    "Boolean",
    "PrefixExpression",
    "InfixExpression",
    "IfExpression",
    "FunctionLiteral",
    "CallExpression",
    # Statement nodes
    "LetStatement",
    "ReturnStatement",
    "ExpressionStatement",
    "BlockStatement",
    # Program node
    "Program",
]


class Node(ABC):
    """Base type for all AST nodes."""

    token: Token

    def token_literal(self) -> str:
        """Literal text of the token that began this construct."""
        return self.token.literal

    @abstractmethod
    def __str__(self) -> str: ...


class Statement(Node):
    """Base type for statement nodes."""


class Expression(Node):
    """Base type for expression nodes."""


# ---------------------------------------------------------------------------
# Expression nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Identifier(Expression):
    """Identifier reference: ``x``, ``foobar``."""

    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    """Integer literal: 5, 838383."""

    token: Token
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class Boolean(Expression):
    """``true`` or ``false``."""

    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    """Prefix operation: ``!right`` or ``-right``."""

    token: Token
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    """Binary operation: ``left op right``. The token is the operator."""

    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(Expression):
    """``if (condition) { ... } else { ... }``; the else branch is optional."""

    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    """``fn(a, b) { ... }``."""

    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    """``function(arg, arg)``. The token is the opening parenthesis."""

    token: Token
    function: Expression
    arguments: tuple[Expression, ...]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# ---------------------------------------------------------------------------
# Statement nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LetStatement(Statement):
    """``let NAME = value;`` binding."""

    token: Token
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """``return value;``."""

    token: Token
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """A bare expression used as a statement: ``x + 10;``."""

    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    """Brace-delimited statement list; the token is ``{``."""

    token: Token
    statements: tuple[Statement, ...]

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# ---------------------------------------------------------------------------
# Program node
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Program(Node):
    """Top-level program: statements in source order."""

    statements: tuple[Statement, ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)
