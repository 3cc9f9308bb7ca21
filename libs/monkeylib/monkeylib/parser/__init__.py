"""Monkey parser subpackage (Layer 1 -- depends on diagnostics)."""

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
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkeylib.parser.lexer import Lexer
from monkeylib.parser.parser import PRECEDENCES, Parser, Precedence, parse
from monkeylib.parser.tokens import KEYWORDS, Token, TokenKind, lookup_ident

__all__ = [
    "TokenKind",
    "Token",
    "KEYWORDS",
    "lookup_ident",
    "Lexer",
    "Node",
    "Statement",
    "Expression",
    "Program",
    "LetStatement",
    "ReturnStatement",
    "ExpressionStatement",
    "BlockStatement",
    "Identifier",
    "IntegerLiteral",
    "Boolean",
    "PrefixExpression",
    "InfixExpression",
    "IfExpression",
    "FunctionLiteral",
    "CallExpression",
    "Parser",
    "Precedence",
    "PRECEDENCES",
    "parse",
]
