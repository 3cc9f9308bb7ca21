"""monkeylib: lexer, AST and parser for the Monkey language."""
