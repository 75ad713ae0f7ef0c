"""Syntax trees, a scoped symbol table, expression typing and three-address code generation."""

__version__ = "0.1.0"
__all__ = ["syntax_tree", "symbol_table", "typecheck", "tac"]