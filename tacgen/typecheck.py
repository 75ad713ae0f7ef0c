"""Static typing of expressions against a symbol table."""

from __future__ import annotations

import logging
from typing import Optional

from tacgen.symbol_table import SemanticError, SymbolTable
from tacgen.syntax_tree import Node

log = logging.getLogger(__name__)

_NUMERIC = ("int", "real")
_BOOL_LITERALS = ("TRUE", "FALSE", "True", "False")
_ARITHMETIC = ("+", "-", "*", "/")
_LOGICAL = ("AND", "OR")
_COMPARISON = ("<", ">", "<=", ">=")
_EQUALITY = ("==", "!=")
_ADDRESSABLE = ("int", "real", "char")


def _literal_type(table: SymbolTable, name: str) -> Optional[str]:
    """Type of a leaf: a declared variable first, then a literal's form."""
    entry = table.find_var(name)
    if entry is not None:
        log.debug("expr_type(%r) found variable of type %r", name, entry.type)
        return entry.type
    first = name[:1]
    if "." in name:
        return "real"
    if first.isdigit():
        return "int"
    if first == '"':
        return "string"
    if first == "'":
        return "char"
    if name in _BOOL_LITERALS:
        return "bool"
    return None


def _binary_types(table: SymbolTable, expr: Node) -> tuple[str, str]:
    return expr_type(table, expr.children[0]), expr_type(table, expr.children[1])


def expr_type(table: SymbolTable, expr: Optional[Node]) -> str:
    """Return the type name of ``expr``; raise SemanticError on a type violation.

    Unrecognised expressions have type ``"unknown"``.
    """
    if expr is None:
        return "unknown"
    name = expr.name or ""

    if not expr.children:
        found = _literal_type(table, name)
        if found is not None:
            return found
        if name == "LENGTH":
            return "int"
        if name == "INDEX":
            return "char"
        return "unknown"

    if name == "LENGTH":
        return "int"

    if name == "ABS":
        return expr_type(table, expr.children[0])

    if name in _ARITHMETIC:
        left, right = _binary_types(table, expr)
        log.debug("arithmetic %r: %r and %r", name, left, right)
        if left not in _NUMERIC or right not in _NUMERIC:
            raise SemanticError(
                f"Arithmetic operator '{name}' requires int or real operands, "
                f"got {left} and {right}"
            )
        return "real" if "real" in (left, right) else "int"

    if name in _LOGICAL:
        left, right = _binary_types(table, expr)
        if left != "bool" or right != "bool":
            raise SemanticError(
                f"Logical operator '{name}' requires boolean operands, "
                f"got {left} and {right}"
            )
        return "bool"

    if name in _COMPARISON:
        left, right = _binary_types(table, expr)
        if left not in _NUMERIC or right not in _NUMERIC:
            raise SemanticError(
                f"Comparison operator '{name}' requires numeric operands, "
                f"got {left} and {right}"
            )
        return "bool"

    if name in _EQUALITY:
        left, right = _binary_types(table, expr)
        if left != right:
            raise SemanticError(
                f"Equality operator '{name}' requires operands of the same type, "
                f"got {left} and {right}"
            )
        return "bool"

    if name == "NOT":
        operand = expr_type(table, expr.children[0])
        if operand != "bool":
            raise SemanticError(
                "Logical NOT operator '!' can only be applied to boolean values, "
                f"got {operand}"
            )
        return "bool"

    if name == "&":
        target = expr.children[0]
        operand = expr_type(table, target)
        if target is not None and target.children and target.name == "INDEX":
            return "char*"
        if operand not in _ADDRESSABLE:
            raise SemanticError(
                "Address operator '&' can only be applied to variables of type "
                f"int, real, char, or string index, got {operand}"
            )
        return operand + "*"

    if name == "DEREF":
        operand = expr_type(table, expr.children[0])
        if "*" not in operand:
            raise SemanticError(
                "Dereference operator '*' can only be applied to pointers, "
                f"got {operand}"
            )
        return operand[:-1]

    if name == "calll":
        callee = expr.children[0]
        func = table.get_function(callee.name) if callee is not None else None
        if func is not None:
            return func.return_type

    if name == "INDEX":
        return "char"

    return "unknown"


def call_arg_types(table: SymbolTable, call_args: Optional[Node]) -> list[str]:
    """Return the types of a call's arguments, in call order.

    Arguments are a left-nested chain of ``par`` nodes whose second child is
    the last argument; ``par(NONE)`` or no node at all means no arguments.
    """
    if call_args is None:
        return []
    if (
        call_args.name == "par"
        and len(call_args.children) == 1
        and call_args.children[0] is not None
        and call_args.children[0].name == "NONE"
    ):
        return []
    if call_args.name != "par":
        return [expr_type(table, call_args)]

    collected: list[Node] = []
    current: Optional[Node] = call_args
    while current is not None:
        if current.name != "par":
            collected.append(current)
            break
        if len(current.children) != 2:
            break
        collected.append(current.children[1])
        current = current.children[0]

    log.debug("found %d call arguments", len(collected))
    return [expr_type(table, node) for node in reversed(collected)]