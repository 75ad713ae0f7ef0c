"""Scoped symbol table for variables and functions, with semantic checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from tacgen.syntax_tree import Node

log = logging.getLogger(__name__)

MAX_SCOPE_DEPTH = 100
MAIN_NAME = "_main_"


class SemanticError(Exception):
    """Raised when a program violates a semantic rule."""


@dataclass
class VarEntry:
    """A declared variable and its type name."""

    name: str
    type: str


@dataclass
class FuncEntry:
    """A declared function: return type, parameter types and body."""

    name: str
    return_type: str
    param_types: tuple[str, ...] = ()
    body: Optional[Node] = None

    @property
    def param_count(self) -> int:
        return len(self.param_types)


@dataclass
class _Scope:
    variables: dict[str, VarEntry] = field(default_factory=dict)
    local_funcs: list[FuncEntry] = field(default_factory=list)


def contains_return(body: Optional[Node]) -> bool:
    """Return True if any node in ``body`` is a return statement."""
    if body is None:
        return False
    if body.name == "RET":
        return True
    return any(contains_return(child) for child in body.children)


class SymbolTable:
    """A stack of variable scopes plus a table of all declared functions."""

    def __init__(self) -> None:
        self._scopes: list[_Scope] = []
        # Newest declaration first, so later definitions shadow earlier ones.
        self._functions: list[FuncEntry] = []
        self.current_function_name = ""
        self.function_start_scope = 0

    # -- scopes -----------------------------------------------------------

    def begin_scope(self) -> None:
        if len(self._scopes) >= MAX_SCOPE_DEPTH:
            raise SemanticError("Exceeded max scope depth")
        self._scopes.append(_Scope())
        log.debug("begin scope: depth=%d", len(self._scopes))

    def end_scope(self) -> None:
        if self._scopes:
            self._scopes.pop()
        log.debug("end scope: depth=%d", len(self._scopes))

    def begin_function_scope(self, function_name: str) -> None:
        self.current_function_name = function_name
        self.function_start_scope = len(self._scopes) + 1

    def end_function_scope(self) -> None:
        self.current_function_name = ""
        self.function_start_scope = 0

    def reset_function_scope(self) -> None:
        self.function_start_scope = 0

    def scope_depth(self) -> int:
        return len(self._scopes)

    # -- variables --------------------------------------------------------

    def insert_variable(self, name: str, type_name: str) -> None:
        """Declare a variable in the innermost scope; shadowing is allowed."""
        if name is None or type_name is None:
            raise SemanticError("NULL name or type")
        if not self._scopes:
            raise SemanticError(
                f"Trying to insert variable '{name}' but no scope is active!"
            )
        self._scopes[-1].variables[name] = VarEntry(name, type_name)

    def find_var(self, name: str) -> Optional[VarEntry]:
        for scope in reversed(self._scopes):
            entry = scope.variables.get(name)
            if entry is not None:
                return entry
        return None

    def check_variable_usage(self, name: str) -> bool:
        if self.find_var(name) is None:
            raise SemanticError(f"Variable '{name}' used before declaration")
        return True

    def get_variable_type(self, name: str) -> str:
        entry = self.find_var(name)
        return entry.type if entry is not None else "unknown"

    def is_var_in_current_scope(self, name: str) -> bool:
        return bool(self._scopes) and name in self._scopes[-1].variables

    def lookup_in_current_scope(self, name: str) -> bool:
        return self.is_var_in_current_scope(name)

    # -- functions --------------------------------------------------------

    def _functions_named(self, name: str) -> Iterable[FuncEntry]:
        return (f for f in self._functions if f.name == name)

    def get_function(self, name: str) -> Optional[FuncEntry]:
        return next(iter(self._functions_named(name)), None)

    def function_exists(self, name: str) -> bool:
        return self.get_function(name) is not None

    def main_exists(self) -> bool:
        return self.function_exists(MAIN_NAME)

    def insert_function(
        self,
        name: str,
        return_type: str,
        param_types: Optional[Sequence[str]],
        param_count: int,
        body: Optional[Node],
    ) -> FuncEntry:
        """Declare a function; nested functions may shadow outer ones."""
        nested = len(self._scopes) > 1
        if nested:
            if any(f.name == name for f in self._scopes[-1].local_funcs):
                raise SemanticError(f"Function '{name}' redeclared in same scope")
        elif self.function_exists(name):
            raise SemanticError(f"Function '{name}' redeclared")

        if param_count <= 0:
            params: tuple[str, ...] = ()
        elif param_types is None:
            params = ("int",) * param_count
        else:
            if len(param_types) < param_count:
                raise ValueError(
                    f"expected {param_count} parameter types, got {len(param_types)}"
                )
            params = tuple(param_types[:param_count])

        entry = FuncEntry(name, return_type, params, body)
        self._functions.insert(0, entry)
        if nested:
            self._scopes[-1].local_funcs.insert(0, entry)
        return entry

    def insert_symbol(self, name: str, type_name: str) -> FuncEntry:
        return self.insert_function(name, type_name, None, 0, None)

    def check_function_call(self, name: str, arg_types: Sequence[str]) -> bool:
        func = self.get_function(name)
        if func is None:
            raise SemanticError(f"Function '{name}' used before declaration")
        if func.param_count != len(arg_types):
            raise SemanticError(
                f"Function '{name}' called with wrong number of arguments "
                f"({len(arg_types)}), expected {func.param_count}"
            )
        for position, (expected, got) in enumerate(
            zip(func.param_types, arg_types), start=1
        ):
            if expected != got:
                raise SemanticError(
                    f"Parameter {position} type mismatch in call to '{name}', "
                    f"expected '{expected}', got '{got}'. "
                    "Parameters must be in correct order."
                )
        return True

    def check_main_signature(self) -> bool:
        main = self.get_function(MAIN_NAME)
        if main is None:
            raise SemanticError("'_main_' function not found")
        if main.param_count != 0 or main.return_type != "NONE":
            raise SemanticError(
                "'_main_' function must not have params or return type"
            )
        if contains_return(main.body):
            raise SemanticError("'_main_' function must not have return statement")
        return True

    def check_return_type(self, func_name: str, return_type: str) -> bool:
        func = self.get_function(func_name)
        if func is None:
            raise SemanticError(f"Function '{func_name}' not found")
        if func.return_type != return_type:
            raise SemanticError(
                f"Return type mismatch in function '{func_name}'. "
                f"Expected '{func.return_type}', got '{return_type}'"
            )
        if func.return_type == "string":
            raise SemanticError(f"Function '{func_name}' cannot return string type")
        return True