"""Three-address code generation from a syntax tree."""

from __future__ import annotations

from typing import Optional, TextIO

from tacgen.syntax_tree import Node

MAIN_NAME = "_main_"
FRAME_SIZE = 24
PARAM_SIZE = 4

_ARITHMETIC = ("+", "-", "*", "/")
_RELATIONAL = ("==", "!=", "<", ">", "<=", ">=")
_BOOL_LITERALS = ("TRUE", "FALSE")
_DECLARATIONS = ("VAR-DECLS", "VARLIST", "DECL", "VAR-LIST", "INIT-VAR", "ARRAY-VAR")


def collect_parameters(args: Optional[Node]) -> list[Node]:
    """Flatten a left-nested ``par`` chain into call arguments, first to last."""
    if args is None:
        return []
    if args.name != "par":
        return [args]
    if len(args.children) == 2:
        return collect_parameters(args.children[0]) + [args.children[1]]
    if len(args.children) == 1:
        only = args.children[0]
        if only is not None and only.name != "NONE":
            return [only]
    return []


def calculate_frame_size(function_body: Optional[Node]) -> int:
    """Return the stack frame size reserved for a function body.

    Every function reserves the same fixed frame, whatever its body holds.
    Raises TypeError if ``function_body`` is neither a node nor None.
    """
    if function_body is not None and not isinstance(function_body, Node):
        raise TypeError(
            f"function body must be a Node or None, not {type(function_body).__name__}"
        )
    return FRAME_SIZE


def _is_constant(name: str) -> bool:
    first = name[:1]
    return first.isdigit() or first in ('"', "'") or name in _BOOL_LITERALS


def _has_no_args(args: Node) -> bool:
    return (
        len(args.children) == 1
        and args.children[0] is not None
        and args.children[0].name == "NONE"
    )


class CodeGenerator:
    """Emits three-address code lines, numbering temporaries and labels."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.temp_counter = 0
        self.label_counter = 0
        self.lines: list[str] = []
        self._stream = stream

    def new_temp(self) -> str:
        name = f"t{self.temp_counter}"
        self.temp_counter += 1
        return name

    def new_label(self) -> str:
        name = f"L{self.label_counter}"
        self.label_counter += 1
        return name

    def emit(self, line: str) -> None:
        """Record one line of output, writing it to the stream if one is set."""
        self.lines.append(line)
        if self._stream is not None:
            self._stream.write(line + "\n")

    # -- top level --------------------------------------------------------

    def generate_code(self, ast: Optional[Node]) -> None:
        """Generate code for every function found anywhere in ``ast``."""
        if ast is None:
            return
        if ast.name == "FUNC":
            self.generate_function(ast)
            return
        for child in ast.children:
            self.generate_code(child)

    def generate_function(self, func_node: Optional[Node]) -> None:
        if func_node is None or func_node.name != "FUNC":
            return
        func_name = func_node.children[0].name
        wrapper = func_node.children[4] if len(func_node.children) == 5 else func_node.children[3]
        body = wrapper.children[0]

        self.emit("main:" if func_name == MAIN_NAME else f"{func_name}:")
        self.emit(f"    BeginFunc {calculate_frame_size(body)}")
        self.generate_statement(body)
        self.emit("    EndFunc")

    # -- statements -------------------------------------------------------

    def generate_statement(self, stmt: Optional[Node]) -> None:
        if stmt is None:
            return
        name = stmt.name
        if name == "=":
            self.generate_assignment(stmt)
        elif name in ("IF", "IF-ELSE"):
            self.generate_if_statement(stmt)
        elif name == "while":
            self.generate_while_statement(stmt)
        elif name == "RET":
            result = self.generate_expression(stmt.children[0])
            self.emit(f"    Return {result}")
        elif name == "CALL":
            self.generate_function_call(stmt)
        elif name == "ASSIGN-CALL":
            var_name = stmt.children[0].name
            result = self.generate_function_call(stmt.children[1])
            self.emit(f"    {var_name} = {result}")
        elif name == "FUNC":
            self.generate_function(stmt)
        elif name in _DECLARATIONS:
            return
        else:
            for child in stmt.children:
                self.generate_statement(child)

    def generate_assignment(self, assign: Node) -> None:
        var_name = assign.children[0].name
        result = self.generate_expression(assign.children[1])
        self.emit(f"    {var_name} = {result}")

    def generate_if_statement(self, if_stmt: Node) -> None:
        true_label = self.new_label()
        false_label = self.new_label()
        end_label = self.new_label()

        self.generate_condition(if_stmt.children[0], true_label, false_label)
        self.emit(f"{true_label}:")
        self.generate_statement(if_stmt.children[1])

        if if_stmt.name == "IF-ELSE":
            self.emit(f"    Goto {end_label}")
            self.emit(f"{false_label}:")
            self.generate_statement(if_stmt.children[2])
            self.emit(f"{end_label}:")
        else:
            self.emit(f"{false_label}:")

    def generate_while_statement(self, while_stmt: Node) -> None:
        loop_label = self.new_label()
        body_label = self.new_label()
        end_label = self.new_label()

        self.emit(f"{loop_label}:")
        self.generate_condition(while_stmt.children[0], body_label, end_label)
        self.emit(f"{body_label}:")
        self.generate_statement(while_stmt.children[1])
        self.emit(f"    Goto {loop_label}")
        self.emit(f"{end_label}:")

    def generate_condition(
        self, condition: Optional[Node], true_label: str, false_label: str
    ) -> None:
        result = self.generate_expression(condition)
        self.emit(f"    if {result} Goto {true_label}")
        self.emit(f"    goto {false_label}")

    # -- expressions ------------------------------------------------------

    def generate_expression(self, expr: Optional[Node]) -> Optional[str]:
        """Emit code for ``expr`` and return the name holding its value."""
        if expr is None:
            return None
        name = expr.name or ""

        if not expr.children:
            if _is_constant(name):
                result = self.new_temp()
                self.emit(f"    {result} = {name}")
                return result
            return name

        if name in _ARITHMETIC or name in _RELATIONAL:
            left = self.generate_expression(expr.children[0])
            right = self.generate_expression(expr.children[1])
            result = self.new_temp()
            self.emit(f"    {result} = {left} {name} {right}")
            return result

        if name in ("AND", "OR"):
            true_label = self.new_label()
            false_label = self.new_label()
            end_label = self.new_label()
            result = self.new_temp()
            if name == "AND":
                self.generate_logical_and(expr, true_label, false_label)
            else:
                self.generate_logical_or(expr, true_label, false_label)
            self.emit(f"{true_label}:")
            self.emit(f"    {result} = 1")
            self.emit(f"    Goto {end_label}")
            self.emit(f"{false_label}:")
            self.emit(f"    {result} = 0")
            self.emit(f"{end_label}:")
            return result

        if name == "LENGTH":
            result = self.new_temp()
            self.emit(f"    {result} = |{expr.children[0].name}|")
            return result

        if name == "calll":
            return self.generate_function_call(expr)

        result = self.new_temp()
        self.emit(f"    {result} = {name}")
        return result

    def generate_logical_and(
        self, and_expr: Node, true_label: str, false_label: str
    ) -> None:
        check_right = self.new_label()
        left = self.generate_expression(and_expr.children[0])
        self.emit(f"    if {left} Goto {check_right}")
        self.emit(f"    goto {false_label}")
        self.emit(f"{check_right}:")
        right = self.generate_expression(and_expr.children[1])
        self.emit(f"    if {right} Goto {true_label}")
        self.emit(f"    goto {false_label}")

    def generate_logical_or(
        self, or_expr: Node, true_label: str, false_label: str
    ) -> None:
        left = self.generate_expression(or_expr.children[0])
        self.emit(f"    if {left} Goto {true_label}")
        right = self.generate_expression(or_expr.children[1])
        self.emit(f"    if {right} Goto {true_label}")
        self.emit(f"    goto {false_label}")

    def generate_function_call(self, call: Node) -> str:
        """Push arguments last to first, call, and return the result temporary."""
        func_name = call.children[0].name
        args = call.children[1] if len(call.children) > 1 else None

        params: list[Node] = []
        if args is not None and args.name == "par" and not _has_no_args(args):
            params = collect_parameters(args)
            for param in reversed(params):
                self.emit(f"    PushParam {self.generate_expression(param)}")

        result = self.new_temp()
        self.emit(f"    {result} = LCall {func_name}")
        if params:
            self.emit(f"    PopParams {len(params) * PARAM_SIZE}")
        return result