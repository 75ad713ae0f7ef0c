# tacgen

Building blocks for the back end of a small compiler:

- syntax tree nodes,
- a scoped symbol table with semantic checks,
- type inference for expressions,
- a generator that turns a syntax tree into three-address code.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Syntax trees: `tacgen.syntax_tree`

`Node` is a dataclass with a `name` (which may be `None`) and a list of
`children`. Build nodes with `make_node(name, *children)`. A leaf is a node
with no children. Its name holds the identifier or literal text, for
example `x`, `5`, `3.14`, `"hi"`, `'c'` or `TRUE`.

`format_ast(node, indent=0)` returns the tree as indented S-expression text.
Each level is indented two more spaces. `print_ast(node, indent=0)` writes
the same text to standard output.

```python
from tacgen.syntax_tree import make_node, format_ast

expr = make_node("+", make_node("a"), make_node("1"))
print(format_ast(expr))
```

## Symbol table: `tacgen.symbol_table`

`SymbolTable` keeps two things:

- a stack of variable scopes, at most 100 deep;
- a table of declared functions, newest first.

Scope control: `begin_scope()`, `end_scope()` and `scope_depth()`.

Variables:

- `insert_variable(name, type_name)` declares a variable in the innermost scope. Shadowing is allowed.
- `find_var(name)` returns the `VarEntry` for the innermost match, or `None`.
- `get_variable_type(name)` returns the type, or `"unknown"` if there is no match.
- `is_var_in_current_scope(name)` and `lookup_in_current_scope(name)` look only at the innermost scope.
- `check_variable_usage(name)` raises if the variable is not declared.

Functions:

- `insert_function(name, return_type, param_types, param_count, body)` records a function and returns its `FuncEntry`.
  - At global level, a second declaration of the same name is an error.
  - Inside nested scopes, a function may shadow an outer one, but not another function in the same scope.
  - If `param_types` is `None`, each of the `param_count` parameters is typed `int`.
- `insert_symbol(name, type_name)` declares a function with no parameters and no body.
- `get_function(name)` finds the newest declaration. `function_exists(name)` and `main_exists()` report whether one is found.

Checks:

- `check_function_call(name, arg_types)` checks the argument count and each argument's type, in order.
- `check_main_signature()` checks that `_main_` exists, has no parameters, has return type `NONE`, and contains no `RET` node.
- `check_return_type(func_name, return_type)` checks the type against the declared return type. Functions declared to return `string` are rejected.

Each check returns `True`, or raises `SemanticError` with a message saying what is wrong.

`contains_return(body)` reports whether any node in a tree is named `RET`.

`begin_function_scope(name)`, `end_function_scope()` and `reset_function_scope()` maintain two attributes:

- `current_function_name`,
- `function_start_scope`.

```python
from tacgen.symbol_table import SymbolTable

table = SymbolTable()
table.begin_scope()
table.insert_variable("x", "int")
table.insert_function("_main_", "NONE", [], 0, None)
table.check_main_signature()
```

## Expression types: `tacgen.typecheck`

`expr_type(table, expr)` returns the type name of an expression tree.

Leaves:

- A declared variable has its declared type.
- Other leaves are typed by their literal form: `real`, `int`, `string`, `char` or `bool`.

Operators:

| Node | Operands | Result |
| --- | --- | --- |
| `+ - * /` | numeric | `real` if either operand is `real`, otherwise `int` |
| `AND`, `OR` | `bool` | `bool` |
| `< > <= >=` | numeric | `bool` |
| `==`, `!=` | two operands of the same type | `bool` |
| `NOT` | `bool` | `bool` |
| `&` | `int`, `real` or `char`, or an `INDEX` node | the pointer type, for example `int*` |
| `DEREF` | a pointer | the pointer's base type |
| `LENGTH` | — | `int` |
| `INDEX` | — | `char` |
| `ABS` | any | the operand's type |
| `calll` | — | the declared function's return type |

A type violation raises `SemanticError`. Anything unrecognised is `"unknown"`.

`call_arg_types(table, call_args)` lists the argument types of a call, in source order. Arguments come as a left-nested chain of `par` nodes. `par(NONE)`, or no node at all, means no arguments.

## Three-address code: `tacgen.tac`

`CodeGenerator(stream=None)` walks a tree and emits one line of code at a time.

Each line is appended to `lines`. If a stream is given, the line is also written to it.

`generate_code(ast)` finds every `FUNC` node and generates code for it. For each function it emits:

- the function's label (`main:` for `_main_`),
- `BeginFunc 24`,
- the body,
- `EndFunc`.

The body is the first child of the function's last child, which is the fifth child when there are five and the fourth otherwise.

Statements handled:

- assignments (`=`),
- `IF` and `IF-ELSE`,
- `while`,
- `RET`,
- `CALL` and `ASSIGN-CALL`,
- nested `FUNC`.

Declaration nodes produce no code. Any other node is walked through.

Temporaries are named `t0, t1, ...` and labels `L0, L1, ...`.

Expressions:

- `AND` and `OR` short-circuit through labels.
- `LENGTH` of `x` becomes `|x|`.
- Calls push their arguments last to first with `PushParam`, call with `LCall`, and then emit `PopParams` with 4 bytes per argument.

`collect_parameters(args)` flattens a `par` chain into a list of argument nodes. `calculate_frame_size(body)` returns the fixed frame size, 24.

```python
from tacgen.syntax_tree import make_node
from tacgen.tac import CodeGenerator

body = make_node("BODY", make_node("=", make_node("x"), make_node("5")))
func = make_node("FUNC", make_node("_main_"), make_node("ARGS"),
                 make_node("RET-TYPE"), body)
gen = CodeGenerator()
gen.generate_code(func)
print("\n".join(gen.lines))
# main:
#     BeginFunc 24
#     t0 = 5
#     x = t0
#     EndFunc
```

## What this package does not do

The package has no lexer or parser, and no command-line program. You build syntax trees yourself with `make_node`, fill the symbol table yourself, and call the checks and the code generator from your own code. The code generator does not consult the symbol table and does not type-check.