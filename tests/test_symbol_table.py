import pytest

from tacgen.symbol_table import (
    MAX_SCOPE_DEPTH,
    FuncEntry,
    SemanticError,
    SymbolTable,
    VarEntry,
    contains_return,
)
from tacgen.syntax_tree import make_node


@pytest.fixture
def table():
    t = SymbolTable()
    t.begin_scope()
    return t


def test_scope_depth_tracks_begin_and_end():
    t = SymbolTable()
    assert t.scope_depth() == 0
    t.begin_scope()
    t.begin_scope()
    assert t.scope_depth() == 2
    t.end_scope()
    assert t.scope_depth() == 1
    t.end_scope()
    t.end_scope()
    assert t.scope_depth() == 0


def test_max_scope_depth():
    t = SymbolTable()
    for _ in range(MAX_SCOPE_DEPTH):
        t.begin_scope()
    with pytest.raises(SemanticError, match="Exceeded max scope depth"):
        t.begin_scope()


def test_insert_variable_without_scope():
    with pytest.raises(SemanticError, match="no scope is active"):
        SymbolTable().insert_variable("x", "int")


def test_variable_lookup_and_shadowing(table):
    table.insert_variable("x", "int")
    table.begin_scope()
    table.insert_variable("x", "real")
    assert table.find_var("x") == VarEntry("x", "real")
    assert table.get_variable_type("x") == "real"
    table.end_scope()
    assert table.get_variable_type("x") == "int"


def test_redeclaration_in_same_scope_keeps_newest(table):
    table.insert_variable("s", "int")
    table.insert_variable("s", "string")
    assert table.get_variable_type("s") == "string"


def test_unknown_variable(table):
    assert table.find_var("nope") is None
    assert table.get_variable_type("nope") == "unknown"
    with pytest.raises(SemanticError, match="used before declaration"):
        table.check_variable_usage("nope")


def test_check_variable_usage_in_outer_scope(table):
    table.insert_variable("y", "bool")
    table.begin_scope()
    assert table.check_variable_usage("y") is True
    assert table.is_var_in_current_scope("y") is False
    assert table.lookup_in_current_scope("y") is False
    table.end_scope()
    assert table.is_var_in_current_scope("y") is True


def test_variables_vanish_with_scope(table):
    table.begin_scope()
    table.insert_variable("tmp", "char")
    table.end_scope()
    assert table.find_var("tmp") is None


def test_global_function_redeclared(table):
    table.insert_function("f", "int", ["int"], 1, None)
    with pytest.raises(SemanticError, match="Function 'f' redeclared"):
        table.insert_function("f", "int", None, 0, None)


def test_nested_function_shadows_global(table):
    table.insert_function("f", "int", None, 0, None)
    table.begin_scope()
    table.insert_function("f", "real", ["real"], 1, None)
    assert table.get_function("f").return_type == "real"
    with pytest.raises(SemanticError, match="redeclared in same scope"):
        table.insert_function("f", "bool", None, 0, None)


def test_missing_param_types_default_to_int(table):
    entry = table.insert_function("g", "int", None, 3, None)
    assert entry.param_types == ("int", "int", "int")
    assert entry.param_count == 3


def test_insert_symbol_has_no_params(table):
    table.insert_symbol("h", "bool")
    assert table.get_function("h") == FuncEntry("h", "bool", (), None)
    assert table.function_exists("h")
    assert not table.function_exists("k")


def test_check_function_call(table):
    table.insert_function("f", "int", ["int", "real"], 2, None)
    assert table.check_function_call("f", ["int", "real"]) is True
    with pytest.raises(SemanticError, match="wrong number of arguments"):
        table.check_function_call("f", ["int"])
    with pytest.raises(SemanticError, match="Parameter 2 type mismatch"):
        table.check_function_call("f", ["int", "int"])
    with pytest.raises(SemanticError, match="used before declaration"):
        table.check_function_call("zz", [])


def test_main_signature(table):
    with pytest.raises(SemanticError, match="not found"):
        table.check_main_signature()
    assert table.main_exists() is False
    body = make_node("STMTLIST", make_node("=", make_node("x"), make_node("1")))
    table.insert_function("_main_", "NONE", None, 0, body)
    assert table.main_exists() is True
    assert table.check_main_signature() is True


def test_main_with_return_rejected(table):
    body = make_node("STMTLIST", make_node("RET", make_node("0")))
    table.insert_function("_main_", "NONE", None, 0, body)
    with pytest.raises(SemanticError, match="must not have return statement"):
        table.check_main_signature()


def test_main_with_params_rejected(table):
    table.insert_function("_main_", "int", ["int"], 1, None)
    with pytest.raises(SemanticError, match="must not have params"):
        table.check_main_signature()


def test_check_return_type(table):
    table.insert_function("f", "int", None, 0, None)
    table.insert_function("s", "string", None, 0, None)
    assert table.check_return_type("f", "int") is True
    with pytest.raises(SemanticError, match="Return type mismatch"):
        table.check_return_type("f", "real")
    with pytest.raises(SemanticError, match="cannot return string"):
        table.check_return_type("s", "string")
    with pytest.raises(SemanticError, match="not found"):
        table.check_return_type("missing", "int")


def test_contains_return():
    assert contains_return(None) is False
    deep = make_node("A", None, make_node("B", make_node("RET", make_node("1"))))
    assert contains_return(deep) is True
    assert contains_return(make_node("A", make_node("B"))) is False


def test_function_scope_markers(table):
    table.begin_function_scope("f")
    assert table.current_function_name == "f"
    assert table.function_start_scope == table.scope_depth() + 1
    table.reset_function_scope()
    assert table.function_start_scope == 0
    assert table.current_function_name == "f"
    table.end_function_scope()
    assert table.current_function_name == ""