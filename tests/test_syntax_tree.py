import pytest

from tacgen.syntax_tree import Node, format_ast, make_node, print_ast


def test_make_node_keeps_children_in_order():
    a = make_node("a")
    b = make_node("b")
    node = make_node("+", a, b)
    assert node.name == "+"
    assert node.children == [a, b]


def test_make_node_without_children():
    node = make_node("x")
    assert node.children == []
    assert node == Node("x", [])


def test_format_nested_tree():
    tree = make_node("A", make_node("B"))
    assert format_ast(tree, 0) == "(A\n  (B\n  )\n)\n"


def test_format_none_is_empty():
    assert format_ast(None, 4) == ""


def test_none_children_are_skipped():
    with_none = make_node("A", None, make_node("B"))
    without = make_node("A", make_node("B"))
    assert format_ast(with_none, 0) == format_ast(without, 0)


@pytest.mark.parametrize("indent", [0, 2, 5])
def test_indent_prefixes_every_line(indent):
    tree = make_node("CODE", make_node("FUNC", make_node("f")))
    lines = format_ast(tree, indent).splitlines()
    assert len(lines) == 6
    assert all(line.startswith(" " * indent) for line in lines)
    assert lines[0].strip() == "(CODE"
    assert lines[-1].strip() == ")"


def test_unnamed_node_has_no_parentheses():
    tree = make_node(None, make_node("x"))
    text = format_ast(tree, 0)
    assert text.count("(") == 1
    assert text.count(")") == 1


def test_print_ast_matches_format(capsys):
    tree = make_node("IF", make_node("c"), make_node("STMTLIST"))
    print_ast(tree, 3)
    assert capsys.readouterr().out == format_ast(tree, 3)