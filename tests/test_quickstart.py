"""Test that the quickstart API works for grammarkit."""
from __future__ import annotations


def test_quickstart_imports(package_name: str) -> None:
    import importlib

    module = importlib.import_module(package_name)
    assert callable(module.parse)
    assert callable(module.evaluate)
    assert callable(module.define_node)


def test_quickstart_version(expected_version: str) -> None:
    import grammarkit

    assert grammarkit.__version__ == expected_version


def test_quickstart_define_parse_evaluate() -> None:
    from grammarkit import const, define_node, evaluate, lhs, parse, rhs

    add = define_node(
        name="add",
        pattern=[lhs("number").bind("left"), const("+"), rhs("number").bind("right")],
        precedence=1,
        result_type="number",
        eval=lambda b, _data: b["left"] + b["right"],
    )
    node, remaining = parse([add], "x + 2", {"x": "number"})
    assert remaining == ""
    assert evaluate(node, {"x": 40}, [add]) == 42


def test_quickstart_infer() -> None:
    from grammarkit import infer, parse

    node, _ = parse([], "'hello'")
    assert infer(node) == "string"


def test_quickstart_errors() -> None:
    from grammarkit import format_error, parse_with_errors

    outcome = parse_with_errors([], "(1")
    assert not outcome.success
    assert outcome.error is not None
    assert format_error(outcome.error).startswith("Error at line 1, column 3:")


def test_quickstart_create_parser() -> None:
    from grammarkit import create_evaluator, create_parser
    from grammarkit.grammars import standard

    parser = create_parser(standard())
    node, _ = parser.parse("1 + 2 * 3")
    assert create_evaluator(standard())(node, {}) == 7


def test_quickstart_evaluate_matches_runtime_entry_point() -> None:
    from grammarkit import evaluate, parse
    from grammarkit.grammars import arithmetic
    from grammarkit.runtime import EvalContext
    from grammarkit.runtime import evaluate as runtime_evaluate

    nodes = arithmetic()
    node, _ = parse(nodes, "x * 2 + 1", {"x": "number"})
    assert evaluate(node, {"x": 5}, nodes) == 11
    assert runtime_evaluate(node, EvalContext(data={"x": 5}, nodes=nodes)) == 11
