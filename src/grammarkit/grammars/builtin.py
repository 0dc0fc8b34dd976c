"""Ready-made grammars.

``arithmetic()``
    ``+ - * / %`` over numbers.  Two levels: additive (loosest), then
    multiplicative.

``standard()``
    A small expression language, loosest first:

    ====  =====================================  ==========================
    prec  rules                                  result
    ====  =====================================  ==========================
    0     ``c ? a : b``                          union of ``a`` and ``b``
    1     ``||``                                 boolean
    2     ``&&``                                 boolean
    3     ``== !=`` (any), ``<= >= < >`` (nums)  boolean
    4     ``+ -`` (numbers), ``++`` (strings)    number / string
    5     ``* / %``                              number
    6     ``!`` prefix                           boolean
    ====  =====================================  ==========================

Binary operators recurse with ``lhs``/``rhs`` roles, so chains are
right-associative: ``8 - 4 - 2`` is ``8 - (4 - 2)``.
"""
from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from grammarkit.schema.nodes import NodeSchema, const, define_node, expr, lhs, rhs, union


def _binary(
    name: str,
    symbol: str,
    precedence: int,
    operand: str | None,
    result_type: str,
    fn: Callable[[Any, Any], Any],
) -> NodeSchema:
    return define_node(
        name=name,
        pattern=[lhs(operand).bind("left"), const(symbol), rhs(operand).bind("right")],
        precedence=precedence,
        result_type=result_type,
        eval=lambda b, _data: fn(b["left"], b["right"]),
    )


def _arithmetic_rules(additive: int, multiplicative: int) -> list[NodeSchema]:
    return [
        _binary("add", "+", additive, "number", "number", operator.add),
        _binary("sub", "-", additive, "number", "number", operator.sub),
        _binary("mul", "*", multiplicative, "number", "number", operator.mul),
        _binary("div", "/", multiplicative, "number", "number", operator.truediv),
        _binary("mod", "%", multiplicative, "number", "number", operator.mod),
    ]


def arithmetic() -> tuple[NodeSchema, ...]:
    """Numeric ``+ - * / %``."""
    return tuple(_arithmetic_rules(1, 2))


def standard() -> tuple[NodeSchema, ...]:
    """Arithmetic, comparison, string concatenation, logic and ternary."""
    ternary = define_node(
        name="ternary",
        pattern=[
            lhs("boolean").bind("condition"),
            const("?"),
            expr().bind("then"),
            const(":"),
            expr().bind("otherwise"),
        ],
        precedence=0,
        result_type=union("then", "otherwise"),
        eval=lambda b, _data: b["then"] if b["condition"] else b["otherwise"],
    )
    negation = define_node(
        name="not",
        pattern=[const("!"), rhs("boolean").bind("operand")],
        precedence=6,
        result_type="boolean",
        eval=lambda b, _data: not b["operand"],
    )
    rules = [
        ternary,
        _binary("or", "||", 1, "boolean", "boolean", lambda a, b: a or b),
        _binary("and", "&&", 2, "boolean", "boolean", lambda a, b: a and b),
        _binary("eq", "==", 3, None, "boolean", operator.eq),
        _binary("neq", "!=", 3, None, "boolean", operator.ne),
        _binary("le", "<=", 3, "number", "boolean", operator.le),
        _binary("ge", ">=", 3, "number", "boolean", operator.ge),
        _binary("lt", "<", 3, "number", "boolean", operator.lt),
        _binary("gt", ">", 3, "number", "boolean", operator.gt),
        _binary("concat", "++", 4, "string", "string", operator.add),
    ]
    rules.extend(_arithmetic_rules(4, 5))
    rules.append(negation)
    return tuple(rules)
