"""
JSONLogic Expressions

All routing conditions are JSONLogic expressions: plain JSON values where an
object with exactly one key is an operation, e.g.

    {"==": [{"var": "eligibility"}, "yes"]}
    {"and": [{"==": [{"var": "a"}, 1]}, {"in": [{"var": "b"}, ["x", "y"]]}]}

Expressions stay as JSON-compatible Python values (dict / list / str /
int / float / bool / None) so they round-trip through storage untouched.

This module provides:
    - The recognised operator vocabulary
    - A syntax checker (exactly one recognised operator per object node)
    - Evaluation, delegated to the json_logic package
    - Complexity metrics used by the journey analyzer

Evaluation follows json-logic-js, including JavaScript's loose equality
and coercion. `to_number` and `to_string` are accepted by the syntax
checker but, as in json-logic-js, have no evaluator.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Set, Tuple, Union

from json_logic import jsonLogic

from govproto.errors import LogicError

JSONLogicExpression = Any

COMPARISON_OPERATORS = ("==", "!=", ">", ">=", "<", "<=")
LOGICAL_OPERATORS = ("and", "or", "!")
DATA_OPERATORS = ("var", "missing", "missing_some")
ARRAY_OPERATORS = ("in", "map", "filter", "some", "all")
STRING_OPERATORS = ("cat", "substr")
ARITHMETIC_OPERATORS = ("+", "-", "*", "/", "%")
CONTROL_OPERATORS = ("if",)
CONVERSION_OPERATORS = ("to_number", "to_string")

OPERATORS = frozenset(
    COMPARISON_OPERATORS
    + LOGICAL_OPERATORS
    + DATA_OPERATORS
    + ARRAY_OPERATORS
    + STRING_OPERATORS
    + ARITHMETIC_OPERATORS
    + CONTROL_OPERATORS
    + CONVERSION_OPERATORS
)

# Operators whose argument list must hold exactly two entries
BINARY_OPERATORS = frozenset(COMPARISON_OPERATORS + ("in",))

# Deepest nesting the syntax checker walks before giving up
MAX_EXPRESSION_DEPTH = 100


def is_logic(value: Any) -> bool:
    """True if value is an operation node (an object with exactly one key)."""
    return isinstance(value, dict) and len(value) == 1


def get_operator(node: Dict[str, Any]) -> str:
    return next(iter(node))


# =============================================================================
# EVALUATION
# =============================================================================


def apply_logic(logic: JSONLogicExpression, data: Any = None) -> Any:
    """
    Evaluate a JSONLogic expression against a data object.

    Args:
        logic: JSONLogic expression (operation node, list or literal)
        data: Evaluation context, usually the answers keyed by field name

    Returns:
        The expression result (any JSON value)

    Raises:
        LogicError: The expression could not be evaluated
    """
    try:
        return jsonLogic(logic, {} if data is None else data)
    except Exception as exc:
        raise LogicError(f"Cannot evaluate expression: {exc}") from exc


def to_boolean(value: Any) -> bool:
    """
    JavaScript Boolean(value).

    Lists and objects are always true, so an empty `missing` result still
    counts as a match at the top level of a condition.
    """
    if isinstance(value, (list, tuple, Mapping)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


# =============================================================================
# SYNTAX CHECKING
# =============================================================================


@dataclass(frozen=True)
class SyntaxProblem:
    """A structural problem found in an expression, located by path."""

    message: str
    path: Tuple[Union[str, int], ...] = ()


def check_syntax(expression: JSONLogicExpression) -> List[SyntaxProblem]:
    """
    Walk an expression and report every malformed node.

    Object nodes must carry exactly one recognised operator. Comparison
    operators and `in` take exactly two arguments; `missing` takes a list
    of field names; `var` takes a name, an index or [name, default].
    Nesting deeper than MAX_EXPRESSION_DEPTH is reported and not walked.
    """
    problems: List[SyntaxProblem] = []
    _check_node(expression, (), problems)
    return problems


def _check_node(node: Any, path: Tuple[Union[str, int], ...], problems: List[SyntaxProblem], depth: int = 0) -> None:
    if isinstance(node, (list, tuple, dict)) and depth >= MAX_EXPRESSION_DEPTH:
        problems.append(SyntaxProblem(
            f"Expression is nested more than {MAX_EXPRESSION_DEPTH} levels deep", path))
        return

    if isinstance(node, (list, tuple)):
        for i, item in enumerate(node):
            _check_node(item, path + (i,), problems, depth + 1)
        return

    if not isinstance(node, dict):
        if node is not None and not isinstance(node, (str, int, float, bool)):
            problems.append(SyntaxProblem(f"Unsupported value of type {type(node).__name__}", path))
        return

    if len(node) != 1:
        problems.append(SyntaxProblem("JSONLogic expression must have exactly one operation", path))
        return

    op, args = next(iter(node.items()))
    if op not in OPERATORS:
        problems.append(SyntaxProblem(f"Unrecognized operation '{op}'", path))
        return

    if op in BINARY_OPERATORS and not (isinstance(args, list) and len(args) == 2):
        problems.append(SyntaxProblem(f"Operator '{op}' takes exactly 2 arguments", path + (op,)))
    elif op == "missing" and not (isinstance(args, list) and all(isinstance(a, str) for a in args)):
        problems.append(SyntaxProblem("Operator 'missing' takes a list of field names", path + (op,)))
    elif op == "var" and (isinstance(args, bool) or not isinstance(args, (str, int, list))):
        problems.append(SyntaxProblem("Operator 'var' takes a field name, an index or [name, default]", path + (op,)))

    _check_node(args, path + (op,), problems, depth + 1)


# =============================================================================
# METRICS
# =============================================================================


@dataclass
class ExpressionMetrics:
    """Metrics about a single expression tree."""
    depth: int = 0
    node_count: int = 0
    variable_references: Set[str] = field(default_factory=set)

    def add(self, other: ExpressionMetrics) -> None:
        self.depth = max(self.depth, other.depth)
        self.node_count += other.node_count
        self.variable_references.update(other.variable_references)


def expression_metrics(expr: JSONLogicExpression) -> ExpressionMetrics:
    """Recursively measure an expression: depth, node count, variables read."""
    if isinstance(expr, (list, tuple)):
        metrics = ExpressionMetrics()
        for item in expr:
            metrics.add(expression_metrics(item))
        return metrics

    metrics = ExpressionMetrics(node_count=1)
    if not is_logic(expr):
        return metrics

    op = get_operator(expr)
    args = expr[op]

    if op == "var":
        name = args[0] if isinstance(args, list) and args else args
        if isinstance(name, str) and name:
            metrics.variable_references.add(name)
        return metrics

    if op == "missing":
        names = args if isinstance(args, list) else [args]
        metrics.variable_references.update(n for n in names if isinstance(n, str))
    elif op == "missing_some" and isinstance(args, list) and len(args) > 1 and isinstance(args[1], list):
        metrics.variable_references.update(n for n in args[1] if isinstance(n, str))

    children = expression_metrics(args if isinstance(args, (list, tuple)) else [args])
    metrics.depth = 1 + children.depth
    metrics.node_count += children.node_count
    metrics.variable_references.update(children.variable_references)
    return metrics
