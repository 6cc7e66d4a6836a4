"""Rule expression parsing.

A rule spec maps each field to its rules, either as one string of
``|``-delimited expressions or as a sequence of expressions:

    {"name": "required|between:3,10", "code": ["required", ["in", "a", "b"]]}

Each expression is parsed into a ParsedRule with a canonical PascalCase name
and its parameters.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ruleforge.validation.naming import snake_case, studly_case
from ruleforge.validation.types import ParsedRule

__all__ = ["explode_rules", "parse_rule", "snake_case", "studly_case"]

RuleExpression = str | Sequence[Any]


def explode_rules(rules: Mapping[str, Any] | None) -> dict[str, tuple[RuleExpression, ...]]:
    """Normalize a rule spec into per-field ordered tuples of expressions.

    String values are split on ``|``; sequences pass through in order.
    The caller's mapping is not modified.
    """
    exploded: dict[str, tuple[RuleExpression, ...]] = {}
    if not rules:
        return exploded

    for field, field_rules in rules.items():
        if isinstance(field_rules, str):
            exploded[field] = tuple(field_rules.split("|"))
        elif field_rules is None:
            exploded[field] = ()
        else:
            exploded[field] = tuple(field_rules)
    return exploded


def parse_rule(expression: RuleExpression) -> ParsedRule:
    """Extract the rule name and parameters from a rule expression.

    Args:
        expression: "name:p1,p2" string or [name, p1, p2] sequence

    Returns:
        ParsedRule with canonical name; name is "" for a blank expression
    """
    if isinstance(expression, str):
        return _parse_string_rule(expression)
    return _parse_sequence_rule(expression)


def _parse_sequence_rule(expression: Sequence[Any]) -> ParsedRule:
    if not expression:
        return ParsedRule(name="")
    name = studly_case(str(expression[0]).strip())
    return ParsedRule(name=name, parameters=tuple(expression[1:]))


def _parse_string_rule(expression: str) -> ParsedRule:
    # Rules follow a {rule}:{parameters} convention
    name, separator, remainder = expression.partition(":")
    parameters: tuple[str, ...] = ()
    if separator:
        parameters = _parse_parameters(name, remainder)
    return ParsedRule(name=studly_case(name.strip()), parameters=parameters)


def _parse_parameters(name: str, remainder: str) -> tuple[str, ...]:
    # Regex patterns may legitimately contain commas
    if name.strip().lower() == "regex":
        return (remainder,)
    return tuple(remainder.split(","))
