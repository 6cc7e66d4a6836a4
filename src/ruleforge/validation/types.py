"""Core types for the ruleforge validation engine.

This module defines the foundational types shared by the parser, the rule
registry, the built-in rules and the validator:
- ParsedRule: canonical name plus parameters of one rule expression
- RuleDefinition: a registered predicate with its default message
- EqualityPolicy: how dependent-field rules compare values
- Exceptions raised for malformed rule specs
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ruleforge.exceptions import RuleConfigurationError, RuleError, UnknownRuleError
from ruleforge.validation.naming import snake_case

__all__ = [
    "EqualityPolicy",
    "ParsedRule",
    "Predicate",
    "RuleConfigurationError",
    "RuleDefinition",
    "RuleError",
    "UnknownRuleError",
]


class EqualityPolicy(Enum):
    """Comparison used by rules that match another field against a value.

    STRING: both sides compared by their string form ("10" matches 10)
    STRICT: plain Python equality, no coercion
    LOOSE: numeric comparison when both sides are numeric, else STRING
    """

    STRING = "string"
    STRICT = "strict"
    LOOSE = "loose"


@dataclass(frozen=True)
class ParsedRule:
    """A single parsed rule expression.

    Attributes:
        name: Canonical PascalCase rule name (e.g. "RequiredIf"), "" for blanks
        parameters: Rule parameters in declared order
    """

    name: str
    parameters: tuple[Any, ...] = ()

    @property
    def snake_name(self) -> str:
        """Message key form of the rule name ("RequiredIf" -> "required_if")."""
        return snake_case(self.name)

    def __bool__(self) -> bool:
        return self.name != ""


# Predicate signatures:
#   plain:      (field, value, parameters) -> bool
#   contextual: (validator, field, value, parameters) -> bool
Predicate = Callable[..., Any]


@dataclass(frozen=True)
class RuleDefinition:
    """A rule registered with a RuleRegistry.

    Attributes:
        name: Canonical PascalCase rule name
        predicate: Callable deciding whether a value passes
        message: Default message used when no translation exists ("" for none)
        contextual: If True the running Validator is passed as first argument
    """

    name: str
    predicate: Predicate
    message: str = ""
    contextual: bool = False

    def check(self, validator: Any, field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
        """Invoke the predicate with the signature it was registered with."""
        if self.contextual:
            result = self.predicate(validator, field, value, parameters)
        else:
            result = self.predicate(field, value, parameters)
        return bool(result)
