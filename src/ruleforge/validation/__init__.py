"""Rule-based record validation.

Usage:
    from ruleforge.validation import ValidatorFactory

    factory = ValidatorFactory()
    validator = factory.make(
        {"email": "", "age": "17"},
        {"email": "required", "age": "numeric|between:18,99"},
    )
    if validator.fails():
        validator.errors().all()
"""

from ruleforge.validation.types import (
    EqualityPolicy,
    ParsedRule,
    RuleConfigurationError,
    RuleDefinition,
    RuleError,
    UnknownRuleError,
)
from ruleforge.validation.bag import MessageBag
from ruleforge.validation.parser import explode_rules, parse_rule, snake_case, studly_case
from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules import register_builtin_rules
from ruleforge.validation.messages import MessageComposer
from ruleforge.validation.validator import (
    Validator,
    ValidatorFactory,
    default_factory,
    extend,
    make,
)

__all__ = [
    # Types
    "EqualityPolicy",
    "ParsedRule",
    "RuleConfigurationError",
    "RuleDefinition",
    "RuleError",
    "UnknownRuleError",
    # Messages
    "MessageBag",
    "MessageComposer",
    # Parsing
    "explode_rules",
    "parse_rule",
    "snake_case",
    "studly_case",
    # Registry
    "RuleRegistry",
    "register_builtin_rules",
    # Validator
    "Validator",
    "ValidatorFactory",
    "default_factory",
    "extend",
    "make",
]
