"""ruleforge: declarative record validation with locale-aware messages.

Usage:
    import ruleforge

    validator = ruleforge.make(
        {"name": "ab", "country": None},
        {"name": "required|between:3,10", "country": "required_if:shipping,1"},
    )
    if validator.fails():
        print(validator.errors().all())

    # Rules added with extend() are available to every validator built on
    # the default registry afterwards
    ruleforge.extend("even", lambda field, value, params: int(value) % 2 == 0,
                     "The :attribute must be even.")
"""

from ruleforge.exceptions import (
    LocaleLoadError,
    MappingLoadError,
    RuleConfigurationError,
    RuleError,
    UnknownRuleError,
)
from ruleforge.translation import LocaleConfig, Translator
from ruleforge.validation import (
    EqualityPolicy,
    MessageBag,
    ParsedRule,
    RuleRegistry,
    Validator,
    ValidatorFactory,
    default_factory,
    extend,
    make,
    parse_rule,
)

__version__ = "0.1.0"

__all__ = [
    "EqualityPolicy",
    "LocaleConfig",
    "LocaleLoadError",
    "MappingLoadError",
    "MessageBag",
    "ParsedRule",
    "RuleConfigurationError",
    "RuleError",
    "RuleRegistry",
    "Translator",
    "UnknownRuleError",
    "Validator",
    "ValidatorFactory",
    "default_factory",
    "extend",
    "make",
    "parse_rule",
]
