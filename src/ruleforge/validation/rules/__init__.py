"""Built-in validation rules."""

from ruleforge.validation.rules.builtins import (
    BUILTIN_RULES,
    DEFAULT_MESSAGES,
    NUMERIC_RULES,
    SIZE_RULES,
    register_builtin_rules,
    require_parameter_count,
)

__all__ = [
    "BUILTIN_RULES",
    "DEFAULT_MESSAGES",
    "NUMERIC_RULES",
    "SIZE_RULES",
    "register_builtin_rules",
    "require_parameter_count",
]
