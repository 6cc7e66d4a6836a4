"""Built-in validation rules for ruleforge.

This module registers the built-in rule predicates with a RuleRegistry.
Every predicate here is contextual: it receives the running Validator so it
can read other fields and the field's full rule list.

Categories:
- Presence: required, accepted, required_if, required_with,
  required_with_all, required_without, required_without_all
- Type: numeric, integer, array
- Size: size, between, min, max
- Membership: in, not_in
- Format: regex, date_format
- Comparison: same, different, before, after
"""

import logging
import math
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ruleforge.validation.rules.values import (
    is_numeric,
    is_present,
    parse_date,
    stringify,
    to_number,
)
from ruleforge.validation.types import EqualityPolicy, RuleConfigurationError

if TYPE_CHECKING:
    from ruleforge.validation.registry import RuleRegistry
    from ruleforge.validation.validator import Validator

logger = logging.getLogger(__name__)

# Rules that declare a field numeric for size computations
NUMERIC_RULES = ("Numeric", "Integer")

# Rules whose messages depend on the numeric/array/string type of the field
SIZE_RULES = ("Size", "Between", "Min", "Max")

_ACCEPTABLE = ("yes", "on", "1", 1, True, "true")

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}

# English messages used when the translator has no line for a rule
DEFAULT_MESSAGES: dict[str, str] = {
    "Accepted": "The :attribute must be accepted.",
    "After": "The :attribute must be a date after :date.",
    "Array": "The :attribute must be an array.",
    "Before": "The :attribute must be a date before :date.",
    "Between": "The :attribute must be between :min and :max.",
    "DateFormat": "The :attribute does not match the format :format.",
    "Different": "The :attribute and :other must be different.",
    "In": "The selected :attribute is invalid.",
    "Integer": "The :attribute must be an integer.",
    "Max": "The :attribute may not be greater than :max.",
    "Min": "The :attribute must be at least :min.",
    "NotIn": "The selected :attribute is invalid.",
    "Numeric": "The :attribute must be a number.",
    "Regex": "The :attribute format is invalid.",
    "Required": "The :attribute field is required.",
    "RequiredIf": "The :attribute field is required when :other is :value.",
    "RequiredWith": "The :attribute field is required when :values is present.",
    "RequiredWithAll": "The :attribute field is required when :values is present.",
    "RequiredWithout": "The :attribute field is required when :values is not present.",
    "RequiredWithoutAll": "The :attribute field is required when none of :values are present.",
    "Same": "The :attribute and :other must match.",
    "Size": "The :attribute must be :size.",
}


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def require_parameter_count(count: int, parameters: tuple[Any, ...], rule: str) -> None:
    """Raise RuleConfigurationError when a rule has too few parameters."""
    if len(parameters) < count:
        raise RuleConfigurationError(
            f"Validation rule {rule} requires at least {count} parameters."
        )


def _to_bound(parameter: Any, rule: str) -> float:
    bound = to_number(parameter)
    if math.isnan(bound) or (isinstance(parameter, str) and parameter.strip() == ""):
        raise RuleConfigurationError(
            f"Validation rule {rule} requires numeric parameters, got {parameter!r}."
        )
    return bound


def _any_failing_required(validator: "Validator", fields: tuple[Any, ...]) -> bool:
    return any(not is_present(validator.get_value(f)) for f in fields)


def _all_failing_required(validator: "Validator", fields: tuple[Any, ...]) -> bool:
    return all(not is_present(validator.get_value(f)) for f in fields)


def values_equal(actual: Any, expected: Any, policy: EqualityPolicy) -> bool:
    """Compare a record value with a rule parameter under an equality policy."""
    if actual is None or expected is None:
        return actual is None and expected is None
    if policy is EqualityPolicy.STRICT:
        return type(actual) is type(expected) and actual == expected
    if policy is EqualityPolicy.LOOSE and is_numeric(actual) and is_numeric(expected):
        return to_number(actual) == to_number(expected)
    return stringify(actual) == stringify(expected)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a rule pattern, accepting optional "/body/flags" delimiters."""
    source = str(pattern)
    flags = 0
    last = source.rfind("/")
    if source.startswith("/") and last > 0:
        modifiers = source[last + 1 :]
        if all(m in _REGEX_FLAGS for m in modifiers):
            for m in modifiers:
                flags |= _REGEX_FLAGS[m]
            source = source[1:last]
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise RuleConfigurationError(f"Invalid regex pattern {pattern!r}: {e}") from e


# -----------------------------------------------------------------------------
# Presence Rules
# -----------------------------------------------------------------------------


def validate_required(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    return is_present(value)


def validate_accepted(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    """Value must be present and one of yes/on/1/true (no other coercion)."""
    if not is_present(value):
        return False
    return any(type(value) is type(a) and value == a for a in _ACCEPTABLE)


def validate_required_if(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(2, parameters, "required_if")
    other, expected = parameters[0], parameters[1]
    if values_equal(validator.get_value(other), expected, validator.equality):
        return is_present(value)
    return True


def validate_required_with(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    if not _all_failing_required(validator, parameters):
        return is_present(value)
    return True


def validate_required_with_all(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    if not _any_failing_required(validator, parameters):
        return is_present(value)
    return True


def validate_required_without(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    if _any_failing_required(validator, parameters):
        return is_present(value)
    return True


def validate_required_without_all(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    if _all_failing_required(validator, parameters):
        return is_present(value)
    return True


# -----------------------------------------------------------------------------
# Type Rules
# -----------------------------------------------------------------------------


def validate_numeric(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    return is_numeric(value)


def validate_integer(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    number = to_number(value)
    return math.isfinite(number) and number.is_integer()


def validate_array(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    return isinstance(value, (list, tuple))


# -----------------------------------------------------------------------------
# Size Rules
# -----------------------------------------------------------------------------


def validate_size(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(1, parameters, "size")
    return validator.get_size(field, value) == _to_bound(parameters[0], "size")


def validate_between(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(2, parameters, "between")
    minimum = _to_bound(parameters[0], "between")
    maximum = _to_bound(parameters[1], "between")
    size = validator.get_size(field, value)
    return minimum <= size <= maximum


def validate_min(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(1, parameters, "min")
    return validator.get_size(field, value) >= _to_bound(parameters[0], "min")


def validate_max(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(1, parameters, "max")
    return validator.get_size(field, value) <= _to_bound(parameters[0], "max")


# -----------------------------------------------------------------------------
# Membership Rules
# -----------------------------------------------------------------------------


def validate_in(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    """Stringified value must be one of the parameters."""
    return stringify(value) in [stringify(p) for p in parameters]


def validate_not_in(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    return not validate_in(validator, field, value, parameters)


# -----------------------------------------------------------------------------
# Format Rules
# -----------------------------------------------------------------------------


def validate_regex(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(1, parameters, "regex")
    pattern = compile_pattern(parameters[0])
    return pattern.search(stringify(value)) is not None


def validate_date_format(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    """Value must be a string matching a strptime format (e.g. "%Y-%m-%d")."""
    require_parameter_count(1, parameters, "date_format")
    if not isinstance(value, str):
        return False
    try:
        datetime.strptime(value, str(parameters[0]))
    except ValueError:
        return False
    return True


# -----------------------------------------------------------------------------
# Comparison Rules
# -----------------------------------------------------------------------------


def validate_same(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(1, parameters, "same")
    return value == validator.get_value(parameters[0])


def validate_different(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    require_parameter_count(1, parameters, "different")
    return not validate_same(validator, field, value, parameters)


def _compare_dates(validator: "Validator", value: Any, parameters: tuple[Any, ...], rule: str) -> int | None:
    require_parameter_count(1, parameters, rule)
    current = parse_date(value)
    if current is None:
        return None

    # The parameter is either a literal date or the name of another field
    reference = parse_date(parameters[0])
    if reference is None:
        reference = parse_date(validator.get_value(parameters[0]))
    if reference is None:
        return None

    return (current > reference) - (current < reference)


def validate_before(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    return _compare_dates(validator, value, parameters, "before") == -1


def validate_after(validator: "Validator", field: str, value: Any, parameters: tuple[Any, ...]) -> bool:
    return _compare_dates(validator, value, parameters, "after") == 1


BUILTIN_RULES = {
    "Accepted": validate_accepted,
    "After": validate_after,
    "Array": validate_array,
    "Before": validate_before,
    "Between": validate_between,
    "DateFormat": validate_date_format,
    "Different": validate_different,
    "In": validate_in,
    "Integer": validate_integer,
    "Max": validate_max,
    "Min": validate_min,
    "NotIn": validate_not_in,
    "Numeric": validate_numeric,
    "Regex": validate_regex,
    "Required": validate_required,
    "RequiredIf": validate_required_if,
    "RequiredWith": validate_required_with,
    "RequiredWithAll": validate_required_with_all,
    "RequiredWithout": validate_required_without,
    "RequiredWithoutAll": validate_required_without_all,
    "Same": validate_same,
    "Size": validate_size,
}


def register_builtin_rules(registry: "RuleRegistry") -> None:
    """Register all built-in rules with a RuleRegistry."""
    for name, predicate in BUILTIN_RULES.items():
        registry.register(name, predicate, DEFAULT_MESSAGES[name], contextual=True)
    logger.debug("Registered %d built-in validation rules", len(BUILTIN_RULES))
