"""Rule and field name case conversions."""

import re

_WORD_START = re.compile(r"^([a-z])|\s+([a-z])")
_UPPER_AFTER_CHAR = re.compile(r"(.)([A-Z])")


def studly_case(value: str) -> str:
    """Convert a rule name to its canonical PascalCase form.

    "required_with_all", "required-with-all" and "RequiredWithAll" all
    become "RequiredWithAll".
    """
    text = str(value).strip().replace("-", " ").replace("_", " ")
    text = _WORD_START.sub(lambda m: m.group(0).upper(), text)
    return re.sub(r"\s", "", text)


def snake_case(value: str) -> str:
    """Convert a PascalCase or camelCase name to snake_case."""
    return _UPPER_AFTER_CHAR.sub(r"\1_\2", str(value)).lower()
