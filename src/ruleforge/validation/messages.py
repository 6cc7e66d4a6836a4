"""Error message resolution and formatting.

For a failed rule the composer finds the message template, then fills in its
placeholders. Templates are looked up in priority order:

1. Custom messages passed to the validator ("field.rule", then "RuleName")
2. Translator line "custom.<field>.<rule>"
3. Size rules only: translator line "<rule>.<numeric|array|string>"
4. Translator line "<rule>"
5. The rule's registered default message, else the rule key itself

Placeholders are ``:name`` tokens. ``:attribute`` and ``:field`` are always
replaced with the field's displayable label; rule-specific tokens
(``:min``, ``:values``, ``:other`` ...) are filled by the replacer registered
for the rule.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from ruleforge.translation.translator import replace_placeholders
from ruleforge.validation.naming import snake_case, studly_case
from ruleforge.validation.rules.builtins import SIZE_RULES
from ruleforge.validation.rules.values import parse_date, stringify

if TYPE_CHECKING:
    from ruleforge.validation.validator import Validator


class MessageComposer:
    """Resolves and formats error messages for one validator.

    Reads the validator's custom messages, custom attribute labels, custom
    value labels, translator and registry. Holds no state of its own, so
    resolving the same (field, rule) twice gives the same message.
    """

    def __init__(self, validator: Validator):
        self.validator = validator

    # -------------------------------------------------------------------------
    # Message lookup
    # -------------------------------------------------------------------------

    def get_message(self, field: str, rule: str) -> str:
        """Get the message template for a field and canonical rule name."""
        snake_rule = snake_case(rule)

        inline = self._inline_message(field, snake_rule, self.validator.custom_messages)
        if inline is not None:
            return inline

        custom = self._translate(f"custom.{field}.{snake_rule}")
        if custom is not None:
            return custom

        if rule in SIZE_RULES:
            sized = self._translate(f"{snake_rule}.{self.validator.get_attribute_type(field)}")
            if sized is not None:
                return sized

        line = self._translate(snake_rule)
        if line is not None:
            return line

        return self.validator.registry.default_message(rule) or snake_rule

    def _inline_message(
        self,
        field: str,
        snake_rule: str,
        messages: Mapping[str, Any],
    ) -> str | None:
        # Field specific message first, then the rule-wide one
        for key in (f"{field}.{snake_rule}", studly_case(snake_rule)):
            if messages.get(key) is not None:
                return str(messages[key])
        return None

    def _translate(self, key: str) -> str | None:
        """Translator line for a key, or None when unresolved or not a string."""
        message = self.validator.translator.resolve(key)
        if message == key or not isinstance(message, str):
            return None
        return message

    # -------------------------------------------------------------------------
    # Displayable names and values
    # -------------------------------------------------------------------------

    def get_attribute(self, field: str) -> str:
        """Get the displayable label of a field."""
        label = self.validator.custom_attributes.get(field)
        if label:
            return str(label)

        for key in (f"attributes.{field}", f"fields.{field}"):
            translated = self._translate(key)
            if translated is not None:
                return translated

        return snake_case(field).replace("_", " ")

    def get_attribute_list(self, fields: tuple[Any, ...]) -> list[str]:
        return [self.get_attribute(str(f)) for f in fields]

    def get_displayable_value(self, field: str, value: Any) -> str:
        """Get the displayable form of a value of a field."""
        labels = self.validator.custom_values.get(field) or {}
        for candidate in (value, stringify(value)):
            try:
                label = labels.get(candidate)
            except TypeError:
                continue
            if label:
                return str(label)

        translated = self._translate(f"values.{field}.{stringify(value)}")
        if translated is not None:
            return translated

        return stringify(value)

    # -------------------------------------------------------------------------
    # Placeholder replacement
    # -------------------------------------------------------------------------

    def do_replacements(
        self,
        message: str,
        field: str,
        rule: str,
        parameters: tuple[Any, ...],
    ) -> str:
        """Replace the generic and rule-specific placeholders of a message."""
        label = self.get_attribute(field)
        message = replace_placeholders(message, {"attribute": label, "field": label})

        replacer = REPLACERS.get(rule)
        if replacer is not None:
            message = replacer(self, message, field, tuple(parameters))
        return message


# -----------------------------------------------------------------------------
# Rule-specific replacers
# -----------------------------------------------------------------------------

Replacer = Callable[[MessageComposer, str, str, tuple[Any, ...]], str]


def _param(parameters: tuple[Any, ...], index: int) -> str | None:
    if index < len(parameters):
        return stringify(parameters[index])
    return None


def replace_between(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    return replace_placeholders(message, {"min": _param(parameters, 0), "max": _param(parameters, 1)})


def replace_size(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    return replace_placeholders(message, {"size": _param(parameters, 0)})


def replace_min(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    return replace_placeholders(message, {"min": _param(parameters, 0)})


def replace_max(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    return replace_placeholders(message, {"max": _param(parameters, 0)})


def replace_in(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    values = [composer.get_displayable_value(field, p) for p in parameters]
    return replace_placeholders(message, {"values": ", ".join(values)})


def replace_required_with(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    return replace_placeholders(message, {"values": " / ".join(composer.get_attribute_list(parameters))})


def replace_required_if(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    if not parameters:
        return message
    other = str(parameters[0])
    value = composer.get_displayable_value(other, composer.validator.get_value(other))
    return replace_placeholders(message, {"other": composer.get_attribute(other), "value": value})


def replace_same(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    if not parameters:
        return message
    return replace_placeholders(message, {"other": composer.get_attribute(str(parameters[0]))})


def replace_date_format(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    return replace_placeholders(message, {"format": _param(parameters, 0)})


def replace_before(composer: MessageComposer, message: str, field: str, parameters: tuple[Any, ...]) -> str:
    if not parameters:
        return message
    reference = parameters[0]
    if parse_date(reference) is None:
        return replace_placeholders(message, {"date": composer.get_attribute(str(reference))})
    return replace_placeholders(message, {"date": stringify(reference)})


REPLACERS: dict[str, Replacer] = {
    "After": replace_before,
    "Before": replace_before,
    "Between": replace_between,
    "DateFormat": replace_date_format,
    "Different": replace_same,
    "In": replace_in,
    "Max": replace_max,
    "Min": replace_min,
    "NotIn": replace_in,
    "RequiredIf": replace_required_if,
    "RequiredWith": replace_required_with,
    "RequiredWithAll": replace_required_with,
    "RequiredWithout": replace_required_with,
    "RequiredWithoutAll": replace_required_with,
    "Same": replace_same,
    "Size": replace_size,
}
