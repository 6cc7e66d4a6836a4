"""The validation engine.

A Validator checks one record against a rule spec:

    validator = make({"name": "ab"}, {"name": "required|between:3,10"})
    if validator.fails():
        validator.errors().first("name")
        # 'The name must be between 3 and 10 characters.'

Rules are dispatched through a RuleRegistry and messages are resolved by a
MessageComposer. Every call to passes()/fails() starts from an empty
MessageBag.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ruleforge.translation.config import LocaleConfig
from ruleforge.translation.translator import Translator
from ruleforge.validation.bag import MessageBag
from ruleforge.validation.messages import MessageComposer
from ruleforge.validation.parser import RuleExpression, explode_rules, parse_rule
from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules.builtins import NUMERIC_RULES, require_parameter_count
from ruleforge.validation.rules.values import COLLECTION_TYPES, is_numeric, stringify, to_number
from ruleforge.validation.types import EqualityPolicy, ParsedRule, Predicate, RuleDefinition

logger = logging.getLogger(__name__)


class Validator:
    """Validates a record against per-field rules.

    Args:
        data: The record being validated (read on every run, so it may be
            changed between runs)
        rules: Field -> "rule|rule:p1,p2" string or sequence of rule expressions
        custom_messages: "field.rule" or "RuleName" -> message template
        custom_attributes: Field -> displayable label
        custom_values: Field -> {raw value -> displayable label}
        registry: Rule registry; defaults to the shared default registry
        translator: Message translator; defaults to the shared translator
        equality: Comparison used by required_if
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        rules: Mapping[str, Any] | None = None,
        custom_messages: Mapping[str, str] | None = None,
        custom_attributes: Mapping[str, str] | None = None,
        *,
        custom_values: Mapping[str, Mapping[Any, str]] | None = None,
        registry: RuleRegistry | None = None,
        translator: Translator | None = None,
        equality: EqualityPolicy = EqualityPolicy.STRING,
    ):
        if registry is None or translator is None:
            factory = default_factory()
            registry = registry if registry is not None else factory.registry
            translator = translator if translator is not None else factory.translator

        self.data: Mapping[str, Any] = data if data is not None else {}
        self.rules: dict[str, tuple[RuleExpression, ...]] = explode_rules(rules)
        self.custom_messages: dict[str, str] = dict(custom_messages or {})
        self.custom_attributes: dict[str, str] = dict(custom_attributes or {})
        self.custom_values: dict[str, Mapping[Any, str]] = dict(custom_values or {})
        self.registry = registry
        self.translator = translator
        self.equality = equality
        self.composer = MessageComposer(self)
        self._messages = MessageBag()

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def passes(self) -> bool:
        """Run every rule and return True if no rule failed.

        Raises:
            RuleConfigurationError: A rule is malformed
            UnknownRuleError: A rule name is not registered
        """
        # An aborted run leaves an empty bag behind, never a partial one
        self._messages = MessageBag()
        bag = MessageBag()

        for field, field_rules in self.rules.items():
            for expression in field_rules:
                self._validate(bag, field, expression)

        self._messages = bag
        return not bag.has_errors()

    def fails(self) -> bool:
        """Run every rule and return True if any rule failed."""
        return not self.passes()

    def errors(self) -> MessageBag:
        """Messages of the last run (a copy; empty before the first run)."""
        return self._messages.copy()

    def messages(self) -> MessageBag:
        return self.errors()

    def extend(self, name: str, predicate: Predicate, message: str | None = None) -> RuleDefinition:
        """Register a rule with this validator's registry.

        The registry is shared, so the rule is available to every validator
        built on it.
        """
        return self.registry.extend(name, predicate, message)

    def _validate(self, bag: MessageBag, field: str, expression: RuleExpression) -> None:
        parsed = parse_rule(expression)
        if not parsed:
            return

        definition = self.registry.get(parsed.name)
        value = self.get_value(field)

        if not definition.check(self, field, value, parsed.parameters):
            self._add_failure(bag, field, parsed)

    def _add_failure(self, bag: MessageBag, field: str, parsed: ParsedRule) -> None:
        message = self.get_message(field, parsed.name)
        message = self.do_replacements(message, field, parsed.name, parsed.parameters)
        logger.debug("Field %s failed rule %s", field, parsed.name)
        bag.add(field, message)

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def get_message(self, field: str, rule: str) -> str:
        """Message template for a field and canonical rule name."""
        return self.composer.get_message(field, rule)

    def do_replacements(self, message: str, field: str, rule: str, parameters: tuple[Any, ...]) -> str:
        return self.composer.do_replacements(message, field, rule, parameters)

    def get_attribute(self, field: str) -> str:
        """Displayable label of a field."""
        return self.composer.get_attribute(field)

    # -------------------------------------------------------------------------
    # Record and rule inspection
    # -------------------------------------------------------------------------

    def get_value(self, field: Any) -> Any:
        return self.data.get(str(field))

    def get_rule(self, field: str, rules: str | Iterable[str]) -> ParsedRule | None:
        """First rule of a field whose canonical name is in ``rules``."""
        names = {rules} if isinstance(rules, str) else set(rules)
        for expression in self.rules.get(field, ()):
            parsed = parse_rule(expression)
            if parsed.name in names:
                return parsed
        return None

    def has_rule(self, field: str, rules: str | Iterable[str]) -> bool:
        return self.get_rule(field, rules) is not None

    def get_attribute_type(self, field: str) -> str:
        """Value type used to pick size messages: numeric, array or string."""
        if self.has_rule(field, NUMERIC_RULES):
            return "numeric"
        if self.has_rule(field, "Array"):
            return "array"
        return "string"

    def get_size(self, field: str, value: Any) -> float:
        """Size of a value for size rules.

        A field with a numeric rule is measured by its numeric value, a
        collection by its length and anything else by its trimmed string
        length.
        """
        if isinstance(value, (COLLECTION_TYPES, Mapping)):
            return len(value)
        if self.has_rule(field, NUMERIC_RULES) and is_numeric(value):
            return to_number(value)
        if not value:
            return 0
        return len(stringify(value).strip())

    @staticmethod
    def require_parameter_count(count: int, parameters: tuple[Any, ...], rule: str) -> None:
        require_parameter_count(count, parameters, rule)


class ValidatorFactory:
    """Builds validators that share one registry and one translator.

    Example:
        factory = ValidatorFactory()
        factory.extend("even", lambda field, value, params: int(value) % 2 == 0,
                       "The :attribute must be even.")
        factory.make({"n": 3}, {"n": "even"}).fails()   # True
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        translator: Translator | None = None,
        equality: EqualityPolicy = EqualityPolicy.STRING,
    ):
        self.registry = registry if registry is not None else RuleRegistry.with_builtins()
        self._translator = translator
        self.equality = equality

    @property
    def translator(self) -> Translator:
        if self._translator is None:
            self._translator = Translator.from_config(LocaleConfig.from_env())
        return self._translator

    @translator.setter
    def translator(self, value: Translator) -> None:
        self._translator = value

    def make(
        self,
        data: Mapping[str, Any] | None,
        rules: Mapping[str, Any] | None,
        custom_messages: Mapping[str, str] | None = None,
        custom_attributes: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Validator:
        """Create a validator bound to this factory's registry and translator."""
        options.setdefault("equality", self.equality)
        return Validator(
            data,
            rules,
            custom_messages,
            custom_attributes,
            registry=self.registry,
            translator=self.translator,
            **options,
        )

    def extend(self, name: str, predicate: Predicate, message: str | None = None) -> RuleDefinition:
        """Add a (field, value, parameters) -> bool rule for future validators."""
        return self.registry.extend(name, predicate, message)


_default_factory: ValidatorFactory | None = None


def default_factory() -> ValidatorFactory:
    """The process-wide factory used by make() and extend()."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ValidatorFactory()
    return _default_factory


def make(
    data: Mapping[str, Any] | None,
    rules: Mapping[str, Any] | None,
    custom_messages: Mapping[str, str] | None = None,
    custom_attributes: Mapping[str, str] | None = None,
    **options: Any,
) -> Validator:
    """Create a validator with the default factory."""
    return default_factory().make(data, rules, custom_messages, custom_attributes, **options)


def extend(name: str, predicate: Predicate, message: str | None = None) -> RuleDefinition:
    """Register a rule with the default registry."""
    return default_factory().extend(name, predicate, message)
