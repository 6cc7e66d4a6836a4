"""Rule registry for ruleforge.

Maps canonical rule names to predicates and their default messages. A
registry is an explicit object: every validator built on the same registry
sees the rules added to it, and ``copy()`` gives an isolated fork.
"""

import logging

from ruleforge.validation.naming import studly_case
from ruleforge.validation.types import Predicate, RuleDefinition, UnknownRuleError

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry of validation rules.

    Rules must be registered before a rule spec can reference them. Names are
    canonicalized, so "required_if", "required-if" and "RequiredIf" refer to
    the same rule.

    Example:
        registry = RuleRegistry.with_builtins()
        registry.register("even", lambda field, value, params: int(value) % 2 == 0,
                          "The :attribute must be even.")

        definition = registry.get("Even")
    """

    def __init__(self) -> None:
        self._rules: dict[str, RuleDefinition] = {}

    @classmethod
    def with_builtins(cls) -> "RuleRegistry":
        """Create a registry pre-populated with the built-in rules."""
        from ruleforge.validation.rules import register_builtin_rules

        registry = cls()
        register_builtin_rules(registry)
        return registry

    def register(
        self,
        name: str,
        predicate: Predicate,
        message: str | None = None,
        *,
        contextual: bool = False,
    ) -> RuleDefinition:
        """Register a rule predicate by name.

        Re-registering a name replaces the previous definition.

        Args:
            name: Rule name in any casing ("custom_rule", "CustomRule")
            predicate: (field, value, parameters) -> bool, or
                (validator, field, value, parameters) -> bool when contextual
            message: Default message when no translation exists
            contextual: Pass the running Validator as first argument

        Returns:
            The stored RuleDefinition
        """
        canonical = studly_case(name)
        if not canonical:
            raise ValueError("Rule name must not be empty")
        if canonical in self._rules:
            logger.debug("Replacing validation rule %s", canonical)
        definition = RuleDefinition(
            name=canonical,
            predicate=predicate,
            message=message or "",
            contextual=contextual,
        )
        self._rules[canonical] = definition
        return definition

    def extend(self, name: str, predicate: Predicate, message: str | None = None) -> RuleDefinition:
        """Add a plain (field, value, parameters) rule. Alias of register()."""
        return self.register(name, predicate, message)

    def get(self, name: str) -> RuleDefinition:
        """Get a registered rule by name.

        Raises:
            UnknownRuleError: If the rule is not registered
        """
        canonical = studly_case(name)
        if canonical not in self._rules:
            raise UnknownRuleError(canonical, self.list_registered())
        return self._rules[canonical]

    def default_message(self, name: str) -> str:
        """Get the default message of a rule, "" when unknown or unset."""
        definition = self._rules.get(studly_case(name))
        return definition.message if definition else ""

    def is_registered(self, name: str) -> bool:
        """Check if a rule is registered."""
        return studly_case(name) in self._rules

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules)

    def copy(self) -> "RuleRegistry":
        """Create an independent registry with the same rules."""
        forked = RuleRegistry()
        forked._rules = dict(self._rules)
        return forked

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._rules.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def __len__(self) -> int:
        return len(self._rules)
