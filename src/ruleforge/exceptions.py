"""Exceptions raised by ruleforge.

Validation failures are not exceptions: they are collected as messages.
These exceptions signal a malformed rule spec or unusable configuration and
abort the current run.
"""

from pathlib import Path


class RuleError(Exception):
    """Base class for ruleforge configuration problems."""

    pass


class RuleConfigurationError(RuleError):
    """A rule is malformed (missing parameters, bad bound, invalid pattern)."""

    pass


class UnknownRuleError(RuleError):
    """A rule name has no registered predicate."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []
        message = f"Validation rule '{name}' is not registered."
        if self.available:
            message += " Available rules: " + ", ".join(self.available)
        super().__init__(message)


class MappingLoadError(RuleError):
    """A YAML/JSON file could not be read or does not contain a mapping."""

    kind = "file"

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load {self.kind} {path}: {reason}")


class LocaleLoadError(MappingLoadError):
    """A locale file could not be read or does not contain a mapping."""

    kind = "locale file"
