"""Locale-aware message lookup.

The translator resolves dotted keys ("between.numeric",
"attributes.email") through nested locale dictionaries. It walks the current
locale first and the fallback locale second. When neither has the key, the
key itself is returned: callers detect a miss by comparing the result with
the key they asked for.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Mapping
from typing import Any

from ruleforge.translation.config import LocaleConfig
from ruleforge.translation.loader import (
    load_bundled_locales,
    load_locale_directory,
    merge_lines,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r":([A-Za-z]+)")


def replace_placeholders(message: str, replacements: Mapping[str, Any]) -> str:
    """Replace ``:name`` tokens with values from ``replacements``.

    Only string and number values are substituted; tokens with no usable
    value are left as they are.

    Example:
        replace_placeholders(":greet :name", {"greet": "Dear", "name": "Andrew"})
        # 'Dear Andrew'
    """

    def replace(match: re.Match) -> str:
        value = replacements.get(match.group(1))
        if isinstance(value, bool):
            return match.group(0)
        if isinstance(value, (str, int, float)):
            return str(value)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, str(message))


class Translator:
    """Resolves message keys through a locale -> fallback chain.

    Example:
        translator = Translator({"en": {"required": "The :attribute field is required."}})
        translator.resolve("required")      # 'The :attribute field is required.'
        translator.resolve("missing.key")   # 'missing.key'
    """

    def __init__(
        self,
        dictionaries: Mapping[str, Mapping[str, Any]] | None = None,
        config: LocaleConfig | None = None,
    ):
        self.config = config or LocaleConfig()
        self._dictionaries: dict[str, dict[str, Any]] = {
            locale: copy.deepcopy(dict(lines)) for locale, lines in (dictionaries or {}).items()
        }

    @classmethod
    def from_config(cls, config: LocaleConfig | None = None) -> Translator:
        """Create a translator with the bundled dictionaries.

        Files under ``config.locale_path`` are merged over the bundled lines.
        """
        config = config or LocaleConfig.from_env()
        translator = cls(load_bundled_locales(), config)
        if config.locale_path is not None:
            for locale, lines in load_locale_directory(config.locale_path).items():
                translator.add_lines(locale, lines)
        return translator

    @property
    def locale(self) -> str:
        return self.config.locale

    @locale.setter
    def locale(self, value: str) -> None:
        self.config.locale = value

    @property
    def fallback(self) -> str:
        return self.config.fallback

    @fallback.setter
    def fallback(self, value: str) -> None:
        self.config.fallback = value

    @property
    def available_locales(self) -> list[str]:
        return sorted(self._dictionaries)

    def add_lines(self, locale: str, lines: Mapping[str, Any]) -> None:
        """Deep-merge message lines into a locale's dictionary."""
        self._dictionaries[locale] = merge_lines(self._dictionaries.get(locale, {}), copy.deepcopy(dict(lines)))

    def resolve(self, key: str, locale: str | None = None) -> Any:
        """Resolve a dotted key, returning the key itself when not found.

        Args:
            key: Dotted key path (e.g. "custom.email.required")
            locale: Locale to try first instead of the current locale

        Returns:
            The leaf string, a copy of the nested mapping, or ``key`` when
            unresolved
        """
        for candidate in self._locale_chain(locale):
            found = self._lookup(candidate, key)
            if isinstance(found, Mapping):
                return copy.deepcopy(found)
            if found is not None:
                return found

        logger.debug("No translation for %r in %s", key, self._locale_chain(locale))
        return key

    def trans(
        self,
        key: str,
        replacements: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> Any:
        """Resolve a key and substitute ``:placeholder`` tokens in the result."""
        message = self.resolve(key, locale)
        if replacements and isinstance(message, str):
            return replace_placeholders(message, replacements)
        return message

    def has(self, key: str, locale: str | None = None) -> bool:
        """Check if a key resolves in the locale chain."""
        return any(self._lookup(candidate, key) is not None for candidate in self._locale_chain(locale))

    def _locale_chain(self, locale: str | None) -> list[str]:
        return [code for code in (locale or self.config.locale, self.config.fallback) if code]

    def _lookup(self, locale: str, key: str) -> Any:
        data: Any = self._dictionaries.get(locale)
        if not data:
            return None

        for segment in key.split("."):
            if not isinstance(data, Mapping) or not data.get(segment):
                return None
            data = data[segment]
        return data
