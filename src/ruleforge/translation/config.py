"""Locale configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class LocaleConfig:
    """Current and fallback locale plus an optional directory of locale files.

    Attributes:
        locale: Locale tried first when resolving a message
        fallback: Locale tried when the current locale has no line for a key
        locale_path: Directory of <locale>.yaml / .yml / .json files that are
            merged over the bundled dictionaries
    """

    locale: str = "en"
    fallback: str = "en"
    locale_path: Path | None = None

    @classmethod
    def from_env(cls) -> LocaleConfig:
        """Create config from environment variables.

        Resolution:
        1. RULEFORGE_LOCALE (default "en")
        2. RULEFORGE_FALLBACK_LOCALE (default "en")
        3. RULEFORGE_LOCALE_PATH (default: bundled dictionaries only)
        """
        locale_path = os.environ.get("RULEFORGE_LOCALE_PATH")
        return cls(
            locale=os.environ.get("RULEFORGE_LOCALE") or "en",
            fallback=os.environ.get("RULEFORGE_FALLBACK_LOCALE") or "en",
            locale_path=Path(locale_path) if locale_path else None,
        )

    @property
    def locales(self) -> list[str]:
        """Locales in resolution order, empty entries removed."""
        return [code for code in (self.locale, self.fallback) if code]
