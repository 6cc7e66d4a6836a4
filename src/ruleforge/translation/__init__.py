"""Locale dictionaries and message lookup."""

from ruleforge.translation.config import LocaleConfig
from ruleforge.translation.loader import (
    LocaleLoadError,
    MappingLoadError,
    load_bundled_locales,
    load_locale_directory,
    load_locale_file,
    load_mapping,
)
from ruleforge.translation.translator import Translator, replace_placeholders

__all__ = [
    "LocaleConfig",
    "LocaleLoadError",
    "MappingLoadError",
    "Translator",
    "load_bundled_locales",
    "load_locale_directory",
    "load_locale_file",
    "load_mapping",
    "replace_placeholders",
]
