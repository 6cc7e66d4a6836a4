"""Load locale dictionaries from YAML or JSON files.

A locale directory holds one file per locale, named by its code:

    locales/
        en.yaml
        de.yaml
        pt-BR.json

JSON is a subset of YAML, so every file is parsed with ``yaml.safe_load``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from ruleforge.exceptions import LocaleLoadError, MappingLoadError

logger = logging.getLogger(__name__)

BUNDLED_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"

LOCALE_SUFFIXES = (".yaml", ".yml", ".json")


def _normalize_keys(obj: Any) -> Any:
    """Turn every mapping key into a string.

    PyYAML parses bare keys such as ``on:`` or ``10:`` as booleans and
    integers; dictionary lookups are always done with string segments.
    """
    if isinstance(obj, Mapping):
        return {_key_to_str(k): _normalize_keys(v) for k, v in obj.items()}
    return obj


def _key_to_str(key: Any) -> str:
    if isinstance(key, bool):
        return "on" if key else "off"
    return str(key)


def load_mapping(path: Path) -> dict[Any, Any]:
    """Load a YAML or JSON file whose top level is a mapping.

    Keys are returned as PyYAML parsed them; an empty file is an empty dict.

    Raises:
        MappingLoadError: If the file cannot be parsed or is not a mapping
    """
    try:
        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise MappingLoadError(path, str(e)) from e

    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise MappingLoadError(path, f"expected a mapping, got {type(raw).__name__}")
    return dict(raw)


def load_locale_file(path: Path) -> dict[str, Any]:
    """Load one locale dictionary.

    Args:
        path: YAML or JSON file

    Returns:
        Nested dictionary of message lines with string keys

    Raises:
        LocaleLoadError: If the file cannot be parsed or is not a mapping
    """
    try:
        raw = load_mapping(path)
    except MappingLoadError as e:
        raise LocaleLoadError(path, e.reason) from e
    return _normalize_keys(raw)


def load_locale_directory(directory: Path) -> dict[str, dict[str, Any]]:
    """Load every locale file in a directory, keyed by locale code.

    Files with other suffixes are skipped. When several files share a locale
    code, later files (in sorted order) are merged over earlier ones.
    """
    dictionaries: dict[str, dict[str, Any]] = {}
    if not directory.is_dir():
        logger.warning("Locale directory %s does not exist", directory)
        return dictionaries

    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        if path.suffix.lower() not in LOCALE_SUFFIXES:
            logger.warning("Skipping %s: not a locale file", path)
            continue
        locale = path.stem
        dictionaries[locale] = merge_lines(dictionaries.get(locale, {}), load_locale_file(path))
        logger.info("Loaded locale %s from %s", locale, path)

    return dictionaries


def load_bundled_locales() -> dict[str, dict[str, Any]]:
    """Load the dictionaries shipped with ruleforge."""
    return load_locale_directory(BUNDLED_LOCALES_DIR)


def merge_lines(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two locale dictionaries; values in ``overrides`` win."""
    merged: dict[str, Any] = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_lines(current, value)
        else:
            merged[key] = value
    return merged
