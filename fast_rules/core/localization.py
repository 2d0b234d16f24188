"""
Message catalog for validation errors.

Built-in rules refer to their messages by key (`validation.min`, ...). A key is
looked up in `{LOCALE_PATH}/{locale}.json` using dot notation, then in the
fallback locale, and finally the English default shipped with the rule is used.

Usage:
    from fast_rules.core.localization import __, set_locale

    set_locale('pt')
    __('validation.required', default='This value is required.')

The current locale lives in a ContextVar, so concurrent validations running in
different tasks may use different locales.
"""

import json
import logging
import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

_translations: Dict[str, Dict[str, Any]] = {}
_LOCALE_DEFAULT = os.getenv('LOCALE_DEFAULT', 'en')
_LOCALE_FALLBACK = os.getenv('LOCALE_FALLBACK', 'en')
_LOCALE_PATH = os.getenv('LOCALE_PATH', os.path.join(os.getcwd(), 'lang'))
_current_locale: ContextVar[str] = ContextVar('fast_rules_locale', default=_LOCALE_DEFAULT)


def _get_nested(data: Dict[str, Any], key: str) -> Optional[Any]:
    """Navigate nested dict with dot notation."""
    current = data
    for part in key.split('.'):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return None
    return current


def _load_locale(locale: str) -> Dict[str, Any]:
    """Load and cache translations for a locale. Idempotent."""
    if locale in _translations:
        return _translations[locale]

    locale_file = Path(_LOCALE_PATH) / f"{locale}.json"
    translations = {}

    if locale_file.exists():
        try:
            with locale_file.open(encoding='utf-8') as f:
                translations = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            logging.warning(f"[LOCALIZATION] Could not load `{locale_file}`: {exc}")

    _translations[locale] = translations
    return translations


def __(key: str, default: Optional[str] = None, locale: Optional[str] = None) -> str:
    """
    Translate a message key.

    Examples:
        __('validation.min')                          # current locale
        __('validation.min', default='Too small')     # with fallback text
        __('validation.min', locale='pt')             # force locale
    """
    current_locale = locale or _current_locale.get()

    translation = _get_nested(_load_locale(current_locale), key)

    if translation is None and current_locale != _LOCALE_FALLBACK:
        translation = _get_nested(_load_locale(_LOCALE_FALLBACK), key)

    if not isinstance(translation, str):
        translation = default if default is not None else key

    return translation


def set_locale(locale: str) -> None:
    _current_locale.set(locale)


def get_locale() -> str:
    return _current_locale.get()


def clear_cache() -> None:
    _translations.clear()


def set_locale_path(path: str) -> None:
    global _LOCALE_PATH
    _LOCALE_PATH = path
    clear_cache()


def get_locale_path() -> str:
    return _LOCALE_PATH


trans = __
