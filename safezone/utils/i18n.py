"""
Internationalization (i18n) utility module for user-facing messages.

This module provides functionality for:
- Loading message catalogs for every supported language
- Translating message keys with optional ``str.format`` arguments
- Falling back to the default language, then to the key itself

Catalogs are the ``messages.po`` files under ``safezone/locales``; they are
parsed with Babel so no compilation step is needed before shipping.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

import structlog
from babel.messages.pofile import read_po

from safezone.core.config.settings import settings

logger = structlog.get_logger(__name__)

LOCALES_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "locales"))

_catalogs: Dict[str, Dict[str, str]] = {}


def setup_i18n(locales_path: str = LOCALES_PATH) -> None:
    """
    Initialize the internationalization system by loading catalogs.

    Raises:
        FileNotFoundError: If the locales directory is not found.
    """
    if not os.path.exists(locales_path):
        raise FileNotFoundError(f"Locales directory not found: {locales_path}")

    for lang in settings.SUPPORTED_LANGUAGES:
        po_path = os.path.join(locales_path, lang, "LC_MESSAGES", "messages.po")
        catalog: Dict[str, str] = {}
        if os.path.exists(po_path):
            with open(po_path, "rb") as po_file:
                for message in read_po(po_file, locale=lang):
                    if message.id and message.string:
                        catalog[str(message.id)] = str(message.string)
        else:
            logger.warning("i18n_catalog_missing", language=lang, path=po_path)

        _catalogs[lang] = catalog
        logger.debug("i18n_initialized", language=lang, entries=len(catalog))


def get_translated_message(key: str, locale: Optional[str] = None, **params: Any) -> str:
    """
    Retrieve a translated message for the given key and locale.

    Args:
        key: The message key to translate.
        locale: The target language code (defaults to DEFAULT_LANGUAGE).
        **params: Values substituted into ``{placeholders}`` of the message.

    Returns:
        The translated message, the default-language message, or the key.
    """
    if not _catalogs:
        setup_i18n()

    locale = locale or settings.DEFAULT_LANGUAGE
    if locale not in _catalogs:
        logger.warning(
            "unsupported_locale_requested",
            requested_locale=locale,
            fallback_locale=settings.DEFAULT_LANGUAGE,
        )
        locale = settings.DEFAULT_LANGUAGE

    translated = _catalogs.get(locale, {}).get(key)
    if translated is None:
        translated = _catalogs.get(settings.DEFAULT_LANGUAGE, {}).get(key)
    if translated is None:
        logger.warning("translation_key_not_found", key=key, locale=locale)
        return key

    if params:
        try:
            return translated.format(**params)
        except (KeyError, IndexError):
            logger.warning("translation_format_failed", key=key, locale=locale)
    return translated
