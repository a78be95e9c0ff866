"""Translation of pass labels from the bundled locale files."""

import json
import logging
import os
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

LOCALES_DIR = os.path.join(os.path.dirname(__file__), "locales")
FALLBACK_LOCALE = "en"


def _flatten(tree: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    flat = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, path))
        else:
            flat[path] = str(value)
    return flat


def load_messages(locale: str) -> Dict[str, str]:
    """Load ``locales/<locale>.json`` as a flat ``{"a.b.c": text}`` mapping."""
    path = os.path.join(LOCALES_DIR, f"{locale}.json")
    with open(path, "r", encoding="utf-8") as f:
        return _flatten(json.load(f))


def available_locales():
    return sorted(name[:-5] for name in os.listdir(LOCALES_DIR) if name.endswith(".json"))


def make_translator(locale: str = FALLBACK_LOCALE) -> Callable[[str], str]:
    """Return ``translate(key) -> str`` for ``locale``.

    Keys missing from the locale fall back to English, then to the key itself.
    """
    fallback = load_messages(FALLBACK_LOCALE)
    if locale in available_locales():
        messages = load_messages(locale)
    else:
        logger.warning(f"[i18n] Unknown locale {locale!r}, using {FALLBACK_LOCALE}")
        messages = fallback

    def translate(key: str) -> str:
        if key in messages:
            return messages[key]
        return fallback.get(key, key)

    return translate
