"""Default locale data table.

``data/locales.json`` stores the compact per-locale settings (``dow`` is the
first day of week, ``L`` the locale date mask). This module expands them into
full locale data records usable by :func:`calendar_locale.config.resolve_config`.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .config import Masks
from .helpers import defaults_deep

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

# Language-only ids pointing at a regional entry
LOCALE_ALIASES = {
    "en": "en-US",
    "es": "es-ES",
    "no": "nb",
    "zh": "zh-CN",
}


@lru_cache(maxsize=None)
def _load_locale_data() -> Dict[str, Dict[str, Any]]:
    path = DATA_DIR / "locales.json"
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load locale data from {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _expand(locale_id: str, compact: Mapping[str, Any]) -> Dict[str, Any]:
    masks = Masks().to_dict()
    if compact.get("L"):
        masks["L"] = compact["L"]
    return {
        "id": locale_id,
        "first_day_of_week": compact.get("dow", 1),
        "masks": masks,
    }


def get_default_locales(
    custom: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Return the locale data table.

    Args:
        custom: Extra or replacement locale records, keyed by locale id. They
            are deep merged over the packaged records, so a custom record may
            only name the fields it changes.

    Returns:
        Dict[str, Dict[str, Any]]: Records with ``id``, ``first_day_of_week``
        and ``masks`` keys. A fresh copy on every call.
    """
    compact = _load_locale_data()
    table = {locale_id: _expand(locale_id, entry) for locale_id, entry in compact.items()}

    for alias, target in LOCALE_ALIASES.items():
        if alias not in table and target in table:
            table[alias] = _expand(alias, compact[target])

    for locale_id, record in (custom or {}).items():
        base = table.get(locale_id) or _expand(locale_id, {})
        table[locale_id] = defaults_deep(record, base)
        table[locale_id]["id"] = locale_id
    return table
