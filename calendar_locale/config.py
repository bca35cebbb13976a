"""Locale configuration types and the locale config resolver."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union

from .helpers import clamp, defaults_deep

logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7
FALLBACK_LOCALE = "en-IE"

Mask = Union[str, List[str]]


@dataclass
class Masks:
    """Named date patterns used by a calendar locale."""

    title: Mask = "MMMM YYYY"
    weekdays: Mask = "W"
    nav_months: Mask = "MMM"
    hours: Mask = "h A"
    input: Mask = field(default_factory=lambda: ["L", "YYYY-MM-DD", "YYYY/MM/DD"])
    input_date_time: Mask = field(
        default_factory=lambda: ["L h:mm A", "YYYY-MM-DD h:mm A", "YYYY/MM/DD h:mm A"]
    )
    input_date_time_24hr: Mask = field(
        default_factory=lambda: ["L HH:mm", "YYYY-MM-DD HH:mm", "YYYY/MM/DD HH:mm"]
    )
    input_time: Mask = field(default_factory=lambda: ["h:mm A"])
    input_time_24hr: Mask = field(default_factory=lambda: ["HH:mm"])
    day_popover: Mask = "WWW, MMM D, YYYY"
    data: Mask = field(default_factory=lambda: ["L", "YYYY-MM-DD", "YYYY/MM/DD"])
    model: Mask = "iso"
    iso: Mask = "YYYY-MM-DDTHH:mm:ss.SSSZ"
    L: Mask = "YYYY-MM-DD"

    @classmethod
    def names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Masks":
        data = data or {}
        known = set(cls.names())
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.warning("Ignoring unknown mask names: %s", ", ".join(unknown))
        return cls(
            **{
                k: list(v) if isinstance(v, (list, tuple)) else v
                for k, v in data.items()
                if k in known
            }
        )

    def get(self, name: str, default: Optional[Mask] = None) -> Optional[Mask]:
        return getattr(self, name, default) if name in self.names() else default

    def to_dict(self) -> Dict[str, Mask]:
        return asdict(self)


@dataclass
class LocaleConfig:
    """A fully resolved locale configuration."""

    id: str
    first_day_of_week: int = 1
    masks: Masks = field(default_factory=Masks)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_first_day: int = 1) -> "LocaleConfig":
        try:
            first_day_of_week = int(data.get("first_day_of_week", default_first_day))
        except (TypeError, ValueError):
            logger.warning(
                "Invalid first_day_of_week %r for %s, using %s",
                data.get("first_day_of_week"),
                data["id"],
                default_first_day,
            )
            first_day_of_week = default_first_day
        return cls(
            id=data["id"],
            first_day_of_week=clamp(first_day_of_week, 1, DAYS_IN_WEEK),
            masks=Masks.from_dict(data.get("masks")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "first_day_of_week": self.first_day_of_week,
            "masks": self.masks.to_dict(),
        }


ConfigSource = Union[str, Mapping[str, Any], None]


def _config_kind(config: ConfigSource) -> str:
    """Classify the accepted config shapes: ``absent``, ``id`` or ``partial``."""
    if config is None:
        return "absent"
    if isinstance(config, str):
        return "id" if config else "absent"
    if isinstance(config, Mapping):
        return "partial"
    raise TypeError(
        f"Locale config must be a locale id, a mapping or None, not {type(config).__name__}"
    )


def _find_key(locales: Mapping[str, Any], candidate: str) -> Optional[str]:
    for key in locales:
        if key.lower() == candidate:
            return key
    return None


def resolve_config(
    config: ConfigSource,
    locales: Mapping[str, Mapping[str, Any]],
    detected_locale: Optional[str] = None,
) -> LocaleConfig:
    """
    Resolve a user supplied locale config against a locale data table.

    Args:
        config: A locale id, a partial config mapping (``id``,
            ``first_day_of_week``, ``masks``) or None for auto-detection.
        locales: Locale data records keyed by locale id. Keys are matched
            case-insensitively.
        detected_locale: The platform locale id. Detected when omitted.

    Returns:
        LocaleConfig: The complete configuration. Unknown ids degrade to the
        language subtag, then to the detected locale.
    """
    kind = _config_kind(config)
    if detected_locale is None:
        from .locale_detector import detect_locale

        detected_locale = detect_locale()

    requested = None
    if kind == "id":
        requested = config
    elif kind == "partial":
        requested = config.get("id")
    candidate = (requested or detected_locale).lower()

    locale_id = (
        _find_key(locales, candidate)
        or _find_key(locales, candidate[:2])
        or detected_locale
    )
    if locale_id.lower() != candidate:
        logger.debug("Locale %r resolved to %r", candidate, locale_id)

    # Fallback record first so partial table entries stay complete
    defaults: Dict[str, Any] = {
        **locales.get(FALLBACK_LOCALE, {}),
        **locales.get(locale_id, {}),
        "id": locale_id,
    }

    record_first_day = defaults.get("first_day_of_week", 1)
    if not isinstance(record_first_day, int):
        record_first_day = 1

    if kind == "partial":
        merged = defaults_deep(config, defaults)
        merged["id"] = locale_id
        return LocaleConfig.from_dict(merged, record_first_day)
    return LocaleConfig.from_dict(defaults, record_first_day)
