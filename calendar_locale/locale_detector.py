"""
Platform locale detection for calendar locales.

This module figures out the ambient locale of the host so that a calendar
can be configured without an explicit locale id. Detected ids are returned
in BCP-47 form (``en-GB``), which is how the locale data table is keyed.
"""

import json
import locale
import logging
import os
from pathlib import Path

import tzlocal
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"


class LocaleDetector:
    """
    Detects the platform locale id.

    Detection tries the Python ``locale`` module first, then the system
    timezone, then the usual locale environment variables.
    """

    # Default locale
    DEFAULT_LOCALE = "en-US"

    ENV_VARS = ("LC_ALL", "LC_TIME", "LANG", "LANGUAGE")

    def __init__(self, timezone_map: Optional[Dict[str, str]] = None):
        """Initialize the locale detector."""
        self._system_locale = None
        self._timezone_map = (
            timezone_map if timezone_map is not None else self._load_timezone_map()
        )

    def _load_timezone_map(self) -> Dict[str, str]:
        """Loads the timezone-to-locale mapping from the JSON file."""
        try:
            map_path = DATA_DIR / "timezone_locale_map.json"
            with open(map_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load timezone map: {e}")
            return {}

    def get_locale_from_timezone(self, tz_id: Optional[str] = None) -> Optional[str]:
        """
        Get the locale from a given timezone or the system's timezone.

        Args:
            tz_id (Optional[str]):
                The timezone ID to look up. If None, detects system timezone.

        Returns:
            Optional[str]: The mapped locale id or None.
        """
        try:
            tz_name = tz_id or tzlocal.get_localzone_name()
            if tz_name in self._timezone_map:
                return self._timezone_map[tz_name]
        except Exception as e:
            logger.warning("Could not determine locale from timezone: %s", e)
        return None

    def detect_system_locale(self) -> str:
        """
        Detect the system's current locale.

        Returns:
            str: Detected locale id or ``DEFAULT_LOCALE`` as fallback
        """
        if self._system_locale:
            return self._system_locale

        detected = None

        # Method 1: Python locale module
        try:
            system_locale = locale.getlocale(locale.LC_TIME)[0] or locale.getlocale()[0]
            if system_locale:
                detected = self.normalize_locale(system_locale)
        except (ValueError, TypeError) as e:
            logger.debug("locale module gave no usable locale: %s", e)

        # Method 2: Timezone detection
        if not detected:
            detected = self.get_locale_from_timezone()

        # Method 3: Environment variables
        if not detected:
            for env_var in self.ENV_VARS:
                env_locale = os.environ.get(env_var)
                if env_locale:
                    detected = self.normalize_locale(env_locale.split(":")[0])
                    if detected:
                        break

        self._system_locale = detected or self.DEFAULT_LOCALE
        logger.debug("Detected system locale %s", self._system_locale)
        return self._system_locale

    def normalize_locale(self, locale_str: Optional[str]) -> Optional[str]:
        """
        Normalize a raw locale string to a BCP-47 id.

        ``en_GB.UTF-8`` and ``en-gb`` both become ``en-GB``. The ``C`` and
        ``POSIX`` pseudo locales carry no language and yield None.

        Args:
            locale_str: Raw locale string

        Returns:
            Optional[str]: Normalized locale id
        """
        if not locale_str:
            return None

        # Remove encoding and other suffixes
        locale_str = locale_str.split(".")[0].split("@")[0].strip()
        if not locale_str or locale_str.upper() in ("C", "POSIX"):
            return None

        parts = locale_str.replace("_", "-").split("-")
        lang = parts[0].lower()
        if not lang.isalpha():
            return None
        if len(parts) >= 2 and parts[1]:
            region = parts[1]
            # Two letter regions are upper case, scripts (Hant) are title case
            region = region.upper() if len(region) == 2 else region.title()
            return f"{lang}-{region}"
        return lang


# Global instance
_detector = LocaleDetector()


def detect_locale() -> str:
    """Global function returning the platform locale id."""
    return _detector.detect_system_locale()
