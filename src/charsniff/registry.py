"""Per-locale registry of candidate encodings and diacritic matchers.

A locale counts as registered only once it has both a candidate list and a
matcher. Values are stored as tuples and compiled patterns so readers never
see a half-built entry; writers take a lock.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable

logger = logging.getLogger(__name__)

POLISH_LOCALE = "pl-PL"
POLISH_CANDIDATES: tuple[str, ...] = ("UTF-8", "ISO-8859-2", "WINDOWS-1250")
POLISH_DIACRITICS = (
    "ąćęłńóśźż"
    "ĄĆĘŁŃÓŚŹŻ"
)


class UnregisteredLocaleError(LookupError):
    """Raised when a locale lacks candidates and/or a diacritic matcher."""

    def __init__(self, locale: str) -> None:
        super().__init__(f"Locale {locale!r} is not registered")
        self.locale = locale


def compile_diacritics(characters: Iterable[str]) -> re.Pattern[str]:
    """Build a character class that matches any of the given literal characters."""
    chars = "".join(dict.fromkeys("".join(characters)))
    if not chars:
        raise ValueError("Diacritic set must contain at least one character")
    return re.compile("[" + "".join(re.escape(ch) for ch in chars) + "]")


class EncodingRegistry:
    def __init__(self, seed: bool = True) -> None:
        self._candidates: dict[str, tuple[str, ...]] = {}
        self._matchers: dict[str, re.Pattern[str]] = {}
        self._lock = threading.Lock()
        if seed:
            self.register_candidates(POLISH_LOCALE, POLISH_CANDIDATES)
            self.register_diacritics(POLISH_LOCALE, POLISH_DIACRITICS)

    def register_candidates(self, locale: str, encodings: Iterable[str]) -> None:
        candidates = tuple(encodings)
        if not candidates:
            raise ValueError(f"Candidate list for locale {locale!r} must not be empty")
        with self._lock:
            self._candidates[locale] = candidates
        logger.debug("Registered candidates for %s: %s", locale, ", ".join(candidates))

    def register_diacritics(self, locale: str, characters: Iterable[str]) -> None:
        matcher = compile_diacritics(characters)
        with self._lock:
            self._matchers[locale] = matcher
        logger.debug("Registered diacritics for %s: %s", locale, matcher.pattern)

    def is_registered(self, locale: str) -> bool:
        return locale in self._candidates and locale in self._matchers

    def candidates_for(self, locale: str) -> tuple[str, ...]:
        if not self.is_registered(locale):
            raise UnregisteredLocaleError(locale)
        return self._candidates[locale]

    def matcher_for(self, locale: str) -> re.Pattern[str]:
        if not self.is_registered(locale):
            raise UnregisteredLocaleError(locale)
        return self._matchers[locale]

    def locales(self) -> list[str]:
        """Registered locales, in first-registration order."""
        with self._lock:
            return [locale for locale in self._candidates if locale in self._matchers]
