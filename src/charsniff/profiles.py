from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from charsniff.detector import Detector
from charsniff.registry import POLISH_CANDIDATES, POLISH_DIACRITICS, POLISH_LOCALE


def _string_list(locale: str, key: str, value: Any) -> list[str]:
    """Accept a string or a list of strings; reject anything else or an empty value."""
    if isinstance(value, str):
        value = [value] if value else []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(
            f"Profile for locale {locale!r}: '{key}' must be a string or a list of strings"
        )
    if not value:
        raise ValueError(f"Profile for locale {locale!r} has no {key}")
    return value


@dataclass
class LocaleProfile:
    locale: str
    candidates: list[str]
    diacritics: str

    @staticmethod
    def from_mapping(locale: str, payload: Any) -> LocaleProfile:
        if not isinstance(payload, dict):
            raise ValueError(f"Profile for locale {locale!r} must be a mapping")
        for key in ("candidates", "diacritics"):
            if key not in payload:
                raise ValueError(f"Profile for locale {locale!r} is missing '{key}'")
        candidates = _string_list(locale, "candidates", payload["candidates"])
        diacritics = "".join(_string_list(locale, "diacritics", payload["diacritics"]))
        return LocaleProfile(locale=str(locale), candidates=candidates, diacritics=diacritics)


@dataclass
class ProfileSet:
    default_encoding: str | None = None
    profiles: list[LocaleProfile] = field(default_factory=list)

    @staticmethod
    def from_mapping(payload: Any) -> ProfileSet:
        if payload is None:
            return ProfileSet()
        if not isinstance(payload, dict):
            raise ValueError("Profile file must contain a mapping at the top level")
        locales = payload.get("locales") or {}
        if not isinstance(locales, dict):
            raise ValueError("'locales' must map locale keys to profiles")
        default = payload.get("default_encoding")
        return ProfileSet(
            default_encoding=str(default) if default else None,
            profiles=[LocaleProfile.from_mapping(k, v) for k, v in locales.items()],
        )


def load_profiles(path: Path) -> ProfileSet:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(text)
    else:
        payload = json.loads(text)
    return ProfileSet.from_mapping(payload)


def apply_profiles(detector: Detector, profiles: ProfileSet) -> Detector:
    """Register every profile on ``detector``; later entries overwrite earlier ones."""
    for profile in profiles.profiles:
        detector.add_candidates_for_locale(profile.locale, profile.candidates)
        detector.add_diacritics_for_locale(profile.locale, profile.diacritics)
    return detector


def sample_profiles() -> dict[str, Any]:
    return {
        "default_encoding": "UTF-8",
        "locales": {
            POLISH_LOCALE: {
                "candidates": list(POLISH_CANDIDATES),
                "diacritics": POLISH_DIACRITICS,
            },
            "el-GR": {
                "candidates": ["UTF-8", "ISO-8859-7"],
                "diacritics": "άέήίόύώΆΈΉΊΌΎΏϊϋΐΰΪΫ",
            },
        },
    }
