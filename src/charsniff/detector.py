"""Diacritic-frequency charset detector.

Each candidate encoding registered for a locale gets a strict decode of the
whole buffer. Successful decodes are scored by how many of the locale's
diacritics appear in the text; the highest score wins, ties go to the
earliest candidate, and a best score of zero falls back to the default.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from charsniff.registry import EncodingRegistry

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"


@dataclass(frozen=True)
class CandidateScore:
    encoding: str
    score: int
    decoded: bool


def count_matches(matcher: re.Pattern[str], text: str) -> int:
    """Count matches, restarting one position past each match start.

    Back-to-back and overlapping matches are each counted ("xx" over [x] is 2).
    """
    count = 0
    pos = 0
    while True:
        match = matcher.search(text, pos)
        if match is None:
            return count
        count += 1
        pos = match.start() + 1


class Detector:
    def __init__(
        self, default_encoding: str = DEFAULT_ENCODING, registry: EncodingRegistry | None = None
    ) -> None:
        self.default_encoding = default_encoding
        self.registry = registry if registry is not None else EncodingRegistry()

    def score(self, locale: str, data: bytes) -> list[CandidateScore]:
        """Score every candidate for ``locale`` in registration order."""
        candidates = self.registry.candidates_for(locale)
        matcher = self.registry.matcher_for(locale)

        scores: list[CandidateScore] = []
        for encoding in candidates:
            try:
                text = bytes(data).decode(encoding, errors="strict")
            except UnicodeError:
                scores.append(CandidateScore(encoding, 0, False))
                logger.debug("%s: %s failed to decode", locale, encoding)
                continue
            except LookupError:
                logger.warning("%s: unknown encoding %r scored as 0", locale, encoding)
                scores.append(CandidateScore(encoding, 0, False))
                continue
            hits = count_matches(matcher, text)
            logger.debug("%s: %s scored %d", locale, encoding, hits)
            scores.append(CandidateScore(encoding, hits, True))
        return scores

    def choose(self, scores: Iterable[CandidateScore]) -> str:
        """Pick the first top-scoring encoding, or the default when nothing scored."""
        best: CandidateScore | None = None
        for candidate in scores:
            if best is None or candidate.score > best.score:
                best = candidate
        if best is None or best.score <= 0:
            return self.default_encoding
        return best.encoding

    def detect(self, locale: str, data: bytes) -> str:
        """Return the best-scoring candidate encoding, or the default when none scores."""
        return self.choose(self.score(locale, data))

    def add_candidates_for_locale(self, locale: str, encodings: Iterable[str]) -> None:
        self.registry.register_candidates(locale, encodings)

    def add_diacritics_for_locale(self, locale: str, characters: Iterable[str]) -> None:
        self.registry.register_diacritics(locale, characters)


def new_detector(default_encoding: str = DEFAULT_ENCODING) -> Detector:
    """Build a detector with its own registry seeded with the Polish locale."""
    return Detector(default_encoding)
