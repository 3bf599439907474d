"""Round-trip evaluation for the diacritic detector.

Purpose:
- Check that a locale's configuration actually separates its candidates.
- Encode a sample text under each encoding, detect it back, and summarize
  how often the detector recovers the encoding that produced the bytes.
"""

from __future__ import annotations

import codecs
from collections.abc import Sequence
from dataclasses import dataclass

from charsniff.detector import CandidateScore, Detector


@dataclass
class SampleEval:
    expected: str
    detected: str
    correct: bool
    scores: list[CandidateScore]


@dataclass
class EvalSummary:
    locale: str
    samples: list[SampleEval]
    accuracy: float
    skipped: list[str]
    notes: str


def _same_codec(left: str, right: str) -> bool:
    try:
        return codecs.lookup(left).name == codecs.lookup(right).name
    except LookupError:
        return left == right


def evaluate_text(
    detector: Detector, locale: str, text: str, encodings: Sequence[str] | None = None
) -> EvalSummary:
    """Encode ``text`` under each encoding and detect it back."""
    pages = list(encodings) if encodings else list(detector.registry.candidates_for(locale))
    samples: list[SampleEval] = []
    skipped: list[str] = []

    for page in pages:
        try:
            data = text.encode(page)
        except (UnicodeError, LookupError):
            skipped.append(page)  # text not representable or codec missing
            continue
        scores = detector.score(locale, data)
        detected = detector.choose(scores)
        samples.append(
            SampleEval(
                expected=page,
                detected=detected,
                correct=_same_codec(detected, page),
                scores=scores,
            )
        )

    accuracy = sum(1 for s in samples if s.correct) / len(samples) if samples else 0.0
    return EvalSummary(
        locale=locale,
        samples=samples,
        accuracy=round(accuracy, 4),
        skipped=skipped,
        notes="round-trip over registered candidates" if not encodings else "custom encodings",
    )
