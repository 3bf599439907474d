"""JSONL run log for round-trip evaluations."""

from __future__ import annotations

from pathlib import Path

import orjson

from charsniff.eval.harness import EvalSummary


def append_run(path: Path, summary: EvalSummary, tag: str | None = None) -> None:
    """Append one evaluation as a JSON line, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("ab") as f:
        f.write(orjson.dumps({"tag": tag or "", "evaluation": summary}) + b"\n")


def summarize_log(path: Path) -> dict[str, object]:
    """Average accuracy overall and per locale across logged runs."""
    per_locale: dict[str, list[float]] = {}
    samples_total = 0
    for line in path.read_bytes().splitlines():
        if not line.strip():
            continue
        evaluation = orjson.loads(line).get("evaluation") or {}
        if "accuracy" not in evaluation:
            continue
        per_locale.setdefault(evaluation.get("locale", ""), []).append(evaluation["accuracy"])
        samples_total += len(evaluation.get("samples") or [])

    accuracies = [a for values in per_locale.values() for a in values]
    return {
        "entries": len(accuracies),
        "samples_total": samples_total,
        "average_accuracy": round(sum(accuracies) / len(accuracies), 4) if accuracies else 0.0,
        "locales": {k: round(sum(v) / len(v), 4) for k, v in per_locale.items()},
    }
