import logging
from pathlib import Path

import orjson
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from charsniff.detector import DEFAULT_ENCODING, Detector
from charsniff.eval.harness import evaluate_text
from charsniff.eval.report import append_run, summarize_log
from charsniff.profiles import apply_profiles, load_profiles, sample_profiles
from charsniff.registry import UnregisteredLocaleError

app = typer.Typer(help="Guess the charset of a byte buffer from a locale's diacritics.")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-candidate scores."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _emit(payload: object) -> None:
    console.print(
        orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode(),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _read_bytes(path: Path) -> bytes:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path.read_bytes()


def _build_detector(default: str | None, profiles: Path | None) -> Detector:
    profile_set = None
    if profiles:
        if not profiles.is_file():
            raise typer.BadParameter(f"Profile file not found: {profiles}")
        try:
            profile_set = load_profiles(profiles)
        except (ValueError, yaml.YAMLError) as exc:
            raise typer.BadParameter(f"Invalid profile file {profiles}: {exc}") from exc
    fallback = default or (profile_set and profile_set.default_encoding) or DEFAULT_ENCODING
    detector = Detector(fallback)
    if profile_set:
        apply_profiles(detector, profile_set)
    return detector


@app.command()
def detect(
    input: Path = typer.Argument(..., help="File whose charset should be guessed."),
    locale: str = typer.Option("pl-PL", "--locale", "-l", help="Locale key, matched exactly."),
    default: str | None = typer.Option(
        None, "--default", "-d", help=f"Fallback encoding (default {DEFAULT_ENCODING})."
    ),
    profiles: Path | None = typer.Option(
        None, "--profiles", "-p", help="YAML/JSON file registering extra locales."
    ),
    scores: bool = typer.Option(False, "--scores", help="Include per-candidate scores."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Optional path for JSON."),
) -> None:
    """Detect the charset of INPUT for the given locale."""
    detector = _build_detector(default, profiles)
    data = _read_bytes(input)
    try:
        candidate_scores = detector.score(locale, data)
    except UnregisteredLocaleError as exc:
        raise typer.BadParameter(str(exc)) from exc

    payload: dict[str, object] = {
        "input": str(input),
        "bytes": len(data),
        "locale": locale,
        "encoding": detector.choose(candidate_scores),
        "fallback": all(c.score <= 0 for c in candidate_scores),
    }
    if scores:
        payload["scores"] = candidate_scores

    if output:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote detection[/] to {output}")
    else:
        _emit(payload)


@app.command()
def locales(
    profiles: Path | None = typer.Option(
        None, "--profiles", "-p", help="YAML/JSON file registering extra locales."
    ),
) -> None:
    """List registered locales with their candidates and diacritics."""
    detector = _build_detector(None, profiles)
    table = Table(title=f"Registered locales (fallback {detector.default_encoding})")
    table.add_column("Locale")
    table.add_column("Candidates")
    table.add_column("Diacritics")
    for key in detector.registry.locales():
        table.add_row(
            key,
            ", ".join(detector.registry.candidates_for(key)),
            Text(detector.registry.matcher_for(key).pattern),
        )
    console.print(table)


@app.command("eval")
def eval_text(
    text: str = typer.Argument(..., help="Sample text to encode and detect back."),
    locale: str = typer.Option("pl-PL", "--locale", "-l", help="Locale key, matched exactly."),
    encodings: list[str] | None = typer.Option(
        None, "--encoding", "-e", help="Encodings to try (repeatable); defaults to candidates."
    ),
    profiles: Path | None = typer.Option(
        None, "--profiles", "-p", help="YAML/JSON file registering extra locales."
    ),
    log_jsonl: Path | None = typer.Option(
        None, "--log-jsonl", help="Append full payload as JSONL for trend tracking."
    ),
    tag: str | None = typer.Option(None, "--tag", help="Optional tag to mark this run."),
) -> None:
    """Round-trip TEXT through each encoding and report detection accuracy."""
    detector = _build_detector(None, profiles)
    try:
        summary = evaluate_text(detector, locale, text, encodings=encodings)
    except UnregisteredLocaleError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if log_jsonl:
        append_run(log_jsonl, summary, tag=tag)
        console.print(f"[bold green]Appended JSONL log[/] to {log_jsonl}")

    _emit(summary)


@app.command("eval-summarize")
def eval_summarize(
    log: Path = typer.Argument(..., help="JSONL log file written by eval --log-jsonl."),
) -> None:
    """Summarize a JSONL log written by eval."""
    if not log.is_file():
        raise typer.BadParameter(f"Log file not found: {log}")
    _emit(summarize_log(log))


@app.command()
def init(
    output: Path = typer.Argument(..., help="Where to write a sample profile file."),
) -> None:
    """Write a sample locale profile file (YAML for .yml/.yaml, JSON otherwise)."""
    payload = sample_profiles()
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() in {".yml", ".yaml"}:
        output.write_text(yaml.safe_dump(payload, allow_unicode=True, sort_keys=False), "utf-8")
    else:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    console.print(f"[bold green]Wrote sample profiles[/] to {output}")


if __name__ == "__main__":
    app()
