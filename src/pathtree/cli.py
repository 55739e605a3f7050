from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .builders import ArtifactService
from .config import Settings
from .errors import ExtractionError, UpstreamError
from .extraction import guess_media_type, ingest
from .generation import build_client
from .models import ExtractedDocument, SummaryKind
from .structured import ParseOutcome
from .study import filter_by_difficulty, shuffle_deck, summary_text
from .visualize import render_graph

app = typer.Typer(help="Turn study documents into knowledge graphs, summaries, flashcards and tutor answers")
console = Console()


class DifficultyChoice(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except (ExtractionError, UpstreamError) as exc:
        console.print(f"[red]{escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _load_document(path: Path, media_type: str | None) -> ExtractedDocument:
    with _reported_errors():
        return ingest(path.read_bytes(), media_type or guess_media_type(path))


def _service() -> ArtifactService:
    try:
        return ArtifactService(build_client(Settings()))
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _emit(value: Any, out_file: Path | None) -> None:
    data = json.dumps(_to_jsonable(value), ensure_ascii=False, indent=2)
    if out_file is None:
        console.print_json(data)
        return
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(data + "\n", encoding="utf-8")
    console.print(f"[green]Wrote {out_file}")


def _report(outcome: ParseOutcome[Any]) -> None:
    if outcome.used_fallback:
        console.print(f"[yellow]Generated output was unusable, built a fallback instead ({escape(outcome.reason)})")


@app.command("index")
def index_command(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to index"),
    media_type: str | None = typer.Option(None, help="Override the media type guessed from the file name"),
    out_file: Path | None = typer.Option(None, "--out", help="Write the extracted document as JSON"),
) -> None:
    document = _load_document(source, media_type)

    table = Table(title=f"Index of {source.name}")
    table.add_column("Kind")
    table.add_column("Count", justify="right")
    table.add_column("First entries")
    for kind, values in (
        ("Topics", document.topics),
        ("Sections", document.sections),
        ("Concepts", document.concepts),
    ):
        table.add_row(kind, str(len(values)), ", ".join(values[:5]))
    console.print(table)

    if out_file is not None:
        _emit(document, out_file)


@app.command()
def graph(
    source: Path = typer.Argument(..., exists=True, dir_okay=False),
    media_type: str | None = typer.Option(None),
    out_file: Path | None = typer.Option(None, "--out", help="Write the graph as JSON"),
    out_html: Path | None = typer.Option(None, "--html", help="Render the graph as interactive HTML"),
) -> None:
    document = _load_document(source, media_type)
    service = _service()
    with _reported_errors():
        outcome = service.build_graph(document)
    _report(outcome)

    _emit(outcome.value, out_file)
    if out_html is not None:
        console.print(f"[green]Graph view: {render_graph(outcome.value, out_html)}")


@app.command()
def summary(
    source: Path = typer.Argument(..., exists=True, dir_okay=False),
    kind: SummaryKind = typer.Option(SummaryKind.ONE_PAGE, help="Summary length / layout"),
    media_type: str | None = typer.Option(None),
    out_file: Path | None = typer.Option(None, "--out", help="Export the summary as plain text"),
) -> None:
    document = _load_document(source, media_type)
    service = _service()
    with _reported_errors():
        outcome = service.build_summary(document, kind)
    _report(outcome)

    text = summary_text(outcome.value)
    if out_file is None:
        console.print(text)
        return
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(text, encoding="utf-8")
    console.print(f"[green]Wrote {out_file}")


@app.command()
def flashcards(
    source: Path = typer.Argument(..., exists=True, dir_okay=False),
    difficulty: DifficultyChoice | None = typer.Option(None, help="Only keep cards of this difficulty"),
    shuffle: bool = typer.Option(False, help="Shuffle the selected cards"),
    seed: int | None = typer.Option(None, help="Seed for a reproducible shuffle"),
    media_type: str | None = typer.Option(None),
    out_file: Path | None = typer.Option(None, "--out"),
) -> None:
    document = _load_document(source, media_type)
    service = _service()
    with _reported_errors():
        outcome = service.build_flashcards(document)
    _report(outcome)

    level = difficulty.value if difficulty is not None else None
    cards = outcome.value
    if shuffle:
        cards = shuffle_deck(cards, level, seed)
    _emit(filter_by_difficulty(cards, level), out_file)


@app.command()
def details(
    source: Path = typer.Argument(..., exists=True, dir_okay=False),
    node: str = typer.Option(..., help="Title of the graph node to explain"),
    media_type: str | None = typer.Option(None),
    out_file: Path | None = typer.Option(None, "--out"),
) -> None:
    document = _load_document(source, media_type)
    service = _service()
    with _reported_errors():
        outcome = service.build_node_details(node, document)
    _report(outcome)
    _emit(outcome.value, out_file)


@app.command()
def tutor(
    source: Path = typer.Argument(..., exists=True, dir_okay=False),
    question: str = typer.Option(..., help="Question to ask about the document"),
    media_type: str | None = typer.Option(None),
    out_file: Path | None = typer.Option(None, "--out"),
) -> None:
    document = _load_document(source, media_type)
    service = _service()
    with _reported_errors():
        outcome = service.build_tutor_answer(question, document)
    _report(outcome)
    _emit(outcome.value, out_file)


if __name__ == "__main__":
    app()
