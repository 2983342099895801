"""Komenda: illit scan - podgląd klasyfikacji linii i przebiegów pliku."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model.lines import LineKind, LineSeq, RunSeq
from illit._config import load_settings, override_settings
from rust_parser import ConversionError, group_runs, scan_source

console = Console()

_KIND_STYLE: dict[LineKind, str] = {
    LineKind.PROSE:   "green",
    LineKind.CODE:    "cyan",
    LineKind.WRAPPER: "magenta",
    LineKind.BLANK:   "dim",
}


def _show_lines(lines: LineSeq) -> None:
    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", expand=False)
    table.add_column("#",      justify="right", no_wrap=True, style="dim")
    table.add_column("KLASA",  no_wrap=True)
    table.add_column("TREŚĆ",  no_wrap=False, max_width=90)

    for cl in lines:
        style = _KIND_STYLE[cl.kind]
        label = f"{cl.kind}:{cl.edge}" if cl.edge else str(cl.kind)
        content = cl.payload if cl.kind is LineKind.PROSE else cl.text
        table.add_row(str(cl.index + 1), f"[{style}]{label}[/{style}]", escape(content))

    console.print(table)


def _show_runs(runs: RunSeq) -> None:
    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", expand=False)
    table.add_column("KLASA",  no_wrap=True)
    table.add_column("LINIE",  justify="center", no_wrap=True)
    table.add_column("LEN",    justify="right", no_wrap=True)

    for run in runs:
        style = _KIND_STYLE[run.kind]
        lines = (
            str(run.start + 1)
            if run.start == run.end
            else f"{run.start + 1}–{run.end + 1}"
        )
        table.add_row(f"[{style}]{run.kind}[/{style}]", lines, str(len(run.lines)))

    console.print(table)
    console.print(f"  [dim]{len(runs)} przebiegów[/dim]\n")


def run(args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.is_file():
        console.print(f"[red]Plik nie istnieje:[/red] {escape(str(path))}")
        raise SystemExit(1)

    settings = override_settings(load_settings(), wrapper=args.wrapper)
    text = path.read_text(encoding="utf-8")

    try:
        lines = scan_source(text, settings.engine.wrapper_matcher(), str(path))
    except ConversionError as e:
        console.print(f"[red]Błąd skanera:[/red] {escape(str(e.diagnostic()))}")
        raise SystemExit(1)

    _show_lines(lines)
    _show_runs(group_runs(lines))


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "scan",
        help="Pokazuje klasy linii i przebiegi pliku (diagnostyka).",
    )
    p.add_argument("file", metavar="PLIK.rs", help="Ścieżka do pliku źródłowego.")
    p.add_argument("--wrapper", default=None, help='Nazwa funkcji-rusztowania (domyślnie: "body").')
    p.set_defaults(func=run)
