"""Komenda: illit convert - konwersja plików .rs do Markdown poza mdBookiem."""

from __future__ import annotations

import argparse
import os
import shutil
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from book.files import FileResult, SourceFile, convert_many, output_path, select_files
from illit._config import load_settings, override_settings

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Zapis wyników
# ---------------------------------------------------------------------------

def _write_result(result: FileResult, out_dir: Path | None) -> Path:
    target = output_path(result.source, out_dir)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(result.output or "", encoding="utf-8")
    return target


def _copy_passthrough(source: SourceFile, out_dir: Path) -> Path:
    target = output_path(source, out_dir)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source.path, target)
    return target


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(rows: list[tuple[str, str, str]]) -> None:
    if not rows:
        console.print("[yellow]Brak plików.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("STATUS", no_wrap=True)
    table.add_column("PLIK",   no_wrap=True, style="bold cyan")
    table.add_column("WYNIK",  no_wrap=False, max_width=70)

    for status, path, detail in rows:
        table.add_row(status, escape(path), escape(detail))

    console.print()
    console.print(table)


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    paths = [Path(p) for p in args.paths]
    missing = [p for p in paths if not p.exists()]
    if missing:
        for p in missing:
            err_console.print(f"[red]Plik nie istnieje:[/red] {escape(str(p))}")
        raise SystemExit(1)

    settings = override_settings(
        load_settings(),
        language=args.language,
        qualifier=args.qualifier,
        wrapper=args.wrapper,
        extensions=args.ext,
    )
    out_dir = Path(args.out_dir) if args.out_dir else None
    sources = select_files(paths, settings.extensions)

    # Pojedynczy plik bez --out-dir → dokument na stdout.
    single = len(paths) == 1 and paths[0].is_file() and out_dir is None
    if single and not sources[0].convert:
        err_console.print(
            f"[red]Plik nie ma rozszerzenia {', '.join(settings.extensions)}:[/red] "
            f"{escape(str(paths[0]))}"
        )
        raise SystemExit(1)

    results = convert_many(sources, settings.engine, jobs=args.jobs)
    failed = [r for r in results if not r.ok]

    if single:
        result = results[0]
        if failed:
            err_console.print(f"[red]Błąd:[/red] {escape(_describe_failure(result))}")
            raise SystemExit(1)
        sys.stdout.write(result.output or "")
        return

    rows: list[tuple[str, str, str]] = []
    for result in results:
        if result.ok:
            target = _write_result(result, out_dir)
            rows.append(("[green]ok[/green]", str(result.source.path), str(target)))
        else:
            rows.append(("[red]błąd[/red]", str(result.source.path), _describe_failure(result)))

    if out_dir is not None:
        for source in sources:
            if not source.convert:
                target = _copy_passthrough(source, out_dir)
                rows.append(("[dim]kopia[/dim]", str(source.path), str(target)))

    if args.show:
        _show_table(rows)

    converted = len(results) - len(failed)
    console.print(f"Skonwertowano [bold]{converted}[/bold] z {len(results)} plików.")

    if failed:
        for result in failed:
            err_console.print(f"[red]Błąd:[/red] {escape(_describe_failure(result))}")
        raise SystemExit(1)


def _describe_failure(result: FileResult) -> str:
    if result.diagnostic is not None:
        return str(result.diagnostic)
    return f"{result.source.path}: {result.error}"


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "convert",
        help="Konwertuje pliki .rs (lub katalogi) do Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Konwertuje pliki źródłowe do rozdziałów Markdown.

Przykłady:
  illit convert src/chapter1.rs                 # wynik na stdout
  illit convert src/ --out-dir build/md --show  # cały katalog, tabela wyników
  illit convert src/ --jobs 8 --ext .rs,.rs.in
        """,
    )
    p.add_argument(
        "paths",
        nargs="+",
        metavar="ŚCIEŻKA",
        help="Pliki lub katalogi (katalogi przechodzone rekurencyjnie).",
    )
    p.add_argument(
        "--out-dir",
        metavar="KATALOG",
        default=None,
        help="Katalog wyjściowy; pozostałe pliki są tam kopiowane bez zmian.",
    )
    p.add_argument(
        "--jobs", "-j",
        type=int,
        default=os.cpu_count() or 1,
        help="Liczba wątków konwersji (domyślnie: liczba CPU).",
    )
    p.add_argument("--language", default=None, help="Język w info-stringu bloku kodu.")
    p.add_argument("--qualifier", default=None, help='Kwalifikator bloku (domyślnie: "ignore").')
    p.add_argument("--wrapper", default=None, help='Nazwa funkcji-rusztowania (domyślnie: "body").')
    p.add_argument("--ext", default=None, help='Rozszerzenia po przecinku (domyślnie: ".rs").')
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę wyników w terminalu.",
    )
    p.set_defaults(func=run)
