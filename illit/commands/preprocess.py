"""Komenda: illit preprocess - preprocesor mdBook (book.toml: command = "illit preprocess")."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.markup import escape

from book.preprocessor import (
    parse_input,
    preprocessor_table,
    process_book,
    version_warning,
)
from illit._config import load_settings

# stdout należy do mdBooka - wszystko dla człowieka idzie na stderr
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def run(args: argparse.Namespace) -> None:
    if args.action == "supports":
        # Każdy renderer dostaje zwykły Markdown.
        raise SystemExit(0)
    if args.action is not None:
        console.print(f"[red]Nieznana akcja:[/red] {args.action}")
        raise SystemExit(1)

    try:
        context, book = parse_input(sys.stdin)
    except (json.JSONDecodeError, ValueError) as e:
        console.print(f"[red]Błąd wejścia mdBook:[/red] {e}")
        raise SystemExit(1)

    warning = version_warning(context)
    if warning:
        logger.warning(warning)

    settings = load_settings(preprocessor_table(context, args.name))
    new_book, diagnostics = process_book(book, settings.engine, settings.extensions)

    if diagnostics:
        for diag in diagnostics:
            console.print(f"[red]Błąd:[/red] {escape(str(diag))}")
        console.print(f"[red]Nieudane rozdziały:[/red] {len(diagnostics)}")
        raise SystemExit(1)

    json.dump(new_book, sys.stdout, ensure_ascii=False)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "preprocess",
        help="Preprocesor mdBook: konwertuje rozdziały .rs na Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Preprocesor mdBook. W book.toml:

  [preprocessor.illit]
  command = "illit preprocess"
  # opcjonalnie: language, qualifier, wrapper, extensions

mdBook najpierw pyta `illit preprocess supports <renderer>`, potem
przekazuje [context, book] na stdin i czyta książkę ze stdout.
        """,
    )
    p.add_argument(
        "action",
        nargs="?",
        default=None,
        metavar="supports",
        help="Zapytanie mdBook o obsługę renderera.",
    )
    p.add_argument(
        "renderer",
        nargs="?",
        default=None,
        help="Nazwa renderera (każdy jest obsługiwany).",
    )
    p.add_argument(
        "--name",
        default="illit",
        help="Nazwa tabeli [preprocessor.<name>] w book.toml (domyślnie: illit).",
    )
    p.set_defaults(func=run)
