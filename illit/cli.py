"""
illit - narzędzie CLI do "nieliterackiego" programowania w Rust.

Rozdziały książki są zwykłymi plikami .rs: komentarze zamieniane są na prozę
Markdown, kod trafia do bloków ```rust,ignore```.

Użycie:
  illit <komenda> [opcje]

Komendy:
  convert      Konwertuje pliki .rs (lub katalogi) do Markdown.
  preprocess   Preprocesor mdBook (book.toml: command = "illit preprocess").
  scan         Pokazuje klasy linii i przebiegi pliku.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252 - wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from illit._log import setup_logging
from illit.commands import convert as cmd_convert
from illit.commands import preprocess as cmd_preprocess
from illit.commands import scan as cmd_scan


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="illit",
        description="illit - rozdziały mdBook pisane jako pliki Rust.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="illit 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Logowanie na poziomie DEBUG (stderr).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_convert.add_parser(subparsers)
    cmd_preprocess.add_parser(subparsers)
    cmd_scan.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
