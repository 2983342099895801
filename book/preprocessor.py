"""
book/preprocessor.py - integracja z mdBook (protokół preprocesora).

mdBook wywołuje preprocesor dwa razy:
  1. `<cmd> supports <renderer>`  → kod wyjścia 0 = renderer obsługiwany
  2. `<cmd>` z JSON-em [context, book] na stdin → książka JSON na stdout

Rozdziały, których `path` kończy się skonfigurowanym rozszerzeniem, dostają
nową treść z convert_source(). Pozostałe elementy książki (Separator,
PartTitle, rozdziały .md, szkice bez ścieżki) przechodzą bez zmian, tak
samo jak nieznane klucze JSON.

Kluczowe funkcje publiczne:
  parse_input(stream)                         -> (context, book)
  preprocessor_table(context, name)           -> dict
  version_warning(context)                    -> str | None
  process_book(book, config, extensions)      -> (book, diagnostics)
"""

from __future__ import annotations

import copy
import json
import logging
from typing import IO, Any, Iterator

from rust_parser import ConversionError, Diagnostic, EngineConfig, convert_source

logger = logging.getLogger(__name__)

# Wersja protokołu mdBook, pod którą pisany jest preprocesor (major.minor).
SUPPORTED_MDBOOK_VERSION = "0.4"


# ---------------------------------------------------------------------------
# Wejście
# ---------------------------------------------------------------------------

def parse_input(stream: IO[str]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Wczytuje parę [context, book] przekazaną przez mdBook."""
    data = json.load(stream)
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("Oczekiwano tablicy JSON [context, book] od mdBook.")
    context, book = data
    if not isinstance(context, dict) or not isinstance(book, dict):
        raise ValueError("Nieprawidłowy format [context, book] od mdBook.")
    return context, book


def preprocessor_table(context: dict[str, Any], name: str) -> dict[str, Any]:
    """Tabela [preprocessor.<name>] z book.toml (pusta gdy brak)."""
    table = context.get("config", {}).get("preprocessor", {}).get(name, {})
    return table if isinstance(table, dict) else {}


def version_warning(context: dict[str, Any]) -> str | None:
    version = str(context.get("mdbook_version", ""))
    major_minor = ".".join(version.split(".")[:2])
    if major_minor == SUPPORTED_MDBOOK_VERSION:
        return None
    return (
        f"Wersja mdBook ({version or '?'}) nie zgadza się z wersją preprocesora "
        f"({SUPPORTED_MDBOOK_VERSION}.x)"
    )


# ---------------------------------------------------------------------------
# Przetwarzanie książki
# ---------------------------------------------------------------------------

def process_book(
    book: dict[str, Any],
    config: EngineConfig,
    extensions: tuple[str, ...] = (".rs",),
) -> tuple[dict[str, Any], list[Diagnostic]]:
    """
    Zwraca głęboką kopię książki z przekonwertowanymi rozdziałami.

    Błąd w jednym rozdziale nie przerywa pozostałych; wszystkie diagnostyki
    trafiają do listy. Rozdział z błędem zachowuje oryginalną treść.
    """
    book = copy.deepcopy(book)
    diagnostics: list[Diagnostic] = []
    converted = 0

    for chapter in iter_chapters(book):
        path = chapter.get("path")
        if not isinstance(path, str) or not has_extension(path, extensions):
            continue
        try:
            chapter["content"] = convert_source(chapter.get("content") or "", path, config)
            converted += 1
        except ConversionError as exc:
            diagnostics.append(exc.diagnostic())

    logger.debug("mdbook: %d rozdziałów, %d błędów", converted, len(diagnostics))
    return book, diagnostics


def iter_chapters(book: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Rozdziały w kolejności książki (rekurencyjnie przez sub_items)."""
    # mdBook 0.4 używa "sections"; starsze wersje "items".
    for key in ("sections", "items"):
        yield from _walk(book.get(key) or [])


def _walk(items: list[Any]) -> Iterator[dict[str, Any]]:
    for item in items:
        if not isinstance(item, dict):
            continue  # "Separator"
        chapter = item.get("Chapter")
        if not isinstance(chapter, dict):
            continue  # PartTitle
        yield chapter
        yield from _walk(chapter.get("sub_items") or [])


def has_extension(path: str, extensions: tuple[str, ...]) -> bool:
    return path.lower().endswith(extensions)
