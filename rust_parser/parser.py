"""
rust_parser/parser.py - konwersja pliku źródłowego Rust do dokumentu Markdown.

Architektura:
  tekst → scan_source() → ClassifiedLine (PROSE | CODE | WRAPPER | BLANK)
  → group_runs() → Run
  → strip_wrappers() → Run bez rusztowań
  → normalize_prose() / emit_code() → ProseBlock | CodeBlock
  → assemble_document() → tekst Markdown

Konwersja jest czystą funkcją tekstu wejściowego: brak stanu współdzielonego
między wywołaniami, ten sam tekst daje zawsze te same bajty wyniku.

Kluczowe funkcje publiczne:
  convert_source(text, path, config)    -> str
  convert_to_blocks(text, path, config) -> Document
"""

from __future__ import annotations

import logging

from data_model.blocks import Document
from data_model.lines import LineKind
from rust_parser.assembler import assemble_document
from rust_parser.code import emit_code
from rust_parser.config import EngineConfig
from rust_parser.grouper import group_runs
from rust_parser.prose import normalize_prose
from rust_parser.scanner import scan_source
from rust_parser.stripper import strip_wrappers

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = EngineConfig()


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def convert_source(
    text: str,
    path: str | None = None,
    config: EngineConfig | None = None,
) -> str:
    """
    Konwertuje tekst pliku .rs na dokument Markdown.

    Args:
        text:   Pełny tekst pliku (UTF-8).
        path:   Ścieżka pliku, tylko do komunikatów błędów.
        config: Parametry silnika (język, kwalifikator, rusztowanie).

    Raises:
        ParseError, StructuralError - plik nie zostaje skonwertowany.
    """
    return assemble_document(convert_to_blocks(text, path, config))


def convert_to_blocks(
    text: str,
    path: str | None = None,
    config: EngineConfig | None = None,
) -> Document:
    config = config or _DEFAULT_CONFIG

    # Krok 1: klasyfikacja linii
    lines = scan_source(text, config.wrapper_matcher(), path)

    # Krok 2: przebiegi
    runs = group_runs(lines)

    # Krok 3: usunięcie rusztowania
    runs = strip_wrappers(runs, path)

    # Krok 4: bloki dokumentu
    blocks: Document = []
    for run in runs:
        if run.kind is LineKind.PROSE:
            prose = normalize_prose(run)
            if prose.text.strip():
                blocks.append(prose)
        elif run.kind is LineKind.CODE:
            code = emit_code(run, config)
            if code is not None:
                blocks.append(code)

    logger.debug(
        "%s: %d linii, %d przebiegów, %d bloków",
        path or "<source>", len(lines), len(runs), len(blocks),
    )
    return blocks
