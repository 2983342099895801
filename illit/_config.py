"""
Konfiguracja illit - wartości domyślne, zmienne środowiskowe, tabela book.toml.

Kolejność (późniejsze wygrywa):
  domyślne → ILLIT_* ze środowiska → [preprocessor.<nazwa>] z book.toml → flagi CLI
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from rust_parser.config import EngineConfig


@dataclass(frozen=True, slots=True)
class BookSettings:
    engine: EngineConfig = field(default_factory=EngineConfig)
    extensions: tuple[str, ...] = (".rs",)


def load_settings(table: Mapping[str, Any] | None = None) -> BookSettings:
    table = table or {}

    language   = os.getenv("ILLIT_LANGUAGE",   "rust")
    qualifier  = os.getenv("ILLIT_QUALIFIER",  "ignore")
    wrapper    = os.getenv("ILLIT_WRAPPER",    "body")
    extensions = os.getenv("ILLIT_EXTENSIONS", ".rs")

    language  = str(table.get("language",  language))
    qualifier = str(table.get("qualifier", qualifier))
    wrapper   = str(table.get("wrapper",   wrapper))
    ext_value = table.get("extensions", extensions)

    return BookSettings(
        engine=EngineConfig(language=language, qualifier=qualifier, wrapper_name=wrapper),
        extensions=parse_extensions(ext_value),
    )


def override_settings(
    settings: BookSettings,
    language: str | None = None,
    qualifier: str | None = None,
    wrapper: str | None = None,
    extensions: str | None = None,
) -> BookSettings:
    """Nakłada flagi CLI (None = bez zmian)."""
    engine = settings.engine
    if language is not None:
        engine = replace(engine, language=language)
    if qualifier is not None:
        engine = replace(engine, qualifier=qualifier)
    if wrapper is not None:
        engine = replace(engine, wrapper_name=wrapper)
    exts = parse_extensions(extensions) if extensions is not None else settings.extensions
    return BookSettings(engine=engine, extensions=exts)


def parse_extensions(value: str | list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """".rs, rs,.RS" → (".rs",) - kropka na początku, małe litery, bez duplikatów."""
    items = value.split(",") if isinstance(value, str) else list(value)
    result: list[str] = []
    for item in items:
        ext = str(item).strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in result:
            result.append(ext)
    return tuple(result)
