"""
book/files.py - wybór plików i wsadowa konwersja poza mdBookiem.

Katalogi przechodzimy rekurencyjnie (posortowane), pliki z pasującym
rozszerzeniem trafiają do silnika, pozostałe przechodzą bez zmian.
Każdy plik to niezależne wywołanie silnika, więc pula wątków nie wymaga
żadnej synchronizacji; wyniki wracają w kolejności ścieżek.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from book.preprocessor import has_extension
from rust_parser import ConversionError, Diagnostic, EngineConfig, convert_source


@dataclass(slots=True)
class SourceFile:
    path: Path        # ścieżka na dysku
    relative: Path    # ścieżka względem katalogu podanego w CLI
    convert: bool     # False → plik przechodzi bez zmian


@dataclass(slots=True)
class FileResult:
    source: SourceFile
    output: str | None = None
    diagnostic: Diagnostic | None = None
    error: str | None = None        # błąd wejścia/wyjścia lub kodowania

    @property
    def ok(self) -> bool:
        return self.diagnostic is None and self.error is None


def select_files(paths: list[Path], extensions: tuple[str, ...]) -> list[SourceFile]:
    selected: list[SourceFile] = []
    for root in paths:
        if root.is_dir():
            for path in sorted(p for p in root.rglob("*") if p.is_file()):
                selected.append(SourceFile(
                    path=path,
                    relative=path.relative_to(root),
                    convert=has_extension(path.name, extensions),
                ))
        else:
            selected.append(SourceFile(
                path=root,
                relative=Path(root.name),
                convert=has_extension(root.name, extensions),
            ))
    return selected


def convert_file(source: SourceFile, config: EngineConfig) -> FileResult:
    try:
        text = source.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return FileResult(source=source, error=str(exc))
    try:
        return FileResult(source=source, output=convert_source(text, str(source.path), config))
    except ConversionError as exc:
        return FileResult(source=source, diagnostic=exc.diagnostic())


def convert_many(
    sources: list[SourceFile],
    config: EngineConfig,
    jobs: int = 1,
) -> list[FileResult]:
    targets = [s for s in sources if s.convert]
    if jobs <= 1 or len(targets) <= 1:
        results = [convert_file(s, config) for s in targets]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            results = list(executor.map(lambda s: convert_file(s, config), targets))
    return sorted(results, key=lambda r: str(r.source.path))


def output_path(source: SourceFile, out_dir: Path | None) -> Path:
    """Cel zapisu: <nazwa>.md dla plików konwertowanych, ta sama nazwa dla reszty."""
    relative = source.relative.with_suffix(".md") if source.convert else source.relative
    if out_dir is None:
        return source.path.with_suffix(".md") if source.convert else source.path
    return out_dir / relative
