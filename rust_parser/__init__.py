"""
rust_parser - konwersja "nieliterackich" plików Rust do rozdziałów Markdown.

Komentarze zwykłe stają się prozą, pozostały kod trafia do bloków
```rust,ignore```, funkcja-rusztowanie `fn body() { ... }` znika.

Typowe użycie:
    from rust_parser import convert_source, ConversionError

    try:
        markdown = convert_source(path.read_text(encoding="utf-8"), str(path))
    except ConversionError as exc:
        print(exc.diagnostic())
"""

from .assembler import assemble_document
from .code import emit_code
from .config import EngineConfig
from .errors import ConversionError, Diagnostic, ErrorCode, ParseError, StructuralError
from .grouper import group_runs
from .parser import convert_source, convert_to_blocks
from .prose import normalize_prose
from .scanner import scan_source, split_lines
from .stripper import strip_wrappers
from .wrapper_patterns import WrapperMatcher, WrapperPattern, fn_wrapper

__all__ = [
    # potok
    "convert_source",
    "convert_to_blocks",
    "scan_source",
    "split_lines",
    "group_runs",
    "strip_wrappers",
    "normalize_prose",
    "emit_code",
    "assemble_document",
    # konfiguracja
    "EngineConfig",
    "WrapperMatcher",
    "WrapperPattern",
    "fn_wrapper",
    # błędy
    "ErrorCode",
    "Diagnostic",
    "ConversionError",
    "ParseError",
    "StructuralError",
]
