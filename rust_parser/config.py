"""rust_parser/config.py - parametry silnika konwersji."""

from __future__ import annotations

from dataclasses import dataclass, field

from rust_parser.wrapper_patterns import WrapperMatcher, fn_wrapper


@dataclass(frozen=True, slots=True)
class EngineConfig:
    language: str = "rust"          # język w info-stringu bloku kodu
    qualifier: str = "ignore"       # kwalifikator "nie wykonuj"
    wrapper_name: str = "body"      # nazwa funkcji-rusztowania
    matcher: WrapperMatcher | None = field(default=None, compare=False)

    def wrapper_matcher(self) -> WrapperMatcher:
        return self.matcher if self.matcher is not None else fn_wrapper(self.wrapper_name)
