"""
data_model/lines.py - model linii pliku źródłowego i przebiegów (runs).

SourceLine      : jedna fizyczna linia wejścia (tekst bez końca linii).
ClassifiedLine  : SourceLine + znacznik LineKind (+ granice treści komentarza).
Run             : maksymalny, spójny ciąg linii o tym samym znaczniku.

Wszystkie obiekty są niemutowalne; każdy etap potoku tworzy nowe sekwencje.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias
from enum import StrEnum


class LineKind(StrEnum):
    """Klasa linii wyznaczona przez skaner."""
    PROSE   = "prose"
    CODE    = "code"
    WRAPPER = "wrapper"
    BLANK   = "blank"


class WrapperEdge(StrEnum):
    """Rola linii-rusztowania: otwarcie lub zamknięcie."""
    OPEN  = "open"
    CLOSE = "close"


@dataclass(frozen=True, slots=True)
class SourceLine:
    text: str     # treść linii bez znaku końca linii
    index: int    # 0-based
    indent: int   # liczba wiodących spacji / tabulatorów
    eol: str = ""  # "\n", "\r\n" albo "" (ostatnia linia bez końca)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def raw(self) -> str:
        """Dosłowne bajty linii razem z końcem linii."""
        return self.text + self.eol


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """
    Linia z przypisaną klasą.

    Dla PROSE pola marker_end / payload_end wyznaczają treść komentarza:
    payload = text[marker_end:payload_end]. Dla pozostałych klas nieużywane.
    edge ustawiany wyłącznie dla WRAPPER.
    """
    line: SourceLine
    kind: LineKind
    marker_end: int = 0
    payload_end: int | None = None
    edge: WrapperEdge | None = None

    @property
    def index(self) -> int:
        return self.line.index

    @property
    def text(self) -> str:
        return self.line.text

    @property
    def payload(self) -> str:
        end = len(self.line.text) if self.payload_end is None else self.payload_end
        return self.line.text[self.marker_end:end]


@dataclass(frozen=True, slots=True)
class Run:
    kind: LineKind
    lines: tuple[ClassifiedLine, ...]

    @property
    def start(self) -> int:
        return self.lines[0].index

    @property
    def end(self) -> int:
        """Indeks ostatniej linii (włącznie)."""
        return self.lines[-1].index

    @property
    def raw(self) -> str:
        return "".join(cl.line.raw for cl in self.lines)


# Kolekcje w kolejności pliku.
LineSeq: TypeAlias = list[ClassifiedLine]
RunSeq: TypeAlias = list[Run]
