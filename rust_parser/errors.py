"""
rust_parser/errors.py - błędy konwersji pliku źródłowego.

ParseError      - niezamknięty literał lub komentarz wykryty przez skaner.
StructuralError - niezbalansowane rusztowanie (wrapper) wykryte przy usuwaniu.

Oba błędy są fatalne dla jednego pliku: konwersja przerwana, brak częściowego
wyniku. Wywołujący zbiera Diagnostic i kontynuuje z kolejnymi plikami.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stałe kody błędów konwersji."""

    # Skaner
    UNTERMINATED_BLOCK_COMMENT = "E_UNTERMINATED_BLOCK_COMMENT"
    UNTERMINATED_STRING        = "E_UNTERMINATED_STRING"
    UNTERMINATED_CHAR          = "E_UNTERMINATED_CHAR"

    # Rusztowanie
    WRAPPER_UNCLOSED           = "E_WRAPPER_UNCLOSED"
    WRAPPER_UNOPENED           = "E_WRAPPER_UNOPENED"
    WRAPPER_NESTED             = "E_WRAPPER_NESTED"


@dataclass(slots=True)
class Diagnostic:
    """
    Opis błędu dla warstwy raportowania.

    - code:    stały identyfikator klasy błędu
    - path:    ścieżka pliku (None dla tekstu spoza pliku)
    - line:    0-based indeks linii, której dotyczy błąd
    - message: czytelny opis
    """

    code: ErrorCode
    path: str | None
    line: int
    message: str

    def __str__(self) -> str:
        where = self.path or "<source>"
        return f"{where}:{self.line + 1}: {self.code}: {self.message}"


class ConversionError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        line: int,
        message: str,
        path: str | None = None,
    ) -> None:
        self.code = code
        self.line = line
        self.message = message
        self.path = path
        super().__init__(str(self.diagnostic()))

    def diagnostic(self) -> Diagnostic:
        return Diagnostic(code=self.code, path=self.path, line=self.line, message=self.message)


class ParseError(ConversionError):
    pass


class StructuralError(ConversionError):
    pass
