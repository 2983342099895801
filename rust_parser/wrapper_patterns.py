"""
rust_parser/wrapper_patterns.py - wzorce rozpoznawania rusztowania (wrapper).

Rusztowanie to funkcja, która istnieje tylko po to, żeby rozdział był
poprawnym plikiem źródłowym, np.:

    pub fn body() {
        // # Rozdział
        let x = 1;
    }

WrapperMatcher to zdolność: "rozpoznaj otwarcie", "rozpoznaj zamknięcie".
WrapperPattern to implementacja oparta o regex (dopasowanie od kolumny 0).
Inne idiomy rusztowania dodaje się nowym matcherem, bez zmian w grouperze.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol


class WrapperMatcher(Protocol):
    def opens(self, text: str) -> bool: ...

    def closes(self, text: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class WrapperPattern:
    opener: re.Pattern[str]
    closer: re.Pattern[str]

    def opens(self, text: str) -> bool:
        return self.opener.match(text) is not None

    def closes(self, text: str) -> bool:
        return self.closer.match(text) is not None


_VISIBILITY = r"(?:pub(?:\s*\([^)]*\))?\s+)?"
_CLOSER_RE = re.compile(r"^\}\s*$")


def fn_wrapper(name: str = "body") -> WrapperPattern:
    """Rusztowanie `fn <name>() {` ... `}` (opcjonalnie `pub` / `pub(crate)`)."""
    opener = re.compile(
        rf"^{_VISIBILITY}fn\s+{re.escape(name)}\s*\(\s*\)\s*\{{\s*$"
    )
    return WrapperPattern(opener=opener, closer=_CLOSER_RE)
