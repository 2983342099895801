"""
data_model/blocks.py - bloki dokumentu wynikowego (Markdown).

ProseBlock : tekst Markdown (znaczniki komentarza usunięte).
CodeBlock  : kod po wyrównaniu wcięć + język i kwalifikator bloku.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class ProseBlock:
    text: str
    start: int = 0   # indeks pierwszej linii źródła

    def render(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class CodeBlock:
    text: str
    language: str
    qualifier: str = "ignore"
    start: int = 0

    @property
    def info_string(self) -> str:
        """Np. "rust,ignore" - mdBook nie kompiluje ani nie testuje próbki."""
        return f"{self.language},{self.qualifier}" if self.qualifier else self.language

    def fence(self) -> str:
        # Płot dłuższy od najdłuższego ciągu ``` rozpoczynającego linię kodu.
        longest = 0
        for line in self.text.split("\n"):
            stripped = line.lstrip()
            n = len(stripped) - len(stripped.lstrip("`"))
            longest = max(longest, n)
        return "`" * max(3, longest + 1)

    def render(self) -> str:
        fence = self.fence()
        return f"{fence}{self.info_string}\n{self.text}\n{fence}"


DocumentBlock: TypeAlias = ProseBlock | CodeBlock
Document: TypeAlias = list[DocumentBlock]
