"""
rust_parser/prose.py - normalizacja przebiegu PROSE do tekstu Markdown.

Co robimy:
  - usuwamy zapisany prefiks znacznika (wcięcie + "//" + jedna spacja),
  - puste linie wewnątrz przebiegu zostają separatorem akapitu,
  - puste linie na brzegach przebiegu pomijamy,
  - nagłówek ("#" x 1..6 + spacja) oddzielamy pustą linią od sąsiedniego tekstu.

Czego nie robimy: nie łączymy linii w akapity, nie ruszamy wewnętrznych spacji.
"""

from __future__ import annotations

import re

from data_model.blocks import ProseBlock
from data_model.lines import LineKind, Run

_HEADING_RE = re.compile(r"^#{1,6} ")


def normalize_prose(run: Run) -> ProseBlock:
    payloads = [
        cl.payload if cl.kind is LineKind.PROSE else ""
        for cl in run.lines
    ]

    # Krok 1: brzegowe puste linie
    while payloads and not payloads[0].strip():
        payloads.pop(0)
    while payloads and not payloads[-1].strip():
        payloads.pop()

    # Krok 2: nagłówki zawsze otwierają blok
    out: list[str] = []
    for i, text in enumerate(payloads):
        if _HEADING_RE.match(text):
            if out and out[-1].strip():
                out.append("")
            out.append(text)
            if i + 1 < len(payloads) and payloads[i + 1].strip():
                out.append("")
            continue
        out.append(text if text.strip() else "")

    return ProseBlock(text="\n".join(out), start=run.start)
