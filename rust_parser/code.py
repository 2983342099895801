"""
rust_parser/code.py - przebieg CODE → CodeBlock.

Wcięcie: minimalna szerokość wiodących białych znaków po niepustych liniach
odejmowana od każdej linii (względne wcięcia zostają). Puste linie na
brzegach przebiegu nie trafiają do bloku; pusty przebieg nie daje bloku.
Linie z samymi białymi znakami też tracą tylko wcięcie bazowe (mogą leżeć
wewnątrz wieloliniowego literału napisowego).
"""

from __future__ import annotations

from data_model.blocks import CodeBlock
from data_model.lines import Run
from rust_parser.config import EngineConfig


def emit_code(run: Run, config: EngineConfig) -> CodeBlock | None:
    lines = list(run.lines)
    while lines and lines[0].line.is_blank:
        lines.pop(0)
    while lines and lines[-1].line.is_blank:
        lines.pop()
    if not lines:
        return None

    width = min(cl.line.indent for cl in lines if not cl.line.is_blank)
    text = "\n".join(cl.text[width:] for cl in lines)
    return CodeBlock(
        text=text,
        language=config.language,
        qualifier=config.qualifier,
        start=lines[0].index,
    )
