"""
data_model - niemutowalne struktury danych potoku konwersji.

Użycie:
  from data_model import SourceLine, ClassifiedLine, Run, ProseBlock, CodeBlock

Moduły:
  lines  - LineKind, WrapperEdge, SourceLine, ClassifiedLine, Run
  blocks - ProseBlock, CodeBlock, DocumentBlock, Document

Cykl życia: obiekty tworzone od nowa dla każdego pliku, nigdy nie
modyfikowane; każdy etap zwraca nową sekwencję.
"""

from .lines import (
    LineKind,
    WrapperEdge,
    SourceLine,
    ClassifiedLine,
    Run,
    LineSeq,
    RunSeq,
)
from .blocks import (
    ProseBlock,
    CodeBlock,
    DocumentBlock,
    Document,
)

__all__ = [
    # lines
    "LineKind",
    "WrapperEdge",
    "SourceLine",
    "ClassifiedLine",
    "Run",
    "LineSeq",
    "RunSeq",
    # blocks
    "ProseBlock",
    "CodeBlock",
    "DocumentBlock",
    "Document",
]
