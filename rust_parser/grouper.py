"""
rust_parser/grouper.py - scalanie ClassifiedLine w przebiegi (Run).

Reguła dla linii pustych (BLANK):
  - poprzednik to CODE albo PROSE → linia dołącza do poprzednika
    (pionowe odstępy w kodzie zostają; puste linie na końcu prozy
    normalizator pomija),
  - poprzednik to WRAPPER lub brak → dołącza do następnika,
  - brak obu sąsiadów → plik złożony z samych pustych linii: jeden Run BLANK.

Następnie sąsiednie grupy o tej samej klasie są łączone, więc dwa odcinki
prozy rozdzielone wyłącznie pustymi liniami tworzą jeden Run PROSE
(pusta linia zostaje jako separator akapitu).

Przebiegi dzielą plik dokładnie: konkatenacja Run.raw == tekst wejścia.
"""

from __future__ import annotations

import logging
from itertools import groupby

from data_model.lines import ClassifiedLine, LineKind, LineSeq, Run, RunSeq

logger = logging.getLogger(__name__)


def group_runs(lines: LineSeq) -> RunSeq:
    groups: list[tuple[LineKind, list[ClassifiedLine]]] = [
        (kind, list(members)) for kind, members in groupby(lines, key=lambda cl: cl.kind)
    ]

    resolved: list[tuple[LineKind, list[ClassifiedLine]]] = []
    pending: list[ClassifiedLine] = []   # puste linie czekające na następnika

    for kind, members in groups:
        if kind is not LineKind.BLANK:
            resolved.append((kind, pending + members))
            pending = []
            continue

        prev_kind = resolved[-1][0] if resolved else None
        if prev_kind in (LineKind.CODE, LineKind.PROSE):
            resolved[-1][1].extend(members)
        else:
            pending.extend(members)

    if pending:
        if resolved:
            resolved[-1][1].extend(pending)
        else:
            resolved.append((LineKind.BLANK, pending))

    runs: RunSeq = []
    for kind, members in resolved:
        if runs and runs[-1].kind is kind:
            runs[-1] = Run(kind=kind, lines=runs[-1].lines + tuple(members))
        else:
            runs.append(Run(kind=kind, lines=tuple(members)))

    logger.debug("grouper: %d linii → %d przebiegów", len(lines), len(runs))
    return runs
