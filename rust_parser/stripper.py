"""
rust_parser/stripper.py - usuwanie przebiegów-rusztowań (WRAPPER).

Najpierw sprawdzany jest balans: prosty licznik otwarć / zamknięć po
liniach WRAPPER (nie pełny parser). Dozwolone jest wyłącznie jedno
rusztowanie otwarte naraz; zagnieżdżenie, zamknięcie bez otwarcia
i brak zamknięcia kończą się StructuralError.

Przebiegi poza rusztowaniem (inne funkcje, importy, komentarze) są
pomijane, o ile plik w ogóle ma rusztowanie. Po usunięciu rusztowania
sąsiadujące z nim przebiegi CODE są scalane.
"""

from __future__ import annotations

import logging

from data_model.lines import LineKind, Run, RunSeq, WrapperEdge
from rust_parser.errors import ErrorCode, StructuralError

logger = logging.getLogger(__name__)


def strip_wrappers(runs: RunSeq, path: str | None = None) -> RunSeq:
    """
    Zwraca nową sekwencję przebiegów bez rusztowań.

    Jeśli plik ma rusztowanie, zostają tylko przebiegi między otwarciem
    a zamknięciem; wszystko poza nim jest pomijane. Plik bez rusztowania
    przechodzi w całości.

    Raises:
        StructuralError: rusztowanie niezbalansowane lub zagnieżdżone.
    """
    _check_balance(runs, path)

    inside = not any(run.kind is LineKind.WRAPPER for run in runs)
    result: RunSeq = []
    removed_since_last = False
    dropped = 0
    for run in runs:
        if run.kind is LineKind.WRAPPER:
            for cl in run.lines:
                if cl.edge is not None:
                    inside = cl.edge is WrapperEdge.OPEN
            removed_since_last = True
            continue
        if not inside:
            dropped += 1
            removed_since_last = True
            continue
        if removed_since_last and result and result[-1].kind is run.kind is LineKind.CODE:
            result[-1] = Run(kind=LineKind.CODE, lines=result[-1].lines + run.lines)
        else:
            result.append(run)
        removed_since_last = False

    logger.debug(
        "stripper: %d → %d przebiegów (%d poza rusztowaniem)",
        len(runs), len(result), dropped,
    )
    return result


def _check_balance(runs: RunSeq, path: str | None) -> None:
    open_at: int | None = None
    for run in runs:
        if run.kind is not LineKind.WRAPPER:
            continue
        for cl in run.lines:
            if cl.kind is not LineKind.WRAPPER:
                continue
            if cl.edge is WrapperEdge.OPEN:
                if open_at is not None:
                    raise StructuralError(
                        ErrorCode.WRAPPER_NESTED,
                        cl.index,
                        f"rusztowanie otwarte wewnątrz rusztowania z linii {open_at + 1}",
                        path,
                    )
                open_at = cl.index
            else:
                if open_at is None:
                    raise StructuralError(
                        ErrorCode.WRAPPER_UNOPENED,
                        cl.index,
                        "zamknięcie rusztowania bez odpowiadającego otwarcia",
                        path,
                    )
                open_at = None

    if open_at is not None:
        raise StructuralError(
            ErrorCode.WRAPPER_UNCLOSED,
            open_at,
            "rusztowanie nie zostało zamknięte",
            path,
        )
