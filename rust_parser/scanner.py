"""
rust_parser/scanner.py - skaner leksykalny: tekst źródła → ClassifiedLine.

Architektura:
  tekst → _split_lines() → SourceLine
  → _lex_line() (jawny stan _LexState przekazywany linia po linii)
  → _classify() → ClassifiedLine (PROSE | CODE | WRAPPER | BLANK)

Reguły klasyfikacji (w tej kolejności):
  1. linia z samymi białymi znakami           → BLANK
  2. pierwszy token to komentarz (nie doc)    → PROSE
  3. linia pasuje do rusztowania (matcher)    → WRAPPER
     (matcher dostaje tekst bez końcowego komentarza, np. `} // koniec`)
  4. wszystko inne                            → CODE

Stan leksera śledzi literały (stringi, raw stringi, znaki) i zagnieżdżone
komentarze blokowe, więc `//` wewnątrz stringa nie jest komentarzem.
Klamry liczone są tylko w zwykłym kodzie; ta sama głębokość rozstrzyga,
czy `}` w kolumnie 0 zamyka rusztowanie. Licznik może się pomylić przy
makrach z niezbalansowanymi klamrami w tokenach.

Publiczne API:
  scan_source(text, matcher, path) -> list[ClassifiedLine]
  split_lines(text)                -> list[SourceLine]
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Literal

from data_model.lines import ClassifiedLine, LineKind, LineSeq, SourceLine, WrapperEdge
from rust_parser.errors import ErrorCode, ParseError
from rust_parser.wrapper_patterns import WrapperMatcher

# ---------------------------------------------------------------------------
# Typy wewnętrzne
# ---------------------------------------------------------------------------

class _Mode(StrEnum):
    CODE          = "code"
    STRING        = "string"
    RAW_STRING    = "raw_string"
    BLOCK_COMMENT = "block_comment"


# Pierwszy niebiały token linii zaczynającej się w trybie CODE.
_Lead = Literal["none", "code", "line", "doc", "block", "doc_block", "continued"]


@dataclass(frozen=True, slots=True)
class _LexState:
    mode: _Mode = _Mode.CODE
    raw_hashes: int = 0                 # liczba '#' otwartego raw stringa
    comment_depth: int = 0              # zagnieżdżenie /* */
    comment_kind: LineKind = LineKind.CODE
    comment_indent: int = 0             # kolumna treści linii otwierającej komentarz
    opened_at: int = 0                  # linia otwarcia literału / komentarza
    brace_depth: int = 0
    wrapper_depth: int | None = None    # głębokość klamer poza otwartym rusztowaniem


@dataclass(frozen=True, slots=True)
class _LineLex:
    lead: _Lead
    lead_close: int | None      # kolumna "*/" zamykającego wiodący komentarz
    code_after_close: bool      # kod po zamknięciu wiodącego komentarza
    trailing_comment: int | None = None   # kolumna komentarza kończącego linię kodu


_RAW_OPEN_RE = re.compile(r'(?:br|cr|r)(#*)"')


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def split_lines(text: str) -> list[SourceLine]:
    """Dzieli tekst na linie; konkatenacja SourceLine.raw odtwarza wejście."""
    lines: list[SourceLine] = []
    pieces = text.split("\n")
    last = len(pieces) - 1
    for idx, piece in enumerate(pieces):
        if idx == last:
            if piece == "":
                break
            eol = ""
        elif piece.endswith("\r"):
            piece, eol = piece[:-1], "\r\n"
        else:
            eol = "\n"
        indent = len(piece) - len(piece.lstrip(" \t"))
        lines.append(SourceLine(text=piece, index=idx, indent=indent, eol=eol))
    return lines


def scan_source(
    text: str,
    matcher: WrapperMatcher,
    path: str | None = None,
) -> LineSeq:
    """
    Klasyfikuje każdą linię pliku. Wynik jest totalny i zachowuje kolejność.

    Raises:
        ParseError: niezamknięty komentarz blokowy, string lub znak.
    """
    state = _LexState()
    result: LineSeq = []
    for line in split_lines(text):
        lex, after = _lex_line(line, state, path)
        classified, after = _classify(line, lex, state, after, matcher)
        result.append(classified)
        state = after

    if state.mode is _Mode.BLOCK_COMMENT:
        raise ParseError(
            ErrorCode.UNTERMINATED_BLOCK_COMMENT,
            state.opened_at,
            "komentarz blokowy nie został zamknięty przed końcem pliku",
            path,
        )
    if state.mode in (_Mode.STRING, _Mode.RAW_STRING):
        raise ParseError(
            ErrorCode.UNTERMINATED_STRING,
            state.opened_at,
            "literał napisowy nie został zamknięty przed końcem pliku",
            path,
        )
    return result


# ---------------------------------------------------------------------------
# Klasyfikacja
# ---------------------------------------------------------------------------

def _classify(
    line: SourceLine,
    lex: _LineLex,
    before: _LexState,
    after: _LexState,
    matcher: WrapperMatcher,
) -> tuple[ClassifiedLine, _LexState]:
    if line.is_blank:
        return ClassifiedLine(line, LineKind.BLANK), after

    # Kontynuacja komentarza blokowego: klasa taka jak linii otwierającej.
    if lex.lead == "continued" and before.mode is _Mode.BLOCK_COMMENT:
        if before.comment_kind is LineKind.PROSE and not lex.code_after_close:
            marker_end = min(line.indent, before.comment_indent)
            return _prose(line, marker_end, lex.lead_close), after
        return _code(line, after)

    if lex.lead == "continued":
        # wnętrze wieloliniowego stringa
        return _code(line, after)

    if lex.lead == "line":
        return _prose(line, _marker_end(line.text, line.indent), None), after

    if lex.lead == "block" and not lex.code_after_close:
        marker_end = _marker_end(line.text, line.indent)
        classified = _prose(line, marker_end, lex.lead_close)
        if after.mode is _Mode.BLOCK_COMMENT and after.opened_at == line.index:
            after = replace(after, comment_kind=LineKind.PROSE, comment_indent=marker_end)
        return classified, after

    if lex.lead == "code":
        code_text = line.text
        if lex.trailing_comment is not None:
            code_text = line.text[:lex.trailing_comment].rstrip()
        if matcher.opens(code_text):
            after = replace(after, wrapper_depth=before.brace_depth)
            classified = ClassifiedLine(line, LineKind.WRAPPER, edge=WrapperEdge.OPEN)
            return classified, _comment_is_code(line, after)
        if matcher.closes(code_text):
            closes_open = (
                before.wrapper_depth is not None
                and after.brace_depth == before.wrapper_depth
            )
            if closes_open or after.brace_depth < 0:
                after = replace(after, wrapper_depth=None)
                classified = ClassifiedLine(line, LineKind.WRAPPER, edge=WrapperEdge.CLOSE)
                return classified, _comment_is_code(line, after)

    return _code(line, after)


def _code(line: SourceLine, after: _LexState) -> tuple[ClassifiedLine, _LexState]:
    return ClassifiedLine(line, LineKind.CODE), _comment_is_code(line, after)


def _comment_is_code(line: SourceLine, after: _LexState) -> _LexState:
    """Komentarz otwarty w tej linii za kodem: jego kontynuacje też są kodem."""
    if after.mode is _Mode.BLOCK_COMMENT and after.opened_at == line.index:
        return replace(after, comment_kind=LineKind.CODE)
    return after


def _prose(line: SourceLine, marker_end: int, close_col: int | None) -> ClassifiedLine:
    payload_end = None
    if close_col is not None:
        payload_end = close_col
        # jedna spacja przed "*/" należy do znacznika
        if payload_end - 1 >= marker_end and line.text[payload_end - 1] == " ":
            payload_end -= 1
        payload_end = max(payload_end, marker_end)
    return ClassifiedLine(line, LineKind.PROSE, marker_end=marker_end, payload_end=payload_end)


def _marker_end(text: str, col: int) -> int:
    """Koniec znacznika "//" lub "/*" oraz dokładnie jednej spacji po nim."""
    end = col + 2
    if end < len(text) and text[end] == " ":
        end += 1
    return end


# ---------------------------------------------------------------------------
# Lekser linii
# ---------------------------------------------------------------------------

def _lex_line(
    line: SourceLine,
    state: _LexState,
    path: str | None,
) -> tuple[_LineLex, _LexState]:
    text = line.text
    n = len(text)
    mode = state.mode
    hashes = state.raw_hashes
    depth = state.comment_depth
    braces = state.brace_depth
    opened = state.opened_at

    lead: _Lead = "none" if mode is _Mode.CODE else "continued"
    in_lead = mode is _Mode.BLOCK_COMMENT
    lead_done = False
    lead_close: int | None = None
    code_after = False
    trailing: int | None = None

    i = 0
    while i < n:
        c = text[i]

        if mode is _Mode.CODE:
            if c in " \t":
                i += 1
                continue
            if text.startswith("//", i):
                if lead == "none":
                    lead = "doc" if _is_doc_line(text, i) else "line"
                elif lead == "code" and trailing is None and not _is_doc_line(text, i):
                    trailing = i
                break
            if text.startswith("/*", i):
                kind: _Lead = "doc_block" if _is_doc_block(text, i) else "block"
                if lead == "none":
                    lead = kind
                    in_lead = True
                elif lead == "code" and trailing is None and kind == "block":
                    trailing = i
                mode, depth, opened = _Mode.BLOCK_COMMENT, 1, line.index
                i += 2
                continue

            if lead == "none":
                lead = "code"
            trailing = None
            if lead_done:
                code_after = True

            if c == '"':
                mode, opened = _Mode.STRING, line.index
                i += 1
                continue
            if c in "rbc" and (i == 0 or not _is_ident_char(text[i - 1])):
                m = _RAW_OPEN_RE.match(text, i)
                if m:
                    mode, hashes, opened = _Mode.RAW_STRING, len(m.group(1)), line.index
                    i = m.end()
                    continue
            if c == "'":
                end = _char_literal_end(text, i)
                if end == -1:
                    raise ParseError(
                        ErrorCode.UNTERMINATED_CHAR,
                        line.index,
                        "literał znakowy nie został zamknięty",
                        path,
                    )
                i = end if end is not None else i + 1
                continue
            if c == "{":
                braces += 1
            elif c == "}":
                braces -= 1
            i += 1

        elif mode is _Mode.STRING:
            if c == "\\":
                i += 2
                continue
            if c == '"':
                mode = _Mode.CODE
            i += 1

        elif mode is _Mode.RAW_STRING:
            closing = '"' + "#" * hashes
            j = text.find(closing, i)
            if j == -1:
                break
            mode = _Mode.CODE
            i = j + len(closing)

        else:  # BLOCK_COMMENT
            if text.startswith("/*", i):
                depth += 1
                i += 2
                continue
            if text.startswith("*/", i):
                depth -= 1
                if depth == 0:
                    mode = _Mode.CODE
                    if in_lead:
                        lead_close = i
                        in_lead = False
                        lead_done = True
                i += 2
                continue
            i += 1

    after = replace(
        state,
        mode=mode,
        raw_hashes=hashes,
        comment_depth=depth,
        brace_depth=braces,
        opened_at=opened,
    )
    lex = _LineLex(
        lead=lead,
        lead_close=lead_close,
        code_after_close=code_after,
        trailing_comment=trailing,
    )
    return lex, after


def _is_doc_line(text: str, i: int) -> bool:
    rest = text[i:]
    return rest.startswith("//!") or (rest.startswith("///") and not rest.startswith("////"))


def _is_doc_block(text: str, i: int) -> bool:
    rest = text[i:]
    if rest.startswith("/*!"):
        return True
    return rest.startswith("/**") and not rest.startswith(("/***", "/**/"))


def _is_ident_char(c: str) -> bool:
    return c.isalnum() or c == "_"


def _char_literal_end(text: str, i: int) -> int | None:
    """
    Zwraca indeks za literałem znakowym zaczynającym się w i.

    None → to nie literał (lifetime / etykieta, np. 'a, 'static).
    -1   → literał z ucieczką bez zamykającego apostrofu.
    """
    n = len(text)
    if i + 1 < n and text[i + 1] == "\\":
        j = text.find("'", i + 3)
        return -1 if j == -1 else j + 1
    if i + 2 < n and text[i + 2] == "'":
        return i + 3
    return None
