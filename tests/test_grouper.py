"""Testy grupowania linii w przebiegi."""

import pytest

from data_model.lines import LineKind
from rust_parser import fn_wrapper, group_runs, scan_source


def runs_of(text):
    return group_runs(scan_source(text, fn_wrapper()))


def shape(runs):
    return [(run.kind, run.start, run.end) for run in runs]


def test_prose_separated_by_blank_lines_is_one_run():
    runs = runs_of("// a\n\n// b\nlet x = 1;\n")

    assert shape(runs) == [(LineKind.PROSE, 0, 2), (LineKind.CODE, 3, 3)]
    assert runs[0].lines[1].kind is LineKind.BLANK


def test_blank_between_code_stays_in_code():
    runs = runs_of("let a = 1;\n\nlet b = 2;\n")

    assert shape(runs) == [(LineKind.CODE, 0, 2)]


def test_blank_after_prose_before_code_goes_to_prose():
    runs = runs_of("// a\n\nlet x = 1;\n")

    assert shape(runs) == [(LineKind.PROSE, 0, 1), (LineKind.CODE, 2, 2)]


def test_blank_after_code_before_prose_goes_to_code():
    runs = runs_of("let x = 1;\n\n// a\n")

    assert shape(runs) == [(LineKind.CODE, 0, 1), (LineKind.PROSE, 2, 2)]


def test_blank_after_wrapper_goes_to_next_run():
    runs = runs_of("fn body() {\n\n    let x = 1;\n}\n")

    assert shape(runs) == [
        (LineKind.WRAPPER, 0, 0),
        (LineKind.CODE, 1, 2),
        (LineKind.WRAPPER, 3, 3),
    ]


def test_trailing_blanks_after_wrapper_join_wrapper():
    runs = runs_of("fn body() {\n}\n\n\n")

    assert shape(runs) == [(LineKind.WRAPPER, 0, 3)]


def test_blank_only_file():
    runs = runs_of("\n  \n")

    assert shape(runs) == [(LineKind.BLANK, 0, 1)]


def test_empty_file():
    assert runs_of("") == []


@pytest.mark.parametrize("text", [
    "fn body() {\r\n    // a\r\n\r\n    let x = 1;\r\n}\r\n",
    "// only prose\n//\n// more",
    "\n\nuse std::io;\n\nfn body() {\n\n    // x\n\n}\n\n",
    "let s = \"a\n\n// b\n\";\n",
])
def test_runs_partition_the_file(text):
    runs = runs_of(text)

    assert "".join(run.raw for run in runs) == text
    indices = [cl.index for run in runs for cl in run.lines]
    assert indices == list(range(len(indices)))
