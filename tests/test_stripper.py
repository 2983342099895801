"""Testy usuwania rusztowania i kontroli balansu."""

import pytest

from data_model.lines import LineKind
from rust_parser import (
    ErrorCode,
    StructuralError,
    fn_wrapper,
    group_runs,
    scan_source,
    strip_wrappers,
)


def strip(text, path=None):
    return strip_wrappers(group_runs(scan_source(text, fn_wrapper())), path)


def test_wrapper_runs_removed():
    runs = strip("fn body() {\n    // a\n    let x = 1;\n}\n")

    assert [run.kind for run in runs] == [LineKind.PROSE, LineKind.CODE]


def test_code_runs_merged_across_removed_wrapper():
    runs = strip("fn body() {\n    let x = 1;\n}\nfn body() {\n    let y = 2;\n}\n")

    assert len(runs) == 1
    assert runs[0].kind is LineKind.CODE
    assert [cl.index for cl in runs[0].lines] == [1, 4]


def test_runs_outside_wrapper_dropped():
    runs = strip(
        "use std::io;\n"
        "// intro\n"
        "fn body() {\n"
        "    // a\n"
        "    let x = 1;\n"
        "}\n"
        "\n"
        "fn helper() {\n"
        "    // hidden\n"
        "}\n"
    )

    assert [run.kind for run in runs] == [LineKind.PROSE, LineKind.CODE]
    assert [cl.index for run in runs for cl in run.lines] == [3, 4]


def test_no_wrapper_leaves_runs_untouched():
    runs = group_runs(scan_source("// a\nlet x = 1;\n", fn_wrapper()))

    assert strip_wrappers(runs) == runs


def test_unclosed_wrapper():
    with pytest.raises(StructuralError) as info:
        strip("fn body() {\n    let x = 1;\n", path="ch.rs")

    assert info.value.code is ErrorCode.WRAPPER_UNCLOSED
    assert info.value.line == 0
    assert info.value.path == "ch.rs"


def test_unbalanced_inner_braces_leave_wrapper_unclosed():
    with pytest.raises(StructuralError) as info:
        strip("fn body() {\n    if x {\n}\n")

    assert info.value.code is ErrorCode.WRAPPER_UNCLOSED


def test_closer_without_opener():
    with pytest.raises(StructuralError) as info:
        strip("let x = 1;\n}\n")

    assert info.value.code is ErrorCode.WRAPPER_UNOPENED
    assert info.value.line == 1


def test_nested_wrapper():
    with pytest.raises(StructuralError) as info:
        strip("fn body() {\nfn body() {\n}\n}\n")

    assert info.value.code is ErrorCode.WRAPPER_NESTED
    assert info.value.line == 1


def test_diagnostic_carries_location():
    with pytest.raises(StructuralError) as info:
        strip("fn body() {\n", path="src/ch2.rs")

    diag = info.value.diagnostic()
    assert (diag.code, diag.path, diag.line) == (ErrorCode.WRAPPER_UNCLOSED, "src/ch2.rs", 0)
    assert str(diag).startswith("src/ch2.rs:1: E_WRAPPER_UNCLOSED")
