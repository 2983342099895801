"""Testy wyboru plików i konwersji wsadowej."""

from pathlib import Path

from book.files import convert_many, output_path, select_files
from rust_parser import EngineConfig, ErrorCode


def make_tree(root: Path) -> None:
    (root / "sub").mkdir()
    (root / "a.rs").write_text("fn body() {\n    // A\n}\n", encoding="utf-8")
    (root / "sub" / "b.rs").write_text("let b = 1;\n", encoding="utf-8")
    (root / "sub" / "broken.rs").write_text('let s = "open\n', encoding="utf-8")
    (root / "README.md").write_text("# Readme\n", encoding="utf-8")


def test_select_files_sorted_and_filtered(tmp_path):
    make_tree(tmp_path)

    selected = select_files([tmp_path], (".rs",))

    assert [str(s.relative) for s in selected] == [
        "README.md", "a.rs", str(Path("sub") / "b.rs"), str(Path("sub") / "broken.rs"),
    ]
    assert [s.convert for s in selected] == [False, True, True, True]


def test_convert_many_isolates_failures(tmp_path):
    make_tree(tmp_path)
    sources = select_files([tmp_path], (".rs",))

    results = convert_many(sources, EngineConfig(), jobs=4)

    by_name = {r.source.path.name: r for r in results}
    assert set(by_name) == {"a.rs", "b.rs", "broken.rs"}
    assert by_name["a.rs"].output == "A\n"
    assert by_name["b.rs"].output == "```rust,ignore\nlet b = 1;\n```\n"
    assert not by_name["broken.rs"].ok
    assert by_name["broken.rs"].diagnostic.code is ErrorCode.UNTERMINATED_STRING


def test_parallel_and_sequential_results_identical(tmp_path):
    make_tree(tmp_path)
    sources = select_files([tmp_path], (".rs",))

    sequential = convert_many(sources, EngineConfig(), jobs=1)
    parallel = convert_many(sources, EngineConfig(), jobs=3)

    assert [(r.source.path, r.output) for r in sequential] == [
        (r.source.path, r.output) for r in parallel
    ]


def test_unreadable_file_reports_error(tmp_path):
    path = tmp_path / "latin1.rs"
    path.write_bytes("// zażółć\n".encode("latin-1", errors="replace") + b"\xff\xfe")

    [result] = convert_many(select_files([path], (".rs",)), EngineConfig())

    assert result.error is not None
    assert result.diagnostic is None


def test_output_path(tmp_path):
    make_tree(tmp_path)
    selected = {s.path.name: s for s in select_files([tmp_path], (".rs",))}
    out = tmp_path / "out"

    assert output_path(selected["b.rs"], out) == out / "sub" / "b.md"
    assert output_path(selected["README.md"], out) == out / "README.md"
    assert output_path(selected["a.rs"], None) == tmp_path / "a.md"
