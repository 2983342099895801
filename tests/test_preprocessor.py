"""Testy integracji z mdBook (protokół preprocesora)."""

import argparse
import io
import json

import pytest

from book.preprocessor import (
    iter_chapters,
    parse_input,
    preprocessor_table,
    process_book,
    version_warning,
)
from illit.commands import preprocess as cmd_preprocess
from rust_parser import EngineConfig, ErrorCode


def chapter(name, path, content, sub_items=None):
    return {"Chapter": {
        "name": name,
        "content": content,
        "number": None,
        "sub_items": sub_items or [],
        "path": path,
        "source_path": path,
        "parent_names": [],
    }}


RS_CHAPTER = "fn body() {\n    // # Rozdział\n    let x = 1;\n}\n"
RS_EXPECTED = "# Rozdział\n\n```rust,ignore\nlet x = 1;\n```\n"


def make_book():
    return {
        "sections": [
            chapter("Intro", "intro.md", "# Intro\n"),
            "Separator",
            {"PartTitle": "Część I"},
            chapter("Ch1", "chapter1.rs", RS_CHAPTER, sub_items=[
                chapter("Ch1.1", "nested.rs", "// Zagnieżdżony\n"),
            ]),
            chapter("Draft", None, ""),
        ],
        "__non_exhaustive": None,
    }


def make_context(**preprocessor):
    return {
        "root": "/book",
        "config": {"book": {"title": "Test"}, "preprocessor": {"illit": preprocessor}},
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }


class TestProcessBook:
    def test_converts_rust_chapters_only(self):
        book, diagnostics = process_book(make_book(), EngineConfig())

        assert diagnostics == []
        chapters = {c["name"]: c for c in iter_chapters(book)}
        assert chapters["Intro"]["content"] == "# Intro\n"
        assert chapters["Ch1"]["content"] == RS_EXPECTED
        assert chapters["Ch1.1"]["content"] == "Zagnieżdżony\n"
        assert chapters["Draft"]["content"] == ""

    def test_non_chapter_items_and_unknown_keys_preserved(self):
        book, _ = process_book(make_book(), EngineConfig())

        assert book["sections"][1] == "Separator"
        assert book["sections"][2] == {"PartTitle": "Część I"}
        assert "__non_exhaustive" in book
        assert book["sections"][0]["Chapter"]["source_path"] == "intro.md"

    def test_input_not_mutated(self):
        original = make_book()
        process_book(original, EngineConfig())

        assert original == make_book()

    def test_failure_does_not_stop_other_chapters(self):
        book_in = make_book()
        book_in["sections"].insert(0, chapter("Broken", "broken.rs", "/* open\n"))

        book, diagnostics = process_book(book_in, EngineConfig())

        assert len(diagnostics) == 1
        assert diagnostics[0].code is ErrorCode.UNTERMINATED_BLOCK_COMMENT
        assert diagnostics[0].path == "broken.rs"
        assert diagnostics[0].line == 0
        chapters = {c["name"]: c for c in iter_chapters(book)}
        assert chapters["Broken"]["content"] == "/* open\n"
        assert chapters["Ch1"]["content"] == RS_EXPECTED

    def test_custom_extensions(self):
        book, _ = process_book(make_book(), EngineConfig(), extensions=(".md",))

        chapters = {c["name"]: c for c in iter_chapters(book)}
        assert chapters["Ch1"]["content"] == RS_CHAPTER
        assert chapters["Intro"]["content"] == "```rust,ignore\n# Intro\n```\n"


class TestProtocolHelpers:
    def test_parse_input(self):
        stream = io.StringIO(json.dumps([make_context(), make_book()]))

        context, book = parse_input(stream)

        assert context["renderer"] == "html"
        assert "sections" in book

    def test_parse_input_rejects_other_shapes(self):
        with pytest.raises(ValueError):
            parse_input(io.StringIO(json.dumps({"book": {}})))

    def test_preprocessor_table(self):
        context = make_context(language="rs")

        assert preprocessor_table(context, "illit") == {"language": "rs"}
        assert preprocessor_table(context, "other") == {}

    @pytest.mark.parametrize("version, warns", [
        ("0.4.40", False),
        ("0.4.0", False),
        ("0.5.0", True),
        ("", True),
    ])
    def test_version_warning(self, version, warns):
        assert (version_warning({"mdbook_version": version}) is not None) is warns


class TestPreprocessCommand:
    def parse(self, *argv):
        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command")
        cmd_preprocess.add_parser(subparsers)
        return parser.parse_args(["preprocess", *argv])

    def test_supports_any_renderer(self):
        args = self.parse("supports", "html")

        with pytest.raises(SystemExit) as info:
            args.func(args)
        assert info.value.code == 0

    def test_round_trip_through_stdin_and_stdout(self, monkeypatch, capsys):
        payload = json.dumps([make_context(qualifier="no_run"), make_book()])
        monkeypatch.setattr("sys.stdin", io.StringIO(payload))
        args = self.parse()

        args.func(args)

        book = json.loads(capsys.readouterr().out)
        chapters = {c["name"]: c for c in iter_chapters(book)}
        assert chapters["Ch1"]["content"] == RS_EXPECTED.replace("rust,ignore", "rust,no_run")

    def test_failed_chapter_exits_without_output(self, monkeypatch, capsys):
        book = make_book()
        book["sections"].append(chapter("Broken", "broken.rs", "fn body() {\n"))
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps([make_context(), book])))
        args = self.parse()

        with pytest.raises(SystemExit) as info:
            args.func(args)

        assert info.value.code == 1
        assert capsys.readouterr().out == ""
