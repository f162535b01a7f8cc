"""Tests for the batch driver, using the real JavaScript parser."""

from pathlib import Path

import pytest

from hmdoc.driver import (
    get_markdown,
    load_filenames,
    parse,
    parse_sources,
    read_file,
    write_markdown_file,
)
from hmdoc.errors import (
    BatchError,
    OutputWriteError,
    SourceParseError,
    SourceReadError,
    TemplateError,
)
from hmdoc.extractors import extract_from_code

DOCUMENTED = """\
/* Adds one. */
// inc :: Number -> Number
const inc = n => n + 1

// this is a random comment
const dec = n => n - 1
"""


class TestExtractFromCode:
    def test_documented_statements(self):
        records = extract_from_code(DOCUMENTED)
        assert [r.display_name for r in records] == ["inc"]
        assert records[0].display_signature == "Number -> Number"
        assert records[0].description_text == " Adds one. "

    def test_malformed_source(self):
        with pytest.raises(SourceParseError):
            extract_from_code("const = ;", path="bad.js")

    def test_module_syntax(self):
        code = "// id :: a -> a\nexport const id = a => a\n"
        with pytest.raises(SourceParseError):
            extract_from_code(code, source_type="script")
        records = extract_from_code(code, source_type="module")
        assert [r.display_name for r in records] == ["id"]

    def test_invalid_source_type(self):
        with pytest.raises(ValueError):
            extract_from_code(DOCUMENTED, source_type="jsx")


class TestParse:
    def test_example_file_has_two_signatures(self, example_js):
        documentation = parse(example_js)
        assert list(documentation) == [example_js]
        records = documentation[example_js]
        assert len(records) == 2
        assert [r.display_name for r in records] == ["fetchText", "writeText"]
        assert records[0].display_signature == "http -> url -> Promise"
        assert "Fetches a URL" in records[0].description_text
        assert records[1].description_text is None

    def test_prose_only_file_is_absent(self, fixtures_dir):
        assert parse(str(fixtures_dir / "prose.js")) == {}

    def test_glob(self, fixtures_dir, example_js):
        documentation = parse(str(fixtures_dir / "e*.js"))
        assert list(documentation) == [example_js]

    def test_no_matching_files(self, tmp_path):
        assert parse(str(tmp_path / "*.js")) == {}

    def test_broken_file_does_not_stop_others(self, tmp_path, fixtures_dir):
        (tmp_path / "a.js").write_text(DOCUMENTED)
        (tmp_path / "b.js").write_text((fixtures_dir / "broken.js").read_text())
        (tmp_path / "c.js").write_text(DOCUMENTED)

        with pytest.raises(BatchError) as exc_info:
            parse(str(tmp_path / "*.js"))

        error = exc_info.value
        assert list(error.errors) == [str(tmp_path / "b.js")]
        assert isinstance(error.errors[str(tmp_path / "b.js")], SourceParseError)
        assert list(error.documentation) == [str(tmp_path / "a.js"), str(tmp_path / "c.js")]


class TestParseSources:
    def test_keeps_input_order(self):
        sources = {"z.js": DOCUMENTED, "a.js": DOCUMENTED}
        assert list(parse_sources(sources)) == ["z.js", "a.js"]

    def test_parallel_matches_sequential(self):
        sources = {f"f{i}.js": DOCUMENTED if i % 2 else "const x = 1\n" for i in range(8)}
        sequential = parse_sources(sources)
        parallel = parse_sources(sources, workers=4)
        assert parallel == sequential
        assert list(parallel) == ["f1.js", "f3.js", "f5.js", "f7.js"]

    def test_no_empty_entries(self):
        sources = {"a.js": DOCUMENTED, "b.js": "// nothing :: \nconst b = 2\n", "c.js": ""}
        documentation = parse_sources(sources)
        assert list(documentation) == ["a.js"]
        assert all(len(records) > 0 for records in documentation.values())

    def test_collects_every_failure(self):
        sources = {"a.js": "const = ;", "b.js": DOCUMENTED, "c.js": "function {"}
        with pytest.raises(BatchError) as exc_info:
            parse_sources(sources, workers=2)
        assert sorted(exc_info.value.errors) == ["a.js", "c.js"]
        assert list(exc_info.value.documentation) == ["b.js"]


class TestFiles:
    def test_load_filenames_sorted_and_recursive(self, tmp_path):
        (tmp_path / "sub").mkdir()
        for name in ("b.js", "a.js", "sub/c.js", "notes.txt"):
            (tmp_path / name).write_text("")
        files = load_filenames(str(tmp_path / "**" / "*.js"))
        assert files == [
            str(tmp_path / "a.js"),
            str(tmp_path / "b.js"),
            str(tmp_path / "sub" / "c.js"),
        ]

    def test_load_filenames_skips_directories(self, tmp_path):
        (tmp_path / "dir.js").mkdir()
        assert load_filenames(str(tmp_path / "*.js")) == []

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError):
            read_file(str(tmp_path / "missing.js"))


class TestMarkdown:
    def test_get_markdown(self, example_js, fixtures_dir):
        markdown = get_markdown(example_js, str(fixtures_dir / "example.md.j2"))
        assert markdown.startswith("# Example\n")
        assert f"## {example_js}" in markdown
        assert "### fetchText\n`http -> url -> Promise`" in markdown
        assert "### writeText\n`fs -> filename -> text -> Promise`" in markdown
        assert "alwaysTrue" not in markdown

    def test_missing_template(self, example_js, tmp_path):
        with pytest.raises(TemplateError):
            get_markdown(example_js, str(tmp_path / "missing.j2"))

    def test_write_markdown_file(self, example_js, fixtures_dir, tmp_path):
        output = tmp_path / "README.md"
        message = write_markdown_file(
            example_js, str(fixtures_dir / "example.md.j2"), str(output)
        )
        assert message == f"Successfully wrote filename: {output}"
        assert "### fetchText" in output.read_text()

    def test_write_to_missing_directory(self, example_js, fixtures_dir, tmp_path):
        output = tmp_path / "nope" / "README.md"
        with pytest.raises(OutputWriteError):
            write_markdown_file(example_js, str(fixtures_dir / "example.md.j2"), str(output))
        assert not Path(output).exists()
