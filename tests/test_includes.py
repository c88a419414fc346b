"""Tests for .INCLUDE resolution"""

import pytest

import unipen
from unipen.config import ParserSettings
from unipen.core.keywords import Keyword
from unipen.core.models import CustomStatement, StringStatement
from unipen.core.vocabulary import TypeMarker
from unipen.errors import IncludeError, IncludeErrorKind, ReadError, UniPenSyntaxError
from unipen.parsers.includes import IncludeGraph


def write(directory, name, content):
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


def parse(path, include_dir=None, **settings):
    return unipen.parse(path, include_dir=include_dir, settings=ParserSettings(**settings))


class TestIncludeExpansion:
    """Included statements are spliced in place of the .INCLUDE"""

    def test_statements_spliced_in_order(self, tmp_path):
        root = write(tmp_path, "a.dat", ".DATA_ID root\n.INCLUDE b.dat\n.WRITER_ID w1\n")
        write(tmp_path, "b.dat", ".LEXICON_ID lex\n")

        doc = parse(root, include_dir=tmp_path)

        assert [s.literal for s in doc] == [".DATA_ID", ".LEXICON_ID", ".WRITER_ID"]
        assert doc.files == (root.resolve(), (tmp_path / "b.dat").resolve())

    def test_nested_includes(self, tmp_path):
        root = write(tmp_path, "a.dat", ".INCLUDE sub/b.dat\n.DATA_ID a\n")
        (tmp_path / "sub").mkdir()
        write(tmp_path / "sub", "b.dat", ".INCLUDE c.dat\n.DATA_ID b\n")
        write(tmp_path, "c.dat", ".DATA_ID c\n")

        doc = parse(root, include_dir=tmp_path)

        assert [s.value for s in doc] == ["c", "b", "a"]

    def test_same_file_included_twice(self, tmp_path):
        """Repeated (non-nested) inclusion is not a cycle"""
        root = write(tmp_path, "a.dat", ".INCLUDE b.dat\n.INCLUDE b.dat\n")
        write(tmp_path, "b.dat", ".DATA_ID b\n")

        doc = parse(root, include_dir=tmp_path)

        assert doc.statements() == [StringStatement(Keyword.DATA_ID, "b")] * 2

    def test_declarations_shared_with_includer(self, tmp_path):
        """A keyword declared in an included file is known afterwards"""
        root = write(tmp_path, "a.dat", ".INCLUDE decl.dat\n.SPEED 12\n")
        write(tmp_path, "decl.dat", ".KEYWORD .SPEED N pen speed\n")

        doc = parse(root, include_dir=tmp_path)

        assert doc.query(".SPEED") == [CustomStatement(".SPEED", (12,), TypeMarker.NUMBER)]

    def test_include_from_string(self, tmp_path):
        write(tmp_path, "b.dat", ".DATA_ID b\n")
        doc = unipen.parse_string(".INCLUDE b.dat", include_dir=tmp_path, settings=ParserSettings())
        assert doc.files == ((tmp_path / "b.dat").resolve(),)


class TestIncludeErrors:
    """Resolution failures carry their kind"""

    def test_cycle(self, tmp_path):
        root = write(tmp_path, "a.dat", ".INCLUDE b.dat\n")
        write(tmp_path, "b.dat", ".DATA_ID b\n.INCLUDE a.dat\n")

        with pytest.raises(IncludeError) as exc_info:
            parse(root, include_dir=tmp_path)

        assert exc_info.value.kind is IncludeErrorKind.CYCLE
        assert exc_info.value.path == root.resolve()
        assert exc_info.value.context.line == 2

    def test_self_include(self, tmp_path):
        root = write(tmp_path, "a.dat", ".INCLUDE a.dat\n")
        with pytest.raises(IncludeError) as exc_info:
            parse(root, include_dir=tmp_path)
        assert exc_info.value.kind is IncludeErrorKind.CYCLE

    def test_missing_base_directory(self):
        with pytest.raises(IncludeError) as exc_info:
            unipen.parse_string(".INCLUDE b.dat", settings=ParserSettings())
        assert exc_info.value.kind is IncludeErrorKind.MISSING_BASE

    def test_not_found(self, tmp_path):
        root = write(tmp_path, "a.dat", ".DATA_ID a\n.INCLUDE missing.dat\n")
        with pytest.raises(IncludeError) as exc_info:
            parse(root, include_dir=tmp_path)
        assert exc_info.value.kind is IncludeErrorKind.NOT_FOUND
        assert "missing.dat" in str(exc_info.value)

    @pytest.mark.parametrize("relative", [True, False])
    def test_name_outside_include_dir(self, tmp_path, relative):
        """Existing files outside the include directory are not reachable"""
        corpus = tmp_path / "corpus"
        corpus.mkdir()
        outside = write(tmp_path, "outside.dat", ".DATA_ID outside\n")
        name = "../outside.dat" if relative else str(outside)
        root = write(corpus, "a.dat", f".INCLUDE {name}\n")

        with pytest.raises(IncludeError) as exc_info:
            parse(root, include_dir=corpus)
        assert exc_info.value.kind is IncludeErrorKind.NOT_FOUND
        assert "outside include directory" in str(exc_info.value)

    def test_depth_limit(self, tmp_path):
        root = write(tmp_path, "a.dat", ".INCLUDE b.dat\n")
        write(tmp_path, "b.dat", ".INCLUDE c.dat\n")
        write(tmp_path, "c.dat", ".DATA_ID c\n")

        with pytest.raises(IncludeError) as exc_info:
            parse(root, include_dir=tmp_path, max_include_depth=1)
        assert exc_info.value.kind is IncludeErrorKind.DEPTH_EXCEEDED

    def test_depth_limit_reached_exactly(self, tmp_path):
        root = write(tmp_path, "a.dat", ".INCLUDE b.dat\n")
        write(tmp_path, "b.dat", ".DATA_ID b\n")
        assert len(parse(root, include_dir=tmp_path, max_include_depth=1)) == 1

    def test_syntax_error_names_included_file(self, tmp_path):
        root = write(tmp_path, "a.dat", ".INCLUDE b.dat\n")
        included = write(tmp_path, "b.dat", ".VERSION 1\n.SKILL GREAT\n")

        with pytest.raises(UniPenSyntaxError) as exc_info:
            parse(root, include_dir=tmp_path)
        assert exc_info.value.context.file == included.resolve()
        assert exc_info.value.line == 2

    def test_unreadable_root(self, tmp_path):
        with pytest.raises(ReadError):
            parse(tmp_path / "nothing.dat")


class TestIncludeGraph:
    def test_open_stack(self, tmp_path):
        graph = IncludeGraph()
        graph.open(None)
        assert graph.depth == 0
        graph.open(tmp_path / "b.dat")
        assert graph.depth == 1
        assert graph.is_open(tmp_path / "b.dat")
        assert graph.close() == tmp_path / "b.dat"
        assert not graph.is_open(tmp_path / "b.dat")
        assert graph.files == [None, tmp_path / "b.dat"]
