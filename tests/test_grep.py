"""Tests for grep."""

import io
import re

import pytest

from unixtools import grep

LOREM = b"Lorem\nIpsum\r\nDOLOR"


@pytest.fixture
def tree(write_file, tmp_path):
    write_file("inputs/fox.txt", b"The quick brown fox jumps over the lazy dog.\n")
    write_file("inputs/bustle.txt", b"The bustle in a house\nThe morning after death\n")
    write_file("inputs/empty.txt", b"")
    write_file("inputs/sub/nobody.txt", b"I'm Nobody! Who are you?\n")
    return tmp_path / "inputs"


class TestFindLines:
    def test_case_sensitive(self) -> None:
        pattern = re.compile("or")
        assert list(grep.find_lines(io.BytesIO(LOREM), pattern, False)) == [b"Lorem\n"]
        assert list(grep.find_lines(io.BytesIO(LOREM), pattern, True)) == [b"Ipsum\r\n", b"DOLOR"]

    def test_case_insensitive(self) -> None:
        pattern = grep.compile_pattern("or", True)
        assert list(grep.find_lines(io.BytesIO(LOREM), pattern, False)) == [b"Lorem\n", b"DOLOR"]
        assert list(grep.find_lines(io.BytesIO(LOREM), pattern, True)) == [b"Ipsum\r\n"]

    def test_match_and_inverse_partition_lines(self) -> None:
        pattern = re.compile("[aeiou]m")
        text = b"Lorem\nipsum\ndolor\nsit\namet\n"
        hits = list(grep.find_lines(io.BytesIO(text), pattern, False))
        misses = list(grep.find_lines(io.BytesIO(text), pattern, True))
        assert sorted(hits + misses) == sorted(io.BytesIO(text).readlines())
        assert not set(hits) & set(misses)


class TestFindFiles:
    def test_plain_file(self, tree) -> None:
        path = str(tree / "fox.txt")
        (operand,) = grep.find_files([path], False)
        assert operand.filename == path
        assert operand.error is None

    def test_directory_needs_recursion(self, tree) -> None:
        (operand,) = grep.find_files([str(tree)], False)
        assert operand.error == f"{tree} is a directory"

    def test_recursive_walk_finds_every_file(self, tree) -> None:
        operands = grep.find_files([str(tree)], True)
        assert [op.filename for op in operands] == [
            str(tree / "bustle.txt"),
            str(tree / "empty.txt"),
            str(tree / "fox.txt"),
            str(tree / "sub" / "nobody.txt"),
        ]

    def test_missing_path(self, tmp_path) -> None:
        missing = str(tmp_path / "blargh")
        (operand,) = grep.find_files([missing], False)
        assert operand.error == f"{missing}: No such file or directory"

    def test_stdin_is_kept(self) -> None:
        (operand,) = grep.find_files(["-"], False)
        assert operand.filename == "-"


class TestGrep:
    def test_count_case_insensitive(self, run_tool, set_stdin) -> None:
        set_stdin(LOREM)
        assert run_tool(grep, ["-i", "-c", "or"]) == b"2\n"

    def test_count_inverted(self, run_tool, set_stdin) -> None:
        set_stdin(LOREM)
        assert run_tool(grep, ["-i", "-c", "-v", "or"]) == b"1\n"

    def test_inverted_lines_keep_terminators(self, run_tool, set_stdin) -> None:
        set_stdin(LOREM)
        assert run_tool(grep, ["-i", "-v", "or"]) == b"Ipsum\r\n"

    def test_count_equals_number_of_lines(self, run_tool, tree) -> None:
        path = str(tree / "bustle.txt")
        lines = run_tool(grep, ["e", path]).splitlines()
        assert run_tool(grep, ["-c", "e", path]) == b"%d\n" % len(lines)

    def test_single_file_has_no_prefix(self, run_tool, tree) -> None:
        path = str(tree / "fox.txt")
        assert run_tool(grep, ["fox", path]) == b"The quick brown fox jumps over the lazy dog.\n"

    def test_several_files_are_prefixed(self, run_tool, tree) -> None:
        fox, bustle = str(tree / "fox.txt"), str(tree / "bustle.txt")
        assert run_tool(grep, ["-c", "The", fox, bustle]) == (
            f"{fox}:1\n{bustle}:2\n".encode()
        )

    def test_recursive(self, run_tool, tree) -> None:
        assert run_tool(grep, ["-r", "Nobody", str(tree)]) == (
            f"{tree / 'sub' / 'nobody.txt'}:I'm Nobody! Who are you?\n".encode()
        )

    def test_directory_without_recursion_is_reported(self, run_tool, tree, capsys) -> None:
        assert run_tool(grep, ["fox", str(tree)]) == b""
        assert capsys.readouterr().err == f"{tree} is a directory\n"

    def test_errors_do_not_stop_the_run(self, run_tool, tree, tmp_path, capsys) -> None:
        missing = str(tmp_path / "missing.txt")
        fox = str(tree / "fox.txt")
        out = run_tool(grep, ["dog", missing, fox])
        assert out == f"{fox}:The quick brown fox jumps over the lazy dog.\n".encode()
        assert capsys.readouterr().err == f"{missing}: No such file or directory\n"

    def test_read_error_is_reported_and_skipped(self, run_tool, tree, failing_stdin, capsys) -> None:
        fox = str(tree / "fox.txt")
        out = run_tool(grep, ["-c", "dog", "-", fox])
        assert out == f"{fox}:1\n".encode()
        assert capsys.readouterr().err == "-: Input/output error\n"

    def test_invalid_pattern(self) -> None:
        with pytest.raises(ValueError) as excinfo:
            grep.get_args(["*foo"])
        assert str(excinfo.value) == 'Invalid pattern: "*foo"'

    def test_main_exits_on_invalid_pattern(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            grep.main(["("])
        assert excinfo.value.code == 1
        assert capsys.readouterr().err == 'grep: Invalid pattern: "("\n'
