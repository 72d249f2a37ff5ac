"""Tests for cat."""

import pytest

from unixtools import cat


@pytest.fixture
def spiders(write_file) -> str:
    return write_file("spiders.txt", b"Don't worry, spiders,\n\nI keep house\r\ncasually.")


class TestCat:
    def test_verbatim(self, run_tool, spiders) -> None:
        assert run_tool(cat, [spiders]) == b"Don't worry, spiders,\n\nI keep house\r\ncasually."

    def test_number_all(self, run_tool, spiders) -> None:
        assert run_tool(cat, ["-n", spiders]) == (
            b"     1\tDon't worry, spiders,\n"
            b"     2\t\n"
            b"     3\tI keep house\r\n"
            b"     4\tcasually."
        )

    def test_number_nonblank(self, run_tool, spiders) -> None:
        assert run_tool(cat, ["-b", spiders]) == (
            b"     1\tDon't worry, spiders,\n"
            b"\n"
            b"     2\tI keep house\r\n"
            b"     3\tcasually."
        )

    def test_numbering_continues_across_files(self, run_tool, write_file) -> None:
        first = write_file("first.txt", b"a\nb\n")
        second = write_file("second.txt", b"c\n")
        assert run_tool(cat, ["-n", first, second]) == b"     1\ta\n     2\tb\n     3\tc\n"

    def test_reads_stdin_by_default(self, run_tool, set_stdin) -> None:
        set_stdin(b"piped\n")
        assert run_tool(cat, []) == b"piped\n"

    def test_output_is_idempotent(self, run_tool, set_stdin, spiders) -> None:
        once = run_tool(cat, [spiders])
        set_stdin(once)
        assert run_tool(cat, ["-"]) == once

    def test_missing_file_is_reported_and_skipped(self, run_tool, write_file, tmp_path, capsys) -> None:
        good = write_file("good.txt", b"ok\n")
        missing = str(tmp_path / "missing.txt")
        assert run_tool(cat, [missing, good]) == b"ok\n"
        assert capsys.readouterr().err == f"Failed to open {missing}: No such file or directory\n"

    def test_read_error_is_reported_and_skipped(self, run_tool, write_file, failing_stdin, capsys) -> None:
        good = write_file("good.txt", b"ok\n")
        assert run_tool(cat, ["-", good]) == b"ok\n"
        assert capsys.readouterr().err == "-: Input/output error\n"

    def test_main_continues_after_read_error(self, write_file, failing_stdin, capsysbinary) -> None:
        good = write_file("good.txt", b"ok\n")
        with pytest.raises(SystemExit) as excinfo:
            cat.main(["-", good])
        assert excinfo.value.code == 0
        assert capsysbinary.readouterr() == (b"ok\n", b"-: Input/output error\n")

    def test_number_flags_conflict(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cat.get_args(["-n", "-b"])
        assert excinfo.value.code == 1
        assert "not allowed with argument" in capsys.readouterr().err
