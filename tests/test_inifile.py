import pytest

from flocksim.inifile import (
    count_inputs,
    find_input_file,
    find_output_file,
    parse_ini,
    parse_ini_lines,
)


class Recorder:
    def __init__(self, accept=True):
        self.entries = []
        self.accept = accept

    def __call__(self, section, name, value):
        self.entries.append((section, name, value))
        return self.accept


def test_sections_and_entries():
    rec = Recorder()
    lines = ["[flock]\n", "v_flock = 400\n", "r_0: 1000\n", "[unit]\n", "tau=0.5\n"]
    assert parse_ini_lines(lines, rec) == 0
    assert rec.entries == [
        ("flock", "v_flock", "400"),
        ("flock", "r_0", "1000"),
        ("unit", "tau", "0.5"),
    ]


def test_comments_and_blank_lines_are_skipped():
    rec = Recorder()
    lines = ["; comment\n", "# other\n", "\n", "   \n", "a=b\n"]
    assert parse_ini_lines(lines, rec) == 0
    assert rec.entries == [("", "a", "b")]


def test_continuation_line_uses_previous_name():
    rec = Recorder()
    lines = ["[s]\n", "name = first\n", "    second\n"]
    assert parse_ini_lines(lines, rec) == 0
    assert rec.entries == [("s", "name", "first"), ("s", "name", "second")]


def test_indented_line_after_section_is_an_entry():
    rec = Recorder()
    assert parse_ini_lines(["[s]\n", "  key = v\n"], rec) == 0
    assert rec.entries == [("s", "key", "v")]


def test_inline_comment_is_kept_in_value():
    rec = Recorder()
    parse_ini_lines(["a = 1 ; note\n"], rec)
    assert rec.entries == [("", "a", "1 ; note")]


def test_unterminated_section_reports_line():
    rec = Recorder()
    assert parse_ini_lines(["a=1\n", "[broken\n", "b=2\n"], rec) == 2
    assert rec.entries == [("", "a", "1"), ("", "b", "2")]


def test_line_without_separator_reports_first_error():
    rec = Recorder()
    assert parse_ini_lines(["a=1\n", "junk\n", "more junk\n"], rec) == 2


def test_handler_rejection_reports_line():
    rec = Recorder(accept=False)
    assert parse_ini_lines(["[s]\n", "a=1\n", "b=2\n"], rec) == 2
    assert len(rec.entries) == 2


def test_long_section_name_is_truncated():
    rec = Recorder()
    long_name = "x" * 40
    parse_ini_lines([f"[{long_name}]\n", "a=1\n"], rec)
    assert rec.entries[0][0] == long_name[:31]


def test_parse_ini_reads_file(tmp_path):
    path = tmp_path / "params.ini"
    path.write_text("[unit]\nalpha = 2\n", encoding="utf-8")
    rec = Recorder()
    assert parse_ini(path, rec) == 0
    assert rec.entries == [("unit", "alpha", "2")]


def test_parse_ini_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_ini(tmp_path / "absent.ini", Recorder())


def test_find_input_file_uses_flag(tmp_path):
    chosen = tmp_path / "chosen.json"
    chosen.write_text("{}", encoding="utf-8")
    default = tmp_path / "default.json"
    default.write_text("{}", encoding="utf-8")
    argv = ["prog", "-i", str(chosen)]
    assert find_input_file(argv, str(default), "-i") == str(chosen)
    assert find_input_file(["prog"], str(default), "-i") == str(default)


def test_find_input_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_input_file(["prog"], str(tmp_path / "nope.json"), "-i")


def test_find_output_file_last_writable_wins(tmp_path):
    first = tmp_path / "first.dat"
    second = tmp_path / "second.dat"
    first.write_text("", encoding="utf-8")
    second.write_text("", encoding="utf-8")
    argv = ["prog", "-o", str(first), "-o", str(second)]
    assert find_output_file(argv, "default.dat", "-o") == str(second)


def test_find_output_file_ignores_missing(tmp_path):
    argv = ["prog", "-o", str(tmp_path / "missing" / "out.dat")]
    assert find_output_file(argv, "default.dat", "-o") == "default.dat"


def test_count_inputs_ignores_trailing_flag():
    argv = ["prog", "-u", "a.json", "-f", "b.json", "-f", "c.json", "-u"]
    assert count_inputs(argv) == (2, 1)