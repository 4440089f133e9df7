"""INI-style parameter file parsing and command-line file selection."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Sequence

Handler = Callable[[str, str, str], bool]

_MAX_SECTION = 32
_MAX_NAME = 64

_log = logging.getLogger(__name__)


def _find_char_or_comment(text: str, char: str) -> int:
    """Index of ``char`` or of a ';' that follows whitespace; ``len(text)`` if neither."""
    was_space = False
    for i, ch in enumerate(text):
        if ch == char or (was_space and ch == ";"):
            return i
        was_space = ch.isspace()
    return len(text)


def parse_ini_lines(lines: Iterable[str], handler: Handler) -> int:
    """Parse INI lines, calling ``handler(section, name, value)`` for every entry.

    Indented lines continue the previous entry. Lines starting with ';' or
    '#' are comments. Returns 0 on success, otherwise the number of the first
    line that could not be parsed or that the handler rejected.
    """
    section = ""
    prev_name = ""
    error = 0
    for lineno, raw in enumerate(lines, start=1):
        stripped = raw.rstrip()
        start = stripped.lstrip()
        indented = len(start) < len(stripped)

        if prev_name and start and indented:
            if not handler(section, prev_name, start) and not error:
                error = lineno
            continue
        if not start or start[0] in ";#":
            continue
        if start[0] == "[":
            body = start[1:]
            end = _find_char_or_comment(body, "]")
            if end < len(body) and body[end] == "]":
                section = body[:end][: _MAX_SECTION - 1]
                prev_name = ""
            elif not error:
                error = lineno
            continue

        end = _find_char_or_comment(start, "=")
        if end >= len(start) or start[end] != "=":
            end = _find_char_or_comment(start, ":")
        if end < len(start) and start[end] in "=:":
            name = start[:end].rstrip()
            value = start[end + 1 :].strip()
            prev_name = name[: _MAX_NAME - 1]
            if not handler(section, name, value) and not error:
                error = lineno
        elif not error:
            error = lineno
    return error


def parse_ini(path: str | os.PathLike[str], handler: Handler) -> int:
    """Parse an INI file; see :func:`parse_ini_lines`. Raises OSError if unreadable."""
    with open(path, encoding="utf-8") as file:
        return parse_ini_lines(file, handler)


def find_input_file(argv: Sequence[str], default: str, flag: str) -> str:
    """Name of the input file given after ``flag`` in ``argv``, else ``default``.

    Raises OSError if the chosen file cannot be opened for reading.
    """
    name = default
    for option, value in zip(argv, argv[1:]):
        if option == flag:
            name = value
            break
    with open(name, "rb"):
        pass
    return name


def find_output_file(argv: Sequence[str], default: str, flag: str) -> str:
    """Name of a writable output file given after ``flag`` in ``argv``, else ``default``.

    The last writable candidate wins; candidates that are not writable are
    ignored.
    """
    name = default
    for option, value in zip(argv, argv[1:]):
        if option == flag and os.access(value, os.W_OK):
            _log.info("Selected output file found! (%s)", value)
            name = value
    return name


def count_inputs(argv: Sequence[str]) -> tuple[int, int]:
    """Count flocking ('-f') and unit ('-u') parameter options that have a value.

    Returns ``(flocking_params, unit_params)``.
    """
    options = list(argv[:-1])
    return options.count("-f"), options.count("-u")