"""
Input collection from piped stdin and files.
"""

import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from .errors import EmptyInputError, FileReadError, InputReadError


def read_piped_input(stream: Optional[TextIO]) -> str:
    """Read the stream only if data is actually piped into it.

    An interactive terminal (or no stream at all) contributes nothing.

    Raises:
        InputReadError: If the piped data cannot be read or decoded
    """
    if stream is None or stream.isatty():
        return ""
    try:
        return stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(e) from e


def read_files(paths: Sequence[str]) -> str:
    """Read files in order and join their contents with newlines.

    Args:
        paths: File paths to read

    Returns:
        Combined file contents

    Raises:
        FileReadError: On the first path that cannot be read
    """
    texts = []
    for path in paths:
        try:
            texts.append(Path(path).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(str(path), e) from e
    return "\n".join(texts)


def collect_input(paths: Sequence[str], stdin: Optional[TextIO] = None) -> str:
    """Build the text to count from piped stdin followed by file contents.

    Files are read before stdin so a bad path fails before any input is
    consumed. No separator is inserted between the piped segment and the
    file segment.

    Args:
        paths: Zero or more file paths
        stdin: Input stream, defaults to sys.stdin

    Returns:
        Non-empty combined text

    Raises:
        FileReadError: If any file cannot be read
        InputReadError: If piped stdin cannot be read
        EmptyInputError: If both sources are empty
    """
    file_input = read_files(paths) if paths else ""
    piped_input = read_piped_input(sys.stdin if stdin is None else stdin)

    text = piped_input + file_input
    if not text:
        raise EmptyInputError()
    return text
