"""File I/O for mdtodo task files."""

import logging
from typing import List, Optional

from .models import Session

logger = logging.getLogger(__name__)

LINE_ENDINGS = ("\r\n", "\n", "\r")

# Bytes that are not valid UTF-8 pass through unchanged.
FILE_OPTS = {"encoding": "utf-8", "errors": "surrogateescape", "newline": ""}


def has_terminator(line: str) -> bool:
    return line.endswith(LINE_ENDINGS)


def load_lines(path: str) -> List[str]:
    """Read every line of path, keeping each line's terminator as found.

    A missing file is not an error and yields an empty list.
    """
    try:
        with open(path, "r", **FILE_OPTS) as f:
            lines = f.readlines()
    except FileNotFoundError:
        logger.debug("no task file at %s, starting empty", path)
        return []
    logger.debug("loaded %d lines from %s", len(lines), path)
    return lines


def save_lines(path: str, lines: List[str]) -> None:
    """Overwrite path with the lines concatenated in order."""
    with open(path, "w", **FILE_OPTS) as f:
        f.write("".join(lines))
    logger.debug("wrote %d lines to %s", len(lines), path)


def append_line(path: str, line: str, lines: Optional[List[str]] = None) -> None:
    """Append one line to path without rewriting the file.

    If `lines` (the currently loaded content) ends in an unterminated line, a
    newline is written first so the two lines do not merge.
    """
    with open(path, "a", **FILE_OPTS) as f:
        if lines and not has_terminator(lines[-1]):
            f.write("\n")
        f.write(line)
    logger.debug("appended to %s: %r", path, line)


def load_session(path: str) -> Session:
    lines = load_lines(path)
    return Session(path=path, lines=lines, loaded=bool(lines))


def save_session(session: Session) -> bool:
    """Write the session back to its file.

    Returns False without touching the file if nothing was ever loaded.
    """
    if not session.loaded:
        logger.debug("nothing loaded from %s, skipping save", session.path)
        return False
    save_lines(session.path, session.lines)
    return True
