"""Data models and constants for mdtodo."""

import os
from dataclasses import dataclass, field
from typing import List, Literal

DEFAULT_FILE = "todo.md"
FILE_ENV_VAR = "TODO_FILE"
FILE_EXTENSIONS = (".md", ".markdown")

UNFINISHED_MARKER = "- [ ]"
FINISHED_MARKER = "- [x]"

LEADING_SPACE = " \t\n\v\f\r"

LineKind = Literal["unfinished", "finished", "other"]


def default_path() -> str:
    """Return $TODO_FILE if set, else todo.md in the working directory."""
    value = os.environ.get(FILE_ENV_VAR, "").strip()
    return os.path.expanduser(value) if value else DEFAULT_FILE


def looks_like_file(arg: str) -> bool:
    """True if arg names a task file rather than a command or task text."""
    return any(
        arg.endswith(ext) and len(arg) > len(ext) for ext in FILE_EXTENSIONS
    )


@dataclass
class Session:
    """One invocation's view of a task file.

    `lines` holds raw lines with their terminators. `loaded` is set once the
    lines came from a non-empty file and stays set after every line has been
    removed, so that an emptied list is still written back.
    """

    path: str
    lines: List[str] = field(default_factory=list)
    loaded: bool = False
