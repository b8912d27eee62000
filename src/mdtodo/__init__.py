"""mdtodo - a Markdown checklist kept in a plain text file."""

__version__ = "1.0.0"

from .models import Session, DEFAULT_FILE, default_path
from .storage import load_lines, save_lines, append_line, load_session, save_session
from .core import (
    TaskError,
    InvalidIndex,
    NoTasks,
    Operation,
    classify,
    positions_of,
    check_task,
    remove_task,
    remove_finished,
    add_task,
    unfinished_tasks,
    parse_indexes,
    apply_indexes,
)

__all__ = [
    "Session",
    "DEFAULT_FILE",
    "default_path",
    "load_lines",
    "save_lines",
    "append_line",
    "load_session",
    "save_session",
    "TaskError",
    "InvalidIndex",
    "NoTasks",
    "Operation",
    "classify",
    "positions_of",
    "check_task",
    "remove_task",
    "remove_finished",
    "add_task",
    "unfinished_tasks",
    "parse_indexes",
    "apply_indexes",
]
