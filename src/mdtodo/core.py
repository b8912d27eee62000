"""Task classification, indexing and mutations (no I/O except add_task)."""

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .models import FINISHED_MARKER, LEADING_SPACE, UNFINISHED_MARKER, LineKind
from .storage import append_line, has_terminator

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base class for soft failures of a task operation."""


class InvalidIndex(TaskError):
    def __init__(self, index: int, count: Optional[int] = None) -> None:
        self.index = index
        self.count = count
        if count is None:
            msg = f"Invalid index: {index}"
        else:
            msg = f"Invalid index: {index} (only {count} unfinished tasks)"
        super().__init__(msg)


class NoTasks(TaskError):
    def __init__(self, kind: LineKind) -> None:
        self.kind = kind
        super().__init__(f"No {kind} tasks found.")


def classify(line: str) -> LineKind:
    """Classify a raw line by its marker after leading whitespace."""
    head = line.lstrip(LEADING_SPACE)[:5]
    if head == UNFINISHED_MARKER:
        return "unfinished"
    if head == FINISHED_MARKER:
        return "finished"
    return "other"


def positions_of(lines: List[str], kind: LineKind) -> List[int]:
    """Return the 0-based positions of all lines of the given kind, in order."""
    return [i for i, line in enumerate(lines) if classify(line) == kind]


def resolve_unfinished(lines: List[str], index: int) -> int:
    """Translate a 1-based unfinished-task index into a line position."""
    if index <= 0:
        raise InvalidIndex(index)
    positions = positions_of(lines, "unfinished")
    if not positions:
        raise NoTasks("unfinished")
    if index > len(positions):
        raise InvalidIndex(index, len(positions))
    return positions[index - 1]


def check_task(lines: List[str], index: int) -> int:
    """Mark the index-th unfinished task as finished.

    Only the five marker characters change. Returns the line position.
    """
    pos = resolve_unfinished(lines, index)
    line = lines[pos]
    start = len(line) - len(line.lstrip(LEADING_SPACE))
    end = start + len(FINISHED_MARKER)
    lines[pos] = line[:start] + FINISHED_MARKER + line[end:]
    logger.debug("checked task %d at line %d", index, pos + 1)
    return pos


def remove_task(lines: List[str], index: int) -> str:
    """Delete the index-th unfinished task and return the removed line."""
    pos = resolve_unfinished(lines, index)
    logger.debug("removing task %d at line %d", index, pos + 1)
    return lines.pop(pos)


def remove_finished(lines: List[str]) -> int:
    """Delete every finished task; returns how many were removed."""
    positions = positions_of(lines, "finished")
    for pos in reversed(positions):
        del lines[pos]
    logger.debug("removed %d finished tasks", len(positions))
    return len(positions)


def format_task(text: str) -> str:
    return f"{UNFINISHED_MARKER} {text}\n"


def add_task(path: str, text: str, lines: Optional[List[str]] = None) -> str:
    """Append a new unfinished task to the file at path.

    `lines` is the content loaded for this invocation, used to avoid merging
    with an unterminated last line. Returns the line that was written.
    """
    line = format_task(text)
    append_line(path, line, lines)
    return line


def task_text(line: str) -> str:
    """The text of a task line: after the marker and one space, no terminator."""
    text = line.lstrip(LEADING_SPACE)[5:]
    if text.startswith(" "):
        text = text[1:]
    if has_terminator(text):
        text = text.rstrip("\r\n")
    return text


def unfinished_tasks(lines: List[str]) -> List[Tuple[int, str]]:
    """(index, text) for each unfinished task, numbered from 1."""
    return [
        (i, task_text(lines[pos]))
        for i, pos in enumerate(positions_of(lines, "unfinished"), start=1)
    ]


class Operation(enum.Enum):
    """Index-addressed operations that can be applied in a batch."""

    CHECK = "check"
    REMOVE = "remove"

    def apply(self, lines: List[str], index: int) -> None:
        if self is Operation.CHECK:
            check_task(lines, index)
        else:
            remove_task(lines, index)


@dataclass
class BatchResult:
    index: int
    error: Optional[TaskError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_indexes(tokens: Iterable[str]) -> Tuple[List[int], List[str]]:
    """Split raw index arguments into usable indexes and skipped tokens.

    Indexes are de-duplicated and sorted highest first, so that removing a
    task never shifts the position of one still pending in the batch.
    """
    indexes = set()
    skipped = []
    for token in tokens:
        if not (token.isascii() and token.isdigit()):
            skipped.append(token)
            continue
        value = int(token)
        if value <= 0:
            skipped.append(token)
            continue
        indexes.add(value)
    return sorted(indexes, reverse=True), skipped


def apply_indexes(
    lines: List[str], op: Operation, indexes: Iterable[int]
) -> List[BatchResult]:
    """Apply op to each index in turn, recomputing positions every time.

    A failing index is recorded and does not stop the rest of the batch.
    """
    results = []
    for index in indexes:
        try:
            op.apply(lines, index)
        except TaskError as e:
            logger.debug("%s %d failed: %s", op.value, index, e)
            results.append(BatchResult(index, e))
        else:
            results.append(BatchResult(index))
    return results
