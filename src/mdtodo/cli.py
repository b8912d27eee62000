"""mdtodo command-line interface."""

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Tuple

from . import __version__
from .models import Session, default_path, looks_like_file
from .storage import load_session, save_session
from .logging_setup import setup_logging
from .core import (
    Operation,
    add_task,
    apply_indexes,
    parse_indexes,
    remove_finished,
    unfinished_tasks,
)

logger = logging.getLogger(__name__)

DONE_VERBS = {Operation.CHECK: "Checked", Operation.REMOVE: "Removed"}

VALUE_OPTIONS = ("-f", "--file")
FLAG_OPTIONS = ("-h", "--help", "-v", "--verbose", "--version")

USAGE = """\
Usage:
  {prog} [<file.md>] "<task>"           - Add a new task (default file: todo.md).
  {prog} [<file.md>] l(ist)             - List all unfinished tasks.
  {prog} [<file.md>] c(heck) <index>    - Mark the <index>th unfinished task as finished.
  {prog} [<file.md>] r(emove) <index>   - Remove the <index>th unfinished task.
  {prog} [<file.md>] clean              - Remove all finished tasks.

You can also use multiple <index>es for check and remove commands, i.e. {prog} check 1 2 3.
"""


def printable(text: str) -> str:
    """Text safe to print when the file held bytes that are not UTF-8."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def print_usage(prog: str) -> None:
    print(USAGE.format(prog=prog), end="")


def save(session: Session) -> int:
    try:
        save_session(session)
    except OSError as e:
        logger.debug("save failed: %s", e)
        print(f"Error opening {session.path} for writing.")
        return 1
    return 0


def cmd_add(session: Session, words: List[str], prog: str) -> int:
    text = " ".join(words)
    try:
        add_task(session.path, text, session.lines if session.loaded else None)
    except OSError as e:
        logger.debug("append failed: %s", e)
        print(f"Error opening {session.path} for appending.")
        return 1
    print(f"Added: {printable(text)}")
    return 0


def cmd_list(session: Session, args: List[str], prog: str) -> int:
    tasks = unfinished_tasks(session.lines)
    if not tasks:
        print("No unfinished tasks found.")
        return 0
    for i, text in tasks:
        print(f"{i}) {printable(text)}")
    return 0


def run_batch(session: Session, op: Operation, tokens: List[str], prog: str) -> int:
    """Apply op to every index in tokens, then save if anything changed."""
    if not tokens:
        print(f"Usage: {prog} [<file.md>] {op.value} <index>")
        return 1

    indexes, skipped = parse_indexes(tokens)
    for token in skipped:
        print(f"Skipping invalid index: {token}")

    changed = False
    for result in apply_indexes(session.lines, op, indexes):
        if result.ok:
            changed = True
            print(f"{DONE_VERBS[op]} {result.index}.")
        else:
            print(result.error)

    return save(session) if changed else 0


def cmd_check(session: Session, args: List[str], prog: str) -> int:
    return run_batch(session, Operation.CHECK, args, prog)


def cmd_remove(session: Session, args: List[str], prog: str) -> int:
    return run_batch(session, Operation.REMOVE, args, prog)


def cmd_clean(session: Session, args: List[str], prog: str) -> int:
    removed = remove_finished(session.lines)
    if not removed:
        print("No finished tasks found.")
        return 0
    print(f"Removed {removed} finished tasks.")
    return save(session)


COMMANDS: Dict[str, Callable[[Session, List[str], str], int]] = {
    "list": cmd_list,
    "l": cmd_list,
    "check": cmd_check,
    "c": cmd_check,
    "remove": cmd_remove,
    "r": cmd_remove,
    "clean": cmd_clean,
}


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="todo",
        description="Keep a Markdown checklist (- [ ] / - [x]) in a text file.",
        epilog=USAGE.format(prog="todo"),
        usage="%(prog)s [-h] [-f FILE] [-v] [--version] [<file.md>] command|task ...",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "-f",
        "--file",
        default=None,
        help="Path to the task file (default: $TODO_FILE or todo.md)",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def split_argv(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Split argv into leading options and the command words.

    Only exact option spellings are taken as options, so task text that
    starts with a dash stays task text. A "--" ends the options.
    """
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            return argv[:i], argv[i + 1 :]
        if arg in VALUE_OPTIONS:
            i += 2
        elif arg in FLAG_OPTIONS or arg.startswith("--file="):
            i += 1
        else:
            break
    return argv[:i], argv[i:]


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    options, words = split_argv(list(argv))
    args = parser.parse_args(options)

    setup_logging(args.verbose)

    path = args.file
    if words and looks_like_file(words[0]):
        path = words.pop(0)
    if path is None:
        path = default_path()

    if not words:
        print_usage(parser.prog)
        return 1

    try:
        session = load_session(path)
    except OSError as e:
        logger.debug("load failed: %s", e)
        print(f"Error opening {path} for reading.")
        return 1

    command = words[0]
    handler = COMMANDS.get(command)
    if handler is None:
        logger.debug("no command %r, adding it as a task", command)
        return cmd_add(session, words, parser.prog)
    return handler(session, words[1:], parser.prog)


if __name__ == "__main__":
    sys.exit(main())
