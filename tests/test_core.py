import pytest

from mdtodo.core import (
    InvalidIndex,
    NoTasks,
    Operation,
    add_task,
    apply_indexes,
    check_task,
    classify,
    parse_indexes,
    positions_of,
    remove_finished,
    remove_task,
    unfinished_tasks,
)

from .conftest import SAMPLE


def sample_lines():
    return SAMPLE.splitlines(keepends=True)


@pytest.mark.parametrize(
    "line, kind",
    [
        ("- [ ] task\n", "unfinished"),
        ("   - [ ] indented\n", "unfinished"),
        ("\t- [x] tabbed", "finished"),
        ("- [x]", "finished"),
        ("- [X] upper\n", "other"),
        ("-[ ] no space\n", "other"),
        ("* [ ] star\n", "other"),
        ("\n", "other"),
        ("", "other"),
    ],
)
def test_classify(line, kind):
    assert classify(line) == kind


def test_positions_of():
    lines = ["# head\n"] + sample_lines() + ["\n"]
    assert positions_of(lines, "unfinished") == [1, 3]
    assert positions_of(lines, "finished") == [2]
    assert positions_of(lines, "other") == [0, 4]
    assert positions_of([], "unfinished") == []


def test_positions_of_is_repeatable():
    lines = sample_lines()
    assert positions_of(lines, "unfinished") == positions_of(lines, "unfinished")


def test_check_rewrites_only_the_marker():
    lines = ["  - [ ]   spaced  text \r\n", "- [ ] other\n"]
    assert check_task(lines, 1) == 0
    assert lines == ["  - [x]   spaced  text \r\n", "- [ ] other\n"]


def test_check_second_unfinished():
    lines = sample_lines()
    check_task(lines, 2)
    assert "".join(lines) == "- [ ] A\n- [x] B\n- [x] C\n"
    assert len(positions_of(lines, "unfinished")) == 1
    assert len(positions_of(lines, "finished")) == 2


@pytest.mark.parametrize("index", [0, -1, 3])
def test_check_out_of_range_leaves_lines_alone(index):
    lines = sample_lines()
    with pytest.raises(InvalidIndex) as exc:
        check_task(lines, index)
    assert exc.value.index == index
    assert lines == sample_lines()


def test_invalid_index_message_names_count():
    with pytest.raises(InvalidIndex, match=r"Invalid index: 5 \(only 2 unfinished tasks\)"):
        remove_task(sample_lines(), 5)
    with pytest.raises(InvalidIndex, match=r"^Invalid index: 0$"):
        remove_task(sample_lines(), 0)


def test_no_unfinished_tasks():
    with pytest.raises(NoTasks, match="No unfinished tasks found."):
        check_task(["- [x] done\n"], 1)


def test_remove_task():
    lines = sample_lines()
    assert remove_task(lines, 1) == "- [ ] A\n"
    assert lines == ["- [x] B\n", "- [ ] C\n"]


def test_remove_finished():
    lines = ["- [x] a\n", "- [ ] b\n", "- [x] c\n", "- [x] d\n", "note\n"]
    assert remove_finished(lines) == 3
    assert lines == ["- [ ] b\n", "note\n"]


def test_clean_is_idempotent():
    lines = sample_lines()
    remove_finished(lines)
    once = list(lines)
    assert remove_finished(lines) == 0
    assert lines == once == ["- [ ] A\n", "- [ ] C\n"]


def test_add_task_to_missing_file(tmp_path):
    path = tmp_path / "todo.md"
    assert add_task(str(path), "buy milk") == "- [ ] buy milk\n"
    assert path.read_text() == "- [ ] buy milk\n"


def test_unfinished_tasks():
    lines = sample_lines() + ["- [ ]\n", "  - [ ]no space"]
    assert unfinished_tasks(lines) == [(1, "A"), (2, "C"), (3, ""), (4, "no space")]


def test_parse_indexes():
    indexes, skipped = parse_indexes(["1", "3", "x", "0", "3", "-2", "2"])
    assert indexes == [3, 2, 1]
    assert skipped == ["x", "0", "-2"]


def test_batch_remove_runs_highest_first():
    lines = ["- [ ] one\n", "- [ ] two\n"]
    results = apply_indexes(lines, Operation.REMOVE, [2, 1])
    assert [r.index for r in results] == [2, 1]
    assert all(r.ok for r in results)
    assert lines == []


def test_batch_continues_after_failure():
    lines = sample_lines()
    indexes, _ = parse_indexes(["1", "7"])
    results = apply_indexes(lines, Operation.CHECK, indexes)
    assert [(r.index, r.ok) for r in results] == [(7, False), (1, True)]
    assert isinstance(results[0].error, InvalidIndex)
    assert "".join(lines) == "- [x] A\n- [x] B\n- [ ] C\n"


def test_batch_check_recomputes_positions():
    lines = ["- [ ] a\n", "- [ ] b\n", "- [ ] c\n"]
    apply_indexes(lines, Operation.CHECK, [3, 1])
    assert lines == ["- [x] a\n", "- [ ] b\n", "- [x] c\n"]


@pytest.mark.parametrize("line", ["\u00a0- [ ] nbsp\n", "\u3000- [x] wide\n", "\x85- [ ] nel\n"])
def test_classify_ignores_unicode_whitespace(line):
    assert classify(line) == "other"


def test_check_keeps_unicode_indent_lines_untouched():
    lines = ["\u00a0- [ ] nbsp\n", "\v- [ ] vtab\n"]
    check_task(lines, 1)
    assert lines == ["\u00a0- [ ] nbsp\n", "\v- [x] vtab\n"]


@pytest.mark.parametrize("token", ["1_0", " 3", "3 ", "+2", "\u0663", "2.0"])
def test_parse_indexes_accepts_only_plain_digits(token):
    assert parse_indexes([token]) == ([], [token])
