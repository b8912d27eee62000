from pathlib import Path

import pytest

SAMPLE = "- [ ] A\n- [x] B\n- [ ] C\n"


@pytest.fixture()
def write_todo(tmp_path: Path):
    """Write content to a todo.md under tmp_path and return its path."""

    def _write(content: str, name: str = "todo.md") -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture()
def sample_file(write_todo) -> Path:
    return write_todo(SAMPLE)


@pytest.fixture(autouse=True)
def _no_env_file(monkeypatch):
    monkeypatch.delenv("TODO_FILE", raising=False)
