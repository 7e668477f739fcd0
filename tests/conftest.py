from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from ciworker.ui.console import Console, set_console


def git(*args: str, cwd: Path) -> None:
    subprocess.run(
        [
            "git",
            "-c", "user.name=ciworker",
            "-c", "user.email=ciworker@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


def make_repo(path: Path, files: dict[str, str], branch: str = "main") -> Path:
    path.mkdir(parents=True)
    git("init", "-q", cwd=path)
    git("symbolic-ref", "HEAD", f"refs/heads/{branch}", cwd=path)
    for rel, content in files.items():
        target = path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    git("add", ".", cwd=path)
    git("commit", "-q", "-m", "init", cwd=path)
    return path


@pytest.fixture(autouse=True)
def _fresh_console():
    set_console(Console())
    yield
    set_console(Console())


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A local repository with README.md == "hello" on branch main."""
    return make_repo(tmp_path / "origin", {"README.md": "hello"})


@pytest.fixture
def work_root(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root
