from __future__ import annotations

import re
import subprocess

import pytest

from ciworker.errors import FetchError
from ciworker.git_facts import git as git_mod
from ciworker.git_facts.git import clone_branch, head_sha

from conftest import git, make_repo


def test_clone_branch_populates_existing_empty_directory(git_repo, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()

    clone_branch(str(git_repo), "main", dest)

    assert (dest / "README.md").read_text() == "hello"


def test_clone_branch_checks_out_requested_branch(git_repo, tmp_path):
    git("checkout", "-q", "-b", "feature", cwd=git_repo)
    (git_repo / "FEATURE.md").write_text("only on feature")
    git("add", ".", cwd=git_repo)
    git("commit", "-q", "-m", "feature", cwd=git_repo)
    git("checkout", "-q", "main", cwd=git_repo)

    dest = tmp_path / "dest"
    dest.mkdir()
    clone_branch(str(git_repo), "feature", dest)

    assert (dest / "FEATURE.md").read_text() == "only on feature"


def test_clone_missing_branch_raises_with_stderr(git_repo, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()

    with pytest.raises(FetchError) as exc_info:
        clone_branch(str(git_repo), "does-not-exist", dest)

    err = exc_info.value
    assert err.invoked is True
    assert "does-not-exist" in err.detail
    assert str(err).startswith("Failed to clone repository: ")


def test_clone_invalid_repository_raises(tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()

    with pytest.raises(FetchError) as exc_info:
        clone_branch(str(tmp_path / "no-such-repo"), "main", dest)

    assert exc_info.value.detail.strip()


def test_clone_reports_invocation_failure(tmp_path, monkeypatch):
    def missing_git(*args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "git")

    monkeypatch.setattr(git_mod.subprocess, "run", missing_git)

    with pytest.raises(FetchError) as exc_info:
        clone_branch("https://example.invalid/repo.git", "main", tmp_path)

    err = exc_info.value
    assert err.invoked is False
    assert str(err).startswith("Error cloning repository: ")
    assert "No such file or directory" in err.detail


def test_head_sha_of_clone(tmp_path):
    repo = make_repo(tmp_path / "origin", {"a.txt": "a"})
    sha = head_sha(repo)

    assert sha is not None
    assert re.fullmatch(r"[0-9a-f]{40}", sha)
    expected = subprocess.run(
        ["git", "rev-parse", "HEAD"], cwd=repo, capture_output=True, text=True, check=True
    ).stdout.strip()
    assert sha == expected


def test_head_sha_outside_repository_is_none(tmp_path):
    assert head_sha(tmp_path) is None


def test_clone_with_nul_byte_is_an_invocation_failure(git_repo, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()

    with pytest.raises(FetchError) as exc_info:
        clone_branch(str(git_repo), "ma\x00in", dest)

    assert exc_info.value.invoked is False
    assert str(exc_info.value).startswith("Error cloning repository: ")


def test_repository_starting_with_dash_is_not_an_option(tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()
    marker = tmp_path / "pwned"

    with pytest.raises(FetchError) as exc_info:
        clone_branch(f"--upload-pack=touch {marker}", "main", dest)

    assert exc_info.value.invoked is True
    assert not marker.exists()


def test_clone_keeps_carriage_returns_in_stderr(tmp_path, monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 128, stdout=b"", stderr=b"progress\rfatal: nope\r\n")

    monkeypatch.setattr(git_mod.subprocess, "run", fake_run)

    with pytest.raises(FetchError) as exc_info:
        clone_branch("https://example.invalid/repo.git", "main", tmp_path)

    assert exc_info.value.detail == "progress\rfatal: nope\r\n"
