from __future__ import annotations

from ciworker.artifacts import collect_artifacts
from ciworker.model import Artifact, JobLog, JobOutput


def test_collects_in_declaration_order(tmp_path):
    (tmp_path / "b.txt").write_text("bee")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "a.txt").write_text("ay")
    log = JobLog()

    artifacts = collect_artifacts(
        [JobOutput("second", "b.txt"), JobOutput("first", "sub/a.txt")],
        tmp_path,
        log=log,
    )

    assert artifacts == [Artifact("second", "bee"), Artifact("first", "ay")]
    assert log.render() == ""


def test_missing_output_is_skipped_with_diagnostic(tmp_path):
    (tmp_path / "present.txt").write_text("here")
    log = JobLog()

    artifacts = collect_artifacts(
        [JobOutput("missing", "nope.txt"), JobOutput("present", "present.txt")],
        tmp_path,
        log=log,
    )

    assert [a.name for a in artifacts] == ["present"]
    assert log.render().startswith("Error reading output missing: ")
    assert [e.stage for e in log.entries] == ["collect"]


def test_non_text_output_is_skipped(tmp_path):
    (tmp_path / "blob.bin").write_bytes(b"\xff\xfe\x00\x81")
    log = JobLog()

    artifacts = collect_artifacts([JobOutput("blob", "blob.bin")], tmp_path, log=log)

    assert artifacts == []
    assert "Error reading output blob: " in log.render()


def test_directory_output_is_skipped(tmp_path):
    (tmp_path / "build").mkdir()
    log = JobLog()

    artifacts = collect_artifacts([JobOutput("build", "build")], tmp_path, log=log)

    assert artifacts == []
    assert "Error reading output build: " in log.render()


def test_path_outside_workspace_is_skipped(tmp_path):
    workspace = tmp_path / "ws"
    workspace.mkdir()
    (tmp_path / "secret.txt").write_text("do not read")
    log = JobLog()

    artifacts = collect_artifacts([JobOutput("secret", "../secret.txt")], workspace, log=log)

    assert artifacts == []
    assert "outside the workspace" in log.render()


def test_line_endings_are_preserved(tmp_path):
    (tmp_path / "crlf.txt").write_bytes(b"a\r\nb\rc")
    log = JobLog()

    artifacts = collect_artifacts([JobOutput("crlf", "crlf.txt")], tmp_path, log=log)

    assert artifacts == [Artifact("crlf", "a\r\nb\rc")]
