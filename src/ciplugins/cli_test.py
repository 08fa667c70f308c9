from __future__ import annotations

import subprocess

from click.testing import CliRunner

from ciplugins.cli import cli

JOBS = '''
from ciplugins.jenkins import Job, JobType

JOBS = [Job(id="app"), Job(id="lib", job_type=JobType.maven, node="agent1")]
'''


def test_render_writes_configs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "jenkins_jobs.py").write_text(JOBS)

    result = CliRunner().invoke(cli, ["render", "--out-dir", "out", "--timestamp", "2026-10-19", "--indent", "4"])

    assert result.exit_code == 0, result.output
    assert "RENDER STARTED" in result.output
    assert "app: SUCCESS" in result.output
    lib = (tmp_path / "out" / "lib" / "config.xml").read_text(encoding="utf-8")
    assert "    <assignedNode>agent1</assignedNode>" in lib
    assert "Generated automatically by [pom.xml] on 2026-10-19" in lib


def test_render_without_definitions(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["render"])
    assert result.exit_code == 1
    assert "No job definitions found" in result.output


def test_render_reports_invalid_job(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bad_jobs.py").write_text(
        "from ciplugins.jenkins import Job, Trigger, TriggerKind\n"
        "JOBS = [Job(id='app', triggers=[Trigger(kind=TriggerKind.gerrit)])]\n"
    )
    result = CliRunner().invoke(cli, ["render", "--jobs", "bad_jobs"])
    assert result.exit_code == 1
    assert "invalid_job" in result.output
    assert not (tmp_path / "target").exists()


def test_compile_rejects_runtime_without_jar(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "src").mkdir()
    result = CliRunner().invoke(cli, [
        "compile", "--src", "src", "--include-runtime", "--kotlin-jar", "kotlin-compiler.jar",
    ])
    assert result.exit_code == 1
    assert "<includeRuntime> parameter can only be used" in result.output


def test_compile_runs_compiler(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "src").mkdir()
    (tmp_path / "kotlin-compiler.jar").write_bytes(b"PK")
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr("ciplugins.kotlin.compiler.subprocess.run", fake_run)
    result = CliRunner().invoke(cli, [
        "compile", "--src", "src", "--jar", "dist/app.jar", "--kotlin-jar", "kotlin-compiler.jar",
    ])

    assert result.exit_code == 0, result.output
    assert "Compiling [src] => [dist/app.jar]" in result.output
    assert len(calls) == 1
    assert (tmp_path / "dist").is_dir()
