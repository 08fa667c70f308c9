from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest

from ciplugins.errors import CompileError
from ciplugins.kotlin.dependencies import IVY_FILE, IVY_JAR_ENV, IVY_SETTINGS_FILE, bundled_resources_dir, resolve_kotlin_jars


def test_explicit_jars_skip_resolution(monkeypatch):
    def no_ivy(cmd, **kwargs):
        raise AssertionError("Ivy must not run when Kotlin jars are given")

    monkeypatch.setattr("ciplugins.kotlin.dependencies.subprocess.run", no_ivy)
    assert resolve_kotlin_jars(["/opt/kotlin/lib/kotlin-compiler.jar"]) == ["/opt/kotlin/lib/kotlin-compiler.jar"]


def test_resolution_needs_ivy(monkeypatch):
    monkeypatch.delenv(IVY_JAR_ENV, raising=False)
    with pytest.raises(CompileError) as e:
        resolve_kotlin_jars([])
    assert e.value.kind == "ivy_unavailable"


def test_ivy_resolves_bundled_descriptors(monkeypatch):
    monkeypatch.setenv(IVY_JAR_ENV, "/opt/ivy/ivy.jar")
    monkeypatch.delenv("JAVA_HOME", raising=False)
    seen = {}

    def fake_ivy(cmd, **kwargs):
        seen["cmd"] = cmd
        settings = Path(cmd[cmd.index("-settings") + 1])
        ivy = Path(cmd[cmd.index("-ivy") + 1])
        seen["descriptors"] = (settings.read_text(), ivy.read_text())
        cachepath = Path(cmd[cmd.index("-cachepath") + 1])
        cachepath.write_text(os.pathsep.join(["/cache/kotlin-compiler.jar", "/cache/kotlin-stdlib.jar"]) + "\n")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr("ciplugins.kotlin.dependencies.subprocess.run", fake_ivy)

    assert resolve_kotlin_jars(None) == ["/cache/kotlin-compiler.jar", "/cache/kotlin-stdlib.jar"]
    assert seen["cmd"][:3] == ["java", "-jar", "/opt/ivy/ivy.jar"]
    settings, ivy = seen["descriptors"]
    assert "<ivysettings>" in settings
    assert 'name="kotlin-compiler-embeddable"' in ivy


def test_ivy_failure(monkeypatch):
    monkeypatch.setenv(IVY_JAR_ENV, "/opt/ivy/ivy.jar")
    monkeypatch.setattr(
        "ciplugins.kotlin.dependencies.subprocess.run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 255, "", "unresolved dependency"),
    )
    with pytest.raises(CompileError) as e:
        resolve_kotlin_jars([])
    assert e.value.kind == "resolution_failed"
    assert e.value.exit_code == 255


def test_bundled_descriptors_are_on_disk():
    resources = bundled_resources_dir()
    assert (resources / IVY_FILE).is_file()
    assert (resources / IVY_SETTINGS_FILE).is_file()
