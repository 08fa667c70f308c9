# kotlin/dependencies.py
from __future__ import annotations

import os
import subprocess
import tempfile
from importlib.resources import files
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import CompileError
from ..ui.console import get_console
from .compiler import java_executable

IVY_JAR_ENV = "IVY_JAR"
IVY_FILE = "ivy.xml"
IVY_SETTINGS_FILE = "ivyconf.xml"


def bundled_resources_dir() -> Path:
    """Directory holding the bundled Ivy descriptors."""
    resources = files("ciplugins.kotlin") / "resources"
    missing = [name for name in (IVY_FILE, IVY_SETTINGS_FILE) if not (resources / name).is_file()]
    if missing:
        raise CompileError(
            kind="resolution_failed",
            target=IVY_FILE,
            message="bundled Ivy descriptors are missing",
            details={"missing": ", ".join(missing)},
        )
    return Path(str(resources))


def resolve_with_ivy(verbose: bool = False, ivy_jar: Optional[str] = None) -> List[str]:
    """
    Resolve the Kotlin compiler jars described by the bundled Ivy descriptors.

    Runs the Ivy command line (`-cachepath`), which downloads the artifacts
    into the Ivy cache and writes their paths to a classpath file.
    """
    ivy_jar = ivy_jar or os.environ.get(IVY_JAR_ENV)
    if not ivy_jar:
        raise CompileError(
            kind="ivy_unavailable",
            target=IVY_FILE,
            message="Kotlin jars are not configured and Ivy is not available",
            details={"hint": f"Pass explicit Kotlin jars or set {IVY_JAR_ENV} to the Ivy jar."},
        )

    resources = bundled_resources_dir()
    with tempfile.TemporaryDirectory() as tmp:
        cachepath = Path(tmp) / "classpath.txt"
        cmd = [
            java_executable(), "-jar", ivy_jar,
            "-settings", str(resources / IVY_SETTINGS_FILE),
            "-ivy", str(resources / IVY_FILE),
            "-cachepath", str(cachepath),
        ]
        if not verbose:
            cmd.append("-warn")

        proc = subprocess.run(cmd, text=True, capture_output=True)
        if proc.returncode != 0 or not cachepath.exists():
            raise CompileError(
                kind="resolution_failed",
                target=IVY_FILE,
                message="Ivy failed to resolve Kotlin jars",
                details={"exit_code": proc.returncode, "stderr": proc.stderr[-4000:]},
            )
        resolved = cachepath.read_text(encoding="utf-8").strip()

    return [p for p in resolved.split(os.pathsep) if p]


def resolve_kotlin_jars(kotlin_jars: Optional[Sequence[str]], verbose: bool = False) -> List[str]:
    """Explicit Kotlin jars when given, Ivy resolution otherwise."""
    console = get_console()
    if kotlin_jars:
        jars = [str(j) for j in kotlin_jars]
    else:
        jars = resolve_with_ivy(verbose=verbose)

    if verbose:
        console.print_info(f"Kotlin jars: {jars}")
    return jars
