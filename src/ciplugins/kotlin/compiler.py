# kotlin/compiler.py
# Thin wrapper around the Kotlin command line compiler (K2JVMCompiler),
# started on a JVM with the resolved Kotlin jars as its classpath.

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..errors import CompileError
from ..ui.console import get_console

K2JVM_COMPILER = "org.jetbrains.kotlin.cli.jvm.K2JVMCompiler"

TOOL_HINTS = {
    "java": "Install a JDK or point JAVA_HOME at one.",
}

# Jar name prefixes recognised as the documentation compiler plugin
DOC_PLUGIN_PREFIXES = ("kdoc", "dokka")
DOC_PLUGIN_ID = "org.jetbrains.kotlin.kdoc"


def java_executable() -> str:
    java_home = os.environ.get("JAVA_HOME")
    if java_home:
        return str(Path(java_home) / "bin" / "java")
    return "java"


@dataclass(frozen=True)
class CompilerPlugin:
    """A compiler plugin jar plus the options passed to it."""
    jar: str
    plugin_id: str
    options: Dict[str, str] = field(default_factory=dict)

    def args(self) -> List[str]:
        out = [f"-Xplugin={self.jar}"]
        for key, value in self.options.items():
            out.extend(["-P", f"plugin:{self.plugin_id}:{key}={value}"])
        return out


def load_doc_plugin(jars: Sequence[str], doc_dir: str) -> Optional[CompilerPlugin]:
    """Documentation plugin writing to `doc_dir`, or None when no plugin jar is available."""
    for jar in jars:
        if Path(jar).name.lower().startswith(DOC_PLUGIN_PREFIXES) and Path(jar).is_file():
            return CompilerPlugin(jar=jar, plugin_id=DOC_PLUGIN_ID, options={"outputDir": doc_dir})
    return None


class KotlinCompiler:
    """
    Kotlin compiler invocations.

    Each operation runs one blocking compiler process and raises
    CompileError when it exits non-zero.
    """

    def __init__(self, compiler_jars: Sequence[str], *, verbose: bool = False):
        self.compiler_jars = list(compiler_jars)
        self.verbose = verbose
        self.plugins: List[CompilerPlugin] = []

    # ---- command line ----

    def _command(self, args: List[str], stdlib: Optional[str], classpath: Sequence[str]) -> List[str]:
        cp = list(classpath)
        cmd = [java_executable(), "-cp", os.pathsep.join(self.compiler_jars), K2JVM_COMPILER]
        if stdlib:
            # custom runtime library replaces the bundled one
            cmd.append("-no-stdlib")
            cp.insert(0, stdlib)
        if cp:
            cmd.extend(["-classpath", os.pathsep.join(cp)])
        if self.verbose:
            cmd.append("-verbose")
        for plugin in self.plugins:
            cmd.extend(plugin.args())
        cmd.extend(args)
        return cmd

    def _run(self, cmd: List[str], target: str) -> None:
        get_console().print_debug(" ".join(cmd))
        try:
            proc = subprocess.run(cmd, text=True, capture_output=True)
        except FileNotFoundError:
            raise CompileError(
                kind="tool_unavailable",
                target=target,
                message=f"{cmd[0]} is not available",
                details={"hint": TOOL_HINTS["java"], "tool": cmd[0]},
            )

        if proc.returncode != 0:
            raise CompileError(
                kind="compilation_failed",
                target=target,
                message=f"Kotlin compiler failed (exit={proc.returncode})",
                details={
                    "exit_code": proc.returncode,
                    "stdout": proc.stdout[-4000:],
                    "stderr": proc.stderr[-4000:],
                },
            )

    # ---- operations ----

    def module_to_jar(
        self,
        module: str,
        jar: Optional[str],
        include_runtime: bool,
        stdlib: Optional[str],
        classpath: Sequence[str],
    ) -> None:
        """Compile a module descriptor; without `jar` the descriptor's own destination is used."""
        args = [f"-Xbuild-file={module}"]
        if jar:
            args.extend(["-d", jar])
        if include_runtime:
            args.append("-include-runtime")
        self._run(self._command(args, stdlib, classpath), module)

    def sources_to_jar(
        self,
        source: str,
        jar: str,
        include_runtime: bool,
        stdlib: Optional[str],
        classpath: Sequence[str],
    ) -> None:
        args = [source, "-d", jar]
        if include_runtime:
            args.append("-include-runtime")
        self._run(self._command(args, stdlib, classpath), source)

    def sources_to_dir(
        self,
        source: str,
        output: str,
        stdlib: Optional[str],
        classpath: Sequence[str],
    ) -> None:
        self._run(self._command([source, "-d", output], stdlib, classpath), source)
