# kotlin/compile.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..errors import CompileError
from ..ui.console import get_console
from .compiler import KotlinCompiler, load_doc_plugin
from .dependencies import resolve_kotlin_jars

MAIN_OUTPUT = "target/classes"
TEST_OUTPUT = "target/test-classes"


@dataclass
class CompileRequest:
    """
    One Kotlin compilation, as configured in the build.

    `src`, `jar`, `stdlib`, `doc_output`, `module`, `include_runtime`,
    `verbose` and `kotlin_jars` are the user-facing settings; `sources`,
    `classpath`, `output` and `doc_output_postfix` come from the compile goal
    (main or test sources).
    """
    src: Optional[str] = None
    jar: Optional[str] = None
    stdlib: Optional[str] = None
    doc_output: Optional[str] = None
    module: Optional[str] = None
    include_runtime: bool = False
    verbose: bool = False
    kotlin_jars: List[str] = field(default_factory=list)

    sources: List[str] = field(default_factory=list)
    classpath: List[str] = field(default_factory=list)
    output: str = MAIN_OUTPUT
    doc_output_postfix: str = ""

    @classmethod
    def for_tests(cls, **kwargs) -> CompileRequest:
        """Request compiling test sources: separate output and doc directories."""
        kwargs.setdefault("output", TEST_OUTPUT)
        kwargs.setdefault("doc_output_postfix", "-test")
        return cls(**kwargs)

    @property
    def target(self) -> str:
        return self.module or self.src or ", ".join(self.sources) or "<none>"


def _fail(request: CompileRequest, message: str, **details) -> CompileError:
    return CompileError(kind="invalid_configuration", target=request.target, message=message, details=details)


def build_classpath(kotlin_jars: Sequence[str], classpath: Sequence[str]) -> List[str]:
    """
    Canonical, de-duplicated classpath (first occurrence wins).

    Entries that do not exist are created as directories.
    """
    seen = set()
    out: List[str] = []
    for entry in [*kotlin_jars, *classpath]:
        path = Path(entry).expanduser().resolve()
        key = str(path)
        if key in seen:
            continue
        seen.add(key)
        if not path.exists():
            path.mkdir(parents=True, exist_ok=True)
        out.append(key)
    return out


def source_locations(request: CompileRequest) -> List[str]:
    if request.module:
        return [request.module]
    if request.src:
        return [request.src]
    return list(request.sources)


def check_preconditions(request: CompileRequest, classpath: Sequence[str]) -> None:
    """
    Raises:
        CompileError: for a configuration that can not be compiled
    """
    if not source_locations(request):
        raise _fail(request, "no Kotlin sources to compile: set <src>, <module> or source roots")
    if not classpath:
        raise _fail(request, "compilation classpath is empty")
    if not (request.jar or request.output):
        raise _fail(request, "no compilation destination: set <jar> or the output directory")
    if request.stdlib and not Path(request.stdlib).is_file():
        raise _fail(request, f"<stdlib> [{request.stdlib}] is not an existing file", stdlib=request.stdlib)
    if request.include_runtime and not (request.module or request.jar):
        raise _fail(request, "<includeRuntime> parameter can only be used with <module> source or <jar> destination")


def compile_kotlin(
    request: CompileRequest,
    compiler_factory: Callable[..., KotlinCompiler] = KotlinCompiler,
) -> List[str]:
    """
    Compile a module, or each source location in turn.

    Returns:
        Compiled source locations, in compilation order.

    Raises:
        CompileError: on invalid configuration or a failed compiler run
    """
    console = get_console()

    kotlin_jars = resolve_kotlin_jars(request.kotlin_jars, verbose=request.verbose)
    check_preconditions(request, [*kotlin_jars, *request.classpath])
    classpath = build_classpath(kotlin_jars, request.classpath)

    compiler = compiler_factory(kotlin_jars, verbose=request.verbose)
    cp_suffix = f", classpath = {classpath}" if request.verbose else ""

    if request.doc_output:
        doc_dir = request.doc_output + request.doc_output_postfix
        console.print_info(f"Generating API docs to [{doc_dir}]")
        plugin = load_doc_plugin(kotlin_jars, doc_dir)
        if plugin is None:
            console.print_warning(
                "Could not load KDoc compiler plugin, did you add the kdoc jar to the Kotlin jars?"
            )
        else:
            compiler.plugins.append(plugin)

    if request.module:
        module = request.module
        if not Path(module).is_file():
            raise _fail(request, f"module [{module}] is not an existing file")

        console.print_info((f"Compiling [{module}] => [{request.jar}]" if request.jar else f"Compiling [{module}]") + cp_suffix)
        if request.jar:
            Path(request.jar).parent.mkdir(parents=True, exist_ok=True)
        compiler.module_to_jar(module, request.jar, request.include_runtime, request.stdlib, classpath)
        return [module]

    destination = request.jar or request.output
    compiled: List[str] = []
    for location in source_locations(request):
        # a Kotlin file or a sources directory
        if not Path(location).exists():
            raise _fail(request, f"source location [{location}] does not exist")

        console.print_info(f"Compiling [{location}] => [{destination}]{cp_suffix}")

        if request.jar:
            Path(request.jar).parent.mkdir(parents=True, exist_ok=True)
            compiler.sources_to_jar(location, request.jar, request.include_runtime, request.stdlib, classpath)
        else:
            Path(request.output).mkdir(parents=True, exist_ok=True)
            compiler.sources_to_dir(location, request.output, request.stdlib, classpath)
        compiled.append(location)

    return compiled
