from .compile import CompileRequest, build_classpath, check_preconditions, compile_kotlin
from .compiler import CompilerPlugin, KotlinCompiler, load_doc_plugin
from .dependencies import resolve_kotlin_jars, resolve_with_ivy

__all__ = [
    "CompileRequest", "build_classpath", "check_preconditions", "compile_kotlin",
    "CompilerPlugin", "KotlinCompiler", "load_doc_plugin",
    "resolve_kotlin_jars", "resolve_with_ivy",
]
