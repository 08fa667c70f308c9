from .errors import CompileError, MarkupError, PluginError
from .jenkins import Job, generate, load_jobs, render
from .kotlin import CompileRequest, compile_kotlin

__all__ = [
    "CompileError", "MarkupError", "PluginError",
    "Job", "generate", "load_jobs", "render",
    "CompileRequest", "compile_kotlin",
]
