# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from ciplugins.errors import PluginError
from ciplugins.jenkins.generator import generate, load_jobs
from ciplugins.kotlin.compile import CompileRequest, compile_kotlin
from ciplugins.ui.console import Console, get_console, set_console

NEWLINES = {"lf": "\n", "crlf": "\r\n"}


def find_job_files() -> list[Path]:
    """
    Find job definition files in the current directory.

    Returns:
        List of Path objects for job definition files
    """
    current_dir = Path(".")
    job_files = []

    default_jobs = current_dir / "jenkins_jobs.py"
    if default_jobs.exists():
        job_files.append(default_jobs)

    for path in current_dir.glob("*_jobs.py"):
        if path != default_jobs:
            job_files.append(path)

    return sorted(job_files)


def discover_jobs(jobs_arg: str | None) -> Path:
    """
    Discover the job definitions file from argument or default.

    Raises:
        SystemExit: If no file or more than one candidate is found
    """
    console = get_console()

    if jobs_arg:
        jobs_path = Path(jobs_arg)
        if not jobs_path.exists() and jobs_path.suffix != ".py":
            jobs_path = Path(str(jobs_path) + ".py")
        if not jobs_path.exists():
            console.print_error(
                "Job definitions not found",
                f"Could not find job definitions file: {jobs_arg}",
                suggestion="Create a job definitions file or specify a different path:\n  ciplugins render --jobs my_jobs.py",
            )
            sys.exit(1)
        return jobs_path

    job_files = find_job_files()

    if len(job_files) == 0:
        console.print_error(
            "No job definitions found",
            "Could not find any job definitions file.",
            details=["Looked for:", "  jenkins_jobs.py", "  *_jobs.py"],
            suggestion="Create jenkins_jobs.py or specify a file explicitly:\n  ciplugins render --jobs my_jobs.py",
        )
        sys.exit(1)

    if len(job_files) > 1:
        file_list = "\n".join(f"  {f}" for f in job_files)
        console.print_error(
            "Multiple job definition files found",
            "Found multiple job definition files. Please specify which one to use:",
            details=[file_list],
            suggestion="Specify a file explicitly:\n  ciplugins render --jobs jenkins_jobs.py",
        )
        sys.exit(1)

    return job_files[0]


def _fail(ctx, e: Exception) -> None:
    console = get_console()
    if isinstance(e, PluginError):
        console.print_error(e.kind, e.message, details=[f"{k}={v}" for k, v in e.details.items()] or None)
    else:
        console.print_exception(e)
    if ctx.obj.get("debug", False):
        import traceback
        traceback.print_exc()
    sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """ciplugins: Jenkins job config generator and Kotlin compiler wrapper."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--jobs", "jobs_file", default=None, help="Job definitions file (defaults to jenkins_jobs.py if present)")
@click.option("--out-dir", default="target/jenkins", show_default=True, help="Directory receiving <job>/config.xml")
@click.option("--timestamp", default="", help="Generation timestamp shown in the config banner")
@click.option("--indent", default=2, show_default=True, type=int, help="Spaces per indentation level")
@click.option("--newline", type=click.Choice(sorted(NEWLINES)), default="lf", show_default=True, help="Line separator")
@click.pass_context
def render(ctx, jobs_file, out_dir, timestamp, indent, newline):
    """Render Jenkins config.xml files for every defined job."""
    console = get_console()
    jobs_path = discover_jobs(jobs_file)

    try:
        jobs = load_jobs(jobs_path)
        console.print_render_started(definitions=jobs_path.name, job_count=len(jobs), out_dir=out_dir)
        written = generate(jobs, out_dir, timestamp=timestamp, indent=" " * indent, newline=NEWLINES[newline])
        console.print_results({job_id: "ok" for job_id in written})
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        _fail(ctx, e)


@cli.command("compile")
@click.option("--src", default=None, help="Kotlin file or sources directory")
@click.option("--jar", default=None, help="Destination jar")
@click.option("--stdlib", default=None, help="Path to the Kotlin runtime library jar")
@click.option("--doc-output", default=None, help="Output directory for API documentation")
@click.option("--module", default=None, help="Kotlin module descriptor, as alternative to sources")
@click.option("--include-runtime/--no-include-runtime", default=False, help="Include the Kotlin runtime in the jar")
@click.option("--verbose/--no-verbose", default=False, help="Verbose compiler logging")
@click.option("--kotlin-jar", "kotlin_jars", multiple=True, help="Explicit Kotlin jar (repeatable), skips Ivy resolution")
@click.option("--source", "sources", multiple=True, help="Source root (repeatable), used when --src is not set")
@click.option("--classpath", "classpath", multiple=True, help="Classpath entry (repeatable)")
@click.option("--output", default=None, help="Classes output directory")
@click.option("--test", "test_sources", is_flag=True, default=False, help="Compile test sources")
@click.pass_context
def compile_cmd(ctx, src, jar, stdlib, doc_output, module, include_runtime, verbose,
                kotlin_jars, sources, classpath, output, test_sources):
    """Compile Kotlin sources or a Kotlin module."""
    console = get_console()

    settings = dict(
        src=src,
        jar=jar,
        stdlib=stdlib,
        doc_output=doc_output,
        module=module,
        include_runtime=include_runtime,
        verbose=verbose,
        kotlin_jars=list(kotlin_jars),
        sources=list(sources),
        classpath=list(classpath),
    )
    if output:
        settings["output"] = output
    request = CompileRequest.for_tests(**settings) if test_sources else CompileRequest(**settings)

    try:
        compiled = compile_kotlin(request)
        console.print_results({location: "ok" for location in compiled})
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        _fail(ctx, e)


if __name__ == "__main__":
    cli()
