# generator.py
from __future__ import annotations

import runpy
from pathlib import Path
from typing import Dict, List

from ..ui.console import get_console
from .markup.config import render
from .model import Job

CONFIG_FILE = "config.xml"


# ----------------------------------------------------------------------
# Job definitions loading (local file)
# ----------------------------------------------------------------------

def load_jobs(path: str | Path) -> List[Job]:
    """
    Load job definitions from a python file path.

    The file must define either:
      - jobs() -> List[Job]
      - JOBS = [Job, ...]

    Returns:
      List[Job]
    """
    defs_path = Path(path).expanduser().resolve()
    if not defs_path.exists():
        raise FileNotFoundError(f"Job definitions file not found: {defs_path}")
    if defs_path.suffix != ".py":
        raise ValueError(f"Job definitions must be a .py file, got: {defs_path.name}")

    module_name = f"ciplugins_jobs_{defs_path.stem}"
    globals_dict = runpy.run_path(str(defs_path), run_name=module_name)

    jobs = None
    if "jobs" in globals_dict and callable(globals_dict["jobs"]):
        jobs = globals_dict["jobs"]()
    elif "JOBS" in globals_dict:
        jobs = globals_dict["JOBS"]

    if not isinstance(jobs, list) or not all(isinstance(j, Job) for j in jobs):
        raise TypeError(
            "Job definitions must return/define a List[Job]. "
            "Define jobs() -> List[Job] or JOBS = [Job, ...]."
        )

    return jobs


# ----------------------------------------------------------------------
# Job index
# ----------------------------------------------------------------------

def index_jobs(jobs: List[Job]) -> Dict[str, Job]:
    """Jobs by id; rejects duplicate ids and invocations of unknown jobs."""
    by_id: Dict[str, Job] = {}
    for j in jobs:
        if j.id in by_id:
            raise ValueError(f"Duplicate job id: {j.id}")
        by_id[j.id] = j

    for j in jobs:
        for downstream in j.invoke.jobs:
            if downstream not in by_id:
                raise ValueError(
                    f"Job '{j.id}' invokes missing job '{downstream}'. "
                    f"Known jobs: {sorted(by_id)}"
                )

    return by_id


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def generate(
    jobs: List[Job],
    out_dir: str | Path,
    *,
    timestamp: str = "",
    indent: str = "  ",
    newline: str = "\n",
) -> Dict[str, Path]:
    """
    Render every job to <out_dir>/<job id>/config.xml.

    All jobs are rendered before the first file is written, so an invalid
    job leaves the output directory untouched.

    Returns:
      Written config file per job id.
    """
    console = get_console()
    by_id = index_jobs(jobs)
    rendered = {j.id: render(j, by_id, timestamp, indent, newline) for j in jobs}

    out_root = Path(out_dir)
    written: Dict[str, Path] = {}
    for job_id, markup in rendered.items():
        target = out_root / job_id / CONFIG_FILE
        target.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the caller's line separator as-is
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(markup)
        console.print_job_written(job_id, str(target))
        written[job_id] = target

    return written
