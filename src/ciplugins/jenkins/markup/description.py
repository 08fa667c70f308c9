# markup/description.py
# HTML shown on the job page: a "generated, do not edit" banner, the user's
# description and a summary table of the job's settings and related jobs.

from __future__ import annotations

from html import escape
from typing import Dict, List, Tuple

from ..model import Job


def job_url(job: Job) -> str:
    return f"{job.jenkins_url.rstrip('/')}/job/{job.id}"


def upstream_jobs(job: Job, jobs: Dict[str, Job]) -> List[Job]:
    """Jobs invoking `job` when they finish."""
    return [j for j in jobs.values() if job.id in j.invoke.jobs]


def _links(job_ids: List[str], jobs: Dict[str, Job]) -> str:
    links = []
    for job_id in job_ids:
        linked = jobs.get(job_id)
        if linked is None:
            links.append(escape(job_id))
        else:
            links.append(f'<a href="{escape(job_url(linked))}">{escape(job_id)}</a>')
    return ", ".join(links)


def _rows(job: Job, jobs: Dict[str, Job]) -> List[Tuple[str, str]]:
    rows = [("Job type", "Maven" if job.is_maven else "Free-style")]
    rows.append(("Node", escape(job.node) if job.node else "any"))

    if job.repositories:
        rows.append(("Repositories", "<br/>".join(escape(r.remote) for r in job.repositories)))

    if job.triggers:
        rows.append(("Triggers", ", ".join(t.kind.value for t in job.triggers)))

    if job.is_maven:
        rows.append(("Maven goals", escape(job.maven_goals)))

    upstream = upstream_jobs(job, jobs)
    if upstream:
        rows.append(("Invoked by", _links([j.id for j in upstream], jobs)))
    if job.invoke.jobs:
        rows.append(("Invokes", _links(job.invoke.jobs, jobs)))

    return rows


def description_table(job: Job, jobs: Dict[str, Job], indent: str = "  ") -> str:
    lines = ['<table border="1" cellpadding="3">']
    for title, value in _rows(job, jobs):
        lines.append(f"{indent}<tr><td><b>{title}</b></td><td>{value}</td></tr>")
    lines.append("</table>")
    return "\n".join(lines)


def description(job: Job, jobs: Dict[str, Job], timestamp: str, indent: str = "  ") -> str:
    pom = escape(job.generation_pom)
    generated = f" {escape(timestamp)}" if timestamp else ""
    banner = [
        "<center>",
        f"{indent}<h4>",
        f'{indent * 2}Job definition is generated by <a href="{pom}">Maven</a>'
        f' using &quot;ciplugins&quot;{generated}.',
        f"{indent * 2}<br/>",
        f'{indent * 2}If you <a href="{escape(job_url(job))}/configure">configure</a> this project manually -',
        f'{indent * 2}it will probably be <a href="{pom}">overwritten</a>!',
        f"{indent}</h4>",
        "</center>",
        job.description or "",
        "<p/>",
        description_table(job, jobs, indent),
    ]
    return "\n" + "\n".join(banner) + "\n"
