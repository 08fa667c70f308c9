# validation.py
from __future__ import annotations

from typing import List

from ..errors import MarkupError
from .model import Job, Trigger, TriggerKind


def _fail(job: Job, message: str, **details) -> MarkupError:
    return MarkupError(kind="invalid_job", target=job.id or "<unnamed>", message=message, details=details)


def validate_trigger(job: Job, trigger: Trigger) -> None:
    """Reject triggers mixing Gerrit and generic fields."""
    if trigger.is_gerrit:
        if trigger.description:
            raise _fail(job, "Gerrit triggers are not using <description>, use <project> or <projects> instead")
        if trigger.expression:
            raise _fail(job, "Gerrit triggers are not using <expression>, use <project> or <projects> instead")
        if not trigger.projects:
            raise _fail(job, "Gerrit triggers should have <project> or <projects> defined")
        return

    if trigger.projects or any(v is not None for v in trigger.thresholds):
        raise _fail(
            job,
            f"'{trigger.kind.value}' trigger can not use Gerrit projects or thresholds",
            trigger=trigger.kind.value,
        )
    # GitHub push triggers have no schedule
    if trigger.kind is not TriggerKind.github and not trigger.expression:
        raise _fail(job, f"'{trigger.kind.value}' trigger requires an <expression>", trigger=trigger.kind.value)


def validate_job(job: Job) -> None:
    """
    Check a job before any markup is built.

    Raises:
        MarkupError: for the first configuration problem found
    """
    if not job.id:
        raise _fail(job, "job id is not set")

    for trigger in job.triggers:
        validate_trigger(job, trigger)

    if job.is_maven:
        if job.tasks:
            raise _fail(job, "Maven jobs can not use freestyle <tasks>, use <prebuildersTasks> or <postbuildersTasks>")
        return

    maven_only: List[str] = []
    if job.deploy is not None:
        maven_only.append("deploy")
    if job.artifactory.name:
        maven_only.append("artifactory")
    if job.prebuilders_tasks:
        maven_only.append("prebuilders_tasks")
    if job.postbuilders_tasks:
        maven_only.append("postbuilders_tasks")
    if job.groovys:
        maven_only.append("groovys")
    if maven_only:
        raise _fail(job, "Maven-only settings used by a freestyle job", fields=", ".join(maven_only))
