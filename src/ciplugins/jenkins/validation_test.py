from __future__ import annotations

from dataclasses import replace

import pytest

from ciplugins.errors import MarkupError
from ciplugins.jenkins.model import Artifactory, Deploy, GroovyTask, Task, TaskKind
from ciplugins.jenkins.validation import validate_job


def test_valid_jobs_pass(free_job, maven_job, gerrit_trigger):
    validate_job(free_job)
    validate_job(maven_job)
    validate_job(replace(free_job, triggers=[gerrit_trigger]))


def test_job_id_required(free_job):
    with pytest.raises(MarkupError, match="job id"):
        validate_job(replace(free_job, id=""))


def test_maven_job_rejects_freestyle_tasks(maven_job):
    with pytest.raises(MarkupError, match="freestyle"):
        validate_job(replace(maven_job, tasks=[Task(kind=TaskKind.shell, command="ls")]))


@pytest.mark.parametrize(
    "changes, field_name",
    [
        ({"deploy": Deploy(id="releases")}, "deploy"),
        ({"artifactory": Artifactory(name="main")}, "artifactory"),
        ({"groovys": [GroovyTask(command="1")]}, "groovys"),
        ({"prebuilders_tasks": [Task(kind=TaskKind.shell, command="ls")]}, "prebuilders_tasks"),
    ],
)
def test_freestyle_job_rejects_maven_settings(free_job, changes, field_name):
    with pytest.raises(MarkupError) as e:
        validate_job(replace(free_job, **changes))
    assert field_name in e.value.details["fields"]


def test_error_text_names_job(free_job):
    with pytest.raises(MarkupError) as e:
        validate_job(replace(free_job, deploy=Deploy()))
    text = str(e.value)
    assert text.startswith("invalid_job: Maven-only settings used by a freestyle job")
    assert "target=app-build" in text
