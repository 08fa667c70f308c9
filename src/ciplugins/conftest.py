from __future__ import annotations

import xml.etree.ElementTree as XML

import pytest

from ciplugins.jenkins.model import (
    CompareType, GerritProject, Job, JobType, Repository, ScmType, Task, TaskKind, Trigger,
    TriggerKind, TypePattern,
)
from ciplugins.ui.console import Console, set_console


@pytest.fixture(autouse=True)
def console():
    c = Console(debug=False)
    set_console(c)
    return c


@pytest.fixture
def free_job() -> Job:
    return Job(
        id="app-build",
        description="Builds the app",
        scm_type=ScmType.git,
        repositories=[Repository(remote="git@example.com:app.git", local="app")],
        tasks=[Task(kind=TaskKind.shell, command="make all")],
    )


@pytest.fixture
def maven_job() -> Job:
    return Job(
        id="lib-build",
        job_type=JobType.maven,
        scm_type=ScmType.svn,
        repositories=[Repository(remote="https://svn.example.com/lib/trunk")],
        maven_goals="-B clean deploy",
    )


@pytest.fixture
def gerrit_trigger() -> Trigger:
    return Trigger(
        kind=TriggerKind.gerrit,
        projects=[GerritProject(
            type=CompareType.PLAIN,
            pattern="app",
            branches=[TypePattern(CompareType.ANT, "**")],
        )],
        verify_successful=1,
        code_review_failed=-1,
    )


@pytest.fixture
def parse():
    """Parse a rendered document back into an element tree."""
    def _parse(markup: str) -> XML.Element:
        return XML.fromstring(markup.encode("utf-8"))
    return _parse
