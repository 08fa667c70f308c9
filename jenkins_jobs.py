# jenkins_jobs.py
# Job definitions for ciplugins itself: render with `ciplugins render`.
from __future__ import annotations

from ciplugins.jenkins import (
    CompareType, GerritProject, Invoke, Job, JobType, Mail, Repository, ScmType, Task, TaskKind,
    Trigger, TriggerKind, TypePattern,
)

REPO = Repository(remote="git@github.com:example/ciplugins.git", local="ciplugins")


def jobs():
    return [
        # Review job - runs for every Gerrit change
        Job(
            id="ciplugins-review",
            description="Lint and unit tests for changes under review.",
            scm_type=ScmType.git,
            repositories=[REPO],
            triggers=[
                Trigger(
                    kind=TriggerKind.gerrit,
                    projects=[GerritProject(
                        type=CompareType.PLAIN,
                        pattern="ciplugins",
                        branches=[TypePattern(CompareType.ANT, "**")],
                    )],
                    verify_successful=1,
                    verify_failed=-1,
                ),
            ],
            tasks=[
                Task(kind=TaskKind.shell, command="pip install -e .[test]"),
                Task(kind=TaskKind.shell, command="pytest -q"),
            ],
            num_to_keep=30,
        ),

        # Nightly build - invokes the sample Kotlin build when green
        Job(
            id="ciplugins-nightly",
            scm_type=ScmType.git,
            repositories=[REPO],
            node="linux",
            triggers=[Trigger(kind=TriggerKind.timer, expression="H 2 * * *", description="nightly")],
            tasks=[Task(kind=TaskKind.shell, command="pip install -e .[test] && pytest")],
            mail=Mail(recipients="dev@example.com"),
            invoke=Invoke(jobs=["kotlin-sample"], git_commit_param=True),
        ),

        # Maven build of the Kotlin sample project
        Job(
            id="kotlin-sample",
            job_type=JobType.maven,
            scm_type=ScmType.git,
            repositories=[Repository(remote="git@github.com:example/kotlin-sample.git")],
            maven_goals="-B -e clean install",
            private_repository=True,
            days_to_keep=14,
        ),
    ]
