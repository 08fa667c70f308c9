from __future__ import annotations

from dataclasses import replace

import pytest

from ciplugins.errors import MarkupError
from ciplugins.jenkins.markup.config import render
from ciplugins.jenkins.markup.triggers import GERRIT_DATA
from ciplugins.jenkins.model import CompareType, GerritProject, Trigger, TriggerKind, TypePattern

GERRIT_CLASS = "com.sonyericsson.hudson.plugins.gerrit.trigger.hudsontrigger.GerritTrigger"


def _triggers(job, parse):
    return parse(render(job, {job.id: job}, "")).find("triggers")


def test_no_triggers_renders_empty_vector(free_job, parse):
    triggers = _triggers(free_job, parse)
    assert triggers.get("class") == "vector"
    assert list(triggers) == []


def test_timer_trigger_with_description(free_job, parse):
    job = replace(free_job, triggers=[
        Trigger(kind=TriggerKind.timer, expression="0 2 * * *", description="nightly"),
        Trigger(kind=TriggerKind.scm, expression="*/5 * * * *"),
    ])
    triggers = _triggers(job, parse)
    assert [t.tag for t in triggers] == ["hudson.triggers.TimerTrigger", "hudson.triggers.SCMTrigger"]
    assert triggers.findtext("hudson.triggers.TimerTrigger/spec") == "# nightly\n0 2 * * *"
    assert triggers.findtext("hudson.triggers.SCMTrigger/spec") == "*/5 * * * *"


def test_github_trigger_needs_no_expression(free_job, parse):
    job = replace(free_job, triggers=[Trigger(kind=TriggerKind.github)])
    triggers = _triggers(job, parse)
    assert triggers.findtext("com.cloudbees.jenkins.GitHubPushTrigger/spec") == ""


def test_gerrit_trigger_projects_and_thresholds(free_job, gerrit_trigger, parse):
    job = replace(free_job, triggers=[gerrit_trigger])
    gerrit = _triggers(job, parse).find(GERRIT_CLASS)

    assert gerrit[0].tag == "spec"
    project = gerrit.find(f"gerritProjects/{GERRIT_DATA}.GerritProject")
    assert project.findtext("compareType") == "PLAIN"
    assert project.findtext("pattern") == "app"
    assert project.findtext(f"branches/{GERRIT_DATA}.Branch/compareType") == "ANT"
    assert project.find("filePaths") is None

    assert gerrit.findtext("gerritBuildSuccessfulVerifiedValue") == "1"
    assert gerrit.findtext("gerritBuildFailedCodeReviewValue") == "-1"
    assert gerrit.find("gerritBuildStartedVerifiedValue") is None
    assert gerrit.findtext("silentMode") == "false"
    assert gerrit.findtext("escapeQuotes") == "true"


def test_gerrit_file_paths(free_job, parse):
    trigger = Trigger(kind=TriggerKind.gerrit, projects=[GerritProject(
        type=CompareType.REG_EXP,
        pattern="app.*",
        file_paths=[TypePattern(CompareType.ANT, "src/**")],
    )])
    gerrit = _triggers(replace(free_job, triggers=[trigger]), parse).find(GERRIT_CLASS)
    path = gerrit.find(f"gerritProjects/{GERRIT_DATA}.GerritProject/filePaths/{GERRIT_DATA}.FilePath")
    assert path.findtext("pattern") == "src/**"


def test_gerrit_trigger_switches_git_to_change_refspec(free_job, gerrit_trigger, parse):
    root = parse(render(replace(free_job, triggers=[gerrit_trigger]), {}, ""))
    assert root.findtext("scm/userRemoteConfigs/hudson.plugins.git.UserRemoteConfig/refspec") == "$GERRIT_REFSPEC"
    assert root.find("scm/buildChooser").get("class").endswith("GerritTriggerBuildChooser")


@pytest.mark.parametrize(
    "trigger, message",
    [
        (Trigger(kind=TriggerKind.gerrit, description="x", projects=[GerritProject(CompareType.PLAIN, "p")]), "<description>"),
        (Trigger(kind=TriggerKind.gerrit, expression="* * * * *", projects=[GerritProject(CompareType.PLAIN, "p")]), "<expression>"),
        (Trigger(kind=TriggerKind.gerrit), "<project>"),
        (Trigger(kind=TriggerKind.timer), "<expression>"),
        (Trigger(kind=TriggerKind.timer, expression="@daily", verify_failed=-1), "Gerrit"),
    ],
)
def test_malformed_triggers_fail(free_job, trigger, message):
    with pytest.raises(MarkupError) as e:
        render(replace(free_job, triggers=[trigger]), {}, "")
    assert message in e.value.message
    assert e.value.kind == "invalid_job"
