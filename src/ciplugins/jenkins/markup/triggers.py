# markup/triggers.py
from __future__ import annotations

import xml.etree.ElementTree as XML
from typing import Callable, Dict, List, Optional

from ..model import Job, Trigger, TriggerKind, TypePattern
from ..xmltree import element

GERRIT_DATA = "com.sonyericsson.hudson.plugins.gerrit.trigger.hudsontrigger.data"

# (threshold attribute, element name) in the order Jenkins writes them
GERRIT_THRESHOLDS = [
    ("verify_started", "gerritBuildStartedVerifiedValue"),
    ("code_review_started", "gerritBuildStartedCodeReviewValue"),
    ("verify_successful", "gerritBuildSuccessfulVerifiedValue"),
    ("code_review_successful", "gerritBuildSuccessfulCodeReviewValue"),
    ("verify_failed", "gerritBuildFailedVerifiedValue"),
    ("code_review_failed", "gerritBuildFailedCodeReviewValue"),
    ("verify_unstable", "gerritBuildUnstableVerifiedValue"),
    ("code_review_unstable", "gerritBuildUnstableCodeReviewValue"),
]


def _type_pattern(tag: str, tp: TypePattern, children: List[Optional[XML.Element]] = ()) -> XML.Element:
    return element(tag, children=[
        element("compareType", tp.type.value),
        element("pattern", tp.pattern),
        *children,
    ])


def _threshold(trigger: Trigger, attr: str, tag: str) -> Optional[XML.Element]:
    value = getattr(trigger, attr)
    return None if value is None else element(tag, value)


def gerrit_trigger(trigger: Trigger) -> List[XML.Element]:
    """Body of a Gerrit trigger: projects, thresholds and messages."""
    projects = []
    for project in trigger.projects:
        branches = None
        if project.branches:
            branches = element("branches", children=[
                _type_pattern(f"{GERRIT_DATA}.Branch", b) for b in project.branches
            ])
        file_paths = None
        if project.file_paths:
            file_paths = element("filePaths", children=[
                _type_pattern(f"{GERRIT_DATA}.FilePath", f) for f in project.file_paths
            ])
        projects.append(_type_pattern(f"{GERRIT_DATA}.GerritProject", project, [branches, file_paths]))

    body: List[Optional[XML.Element]] = [
        element("spec"),
        element("gerritProjects", children=projects),
    ]
    body.extend(_threshold(trigger, attr, tag) for attr, tag in GERRIT_THRESHOLDS)
    body.extend([
        element("silentMode", trigger.silent_mode),
        element("escapeQuotes", trigger.escape_quotes),
        element("buildStartMessage", trigger.build_start_message),
        element("buildFailureMessage", trigger.build_failure_message),
        element("buildSuccessfulMessage", trigger.build_successful_message),
        element("buildUnstableMessage", trigger.build_unstable_message),
        element("buildUnsuccessfulFilepath", trigger.unsuccessful_message_file),
        element("customUrl", trigger.url_to_post),
    ])
    return [e for e in body if e is not None]


def generic_trigger(trigger: Trigger) -> List[XML.Element]:
    """Body of a cron-like trigger: the schedule, preceded by its description as a comment line."""
    spec = (f"# {trigger.description}\n" if trigger.description else "") + (trigger.expression or "")
    return [element("spec", spec)]


TRIGGER_RENDERERS: Dict[TriggerKind, Callable[[Trigger], List[XML.Element]]] = {
    TriggerKind.timer: generic_trigger,
    TriggerKind.scm: generic_trigger,
    TriggerKind.github: generic_trigger,
    TriggerKind.gerrit: gerrit_trigger,
}


def triggers(job: Job) -> XML.Element:
    return element("triggers", attrib={"class": "vector"}, children=[
        element(t.kind.trigger_class, children=TRIGGER_RENDERERS[t.kind](t)) for t in job.triggers
    ])


