# markup/config.py
from __future__ import annotations

import xml.etree.ElementTree as XML
from typing import Dict, List, Optional

from ..model import Job, ParameterType
from ..validation import validate_job
from ..xmltree import CData, element, extension_point, optional, to_xml
from .description import description
from .publishers import maven, publishers
from .scm import scm
from .steps import groovy_task, parameter, tasks
from .triggers import triggers

BANNER_RULE = "~" * 65


def banner(job: Job, timestamp: str) -> List[str]:
    generated = f" on {timestamp}" if timestamp else ""
    return [BANNER_RULE, f"Generated automatically by [{job.generation_pom}]{generated}", BANNER_RULE]


def log_rotator(job: Job) -> Optional[XML.Element]:
    """Retention block, omitted while every counter keeps builds forever (-1)."""
    if not any(value > -1 for value in job.retention):
        return None
    return element("logRotator", children=[
        element("daysToKeep", job.days_to_keep),
        element("numToKeep", job.num_to_keep),
        element("artifactDaysToKeep", job.artifact_days_to_keep),
        element("artifactNumToKeep", job.artifact_num_to_keep),
    ])


def properties(job: Job) -> XML.Element:
    children: List[Optional[XML.Element]] = [extension_point(job.properties)]

    params = [p for p in job.parameters if p.type is not ParameterType.jira]
    jira = [p for p in job.parameters if p.type is ParameterType.jira]
    if params:
        children.append(element("hudson.model.ParametersDefinitionProperty", children=[
            element("parameterDefinitions", children=[parameter(p) for p in params]),
        ]))
    children.extend(parameter(p) for p in jira)

    if job.github_url:
        children.append(element("com.coravy.hudson.plugins.github.GithubProjectProperty", children=[
            element("projectUrl", job.github_url),
        ]))
    return element("properties", children=children)


def maven_builders(job: Job) -> List[XML.Element]:
    """Maven <prebuilders>, <postbuilders> and the post-steps result threshold."""
    result = job.run_post_steps_if_result
    return [
        element("prebuilders", children=[
            extension_point(job.prebuilders),
            *[groovy_task(g) for g in job.groovys if g.pre],
            *tasks(job.prebuilders_tasks),
        ]),
        element("postbuilders", children=[
            extension_point(job.postbuilders),
            *[groovy_task(g) for g in job.groovys if not g.pre],
            *tasks(job.postbuilders_tasks),
        ]),
        element("runPostStepsIfResult", children=[
            element("name", result.name),
            element("ordinal", result.ordinal),
            element("color", result.color),
        ]),
    ]


def build_tree(job: Job, jobs: Dict[str, Job], timestamp: str, indent: str = "  ") -> XML.Element:
    """Build the config.xml element tree for `job` (validated first)."""
    validate_job(job)

    root_tag = "maven2-moduleset" if job.is_maven else "project"
    children: List[Optional[XML.Element]] = [
        element("actions"),
        element("description", children=[CData(description(job, jobs, timestamp, indent))]),
        optional("displayName", job.display_name),
        log_rotator(job),
        element("keepDependencies", False),
        properties(job),
        *scm(job),
        optional("quietPeriod", job.quiet_period),
        optional("scmCheckoutRetryCount", job.scm_checkout_retry_count),
        optional("assignedNode", job.node),
        element("canRoam", not job.node),
        element("disabled", job.disabled),
        element("blockBuildWhenDownstreamBuilding", job.block_build_when_downstream_building),
        element("blockBuildWhenUpstreamBuilding", job.block_build_when_upstream_building),
        element("jdk", job.jdk_name),
        optional("authToken", job.auth_token),
        triggers(job),
        element("concurrentBuild", False),
    ]

    if job.is_maven:
        children.extend(maven(job))
    else:
        children.append(element("builders", children=tasks(job.tasks)))

    children.append(publishers(job))
    children.append(element("buildWrappers", children=[extension_point(job.build_wrappers)]))

    if job.is_maven:
        children.extend(maven_builders(job))

    return element(root_tag, children=children)


def render(
    job: Job,
    jobs: Dict[str, Job],
    timestamp: str = "",
    indent: str = "  ",
    newline: str = "\n",
) -> str:
    """
    Render the Jenkins config.xml document for one job.

    Args:
        job: job to render
        jobs: every known job by id, used for the upstream/downstream table
        timestamp: generation time shown in the banner, supplied by the caller
        indent: indentation unit
        newline: line separator

    Returns:
        The complete XML document. Output only depends on the arguments.

    Raises:
        MarkupError: if the job definition is invalid
    """
    tree = build_tree(job, jobs, timestamp, indent)
    return to_xml(tree, indent=indent, newline=newline, banner=banner(job, timestamp))
