# markup/steps.py
from __future__ import annotations

import xml.etree.ElementTree as XML
from typing import Callable, Dict, List

from ..model import GroovyTask, Parameter, ParameterType, Task, TaskKind
from ..xmltree import element

# ---------------------------------------------------------------------
# Build steps
# ---------------------------------------------------------------------


def shell_task(task: Task) -> XML.Element:
    return element("hudson.tasks.Shell", children=[element("command", task.command or "")])


def batch_task(task: Task) -> XML.Element:
    return element("hudson.tasks.BatchFile", children=[element("command", task.command or "")])


def maven_task(task: Task) -> XML.Element:
    return element("hudson.tasks.Maven", children=[
        element("targets", task.targets or ""),
        element("mavenName", task.tool_name or "(Default)"),
        element("pom", task.build_file),
        element("properties", task.properties),
        element("jvmOptions", task.jvm_options),
        element("usePrivateRepository", task.private_repository),
    ])


def ant_task(task: Task) -> XML.Element:
    return element("hudson.tasks.Ant", children=[
        element("targets", task.targets or ""),
        element("antName", task.tool_name or "(Default)"),
        element("antOpts", task.jvm_options),
        element("buildFile", task.build_file),
        element("properties", task.properties),
    ])


TASK_RENDERERS: Dict[TaskKind, Callable[[Task], XML.Element]] = {
    TaskKind.shell: shell_task,
    TaskKind.batch: batch_task,
    TaskKind.maven: maven_task,
    TaskKind.ant: ant_task,
}


def tasks(items: List[Task]) -> List[XML.Element]:
    return [TASK_RENDERERS[t.kind](t) for t in items]


def groovy_task(task: GroovyTask) -> XML.Element:
    """Groovy plugin step running either an inline script or a script file."""
    if task.file:
        source = element("scriptSource", attrib={"class": "hudson.plugins.groovy.FileScriptSource"}, children=[
            element("scriptFile", task.file),
        ])
    else:
        source = element("scriptSource", attrib={"class": "hudson.plugins.groovy.StringScriptSource"}, children=[
            element("command", task.command or ""),
        ])
    return element("hudson.plugins.groovy.Groovy", children=[
        source,
        element("groovyName", "(Default)"),
        element("parameters"),
        element("scriptParameters"),
        element("properties"),
        element("javaOpts"),
        element("classPath"),
    ])


# ---------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------

PARAMETER_CLASSES = {
    ParameterType.string: "hudson.model.StringParameterDefinition",
    ParameterType.boolean: "hudson.model.BooleanParameterDefinition",
    ParameterType.choice: "hudson.model.ChoiceParameterDefinition",
    ParameterType.password: "hudson.model.PasswordParameterDefinition",
    ParameterType.run: "hudson.model.RunParameterDefinition",
}


def parameter(param: Parameter) -> XML.Element:
    """A parameter definition; Jira parameters render as a project property instead."""
    if param.type is ParameterType.jira:
        return element("hudson.plugins.jira.JiraProjectProperty", children=[
            element("siteName", param.value or param.name),
        ])

    common = [element("name", param.name), element("description", param.description or "")]

    if param.type is ParameterType.choice:
        choices = [c.strip() for c in (param.value or "").split(",") if c.strip()]
        value = element("choices", attrib={"class": "java.util.Arrays$ArrayList"}, children=[
            element("a", attrib={"class": "string-array"}, children=[element("string", c) for c in choices]),
        ])
    elif param.type is ParameterType.run:
        value = element("projectName", param.value or "")
    elif param.type is ParameterType.boolean:
        value = element("defaultValue", (param.value or "").strip().lower() == "true")
    else:
        value = element("defaultValue", param.value or "")

    return element(PARAMETER_CLASSES[param.type], children=[*common, value])
