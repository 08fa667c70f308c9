# markup/publishers.py
from __future__ import annotations

import xml.etree.ElementTree as XML
from typing import List, Optional

from ..model import Invoke, Job, Mail
from ..xmltree import element, extension_point, optional

TRIGGER_PKG = "hudson.plugins.parameterizedtrigger"
EMPTY_LIST_CLASS = "java.util.Collections$EmptyList"
PRIVATE_REPOSITORY_LOCATORS = {
    True: "hudson.maven.local_repo.PerJobLocalRepositoryLocator",
    False: "hudson.maven.local_repo.PerExecutorLocalRepositoryLocator",
}


def _mailer(tag: str, mail: Mail) -> XML.Element:
    return element(tag, children=[
        element("recipients", mail.recipients),
        element("dontNotifyEveryUnstableBuild", not mail.send_for_unstable),
        element("sendToIndividuals", mail.send_to_individuals),
    ])


# ---------------------------------------------------------------------
# Maven root section (Maven jobs only)
# ---------------------------------------------------------------------

def maven(job: Job) -> List[XML.Element]:
    nodes: List[Optional[XML.Element]] = [
        element("rootPOM", job.pom),
        element("goals", job.maven_goals),
        element("mavenName", job.maven_name),
        element("mavenOpts", job.maven_opts or ""),
        element("aggregatorStyleBuild", True),
        element("incrementalBuild", job.incremental_build),
    ]

    if job.private_repository or job.private_repository_per_executor:
        nodes.append(element("localRepository", attrib={
            "class": PRIVATE_REPOSITORY_LOCATORS[job.private_repository],
        }))
        nodes.append(element("usePrivateRepository", True))

    reporters = [extension_point(job.reporters)]
    if job.mail.recipients:
        reporters.append(_mailer("hudson.maven.reporters.MavenMailer", job.mail))

    nodes.extend([
        element("ignoreUpstremChanges", not job.build_on_snapshot),
        element("archivingDisabled", job.archiving_disabled),
        element("resolveDependencies", False),
        element("processPlugins", False),
        element("mavenValidationLevel", 0),
        element("runHeadless", False),
        element("reporters", children=reporters),
    ])
    return [n for n in nodes if n is not None]


# ---------------------------------------------------------------------
# Publishers
# ---------------------------------------------------------------------

def parameter_configs(invoke: Invoke) -> XML.Element:
    """
    Parameters passed to downstream jobs.

    With no parameter source configured Jenkins expects the empty-list class
    marker, not an empty <configs/> element.
    """
    if not invoke.any_params:
        return element("configs", attrib={"class": EMPTY_LIST_CLASS})

    configs: List[Optional[XML.Element]] = []
    if invoke.current_build_params:
        configs.append(element(f"{TRIGGER_PKG}.CurrentBuildParameters"))
    if invoke.subversion_revision_param:
        configs.append(element(f"{TRIGGER_PKG}.SubversionRevisionBuildParameters"))
    if invoke.git_commit_param:
        configs.append(element("hudson.plugins.git.GitRevisionBuildParameters"))
    if invoke.params:
        lines = "\n".join(line.strip() for line in invoke.params.splitlines())
        configs.append(element(f"{TRIGGER_PKG}.PredefinedBuildParameters", children=[
            element("properties", lines.strip()),
        ]))
    if invoke.properties_file_params:
        configs.append(element(f"{TRIGGER_PKG}.FileBuildParameters", children=[
            element("propertiesFile", invoke.properties_file_params),
        ]))
    return element("configs", children=configs)


def build_trigger(invoke: Invoke) -> XML.Element:
    return element(f"{TRIGGER_PKG}.BuildTrigger", children=[
        element("configs", children=[
            element(f"{TRIGGER_PKG}.BuildTriggerConfig", children=[
                parameter_configs(invoke),
                element("projects", ", ".join(invoke.jobs)),
                element("condition", invoke.condition),
                element("triggerWithNoParameters", invoke.trigger_without_parameters),
            ]),
        ]),
    ])


def redeploy(job: Job) -> XML.Element:
    deploy = job.deploy
    return element("hudson.maven.RedeployPublisher", children=[
        optional("id", deploy.id),
        optional("url", deploy.url),
        element("uniqueVersion", deploy.unique_version),
        element("evenIfUnstable", deploy.even_if_unstable),
    ])


def artifactory(job: Job) -> XML.Element:
    a = job.artifactory
    return element("org.jfrog.hudson.ArtifactoryRedeployPublisher", children=[
        element("details", children=[
            element("artifactoryName", a.name),
            element("repositoryKey", a.repository),
            element("snapshotsRepositoryKey", a.snapshots_repository),
        ]),
        element("deployArtifacts", a.deploy_artifacts),
        element("username", a.user),
        element("scrambledPassword", a.scrambled_password),
        element("includeEnvVars", a.include_env_vars),
        element("skipBuildInfoDeploy", a.skip_build_info_deploy),
        element("evenIfUnstable", a.even_if_unstable),
        element("runChecks", a.run_checks),
        element("violationRecipients", a.violation_recipients),
    ])


def publishers(job: Job) -> XML.Element:
    nodes: List[Optional[XML.Element]] = [extension_point(job.publishers)]

    if not job.is_maven and job.mail.recipients:
        nodes.append(_mailer("hudson.tasks.Mailer", job.mail))
    if job.is_maven and job.deploy is not None:
        nodes.append(redeploy(job))
    if job.is_maven and job.artifactory.name:
        nodes.append(artifactory(job))
    if job.invoke.jobs:
        nodes.append(build_trigger(job.invoke))

    return element("publishers", children=nodes)
