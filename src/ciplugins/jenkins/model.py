# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class JobType(str, Enum):
    free = "free"
    maven = "maven"


class ScmType(str, Enum):
    none = "none"
    svn = "svn"
    git = "git"


class CompareType(str, Enum):
    """Gerrit pattern matching modes."""
    PLAIN = "PLAIN"
    ANT = "ANT"
    REG_EXP = "REG_EXP"


class TriggerKind(str, Enum):
    timer = "timer"
    scm = "scm"
    github = "github"
    gerrit = "gerrit"

    @property
    def trigger_class(self) -> str:
        return TRIGGER_CLASSES[self]


TRIGGER_CLASSES = {
    TriggerKind.timer: "hudson.triggers.TimerTrigger",
    TriggerKind.scm: "hudson.triggers.SCMTrigger",
    TriggerKind.github: "com.cloudbees.jenkins.GitHubPushTrigger",
    TriggerKind.gerrit: "com.sonyericsson.hudson.plugins.gerrit.trigger.hudsontrigger.GerritTrigger",
}


class ParameterType(str, Enum):
    string = "string"
    boolean = "boolean"
    choice = "choice"
    password = "password"
    run = "run"
    jira = "jira"


class TaskKind(str, Enum):
    shell = "shell"
    batch = "batch"
    maven = "maven"
    ant = "ant"


class PostStepsResult(Enum):
    """Build result threshold for Maven post-build steps: (name, ordinal, color)."""
    SUCCESS = ("SUCCESS", 0, "BLUE")
    UNSTABLE = ("UNSTABLE", 1, "YELLOW")
    FAILURE = ("FAILURE", 2, "RED")

    @property
    def ordinal(self) -> int:
        return self.value[1]

    @property
    def color(self) -> str:
        return self.value[2]


# ---------------------------------------------------------------------
# SCM
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Repository:
    """A single SCM location checked out by the job."""
    remote: str
    local: Optional[str] = None
    branch: str = "master"
    git_name: str = "origin"
    refspec: Optional[str] = None


# ---------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class TypePattern:
    type: CompareType
    pattern: str


@dataclass(frozen=True)
class GerritProject(TypePattern):
    branches: List[TypePattern] = field(default_factory=list)
    file_paths: List[TypePattern] = field(default_factory=list)


@dataclass(frozen=True)
class Trigger:
    """
    A build trigger.

    Generic kinds (timer, scm, github) use `expression` and `description`.
    Gerrit triggers use `projects` and the review/verify thresholds instead;
    mixing the two sets of fields is a configuration error.
    """
    kind: TriggerKind
    expression: Optional[str] = None
    description: Optional[str] = None

    # Gerrit only
    projects: List[GerritProject] = field(default_factory=list)
    verify_started: Optional[int] = None
    code_review_started: Optional[int] = None
    verify_successful: Optional[int] = None
    code_review_successful: Optional[int] = None
    verify_failed: Optional[int] = None
    code_review_failed: Optional[int] = None
    verify_unstable: Optional[int] = None
    code_review_unstable: Optional[int] = None
    silent_mode: bool = False
    escape_quotes: bool = True
    build_start_message: Optional[str] = None
    build_failure_message: Optional[str] = None
    build_successful_message: Optional[str] = None
    build_unstable_message: Optional[str] = None
    unsuccessful_message_file: Optional[str] = None
    url_to_post: Optional[str] = None

    @property
    def is_gerrit(self) -> bool:
        return self.kind is TriggerKind.gerrit

    @property
    def thresholds(self) -> List[Optional[int]]:
        return [
            self.verify_started, self.code_review_started,
            self.verify_successful, self.code_review_successful,
            self.verify_failed, self.code_review_failed,
            self.verify_unstable, self.code_review_unstable,
        ]


# ---------------------------------------------------------------------
# Parameters and build steps
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Parameter:
    name: str
    type: ParameterType = ParameterType.string
    value: Optional[str] = None     # default value; comma separated choices for `choice`
    description: Optional[str] = None


@dataclass(frozen=True)
class Task:
    """A freestyle build step (or a Maven pre/post build step)."""
    kind: TaskKind
    command: Optional[str] = None           # shell, batch
    targets: Optional[str] = None           # maven goals, ant targets
    tool_name: Optional[str] = None         # Maven or Ant installation
    build_file: Optional[str] = None        # pom.xml or build.xml
    properties: Optional[str] = None
    jvm_options: Optional[str] = None
    private_repository: bool = False


@dataclass(frozen=True)
class GroovyTask:
    command: Optional[str] = None
    file: Optional[str] = None
    pre: bool = False               # Maven prebuilder when True, postbuilder otherwise


# ---------------------------------------------------------------------
# Publishers
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Mail:
    recipients: Optional[str] = None
    send_for_unstable: bool = True
    send_to_individuals: bool = False


@dataclass(frozen=True)
class Deploy:
    id: Optional[str] = None
    url: Optional[str] = None
    unique_version: bool = True
    even_if_unstable: bool = False


@dataclass(frozen=True)
class Artifactory:
    name: Optional[str] = None
    repository: str = "libs-releases-local"
    snapshots_repository: str = "libs-snapshots-local"
    deploy_artifacts: bool = True
    user: Optional[str] = None
    scrambled_password: Optional[str] = None
    include_env_vars: bool = False
    skip_build_info_deploy: bool = False
    even_if_unstable: bool = False
    run_checks: bool = False
    violation_recipients: Optional[str] = None


@dataclass(frozen=True)
class Invoke:
    """Downstream jobs started after this one, with the parameters passed to them."""
    jobs: List[str] = field(default_factory=list)
    condition: str = "SUCCESS"
    current_build_params: bool = False
    subversion_revision_param: bool = False
    git_commit_param: bool = False
    params: Optional[str] = None                # key=value lines
    properties_file_params: Optional[str] = None
    trigger_without_parameters: bool = False

    @property
    def any_params(self) -> bool:
        return bool(
            self.current_build_params or self.subversion_revision_param or
            self.git_commit_param or self.params or self.properties_file_params
        )


# ---------------------------------------------------------------------
# Job
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Job:
    """
    A Jenkins job definition, fully resolved by the configuration layer.

    Raw markup fields (`properties`, `scm`, `publishers`, `build_wrappers`,
    `reporters`, `prebuilders`, `postbuilders`) are user extension points
    copied verbatim into the matching section.
    """
    id: str
    job_type: JobType = JobType.free
    display_name: Optional[str] = None
    description: str = ""
    generation_pom: str = "pom.xml"
    jenkins_url: str = "http://localhost:8080"

    # Log rotation, -1 keeps forever
    days_to_keep: int = -1
    num_to_keep: int = -1
    artifact_days_to_keep: int = -1
    artifact_num_to_keep: int = -1

    properties: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    github_url: Optional[str] = None

    scm_type: ScmType = ScmType.none
    repositories: List[Repository] = field(default_factory=list)
    scm: Optional[str] = None

    quiet_period: Optional[int] = None
    scm_checkout_retry_count: Optional[int] = None
    node: Optional[str] = None
    disabled: bool = False
    block_build_when_downstream_building: bool = False
    block_build_when_upstream_building: bool = False
    jdk_name: Optional[str] = None
    auth_token: Optional[str] = None
    triggers: List[Trigger] = field(default_factory=list)

    tasks: List[Task] = field(default_factory=list)
    prebuilders_tasks: List[Task] = field(default_factory=list)
    postbuilders_tasks: List[Task] = field(default_factory=list)
    groovys: List[GroovyTask] = field(default_factory=list)

    # Maven
    pom: str = "pom.xml"
    maven_goals: str = "-B -e clean install"
    maven_name: Optional[str] = None
    maven_opts: Optional[str] = None
    incremental_build: bool = False
    private_repository: bool = False
    private_repository_per_executor: bool = False
    build_on_snapshot: bool = False
    archiving_disabled: bool = False
    reporters: Optional[str] = None
    prebuilders: Optional[str] = None
    postbuilders: Optional[str] = None
    run_post_steps_if_result: PostStepsResult = PostStepsResult.FAILURE

    mail: Mail = field(default_factory=Mail)
    deploy: Optional[Deploy] = None
    artifactory: Artifactory = field(default_factory=Artifactory)
    invoke: Invoke = field(default_factory=Invoke)

    publishers: Optional[str] = None
    build_wrappers: Optional[str] = None

    @property
    def is_maven(self) -> bool:
        return self.job_type is JobType.maven

    @property
    def has_gerrit_trigger(self) -> bool:
        return any(t.is_gerrit for t in self.triggers)

    @property
    def retention(self) -> List[int]:
        return [self.days_to_keep, self.num_to_keep, self.artifact_days_to_keep, self.artifact_num_to_keep]

    def __str__(self) -> str:
        return f"[{self.id}]"
