from .generator import generate, load_jobs
from .markup.config import render
from .model import (
    Artifactory, CompareType, Deploy, GerritProject, GroovyTask, Invoke, Job, JobType, Mail,
    Parameter, ParameterType, PostStepsResult, Repository, ScmType, Task, TaskKind, Trigger,
    TriggerKind, TypePattern,
)
from .validation import validate_job

__all__ = [
    "generate", "load_jobs", "render", "validate_job",
    "Artifactory", "CompareType", "Deploy", "GerritProject", "GroovyTask", "Invoke", "Job",
    "JobType", "Mail", "Parameter", "ParameterType", "PostStepsResult", "Repository", "ScmType",
    "Task", "TaskKind", "Trigger", "TriggerKind", "TypePattern",
]
