# markup/scm.py
from __future__ import annotations

import xml.etree.ElementTree as XML
from typing import Callable, Dict, List, Optional

from ..model import Job, Repository, ScmType
from ..xmltree import element, extension_point

GERRIT_REFSPEC = "$GERRIT_REFSPEC"
GERRIT_BUILD_CHOOSER = "com.sonyericsson.hudson.plugins.gerrit.trigger.hudsontrigger.GerritTriggerBuildChooser"


def null_scm(job: Job) -> XML.Element:
    return element("scm", attrib={"class": "hudson.scm.NullSCM"})


def svn_scm(job: Job) -> XML.Element:
    locations = [
        element("hudson.scm.SubversionSCM_-ModuleLocation", children=[
            element("remote", repo.remote),
            element("local", repo.local or "."),
        ])
        for repo in job.repositories
    ]
    return element("scm", attrib={"class": "hudson.scm.SubversionSCM"}, children=[
        element("locations", children=locations),
        element("excludedRegions"),
        element("includedRegions"),
        element("excludedUsers"),
        element("excludedRevprop"),
        element("excludedCommitMessages"),
        element("workspaceUpdater", attrib={"class": "hudson.scm.subversion.UpdateUpdater"}),
    ])


def _git_remote(repo: Repository, gerrit: bool) -> XML.Element:
    refspec = GERRIT_REFSPEC if gerrit else (repo.refspec or f"+refs/heads/*:refs/remotes/{repo.git_name}/*")
    return element("hudson.plugins.git.UserRemoteConfig", children=[
        element("name", repo.git_name),
        element("refspec", refspec),
        element("url", repo.remote),
    ])


def git_scm(job: Job) -> XML.Element:
    """
    Git SCM block.

    Gerrit-triggered jobs fetch the change under review ($GERRIT_REFSPEC)
    and let the Gerrit build chooser pick the revision.
    """
    gerrit = job.has_gerrit_trigger
    repos = job.repositories
    # Jenkins' Git plugin checks out a single working copy
    first: Optional[Repository] = repos[0] if repos else None

    branches: List[XML.Element] = [
        element("hudson.plugins.git.BranchSpec", children=[element("name", repo.branch)])
        for repo in repos
    ]
    chooser = GERRIT_BUILD_CHOOSER if gerrit else "hudson.plugins.git.util.DefaultBuildChooser"

    return element("scm", attrib={"class": "hudson.plugins.git.GitSCM"}, children=[
        element("configVersion", 2),
        element("userRemoteConfigs", children=[_git_remote(repo, gerrit) for repo in repos]),
        element("branches", children=branches),
        element("disableSubmodules", False),
        element("recursiveSubmodules", False),
        element("doGenerateSubmoduleConfigurations", False),
        element("authorOrCommitter", False),
        element("clean", False),
        element("wipeOutWorkspace", False),
        element("pruneBranches", False),
        element("remotePoll", False),
        element("buildChooser", attrib={"class": chooser}),
        element("gitTool", "Default"),
        element("submoduleCfg", attrib={"class": "list"}),
        element("relativeTargetDir", first.local if first else None),
        element("skipTag", False),
    ])


SCM_RENDERERS: Dict[ScmType, Callable[[Job], XML.Element]] = {
    ScmType.none: null_scm,
    ScmType.svn: svn_scm,
    ScmType.git: git_scm,
}


def scm(job: Job) -> List[XML.Element]:
    """The SCM block for the job's SCM kind, followed by the user's raw SCM markup."""
    nodes = [SCM_RENDERERS[job.scm_type](job), extension_point(job.scm)]
    return [n for n in nodes if n is not None]
