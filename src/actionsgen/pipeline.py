# pipeline.py
# Assembles the default two job CI pipeline (build, then conditional
# publish) out of the fragments configured on Settings.
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .compiler import compile_branch_predicate, declares_windows
from .model import CHECKOUT, SETUP_SCALA, Workflow, WorkflowJob, WorkflowStep
from .settings import Settings
from .step_workflows.artifacts import download_steps, normalize_target, upload_steps
from .step_workflows.cache import cache_steps
from .step_workflows.windows import autocrlf_steps, symlink_steps


def target_paths(settings: Settings, base: str | Path = ".") -> List[str]:
    return [normalize_target(t, base) for t in settings.target_dirs]


def preamble(settings: Settings) -> List[WorkflowStep]:
    """
    Steps shared by build and publish: windows fixups (only when a windows
    OS is configured), checkout, java/scala setup and the cache steps.
    """
    windows = declares_windows(settings.oses)

    steps: List[WorkflowStep] = []
    if windows:
        steps.extend(autocrlf_steps())
    steps.append(CHECKOUT)
    steps.append(SETUP_SCALA)
    if windows:
        steps.extend(symlink_steps())

    if settings.cache_steps is not None:
        steps.extend(settings.cache_steps)
    else:
        steps.extend(cache_steps(settings.dependency_patterns))
    return steps


def publication_cond(settings: Settings) -> str:
    branches = " || ".join(
        compile_branch_predicate("github.ref", pred)
        for pred in settings.publish_target_branches
    )
    cond = f"github.event_name != 'pull_request' && ({branches})"
    if settings.publish_cond is not None:
        cond += f" && ({settings.publish_cond})"
    return cond


def build_job(settings: Settings, base: str | Path = ".") -> WorkflowJob:
    steps = preamble(settings)
    steps.extend(settings.build_preamble)
    steps.extend(settings.check_preamble)
    steps.append(settings.check_step)
    steps.append(settings.build)

    # artifacts only matter when some other job consumes them
    if settings.publish_target_branches or settings.added_jobs:
        if settings.upload_steps is not None:
            steps.extend(settings.upload_steps)
        else:
            steps.extend(upload_steps(target_paths(settings, base)))

    return WorkflowJob(
        "build",
        "Build and Test",
        steps,
        oses=list(settings.oses),
        scalas=list(settings.scala_versions),
        javas=list(settings.java_versions),
        matrix_adds=dict(settings.build_matrix_additions),
    )


def publish_job(settings: Settings, base: str | Path = ".") -> Optional[WorkflowJob]:
    """The publish job, or None when no publish target branches are configured."""
    if not settings.publish_target_branches:
        return None

    steps = preamble(settings)
    if settings.download_steps is not None:
        steps.extend(settings.download_steps)
    else:
        steps.extend(download_steps(target_paths(settings, base), settings.scala_versions))
    steps.extend(settings.publish_preamble)
    steps.append(settings.publish)

    return WorkflowJob(
        "publish",
        "Publish Artifacts",
        steps,
        cond=publication_cond(settings),
        scalas=[settings.primary_scala_version],
        needs=["build"],
    )


def ci_jobs(settings: Settings, base: str | Path = ".") -> List[WorkflowJob]:
    if settings.jobs is not None:
        return list(settings.jobs)

    jobs = [build_job(settings, base)]
    publish = publish_job(settings, base)
    if publish is not None:
        jobs.append(publish)
    jobs.extend(settings.added_jobs)
    return jobs


def ci_workflow(settings: Settings, base: str | Path = ".") -> Workflow:
    return Workflow(
        name=settings.workflow_name,
        branches=list(settings.target_branches),
        pr_event_types=list(settings.pr_event_types),
        env=dict(settings.env),
        jobs=ci_jobs(settings, base),
        sbt_command=settings.sbt_command,
    )
