# step_workflows/artifacts.py
# Upload/download steps that hand target directories from the build job
# over to the publish job.
from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import List, Sequence

from ..compiler import MATRIX_JAVA, MATRIX_OS, MATRIX_SCALA
from ..model import Use, WorkflowStep

# Artifact names cannot contain any of these.
FORBIDDEN_ARTIFACT_CHARS = ('\\', '/', '"', ':', '<', '>', '|', '*', '?')

PROJECT_TARGET = "project/target"


def sanitize_target(target: str) -> str:
    for ch in FORBIDDEN_ARTIFACT_CHARS:
        target = target.replace(ch, "_")
    return target


def normalize_target(target: str | PurePath, base: str | PurePath) -> str:
    """
    Make `target` relative to `base` (when absolute) and force `/` separators.
    """
    path = Path(target)
    if path.is_absolute():
        path = Path(os.path.relpath(path, Path(base)))
    return str(path).replace(os.sep, "/")


def _artifact_step(action: str, name: str, artifact: str, path: str) -> WorkflowStep:
    return Use(
        "actions",
        action,
        "v1",
        name=name,
        params={"name": artifact, "path": path},
    )


def _project_target_step(action: str, verb: str) -> WorkflowStep:
    return _artifact_step(
        action,
        f"{verb} target directory '{PROJECT_TARGET}'",
        f"target-{MATRIX_OS}-{MATRIX_JAVA}-project_target",
        PROJECT_TARGET,
    )


def upload_steps(targets: Sequence[str]) -> List[WorkflowStep]:
    """One upload per target directory for the current matrix cell, plus project/target."""
    steps = [
        _artifact_step(
            "upload-artifact",
            f"Upload target directory '{target}' ({MATRIX_SCALA})",
            f"target-{MATRIX_OS}-{MATRIX_SCALA}-{MATRIX_JAVA}-{sanitize_target(target)}",
            target,
        )
        for target in targets
    ]
    steps.append(_project_target_step("upload-artifact", "Upload"))
    return steps


def download_steps(targets: Sequence[str], scala_versions: Sequence[str]) -> List[WorkflowStep]:
    """
    Downloads for every target directory under every Scala version the
    build job produced, plus project/target.
    """
    steps = [
        _artifact_step(
            "download-artifact",
            f"Download target directory '{target}' ({version})",
            f"target-{MATRIX_OS}-{version}-{MATRIX_JAVA}-{sanitize_target(target)}",
            target,
        )
        for target in targets
        for version in scala_versions
    ]
    steps.append(_project_target_step("download-artifact", "Download"))
    return steps
