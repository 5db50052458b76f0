# settings.py
from __future__ import annotations

import runpy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .model import (
    DEFAULT_PR_EVENT_TYPES,
    SETUP_PYTHON,
    Branch,
    Equals,
    PREventType,
    RefPredicate,
    Run,
    Sbt,
    WorkflowJob,
    WorkflowStep,
)

DEFAULT_CONFIG_FILE = "actionsgen_config.py"


@dataclass(frozen=True)
class Settings:
    """
    Everything the default pipeline is assembled from.

    The fragment fields at the bottom (cache_steps, upload_steps,
    download_steps, jobs) are generated from the rest when left as None;
    set them to replace the generated fragment wholesale.
    """
    workflow_name: str = "Continuous Integration"
    sbt_command: str = "sbt"

    # build job
    build_matrix_additions: Dict[str, List[str]] = field(default_factory=dict)
    build_preamble: List[WorkflowStep] = field(default_factory=list)
    build: WorkflowStep = field(
        default_factory=lambda: Sbt(["test"], name="Build project")
    )
    # puts actionsgen on the PATH ahead of check_step
    check_preamble: List[WorkflowStep] = field(
        default_factory=lambda: [
            SETUP_PYTHON,
            Run(["pip install actionsgen"], name="Install actionsgen"),
        ]
    )
    check_step: WorkflowStep = field(
        default_factory=lambda: Run(
            ["actionsgen check"], name="Check that workflows are up to date"
        )
    )

    # publish job
    publish_preamble: List[WorkflowStep] = field(default_factory=list)
    publish: WorkflowStep = field(
        default_factory=lambda: Sbt(["+publish"], name="Publish project")
    )
    publish_target_branches: List[RefPredicate] = field(
        default_factory=lambda: [Equals(Branch("master"))]
    )
    publish_cond: Optional[str] = None

    # matrix
    java_versions: List[str] = field(default_factory=lambda: ["adopt@1.8"])
    scala_versions: List[str] = field(default_factory=lambda: ["2.13.1"])
    scala_version: Optional[str] = None  # publish job; defaults to scala_versions[0]
    oses: List[str] = field(default_factory=lambda: ["ubuntu-latest"])

    # triggers / workflow level
    dependency_patterns: List[str] = field(
        default_factory=lambda: ["**/*.sbt", "project/build.properties"]
    )
    target_branches: List[str] = field(default_factory=lambda: ["*"])
    pr_event_types: List[PREventType] = field(
        default_factory=lambda: list(DEFAULT_PR_EVENT_TYPES)
    )
    env: Dict[str, str] = field(
        default_factory=lambda: {"GITHUB_TOKEN": "${{ secrets.GITHUB_TOKEN }}"}
    )
    added_jobs: List[WorkflowJob] = field(default_factory=list)

    # target directories of the build, relative to the project root
    target_dirs: List[str] = field(default_factory=lambda: ["target"])

    # generated fragments (None -> generate)
    cache_steps: Optional[List[WorkflowStep]] = None
    upload_steps: Optional[List[WorkflowStep]] = None
    download_steps: Optional[List[WorkflowStep]] = None
    jobs: Optional[List[WorkflowJob]] = None

    @property
    def primary_scala_version(self) -> str:
        if self.scala_version is not None:
            return self.scala_version
        return self.scala_versions[0]


# ----------------------------------------------------------------------
# Config file loading (local file)
# ----------------------------------------------------------------------

def load_settings(path: str | Path) -> Settings:
    """
    Load settings from a python file path.

    The file must define either:
      - settings() -> Settings
      - SETTINGS = Settings(...)
    """
    cfg_path = Path(path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    if cfg_path.suffix != ".py":
        raise ValueError(f"Config must be a .py file, got: {cfg_path.name}")

    module_name = f"actionsgen_config_{cfg_path.stem}"
    globals_dict = runpy.run_path(str(cfg_path), run_name=module_name)

    settings = None
    if "settings" in globals_dict and callable(globals_dict["settings"]):
        settings = globals_dict["settings"]()
    elif "SETTINGS" in globals_dict:
        settings = globals_dict["SETTINGS"]

    if not isinstance(settings, Settings):
        raise TypeError(
            "Config must return/define a Settings value. "
            "Define settings() -> Settings or SETTINGS = Settings(...)."
        )

    return settings


def resolve_settings(root: Path, config: str | Path | None = None) -> Settings:
    """
    Settings for the project at `root`.

    An explicit `config` must exist; the default config file is optional
    and plain defaults are used without it.
    """
    if config is not None:
        return load_settings(config)

    default = root / DEFAULT_CONFIG_FILE
    if default.exists():
        return load_settings(default)
    return Settings()
