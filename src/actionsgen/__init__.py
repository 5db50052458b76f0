from .model import (
    CHECKOUT,
    SETUP_PYTHON,
    SETUP_SCALA,
    Branch,
    Contains,
    EndsWith,
    Equals,
    PREventType,
    Run,
    Sbt,
    StartsWith,
    Tag,
    Use,
    Workflow,
    WorkflowJob,
)
from .compiler import compile_job, compile_step, compile_workflow, render
from .settings import Settings
from .sync import check, generate
from .errors import WorkflowError

__all__ = [
    "CHECKOUT", "SETUP_PYTHON", "SETUP_SCALA", "Branch", "Tag", "Equals", "Contains", "StartsWith", "EndsWith",
    "PREventType", "Run", "Sbt", "Use", "Workflow", "WorkflowJob",
    "compile_job", "compile_step", "compile_workflow", "render",
    "Settings", "check", "generate", "WorkflowError",
]
