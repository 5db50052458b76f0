# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WorkflowError(Exception):
    """
    Structured error raised while compiling or checking workflows.

    kind is one of:
      - "invalid_model"   a value in the pipeline model cannot be rendered
      - "stale_workflow"  a file on disk differs from what would be generated
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)

    @property
    def hint(self) -> str | None:
        return self.details.get("hint")


def invalid_env_key(key: str) -> WorkflowError:
    return WorkflowError(
        kind="invalid_model",
        message=f"'{key}' is not a valid environment variable name",
        details={"key": key},
    )


def stale_workflow(filename: str) -> WorkflowError:
    return WorkflowError(
        kind="stale_workflow",
        message=(
            f"{filename} does not contain contents that would have been generated "
            "by actionsgen; try running `actionsgen generate`"
        ),
        details={"file": filename, "hint": "Run `actionsgen generate` and commit the result."},
    )
