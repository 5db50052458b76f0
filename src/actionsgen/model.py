# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


# ---------------------------------------------------------------------
# Refs and predicates
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Branch:
    """A branch ref, compiled to refs/heads/<name>."""
    name: str


@dataclass(frozen=True)
class Tag:
    """A tag ref, compiled to refs/tags/<name>."""
    name: str


Ref = Union[Branch, Tag]


@dataclass(frozen=True)
class Equals:
    ref: Ref


@dataclass(frozen=True)
class Contains:
    ref: Ref


@dataclass(frozen=True)
class StartsWith:
    ref: Ref


@dataclass(frozen=True)
class EndsWith:
    ref: Ref


RefPredicate = Union[Equals, Contains, StartsWith, EndsWith]


class PREventType(Enum):
    """Pull request activity types. The value is the name GitHub expects."""
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    LABELED = "labeled"
    UNLABELED = "unlabeled"
    OPENED = "opened"
    EDITED = "edited"
    CLOSED = "closed"
    REOPENED = "reopened"
    SYNCHRONIZE = "synchronize"
    READY_FOR_REVIEW = "ready_for_review"
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    REVIEW_REQUESTED = "review_requested"
    REVIEW_REQUEST_REMOVED = "review_request_removed"


# What GitHub triggers on when `types:` is left out.
DEFAULT_PR_EVENT_TYPES: List[PREventType] = [
    PREventType.OPENED,
    PREventType.REOPENED,
    PREventType.SYNCHRONIZE,
]


# ---------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Run:
    """Shell commands, joined by newlines into a single `run:` block."""
    commands: List[str]
    name: Optional[str] = None
    id: Optional[str] = None
    cond: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Sbt:
    """Build tool commands, run against the current `matrix.scala` version."""
    commands: List[str]
    name: Optional[str] = None
    id: Optional[str] = None
    cond: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Use:
    """A reusable action, `uses: owner/repo@ref` with `params` as its inputs."""
    owner: str
    repo: str
    ref: str
    params: Dict[str, str] = field(default_factory=dict)
    name: Optional[str] = None
    id: Optional[str] = None
    cond: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)


WorkflowStep = Union[Run, Sbt, Use]


CHECKOUT: WorkflowStep = Use(
    "actions",
    "checkout",
    "v2",
    name="Checkout current branch (fast)",
)

SETUP_SCALA: WorkflowStep = Use(
    "olafurpg",
    "setup-scala",
    "v5",
    name="Setup Java and Scala",
    params={"java-version": "${{ matrix.java }}"},
)

SETUP_PYTHON: WorkflowStep = Use(
    "actions",
    "setup-python",
    "v2",
    name="Setup Python",
    params={"python-version": "3.x"},
)


# ---------------------------------------------------------------------
# Jobs and workflows
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class WorkflowJob:
    """
    A job in the generated workflow.

    `oses`, `scalas` and `javas` are the fixed matrix axes; `matrix_adds`
    holds any extra axes, rendered after them in insertion order.
    `needs` lists job ids that must finish before this one starts.
    """
    id: str
    name: str
    steps: List[WorkflowStep]
    cond: Optional[str] = None
    oses: List[str] = field(default_factory=lambda: ["ubuntu-latest"])
    scalas: List[str] = field(default_factory=lambda: ["2.13.1"])
    javas: List[str] = field(default_factory=lambda: ["adopt@1.8"])
    env: Dict[str, str] = field(default_factory=dict)
    matrix_adds: Dict[str, List[str]] = field(default_factory=dict)
    needs: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Workflow:
    name: str
    branches: List[str]
    pr_event_types: List[PREventType]
    env: Dict[str, str]
    jobs: List[WorkflowJob]
    sbt_command: str = "sbt"
