# compiler.py
# Pure functions from the pipeline model to GitHub Actions YAML text.
from __future__ import annotations

from typing import Dict, List

from .errors import invalid_env_key
from .model import (
    DEFAULT_PR_EVENT_TYPES,
    Branch,
    Contains,
    EndsWith,
    Equals,
    PREventType,
    Ref,
    RefPredicate,
    Run,
    Sbt,
    StartsWith,
    Tag,
    Use,
    Workflow,
    WorkflowJob,
    WorkflowStep,
)
from .render import flow_list, indent, is_safe_string, wrap

MATRIX_OS = "${{ matrix.os }}"
MATRIX_SCALA = "${{ matrix.scala }}"
MATRIX_JAVA = "${{ matrix.java }}"

GENERATED_HEADER = """\
# This file was automatically generated by actionsgen using the
# `actionsgen generate` command. You should add and commit this file to
# your git repository. It goes without saying that you shouldn't edit
# this file by hand! Instead, if you wish to make changes, you should
# change your actionsgen configuration to revise the workflow description
# to meet your needs, then regenerate this file."""


# ---------------------------------------------------------------------
# Refs, predicates, events
# ---------------------------------------------------------------------

def _ref_prefix(ref: Ref) -> str:
    if isinstance(ref, Branch):
        return "refs/heads/"
    if isinstance(ref, Tag):
        return "refs/tags/"
    raise TypeError(f"Unknown ref: {ref!r}")


def compile_ref(ref: Ref) -> str:
    return _ref_prefix(ref) + ref.name


def compile_branch_predicate(target: str, pred: RefPredicate) -> str:
    """
    Render `pred` as a GitHub expression over `target` (usually github.ref).

    `target` holds a fully qualified ref, so contains/endsWith checks also
    pin the ref kind, otherwise a tag could satisfy a branch predicate.
    """
    if isinstance(pred, Equals):
        return f"{target} == '{compile_ref(pred.ref)}'"

    if isinstance(pred, Contains):
        prefix = _ref_prefix(pred.ref)
        return f"(startsWith({target}, '{prefix}') && contains({target}, '{pred.ref.name}'))"

    if isinstance(pred, StartsWith):
        return f"startsWith({target}, '{compile_ref(pred.ref)}')"

    if isinstance(pred, EndsWith):
        prefix = _ref_prefix(pred.ref)
        return f"(startsWith({target}, '{prefix}') && endsWith({target}, '{pred.ref.name}'))"

    raise TypeError(f"Unknown ref predicate: {pred!r}")


def compile_pr_event_type(tpe: PREventType) -> str:
    return tpe.value


def _is_default_event_set(types: List[PREventType]) -> bool:
    return sorted(t.name for t in types) == sorted(t.name for t in DEFAULT_PR_EVENT_TYPES)


# ---------------------------------------------------------------------
# Env / params blocks
# ---------------------------------------------------------------------

def compile_env(env: Dict[str, str], prefix: str = "env") -> str:
    if not env:
        return ""

    rendered = []
    for key, value in env.items():
        if not is_safe_string(key) or " " in key:
            raise invalid_env_key(key)
        rendered.append(f"{key}: {wrap(value)}")

    return f"{prefix}:\n" + indent("\n".join(rendered), 1)


# ---------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------

def _quote_sbt_command(command: str) -> str:
    return f"'{command}'" if " " in command else command


def compile_step(step: WorkflowStep, sbt_command: str, declare_shell: bool = False) -> str:
    """
    Render a single step as a `- ` sequence item.

    declare_shell forces `shell: bash` on run-style steps; needed whenever
    the job may land on a Windows runner.
    """
    preamble = ""
    if step.name is not None:
        preamble += f"name: {wrap(step.name)}\n"
    if step.id is not None:
        preamble += f"id: {wrap(step.id)}\n"
    if step.cond is not None:
        preamble += f"if: {wrap(step.cond)}\n"

    rendered_env = compile_env(step.env)
    if rendered_env:
        preamble += rendered_env + "\n"

    shell = "shell: bash\n" if declare_shell else ""

    if isinstance(step, Run):
        body = shell + "run: " + wrap("\n".join(step.commands))

    elif isinstance(step, Sbt):
        commands = " ".join(_quote_sbt_command(c) for c in step.commands)
        body = shell + "run: " + wrap(f"{sbt_command} ++{MATRIX_SCALA} {commands}")

    elif isinstance(step, Use):
        body = f"uses: {step.owner}/{step.repo}@{step.ref}"
        rendered_params = compile_env(step.params, prefix="with")
        if rendered_params:
            body += "\n" + rendered_params

    else:
        raise TypeError(f"Unknown workflow step: {step!r}")

    rendered = indent(preamble + body, 1)
    return "-" + rendered[1:]


# ---------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------

def declares_windows(oses: List[str]) -> bool:
    return any("windows" in os_name for os_name in oses)


def compile_job(job: WorkflowJob, sbt_command: str) -> str:
    rendered_needs = f"\nneeds: [{', '.join(job.needs)}]" if job.needs else ""
    rendered_cond = f"\nif: {wrap(job.cond)}" if job.cond is not None else ""

    rendered_env = compile_env(job.env)
    if rendered_env:
        rendered_env = "\n" + rendered_env

    rendered_matrices = "\n".join(
        f"{key}: {flow_list(values)}" for key, values in job.matrix_adds.items()
    )
    if rendered_matrices:
        rendered_matrices = "\n" + indent(rendered_matrices, 2)

    declare_shell = declares_windows(job.oses)
    rendered_steps = "\n\n".join(
        compile_step(step, sbt_command, declare_shell=declare_shell) for step in job.steps
    )

    body = (
        f"name: {wrap(job.name)}{rendered_needs}{rendered_cond}\n"
        "strategy:\n"
        "  matrix:\n"
        f"    os: {flow_list(job.oses)}\n"
        f"    scala: {flow_list(job.scalas)}\n"
        f"    java: {flow_list(job.javas)}{rendered_matrices}\n"
        f"runs-on: {MATRIX_OS}{rendered_env}\n"
        "steps:\n"
        f"{indent(rendered_steps, 1)}"
    )

    return f"{job.id}:\n{indent(body, 1)}"


# ---------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------

def compile_workflow(
    name: str,
    branches: List[str],
    pr_event_types: List[PREventType],
    env: Dict[str, str],
    jobs: List[WorkflowJob],
    sbt_command: str,
) -> str:
    rendered_env = compile_env(env)
    if rendered_env:
        rendered_env += "\n\n"

    if _is_default_event_set(pr_event_types):
        rendered_types = ""
    else:
        types = ", ".join(compile_pr_event_type(t) for t in pr_event_types)
        rendered_types = "\n" + indent(f"types: [{types}]", 2)

    rendered_branches = flow_list(branches)
    rendered_jobs = "\n\n".join(compile_job(job, sbt_command) for job in jobs)

    return (
        f"{GENERATED_HEADER}\n"
        "\n"
        f"name: {wrap(name)}\n"
        "\n"
        "on:\n"
        "  pull_request:\n"
        f"    branches: {rendered_branches}{rendered_types}\n"
        "  push:\n"
        f"    branches: {rendered_branches}\n"
        "\n"
        f"{rendered_env}jobs:\n"
        f"{indent(rendered_jobs, 1)}"
    )


def render(workflow: Workflow) -> str:
    """Compile a whole `Workflow` value."""
    return compile_workflow(
        workflow.name,
        workflow.branches,
        workflow.pr_event_types,
        workflow.env,
        workflow.jobs,
        workflow.sbt_command,
    )
