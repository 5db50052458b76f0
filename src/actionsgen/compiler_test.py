# compiler_test.py
from __future__ import annotations

import pytest

from actionsgen.compiler import (
    GENERATED_HEADER,
    compile_branch_predicate,
    compile_env,
    compile_job,
    compile_pr_event_type,
    compile_ref,
    compile_step,
    compile_workflow,
    render,
)
from actionsgen.errors import WorkflowError
from actionsgen.model import (
    DEFAULT_PR_EVENT_TYPES,
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
from actionsgen.render import indent


# ---------------------------------------------------------------------------
# Refs and predicates
# ---------------------------------------------------------------------------


def test_compile_ref():
    assert compile_ref(Branch("main")) == "refs/heads/main"
    assert compile_ref(Tag("v1.0")) == "refs/tags/v1.0"


def test_branch_predicates():
    assert compile_branch_predicate("x", Equals(Branch("main"))) == "x == 'refs/heads/main'"
    assert compile_branch_predicate("x", StartsWith(Tag("v"))) == "startsWith(x, 'refs/tags/v')"
    assert (
        compile_branch_predicate("x", Contains(Tag("v1")))
        == "(startsWith(x, 'refs/tags/') && contains(x, 'v1'))"
    )
    assert (
        compile_branch_predicate("x", Contains(Branch("v1")))
        == "(startsWith(x, 'refs/heads/') && contains(x, 'v1'))"
    )
    assert (
        compile_branch_predicate("github.ref", EndsWith(Branch("-rc")))
        == "(startsWith(github.ref, 'refs/heads/') && endsWith(github.ref, '-rc'))"
    )


def test_pr_event_types_are_bijective():
    names = [compile_pr_event_type(t) for t in PREventType]
    assert len(names) == 14
    assert len(set(names)) == 14
    assert compile_pr_event_type(PREventType.READY_FOR_REVIEW) == "ready_for_review"
    assert compile_pr_event_type(PREventType.REVIEW_REQUEST_REMOVED) == "review_request_removed"
    assert compile_pr_event_type(PREventType.SYNCHRONIZE) == "synchronize"


# ---------------------------------------------------------------------------
# Env blocks
# ---------------------------------------------------------------------------


def test_compile_env():
    assert compile_env({}) == ""
    assert compile_env({"A": "b"}, "env") == "env:\n  A: b"
    assert compile_env({"A": "b", "C": "d:e"}, "with") == "with:\n  A: b\n  C: 'd:e'"


def test_compile_env_multiline_value():
    assert compile_env({"A": "x\ny"}) == "env:\n  A: |\n    x\n    y"


@pytest.mark.parametrize("key", ["bad key", "#x", "a:b", "-x"])
def test_compile_env_rejects_invalid_keys(key):
    with pytest.raises(WorkflowError) as exc_info:
        compile_env({key: "x"})
    assert exc_info.value.kind == "invalid_model"
    assert key in str(exc_info.value)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def test_run_step():
    assert compile_step(Run(["echo hi"], name="Say hi"), "sbt") == "- name: Say hi\n  run: echo hi"


def test_run_step_multiple_commands_with_shell():
    rendered = compile_step(Run(["a", "b"]), "sbt", declare_shell=True)
    assert rendered == "- shell: bash\n  run: |\n    a\n    b"


def test_step_id_cond_and_env():
    step = Run(["x"], id="s1", cond="github.event_name == 'push'", env={"A": "1"})
    assert compile_step(step, "sbt") == (
        "- id: s1\n"
        "  if: github.event_name == 'push'\n"
        "  env:\n"
        "    A: 1\n"
        "  run: x"
    )


def test_sbt_step():
    assert compile_step(Sbt(["test"]), "sbt") == "- run: sbt ++${{ matrix.scala }} test"


def test_sbt_step_quotes_commands_with_spaces():
    rendered = compile_step(Sbt(["test", "set foo := 1"], name="Build"), "csbt")
    assert rendered == "- name: Build\n  run: 'csbt ++${{ matrix.scala }} test ''set foo := 1'''"


def test_use_step():
    step = Use("actions", "cache", "v1", params={"path": "~/.sbt"}, name="Cache")
    assert compile_step(step, "sbt") == (
        "- name: Cache\n"
        "  uses: actions/cache@v1\n"
        "  with:\n"
        "    path: ~/.sbt"
    )


def test_use_step_never_declares_shell():
    rendered = compile_step(Use("actions", "checkout", "v2"), "sbt", declare_shell=True)
    assert rendered == "- uses: actions/checkout@v2"


def test_use_step_rejects_invalid_param_key():
    with pytest.raises(WorkflowError, match="java version"):
        compile_step(Use("a", "b", "v1", params={"java version": "8"}), "sbt")


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


def test_minimal_job():
    job = WorkflowJob("build", "Build and Test", [Run(["echo hi"])])
    assert compile_job(job, "sbt") == (
        "build:\n"
        "  name: Build and Test\n"
        "  strategy:\n"
        "    matrix:\n"
        "      os: [ubuntu-latest]\n"
        "      scala: [2.13.1]\n"
        "      java: [adopt@1.8]\n"
        "  runs-on: ${{ matrix.os }}\n"
        "  steps:\n"
        "    - run: echo hi"
    )


def test_full_job():
    job = WorkflowJob(
        "publish",
        "Publish",
        [Run(["a"]), Run(["b"])],
        cond="github.ref == 'refs/heads/main'",
        needs=["build", "lint"],
        env={"X": "y"},
        matrix_adds={"node": ["14", "16"]},
    )
    assert compile_job(job, "sbt") == (
        "publish:\n"
        "  name: Publish\n"
        "  needs: [build, lint]\n"
        "  if: github.ref == 'refs/heads/main'\n"
        "  strategy:\n"
        "    matrix:\n"
        "      os: [ubuntu-latest]\n"
        "      scala: [2.13.1]\n"
        "      java: [adopt@1.8]\n"
        "      node: [14, 16]\n"
        "  runs-on: ${{ matrix.os }}\n"
        "  env:\n"
        "    X: y\n"
        "  steps:\n"
        "    - run: a\n"
        "\n"
        "    - run: b"
    )


def test_windows_job_declares_bash_on_every_run_step():
    job = WorkflowJob(
        "build",
        "Build",
        [Run(["a"]), Sbt(["test"]), Use("actions", "checkout", "v2")],
        oses=["ubuntu-latest", "windows-latest"],
    )
    rendered = compile_job(job, "sbt")
    assert rendered.count("shell: bash") == 2
    assert "os: [ubuntu-latest, windows-latest]" in rendered


# ---------------------------------------------------------------------------
# Workflows
# ---------------------------------------------------------------------------


def _job() -> WorkflowJob:
    return WorkflowJob("build", "Build", [Sbt(["test"])])


def test_workflow_document():
    job = _job()
    rendered = compile_workflow("CI", ["main"], DEFAULT_PR_EVENT_TYPES, {}, [job], "sbt")
    assert rendered == (
        GENERATED_HEADER + "\n"
        "\n"
        "name: CI\n"
        "\n"
        "on:\n"
        "  pull_request:\n"
        "    branches: [main]\n"
        "  push:\n"
        "    branches: [main]\n"
        "\n"
        "jobs:\n" + indent(compile_job(job, "sbt"), 1)
    )


def test_workflow_starts_with_generated_header():
    rendered = compile_workflow("CI", ["*"], DEFAULT_PR_EVENT_TYPES, {}, [_job()], "sbt")
    assert rendered.startswith("# This file was automatically generated by actionsgen")
    assert "branches: ['*']" in rendered


def test_workflow_env_block():
    rendered = compile_workflow("CI", ["main"], DEFAULT_PR_EVENT_TYPES, {"A": "b"}, [_job()], "sbt")
    assert "    branches: [main]\n\nenv:\n  A: b\n\njobs:\n" in rendered


def test_default_event_types_are_omitted_in_any_order():
    shuffled = [PREventType.SYNCHRONIZE, PREventType.OPENED, PREventType.REOPENED]
    rendered = compile_workflow("CI", ["main"], shuffled, {}, [_job()], "sbt")
    assert "types:" not in rendered


def test_custom_event_types_are_listed():
    types = [PREventType.OPENED, PREventType.LABELED]
    rendered = compile_workflow("CI", ["main"], types, {}, [_job()], "sbt")
    assert (
        "  pull_request:\n"
        "    branches: [main]\n"
        "    types: [opened, labeled]\n"
        "  push:\n"
    ) in rendered


def test_jobs_are_blank_line_separated():
    other = WorkflowJob("lint", "Lint", [Run(["make lint"])])
    rendered = compile_workflow("CI", ["main"], DEFAULT_PR_EVENT_TYPES, {}, [_job(), other], "sbt")
    assert "\n\n  lint:\n    name: Lint\n" in rendered


def test_render_is_deterministic():
    workflow = Workflow(
        name="CI",
        branches=["main"],
        pr_event_types=list(DEFAULT_PR_EVENT_TYPES),
        env={"B": "2", "A": "1"},
        jobs=[_job()],
    )
    assert render(workflow) == render(workflow)
    assert render(workflow).index("B: 2") < render(workflow).index("A: 1")
