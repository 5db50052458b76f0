# sync.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

from .compiler import render
from .errors import stale_workflow
from .files import join_lines, read_lines, template_text, workflows_dir, write_text
from .pipeline import ci_workflow
from .settings import Settings

CI_FILE = "ci.yml"
CLEAN_FILE = "clean.yml"


def ci_contents(settings: Settings, root: str | Path = ".") -> str:
    return render(ci_workflow(settings, root))


def clean_contents() -> str:
    return template_text(CLEAN_FILE)


def expected_contents(settings: Settings, root: str | Path = ".") -> Dict[str, str]:
    """File name -> the exact text that file should hold. Nothing is written."""
    return {
        CI_FILE: ci_contents(settings, root),
        CLEAN_FILE: clean_contents(),
    }


def generate(root: str | Path, settings: Settings) -> list[Path]:
    """
    (Re)write ci.yml and clean.yml under <root>/.github/workflows.

    Both documents are rendered before anything is written, so a model
    error leaves the existing files untouched.

    Returns the written paths.
    """
    contents = expected_contents(settings, root)
    target_dir = workflows_dir(root)

    written: list[Path] = []
    for filename, text in contents.items():
        path = target_dir / filename
        write_text(path, text)
        written.append(path)
    return written


def check(root: str | Path, settings: Settings) -> list[Path]:
    """
    Verify ci.yml and clean.yml match what generate() would write.

    Raises WorkflowError(kind="stale_workflow") naming the first file that
    differs. Missing files surface as FileNotFoundError.

    Returns the checked paths.
    """
    contents = expected_contents(settings, root)
    target_dir = workflows_dir(root)

    checked: list[Path] = []
    for filename, text in contents.items():
        path = target_dir / filename
        if read_lines(path) != join_lines(text):
            raise stale_workflow(filename)
        checked.append(path)
    return checked
