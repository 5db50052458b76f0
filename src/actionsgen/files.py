# files.py
# All disk access for actionsgen lives here: locating the project root,
# the workflows directory, and reading/writing workflow files.
# The compiler itself never touches the filesystem.

from __future__ import annotations

import subprocess
from importlib import resources
from pathlib import Path
from typing import Optional

GITHUB_DIR = ".github"
WORKFLOWS_DIR = "workflows"


def _git(args: list[str], cwd: Optional[str] = None) -> str:
    """
    Execute a git command and return its stdout, stripped.

    Raises CalledProcessError on a non-zero exit and FileNotFoundError
    when git is not installed.
    """
    out = subprocess.check_output(
        ["git", *args],
        cwd=cwd,
        text=True,
        stderr=subprocess.DEVNULL,
    )
    return out.strip()


def project_root(start: str | Path | None = None) -> Path:
    """
    Return the directory workflows are generated under.

    Inside a git work tree this is the repository root; anywhere else it
    is `start` (or the current directory) itself.

    Args:
        start: Directory to resolve from. Defaults to the current directory.
    """
    base = Path(start or ".").resolve()
    try:
        return Path(_git(["rev-parse", "--show-toplevel"], cwd=str(base)))
    except (subprocess.CalledProcessError, FileNotFoundError):
        return base


def workflows_dir(root: str | Path) -> Path:
    """
    Return `<root>/.github/workflows`, creating both levels if missing.
    """
    path = Path(root) / GITHUB_DIR / WORKFLOWS_DIR
    path.mkdir(parents=True, exist_ok=True)
    return path


def join_lines(text: str) -> str:
    """
    Normalise `text` to its lines joined by a bare newline.

    Only `\\r\\n` and a lone `\\r` count as line breaks besides `\\n`; other
    unicode separators are content. One final line terminator is dropped,
    so a file compares equal to the string it was written from no matter
    how the checkout treated line endings.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if text.endswith("\n"):
        text = text[:-1]
    return text


def read_lines(path: str | Path) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return join_lines(f.read())


def write_text(path: str | Path, contents: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(contents)


def template_text(name: str) -> str:
    """Contents of a workflow template shipped in actionsgen/resources."""
    source = resources.files("actionsgen").joinpath("resources").joinpath(name)
    return join_lines(source.read_text(encoding="utf-8"))
