# step_workflows/cache.py
from __future__ import annotations

from typing import List, Optional, Sequence

from ..model import Use, WorkflowStep

RUNNER_OS = "${{ runner.os }}"


def hash_files_key(patterns: Sequence[str]) -> str:
    """Join one `hashFiles(...)` expression per dependency glob with `-`."""
    return "-".join(f"${{{{ hashFiles('{glob}') }}}}" for glob in patterns)


def cache_step(
    name: str,
    path: str,
    flavour: str,
    hashes: str,
    *,
    cond: Optional[str] = None,
) -> WorkflowStep:
    """
    Create an actions/cache step.

    The key is `<runner os>-<flavour>-<hashes>`; the restore key drops the
    hashes so a stale cache is still picked up when dependencies change.
    """
    restore_key = f"{RUNNER_OS}-{flavour}-"
    return Use(
        "actions",
        "cache",
        "v1",
        name=name,
        cond=cond,
        params={
            "path": path,
            "key": restore_key + hashes,
            "restore-keys": restore_key,
        },
    )


def cache_steps(dependency_patterns: Sequence[str]) -> List[WorkflowStep]:
    """Cache steps for ivy, coursier (per OS layout) and sbt itself."""
    hashes = hash_files_key(dependency_patterns)

    return [
        cache_step("Cache ivy2", "~/.ivy2/cache", "sbt-ivy-cache", hashes),
        cache_step(
            "Cache coursier (generic)",
            "~/.coursier/cache/v1",
            "generic-sbt-coursier-cache",
            hashes,
        ),
        cache_step(
            "Cache coursier (linux)",
            "~/.cache/coursier/v1",
            "sbt-coursier-cache",
            hashes,
            cond="contains(runner.os, 'linux')",
        ),
        cache_step(
            "Cache coursier (macOS)",
            "~/Library/Caches/Coursier/v1",
            "sbt-coursier-cache",
            hashes,
            cond="contains(runner.os, 'macos')",
        ),
        cache_step(
            "Cache coursier (windows)",
            "~/AppData/Local/Coursier/Cache/v1",
            "sbt-coursier-cache",
            hashes,
            cond="contains(runner.os, 'windows')",
        ),
        cache_step("Cache sbt", "~/.sbt", "sbt-cache", hashes),
    ]
