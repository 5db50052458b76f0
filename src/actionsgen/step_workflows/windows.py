# step_workflows/windows.py
# Fixups that make a checkout behave on Windows runners. Every step is
# guarded so the same preamble can run on any OS in the matrix.
from __future__ import annotations

from typing import List

from ..model import Run, WorkflowStep

WINDOWS_GUARD = "contains(runner.os, 'windows')"

# Replaces checked out symlinks with hard links / junctions.
# credit: https://stackoverflow.com/a/16754068/9815
RM_SYMLINKS_ALIAS = r"""git config --global alias.rm-symlinks '!'"$(cat <<'ETX'
__git_rm_symlinks() {
  case "$1" in (-h)
    printf 'usage: git rm-symlinks [symlink] [symlink] [...]\n'
    return 0
  esac
  ppid=$$
  case $# in
    (0) git ls-files -s | grep -E '^120000' | cut -f2 ;;
    (*) printf '%s\n' "$@" ;;
  esac | while IFS= read -r symlink; do
    case "$symlink" in
      (*/*) symdir=${symlink%/*} ;;
      (*) symdir=. ;;
    esac
    git checkout -- "$symlink"
    src="${symdir}/$(cat "$symlink")"
    posix_to_dos_sed='s_^/\([A-Za-z]\)_\1:_;s_/_\\\\_g'
    doslnk=$(printf '%s\n' "$symlink" | sed "$posix_to_dos_sed")
    dossrc=$(printf '%s\n' "$src" | sed "$posix_to_dos_sed")
    if [ -f "$src" ]; then
      rm -f "$symlink"
      cmd //C mklink //H "$doslnk" "$dossrc"
    elif [ -d "$src" ]; then
      rm -f "$symlink"
      cmd //C mklink //J "$doslnk" "$dossrc"
    else
      printf 'error: git-rm-symlink: Not a valid source\n' >&2
      printf '%s =/=> %s  (%s =/=> %s)...\n' \
          "$symlink" "$src" "$doslnk" "$dossrc" >&2
      false
    fi || printf 'ESC[%d]: %d\n' "$ppid" "$?"
    git update-index --assume-unchanged "$symlink"
  done | awk '
    BEGIN { status_code = 0 }
    /^ESC\['"$ppid"'\]: / { status_code = $2 ; next }
    { print }
    END { exit status_code }
  '
}
__git_rm_symlinks
ETX
)"
git config --global alias.rm-symlink '!git rm-symlinks'  # for back-compat."""


def autocrlf_steps() -> List[WorkflowStep]:
    """Runs before checkout so files land with their committed line endings."""
    return [
        Run(
            ["git config --global core.autocrlf false"],
            name="Ignore line ending differences in git",
            cond=WINDOWS_GUARD,
        ),
    ]


def symlink_steps() -> List[WorkflowStep]:
    """Runs after checkout: installs the alias, then rewrites the symlinks."""
    return [
        Run([RM_SYMLINKS_ALIAS], name="Setup rm-symlink alias", cond=WINDOWS_GUARD),
        Run(["git rm-symlink"], cond=WINDOWS_GUARD),
    ]
