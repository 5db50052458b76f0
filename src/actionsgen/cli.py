# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from actionsgen.errors import WorkflowError
from actionsgen.files import project_root
from actionsgen.settings import DEFAULT_CONFIG_FILE, Settings, resolve_settings
from actionsgen.sync import check as check_workflows
from actionsgen.sync import generate as generate_workflows
from actionsgen.ui.console import Console, get_console, set_console


def _load(root: str | None, config: str | None) -> tuple[Path, Settings]:
    """
    Resolve the project root and its settings.

    Exits with status 1 if an explicitly requested config file is missing
    or if the config file cannot be loaded.
    """
    console = get_console()
    root_path = Path(root).resolve() if root else project_root()
    console.print_debug(f"Project root: {root_path}")

    try:
        settings = resolve_settings(root_path, config)
    except FileNotFoundError as e:
        console.print_error(
            "Config file not found",
            str(e),
            suggestion=f"Create {DEFAULT_CONFIG_FILE} or pass a different path:\n  actionsgen generate --config my_config.py",
        )
        sys.exit(1)
    except (TypeError, ValueError) as e:
        console.print_error(
            "Invalid config file",
            str(e),
            suggestion=(
                "Define settings in your config file:\n"
                "  from actionsgen import Settings\n\n"
                "  def settings():\n"
                "      return Settings(scala_versions=[\"2.13.1\"])"
            ),
        )
        sys.exit(1)
    except Exception as e:
        console.print_error(
            "Failed to load config",
            "Could not load settings from the config file",
            details=[str(e)],
        )
        if console.debug:
            console.print_exception(e)
        sys.exit(1)

    return root_path, settings


ERROR_TITLES = {
    "invalid_model": "Invalid pipeline model",
    "stale_workflow": "Workflows are out of date",
}


def _fail(exc: Exception) -> None:
    console = get_console()
    if isinstance(exc, WorkflowError):
        console.print_error(
            ERROR_TITLES.get(exc.kind, exc.kind),
            exc.message,
            details=[f"{k}={v}" for k, v in exc.details.items() if k != "hint"] or None,
            suggestion=exc.hint,
        )
        console.print_debug(repr(exc))
    else:
        console.print_exception(exc)
    sys.exit(1)


root_option = click.option(
    "--root",
    default=None,
    help="Project root (defaults to the enclosing git repository, else the current directory)",
)
config_option = click.option(
    "--config",
    default=None,
    help=f"Config file path (defaults to {DEFAULT_CONFIG_FILE} in the project root if present)",
)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
def cli(debug):
    """actionsgen: generate and verify GitHub Actions CI workflows."""
    set_console(Console(debug=debug))


@cli.command()
@root_option
@config_option
def generate(root, config):
    """Generate (and overwrite) .github/workflows/ci.yml and clean.yml."""
    root_path, settings = _load(root, config)

    try:
        written = generate_workflows(root_path, settings)
    except Exception as e:
        _fail(e)
        return

    get_console().print_written(written)


@cli.command()
@root_option
@config_option
def check(root, config):
    """Check that ci.yml and clean.yml match what would be generated."""
    root_path, settings = _load(root, config)

    try:
        checked = check_workflows(root_path, settings)
    except FileNotFoundError as e:
        get_console().print_error(
            "Workflow file missing",
            str(e),
            suggestion="Generate the workflows first:\n  actionsgen generate",
        )
        sys.exit(1)
    except Exception as e:
        _fail(e)
        return

    get_console().print_up_to_date(checked)


if __name__ == "__main__":
    cli()
