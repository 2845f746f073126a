"""Typer application and CLI entry point for routegen.

routegen exposes a single command. Without flags it runs one build pass for
the project in the current directory (or ``$ROUTEGEN_ROOT``) and writes the
generated package under the nearest ``node_modules``; ``--watch`` keeps it
running and rebuilds on every route change.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handling and turns unexpected
exceptions into a clean error message and exit code.

See Also:
    :mod:`routegen.build`: The pass the command runs.
    :mod:`routegen.watch`: The watch loop behind ``--watch``.
"""

from __future__ import annotations

import signal
import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import typer

from routegen import __version__
from routegen.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INVALID_USAGE

if TYPE_CHECKING:
    from routegen.models import ProjectConfig


app = typer.Typer(
    name="routegen",
    help="Generate typed $path/$params helpers from an application's route tree.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"routegen {__version__}")
        raise typer.Exit()


@app.command()
def generate_command(
    watch: bool = typer.Option(
        False, "--watch", "-w", help="Watch for routes changes."
    ),
    root: Optional[str] = typer.Option(
        None,
        "--root",
        "-r",
        help="Project root (default: $ROUTEGEN_ROOT or the current directory).",
    ),
    out_dir: Optional[str] = typer.Option(
        None,
        "--out-dir",
        "-o",
        help="Write the generated package here instead of node_modules.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the generated modules, write nothing."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Generate route helpers once, or keep them up to date with --watch."""
    from routegen.config import resolve_root
    from routegen.exceptions import OutputLocationError, RoutegenError
    from routegen.output import (
        OutputManager,
        error,
        install_log_handler,
        set_output,
        suggest,
    )
    from routegen.watch import watch_routes

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
    install_log_handler(verbose=verbose)

    if watch and dry_run:
        error("--dry-run cannot be combined with --watch")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    try:
        project_root = resolve_root(root)
        if watch:
            config = _load_config(project_root, out_dir)
            watch_routes(
                project_root,
                config.effective_watch_patterns(),
                lambda: _run_pass(project_root, out_dir, dry_run=False),
            )
        else:
            _run_pass(project_root, out_dir, dry_run=dry_run)
    except RoutegenError as exc:
        error(str(exc))
        if isinstance(exc, OutputLocationError):
            suggest("Pass --out-dir or set ROUTEGEN_OUTPUT_DIR to choose where to write")
        raise typer.Exit(code=exc.exit_code) from None


def _load_config(project_root: Path, out_dir: Optional[str]) -> ProjectConfig:
    from routegen.config import resolve_config

    return resolve_config(project_root, cli_output_dir=out_dir)


def _run_pass(project_root: Path, out_dir: Optional[str], dry_run: bool) -> None:
    """Resolve config and run one build, reporting the outcome.

    The config is re-read on every pass so that edits to ``routegen.json``
    take effect in watch mode.
    """
    from routegen.build import build
    from routegen.generator.writer import RUNTIME_FILENAME, TYPES_FILENAME
    from routegen.output import debug, print_data, success

    config = _load_config(project_root, out_dir)
    debug(f"Project root: {project_root}")
    result = build(project_root, config, dry_run=dry_run)

    if dry_run:
        print_data(f"// {RUNTIME_FILENAME}\n{result.modules.runtime_module}")
        print_data(f"// {TYPES_FILENAME}\n{result.modules.type_module}")
        return

    success(f"Generated {result.route_count} routes in {result.output_dir}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``routegen`` console script.

    Known failures are handled inside the command and exit with the code of
    the :class:`~routegen.exceptions.RoutegenError` raised. Anything else
    prints the traceback under ``--verbose`` and exits with
    :data:`~routegen.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from routegen.output import error, get_output

        if get_output().is_verbose:
            sys.stderr.write(traceback.format_exc())
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
