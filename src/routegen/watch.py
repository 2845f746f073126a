"""Rebuild the generated package whenever route-defining files change.

:func:`watch_routes` runs one pass immediately, then blocks on
:func:`watchfiles.watch` and runs a full, independent pass for every change
event that passes :class:`RouteFilesFilter`. Events are not debounced: a
batch reporting three changed files runs three passes. Passes never share
state.

A pass that fails with a :class:`~routegen.exceptions.RoutegenError` is
reported and the watcher keeps running, so a half-saved route file does not
end the session. Any other exception propagates.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

import pathspec
from watchfiles import Change, DefaultFilter, watch

from routegen.exceptions import RoutegenError
from routegen.output import debug, error, info

logger = logging.getLogger(__name__)

# watchfiles returns each batch as soon as it is observed; nothing is coalesced
_DEBOUNCE_MS = 0


class RouteFilesFilter(DefaultFilter):
    """Accept changes to files matching gitignore-style *patterns* under *root*.

    :class:`watchfiles.DefaultFilter` already drops ``.git``,
    ``node_modules``, ``__pycache__`` and editor swap files, so the
    generated package never retriggers a build.
    """

    def __init__(self, root: Path, patterns: list[str]) -> None:
        super().__init__()
        self._root = root.resolve()
        self._spec = pathspec.PathSpec.from_lines("gitignore", patterns)

    def __call__(self, change: Change, path: str) -> bool:
        if not super().__call__(change, path):
            return False
        try:
            relative = Path(path).resolve().relative_to(self._root)
        except ValueError:
            return False
        return self._spec.match_file(relative.as_posix())


def watch_routes(
    root: Path,
    patterns: list[str],
    run_pass: Callable[[], object],
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Run *run_pass* now and again after every matching change under *root*.

    Args:
        root: Directory to watch recursively.
        patterns: Gitignore-style patterns, relative to *root*, selecting
            the files that trigger a rebuild.
        run_pass: Callable performing one full build.
        stop_event: Optional event that ends the watch loop when set.
    """
    _run_reporting_errors(run_pass)

    info("Watching for route changes...")
    watch_filter = RouteFilesFilter(root, patterns)
    for changes in watch(
        root,
        watch_filter=watch_filter,
        debounce=_DEBOUNCE_MS,
        stop_event=stop_event,
    ):
        for change, path in sorted(changes, key=lambda c: (c[1], c[0])):
            debug(f"{change.name.capitalize()}: {path}")
            _run_reporting_errors(run_pass)


def _run_reporting_errors(run_pass: Callable[[], object]) -> None:
    try:
        run_pass()
    except RoutegenError as exc:
        logger.debug("Pass failed with exit code %d", exc.exit_code)
        error(str(exc))
