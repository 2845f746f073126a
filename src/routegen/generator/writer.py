"""Persist generated modules as a small package on disk.

The output directory receives three files:

* ``index.js`` -- the runtime routes table (the package entry point).
* ``types.d.ts`` -- the ``$path`` / ``$params`` declarations.
* ``package.json`` -- a descriptor naming the package and its entry point.

All writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so that a bundler or type checker reading the files
mid-build never sees a truncated module.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from routegen.exceptions import OutputWriteError
from routegen.models import GeneratedModules

RUNTIME_FILENAME = "index.js"
TYPES_FILENAME = "types.d.ts"
DESCRIPTOR_FILENAME = "package.json"


def render_package_descriptor(package_name: str) -> str:
    """Return the compact ``package.json`` text for the generated package."""
    return json.dumps(
        {"name": package_name, "main": RUNTIME_FILENAME}, separators=(",", ":")
    )


def write_modules(
    modules: GeneratedModules, output_dir: Path, package_name: str
) -> list[Path]:
    """Write the generated package into *output_dir*, creating it if needed.

    Args:
        modules: Output of :func:`~routegen.generator.declarations.generate`.
        output_dir: Target directory.
        package_name: Name recorded in ``package.json``.

    Returns:
        The written file paths, in write order.

    Raises:
        OutputWriteError: If the directory cannot be created or a file
            cannot be written.
    """
    files = {
        RUNTIME_FILENAME: modules.runtime_module,
        TYPES_FILENAME: modules.type_module,
        DESCRIPTOR_FILENAME: render_package_descriptor(package_name),
    }
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Cannot create output directory {output_dir}: {exc}") from exc

    written: list[Path] = []
    for name, text in files.items():
        path = output_dir / name
        try:
            _atomic_write(path, text)
        except OSError as exc:
            raise OutputWriteError(f"Cannot write {path}: {exc}") from exc
        written.append(path)
    return written


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.
    """
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
