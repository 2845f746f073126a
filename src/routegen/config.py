"""Project configuration, precedence resolution, and output location.

This module handles every setting routegen reads before a build:

* **Project root** -- :func:`resolve_root` picks the ``--root`` flag, the
  ``ROUTEGEN_ROOT`` environment variable, or the current directory.
* **Project config** -- :func:`load_project_config` reads ``routegen.json``
  from the project root into a :class:`~routegen.models.ProjectConfig`.
* **Precedence resolution** -- :func:`resolve_config` layers CLI flags and
  environment variables over the project file and the model defaults.
* **Output location** -- :func:`find_output_dir` walks upward from the
  project root to the nearest ``node_modules`` directory, and
  :func:`resolve_output_dir` lets an explicit ``output_dir`` bypass it.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from routegen.exceptions import ConfigError, InvalidUsageError, OutputLocationError
from routegen.models import ProjectConfig

PROJECT_CONFIG_FILENAME = "routegen.json"
DEPENDENCY_DIRNAME = "node_modules"

ENV_ROOT = "ROUTEGEN_ROOT"
ENV_OUTPUT_DIR = "ROUTEGEN_OUTPUT_DIR"


# --- Project root ---


def resolve_root(cli_root: Optional[str] = None) -> Path:
    """Return the absolute project root.

    Precedence: ``cli_root`` > ``$ROUTEGEN_ROOT`` > current directory.

    Raises:
        InvalidUsageError: If the chosen root is not a directory.
    """
    raw = cli_root or os.environ.get(ENV_ROOT) or os.getcwd()
    root = Path(raw).expanduser().resolve()
    if not root.is_dir():
        raise InvalidUsageError(f"Project root is not a directory: {root}")
    return root


# --- Project config ---


def load_project_config(root: Path) -> Optional[ProjectConfig]:
    """Load ``routegen.json`` from *root*.

    Returns:
        The parsed config, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = root / PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return ProjectConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def resolve_config(
    root: Path,
    cli_output_dir: Optional[str] = None,
) -> ProjectConfig:
    """Resolve the effective config for *root*.

    Precedence (high to low):
        1. CLI flags (``cli_output_dir``)
        2. Environment variables (``ROUTEGEN_OUTPUT_DIR``)
        3. Project config (``<root>/routegen.json``)
        4. Defaults
    """
    config = load_project_config(root) or ProjectConfig()

    env_output_dir = os.environ.get(ENV_OUTPUT_DIR)
    if cli_output_dir is not None:
        config.output_dir = cli_output_dir
    elif env_output_dir:
        config.output_dir = env_output_dir

    return config


# --- Output location ---


def find_output_dir(start: Path, package_name: str) -> Path:
    """Return ``<dir>/node_modules/<package_name>`` for the nearest *dir* above *start*.

    The search starts at *start* itself and stops at the filesystem root.

    Raises:
        OutputLocationError: If no ancestor contains a ``node_modules``
            directory.
    """
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / DEPENDENCY_DIRNAME
        if candidate.is_dir():
            return candidate / package_name
    raise OutputLocationError(
        f"Could not find a {DEPENDENCY_DIRNAME} directory in {current} or any parent"
    )


def resolve_output_dir(root: Path, config: ProjectConfig) -> Path:
    """Return the directory the generated package is written to.

    An explicit ``config.output_dir`` (relative paths are taken from
    *root*) wins over the ``node_modules`` search.
    """
    if config.output_dir:
        explicit = Path(config.output_dir).expanduser()
        if not explicit.is_absolute():
            explicit = root / explicit
        return explicit
    return find_output_dir(root, config.package_name)
