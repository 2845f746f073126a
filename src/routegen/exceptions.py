"""Exception hierarchy for routegen.

All exceptions inherit from :class:`RoutegenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`routegen.exit_codes`.
The top-level error handler in :func:`routegen.app.main` catches
``RoutegenError`` and exits with the appropriate code. In watch mode the
error is reported and the watcher keeps running.

Subclass hierarchy::

    RoutegenError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- RouteSourceError      (exit 3)
    +-- OutputLocationError   (exit 4)
    +-- OutputWriteError      (exit 5)
    +-- DuplicateRouteError   (exit 6)
    +-- ConfigError           (exit 1)
"""

from routegen.exit_codes import (
    EXIT_DUPLICATE_ROUTE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_OUTPUT_LOCATION_ERROR,
    EXIT_OUTPUT_WRITE_ERROR,
    EXIT_ROUTE_SOURCE_ERROR,
)


class RoutegenError(Exception):
    """Base exception for all routegen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`routegen.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RoutegenError):
    """Raised for invalid CLI arguments (e.g. a project root that does not exist)."""

    exit_code = EXIT_INVALID_USAGE


class RouteSourceError(RoutegenError):
    """Raised when a route manifest or routes directory cannot be read or parsed."""

    exit_code = EXIT_ROUTE_SOURCE_ERROR


class OutputLocationError(RoutegenError):
    """Raised when no ``node_modules`` directory exists above the project root."""

    exit_code = EXIT_OUTPUT_LOCATION_ERROR


class OutputWriteError(RoutegenError):
    """Raised when a generated artifact cannot be written."""

    exit_code = EXIT_OUTPUT_WRITE_ERROR


class DuplicateRouteError(RoutegenError):
    """Raised in strict mode when two route chains produce the same full path.

    Args:
        path: The colliding full path.
        first_id: Id of the route that produced the path first.
        second_id: Id of the route that produced it again.
    """

    exit_code = EXIT_DUPLICATE_ROUTE

    def __init__(self, path: str, first_id: str, second_id: str):
        super().__init__(
            f"Routes '{first_id}' and '{second_id}' both resolve to path '{path}'"
        )
        self.path = path
        self.first_id = first_id
        self.second_id = second_id


class ConfigError(RoutegenError):
    """Raised for configuration problems (invalid ``routegen.json``, bad overrides)."""

    exit_code = EXIT_GENERIC_FAILURE
