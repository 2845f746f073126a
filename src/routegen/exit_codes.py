"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~routegen.exceptions.RoutegenError` subclass.
Build scripts and CI jobs can inspect the exit code to tell a broken route
source apart from a missing ``node_modules`` without parsing stderr.

Example::

    $ routegen --root ./web
    $ echo $?
    4   # EXIT_OUTPUT_LOCATION_ERROR -- no node_modules above ./web
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_ROUTE_SOURCE_ERROR = 3
"""The route tree could not be loaded from the manifest or the routes directory."""

EXIT_OUTPUT_LOCATION_ERROR = 4
"""No ``node_modules`` directory was found to place the generated package in."""

EXIT_OUTPUT_WRITE_ERROR = 5
"""A generated artifact could not be written to disk."""

EXIT_DUPLICATE_ROUTE = 6
"""Two route chains resolved to the same full path while running in strict mode."""
