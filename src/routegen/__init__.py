"""routegen -- Generate typed URL helpers from a web application's route tree.

This package reads an application's route tree (from a route manifest or
from the conventional ``app/routes`` file layout), flattens it into a table
of full URL paths and their dynamic parameter names, and writes a small
package containing a runtime lookup table and TypeScript declarations for
``$path`` and ``$params`` helpers.

Typical workflow::

    routegen            # generate once into node_modules/.routegen
    routegen --watch    # regenerate on every route change

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Project config, precedence resolution and output location.
    build: One complete resolve-then-generate pass.
    watch: File watching that re-runs the pass on change.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
