"""Code generator -- render and persist typed route helpers.

This sub-package is responsible for the second half of the routegen
pipeline: taking a :data:`~routegen.models.RoutesTable` (produced by the
resolver) and turning it into a JavaScript runtime module and TypeScript
declarations.

Typical usage::

    from routegen.generator import generate, write_modules

    modules = generate(table)
    write_modules(modules, Path("node_modules/.routegen"), ".routegen")

Sub-modules:

* :mod:`~routegen.generator.declarations` -- Pure rendering of the runtime
  table and the ``$path`` / ``$params`` declarations.
* :mod:`~routegen.generator.writer` -- Atomic writes of ``index.js``,
  ``types.d.ts`` and ``package.json``.
"""

from routegen.generator.declarations import generate
from routegen.generator.writer import write_modules

__all__ = ["generate", "write_modules"]
