"""opnorm -- Normalise parsed API operations before client code generation.

This package is the post-processing stage of an API-client generator.  It
takes operation groups (one per tag) from an upstream API-description parser
and prepares them for a template renderer:

* groups that exactly implement the canonical Add/Item/Delete/Save/List/History
  endpoints are promoted to a *generic base* and lose those methods;
* ``{name}`` path placeholders are rewritten into interpolation expressions;
* model imports are resolved, and envelope types only the removed endpoints
  needed are pruned.

Typical workflow::

    opnorm --json normalize operations.json > normalized.json

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    naming: Identifier and file-name conventions.
    normalizer: The normalisation engine.
    config: Configuration files and precedence resolution.
    loader: JSON/YAML document loading.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
