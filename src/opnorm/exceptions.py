"""Exception hierarchy for opnorm.

All exceptions inherit from :class:`OpnormError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`opnorm.exit_codes`.
The top-level error handler in :func:`opnorm.app.main` catches
``OpnormError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Partial or ambiguous signature matches and a missing entity type are *not*
errors: the engine handles them by leaving a group unpromoted.  Only
contract violations from the upstream collaborator surface as exceptions.

Subclass hierarchy::

    OpnormError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- InputParseError     (exit 7)
    +-- MalformedPathError  (exit 8)
    +-- CatalogError        (exit 9)
    +-- ConfigError         (exit 1)
"""

from opnorm.exit_codes import (
    EXIT_CATALOG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INPUT_PARSE_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_PATH,
)


class OpnormError(Exception):
    """Base exception for all opnorm errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(OpnormError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class InputParseError(OpnormError):
    """Raised when an operations document cannot be loaded or fails validation."""

    exit_code = EXIT_INPUT_PARSE_ERROR


class MalformedPathError(OpnormError):
    """Raised when a path template has unbalanced or nested ``{``/``}`` delimiters.

    Attributes:
        path: The offending path template.
        position: Zero-based character offset where the scan failed.
    """

    exit_code = EXIT_MALFORMED_PATH

    def __init__(self, path: str, position: int, reason: str):
        super().__init__(f"Malformed path template {path!r} at offset {position}: {reason}")
        self.path = path
        self.position = position


class CatalogError(OpnormError):
    """Raised when a canonical signature catalog file is missing or invalid."""

    exit_code = EXIT_CATALOG_ERROR


class ConfigError(OpnormError):
    """Raised for configuration problems (invalid JSON, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
