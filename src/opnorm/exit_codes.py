"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~opnorm.exceptions.OpnormError` subclass.
Build scripts that drive the generator can inspect the exit code to tell a
broken input document apart from a broken catalog without parsing stderr.

Example::

    $ opnorm normalize operations.json
    $ echo $?
    8   # EXIT_MALFORMED_PATH -- a path had unbalanced placeholder braces
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_INPUT_PARSE_ERROR = 7
"""The operations document could not be loaded or validated."""

EXIT_MALFORMED_PATH = 8
"""A path template had unbalanced or nested placeholder delimiters."""

EXIT_CATALOG_ERROR = 9
"""A canonical signature catalog file was invalid."""
