"""Built-in CLI commands for opnorm.

Each module defines a Typer command function that is registered on the root
application by :mod:`opnorm.app`:

* :mod:`~opnorm.commands.normalize` -- ``normalize`` and ``rewrite``.
* :mod:`~opnorm.commands.catalog` -- ``catalog``.
"""
