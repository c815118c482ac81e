"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~monitorkey.exceptions.MonitorKeyError` subclass.
Shell wrappers can inspect the exit code without parsing stderr.

Example::

    $ monitorkey generatekey --output Yaml
    $ echo $?
    2   # EXIT_INVALID_USAGE -- the output format is not recognised
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration problems)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments, such as an unknown output format."""

EXIT_INVALID_KEY = 3
"""A presented API key failed verification against its public key."""

EXIT_CANCELLED = 130
"""The operator interrupted the command with Ctrl-C."""
