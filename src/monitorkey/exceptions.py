"""Exception hierarchy for monitorkey.

All exceptions inherit from :class:`MonitorKeyError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`monitorkey.exit_codes`.
The top-level handler in :func:`monitorkey.app.main` catches
``MonitorKeyError`` and exits with the matching code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    MonitorKeyError (exit 1)
    +-- InvalidUsageError      (exit 2)
    |   +-- UnknownFormatError (exit 2)
    +-- InvalidApiKeyError     (exit 3)
    +-- ConfigError            (exit 1)
"""

from __future__ import annotations

from typing import Any

from monitorkey.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_KEY,
    EXIT_INVALID_USAGE,
)


class MonitorKeyError(Exception):
    """Base exception for all monitorkey errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(MonitorKeyError):
    """Raised for invalid CLI arguments or option values."""

    exit_code = EXIT_INVALID_USAGE


class UnknownFormatError(InvalidUsageError):
    """Raised when a requested output format is not one of the known formats.

    The offending value is kept on :attr:`value` so callers can report it
    verbatim.

    Args:
        value: The unrecognised format value, exactly as it was supplied.
    """

    def __init__(self, value: Any):
        super().__init__(f"Unknown output format: {value}")
        self.value = value


class InvalidApiKeyError(MonitorKeyError):
    """Raised when a token does not verify against a subject and public key."""

    exit_code = EXIT_INVALID_KEY


class ConfigError(MonitorKeyError):
    """Raised for configuration problems (invalid JSON, bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
