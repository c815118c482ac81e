"""The closed set of formats a generated key can be presented in."""

from __future__ import annotations

from enum import Enum
from typing import Any

from monitorkey.exceptions import UnknownFormatError


class OutputFormat(str, Enum):
    """Enumeration of supported output formats.

    Member values are the display names used on the command line and in the
    ``Settings in <name> format:`` label.
    """

    JSON = "Json"
    TEXT = "Text"
    CMD = "Cmd"
    POWERSHELL = "PowerShell"
    SHELL = "Shell"

    @classmethod
    def parse(cls, value: Any) -> OutputFormat:
        """Resolve *value* to a member, matching names case-insensitively.

        Args:
            value: A member, or a format name such as ``"shell"``.

        Returns:
            The matching :class:`OutputFormat`.

        Raises:
            UnknownFormatError: If *value* names no known format.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        raise UnknownFormatError(value)

    @classmethod
    def names(cls) -> list[str]:
        """Return the display names of all members, in declaration order."""
        return [member.value for member in cls]
