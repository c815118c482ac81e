"""Compose the full text block presented after generating a key.

:class:`OutputRenderer` owns the layout shared by every format -- the
introductory message, the ``Authorization`` header line, and the settings
label -- and delegates the settings fragment to the
:class:`~monitorkey.render.base.FragmentRenderer` registered for the
requested format.
"""

from __future__ import annotations

from typing import Any, Optional

from monitorkey.formats import OutputFormat
from monitorkey.models import Credential, RootOptions
from monitorkey.render.base import RendererRegistry
from monitorkey.render.renderers import EnvironmentRenderer, JsonRenderer, TextRenderer
from monitorkey.render.strings import (
    API_KEY_SCHEME,
    AUTHORIZATION_HEADER,
    MESSAGE_AUTHORIZATION_HEADER,
    MESSAGE_GENERATE_API_KEY,
    MESSAGE_SETTINGS_DUMP,
)
from monitorkey.settings import PATH_SEPARATOR


def create_default_registry(separator: str = PATH_SEPARATOR) -> RendererRegistry:
    """Create a :class:`RendererRegistry` with a renderer for every format.

    Args:
        separator: Path separator used by the shell dialect renderers.

    Returns:
        A registry covering all :class:`~monitorkey.formats.OutputFormat`
        members.
    """
    registry = RendererRegistry()
    registry.register(JsonRenderer())
    registry.register(TextRenderer())
    for fmt in (OutputFormat.CMD, OutputFormat.POWERSHELL, OutputFormat.SHELL):
        registry.register(EnvironmentRenderer(fmt, separator=separator))
    return registry


class OutputRenderer:
    """Render a credential and its server settings as one text block.

    The block always has this shape::

        <introductory message>

        Authorization: Bearer <token>

        Settings in <format> format:

        <format-specific settings lines>
        <blank line>

    The token appears only on the header line; the settings fragment holds
    only the subject and the public key.

    Args:
        registry: Renderers to dispatch to. Defaults to
            :func:`create_default_registry`.
    """

    def __init__(self, registry: Optional[RendererRegistry] = None) -> None:
        self._registry = registry or create_default_registry()

    def render(self, credential: Credential, output_format: Any) -> str:
        """Render *credential* in *output_format*.

        The format is resolved before anything is composed, so an invalid
        format never yields partial output.

        Args:
            credential: The freshly generated key.
            output_format: An :class:`~monitorkey.formats.OutputFormat` or a
                format name.

        Returns:
            The complete text block, ending with a blank line.

        Raises:
            UnknownFormatError: If *output_format* is not recognised.
        """
        fmt = OutputFormat.parse(output_format)
        fragment_renderer = self._registry.get_renderer(fmt)
        fragment = fragment_renderer.render(RootOptions.from_credential(credential))

        lines = [
            MESSAGE_GENERATE_API_KEY,
            "",
            MESSAGE_AUTHORIZATION_HEADER.format(
                AUTHORIZATION_HEADER, API_KEY_SCHEME, credential.token
            ),
            "",
            MESSAGE_SETTINGS_DUMP.format(fmt.value),
            "",
            *fragment,
            "",
        ]
        return "\n".join(lines) + "\n"


def render(credential: Credential, output_format: Any) -> str:
    """Render *credential* with a default :class:`OutputRenderer`."""
    return OutputRenderer().render(credential, output_format)
