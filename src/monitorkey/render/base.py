"""Abstract base class and registry for fragment renderers.

This module defines the two foundational types of the rendering subsystem:

- :class:`FragmentRenderer` -- the abstract base class every output format
  extends. A renderer turns the monitor settings fragment into lines of
  text.
- :class:`RendererRegistry` -- a mapping from
  :class:`~monitorkey.formats.OutputFormat` to renderer instances.

To support a new format, subclass :class:`FragmentRenderer`, set the
:attr:`~FragmentRenderer.output_format` property, implement
:meth:`~FragmentRenderer.render`, and register an instance.

See Also:
    :mod:`monitorkey.render.renderers` for the built-in renderers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from monitorkey.exceptions import UnknownFormatError
from monitorkey.formats import OutputFormat
from monitorkey.models import RootOptions


class FragmentRenderer(ABC):
    """Abstract base class for settings fragment renderers."""

    @property
    @abstractmethod
    def output_format(self) -> OutputFormat:
        """Return the format this renderer produces."""
        ...

    @abstractmethod
    def render(self, options: RootOptions) -> list[str]:
        """Render *options* as lines of text, without trailing newlines.

        Args:
            options: The settings fragment to present.

        Returns:
            The lines making up this format's rendering of *options*.
        """
        ...


class RendererRegistry:
    """Registry of fragment renderers keyed by output format.

    Example::

        registry = RendererRegistry()
        registry.register(TextRenderer())
        registry.get_renderer(OutputFormat.TEXT).render(options)
    """

    def __init__(self) -> None:
        self._renderers: dict[OutputFormat, FragmentRenderer] = {}

    def register(self, renderer: FragmentRenderer) -> None:
        """Register *renderer*, replacing any renderer for the same format."""
        self._renderers[renderer.output_format] = renderer

    def get_renderer(self, output_format: OutputFormat) -> FragmentRenderer:
        """Retrieve the renderer registered for *output_format*.

        Raises:
            UnknownFormatError: If no renderer handles *output_format*.
        """
        renderer = self._renderers.get(output_format)
        if renderer is None:
            raise UnknownFormatError(output_format)
        return renderer

    def list_formats(self) -> list[OutputFormat]:
        """Return the registered formats in declaration order."""
        return [fmt for fmt in OutputFormat if fmt in self._renderers]
