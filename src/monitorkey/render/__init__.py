"""Presentation of generated keys in each supported output format.

The main entry points are:

- :class:`OutputRenderer` -- composes the full text block for a credential.
- :func:`render` -- convenience wrapper around a default renderer.
- :class:`FragmentRenderer` -- abstract base class for per-format renderers.
- :class:`RendererRegistry` -- maps formats to renderer instances.
- :func:`create_default_registry` -- registry pre-loaded with all built-in
  renderers.

Typical usage::

    from monitorkey.render import render

    text = render(credential, "Shell")
"""

from monitorkey.render.base import FragmentRenderer, RendererRegistry
from monitorkey.render.renderer import OutputRenderer, create_default_registry, render
from monitorkey.render.renderers import EnvironmentRenderer, JsonRenderer, TextRenderer

__all__ = [
    "EnvironmentRenderer",
    "FragmentRenderer",
    "JsonRenderer",
    "OutputRenderer",
    "RendererRegistry",
    "TextRenderer",
    "create_default_registry",
    "render",
]
