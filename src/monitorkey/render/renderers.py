"""Built-in fragment renderers, one per output format."""

from __future__ import annotations

from collections.abc import Callable

from monitorkey.exceptions import UnknownFormatError
from monitorkey.formats import OutputFormat
from monitorkey.models import RootOptions
from monitorkey.render.base import FragmentRenderer
from monitorkey.render.strings import MESSAGE_PUBLIC_KEY, MESSAGE_SUBJECT
from monitorkey.settings import PATH_SEPARATOR, flatten, to_json

Flattener = Callable[[RootOptions, str], list[tuple[str, str]]]

ENVIRONMENT_TEMPLATES: dict[OutputFormat, str] = {
    OutputFormat.CMD: "set {name}={value}",
    OutputFormat.POWERSHELL: '$env:{name}="{value}"',
    OutputFormat.SHELL: 'export {name}="{value}"',
}
"""Line template for each shell dialect. Values are substituted verbatim."""


class JsonRenderer(FragmentRenderer):
    """Render the fragment as a nested JSON document of present values."""

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, options: RootOptions) -> list[str]:
        return to_json(options).splitlines()


class TextRenderer(FragmentRenderer):
    """Render subject and public key under human-readable labels."""

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat.TEXT

    def render(self, options: RootOptions) -> list[str]:
        authentication = options.authentication
        api_key = authentication.monitor_api_key if authentication else None
        if api_key is None:
            return []
        return [
            MESSAGE_SUBJECT.format(api_key.subject),
            MESSAGE_PUBLIC_KEY.format(api_key.public_key),
        ]


class EnvironmentRenderer(FragmentRenderer):
    """Render one environment-variable assignment per flattened setting.

    Args:
        output_format: One of the shell dialects in
            :data:`ENVIRONMENT_TEMPLATES`.
        separator: Separator between nested setting names.
        flattener: Callable producing ordered ``(path, value)`` pairs.
            Defaults to :func:`monitorkey.settings.flatten`.

    Raises:
        UnknownFormatError: If *output_format* is not a shell dialect.
    """

    def __init__(
        self,
        output_format: OutputFormat,
        separator: str = PATH_SEPARATOR,
        flattener: Flattener = flatten,
    ) -> None:
        template = ENVIRONMENT_TEMPLATES.get(output_format)
        if template is None:
            raise UnknownFormatError(output_format)
        self._output_format = output_format
        self._template = template
        self._separator = separator
        self._flattener = flattener

    @property
    def output_format(self) -> OutputFormat:
        return self._output_format

    def render(self, options: RootOptions) -> list[str]:
        return [
            self._template.format(name=name, value=value)
            for name, value in self._flattener(options, self._separator)
        ]
