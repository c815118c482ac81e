"""generatekey command -- issue a new API key and print its settings.

Generates a fresh credential, then prints the ``Authorization`` header a
client must send together with the monitor settings that accept it, in the
requested output format.

Typical workflow::

    monitorkey generatekey                        # JSON for settings.json
    monitorkey generatekey -o Shell > key.env     # export lines for bash
    monitorkey generatekey -o PowerShell --expiration 604800
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer

from monitorkey.exceptions import MonitorKeyError
from monitorkey.formats import OutputFormat
from monitorkey.keys import CredentialSource, KeyMaterialGenerator
from monitorkey.output import debug, error, print_data, success
from monitorkey.render import OutputRenderer, create_default_registry


def generate_api_key_text(
    output_format: Any,
    generator: Optional[CredentialSource] = None,
    renderer: Optional[OutputRenderer] = None,
) -> str:
    """Generate a credential and render it in *output_format*.

    The format is validated before any key material is generated.

    Args:
        output_format: An :class:`~monitorkey.formats.OutputFormat` or a
            format name.
        generator: Source of the credential. Defaults to a
            :class:`~monitorkey.keys.KeyMaterialGenerator` without expiry.
        renderer: Renderer for the text block. Defaults to
            :class:`~monitorkey.render.OutputRenderer`.

    Returns:
        The complete text block.

    Raises:
        UnknownFormatError: If *output_format* is not recognised.
    """
    fmt = OutputFormat.parse(output_format)
    generator = generator or KeyMaterialGenerator()
    renderer = renderer or OutputRenderer()

    credential = generator.generate()
    debug(f"Generated API key for subject {credential.subject}")
    return renderer.render(credential, fmt)


def generatekey_command(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help=f"Output format: {', '.join(OutputFormat.names())}.",
        show_default=False,
    ),
    expiration: Optional[int] = typer.Option(
        None,
        "--expiration",
        "-e",
        min=1,
        help="Token lifetime in seconds. Tokens do not expire when omitted.",
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output-file",
        help="Write the key and settings to this file instead of stdout.",
        dir_okay=False,
    ),
) -> None:
    """Generate an API key and the settings needed to accept it.

    The output format is taken from ``--output``, then
    ``MONITORKEY_FORMAT``, then ``./monitorkey.json``, then the global
    config, and defaults to ``Json``.

    Args:
        output: Output format name (case-insensitive).
        expiration: Optional token lifetime in seconds.
        output_file: Optional destination file, written with ``0o600``
            permissions because it contains the token.

    Raises:
        typer.Exit: With code 2 if the format is not recognised, or 1 if
            the configuration cannot be resolved. Nothing is written to
            stdout in either case.

    Example::

        monitorkey generatekey --output Cmd
    """
    from monitorkey.config import atomic_write, resolve_config

    try:
        config = resolve_config(cli_format=output, cli_expiration=expiration)
        fmt = OutputFormat.parse(config.default_format)
        debug(f"Output format: {fmt.value}")

        text = generate_api_key_text(
            fmt,
            generator=KeyMaterialGenerator(expiration=config.expiration_seconds),
            renderer=OutputRenderer(create_default_registry(config.path_separator)),
        )
    except MonitorKeyError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if output_file is not None:
        atomic_write(output_file, text, mode=0o600)
        success(f"Wrote API key settings to {output_file}")
    else:
        print_data(text)
