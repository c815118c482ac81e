"""Config commands -- view and modify global configuration.

Provides the ``monitorkey config`` sub-command group for reading,
updating, and resetting the user's global configuration file
(:class:`~monitorkey.models.GlobalConfig`).
"""

from __future__ import annotations

import typer

from monitorkey.output import error, info, print_json, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False,
        "--effective",
        help="Show the configuration after applying project and environment overrides.",
    ),
) -> None:
    """Show current configuration.

    Example::

        monitorkey config show
        monitorkey config show --effective
    """
    from monitorkey.config import get_config_dir, load_global_config, resolve_config

    config = resolve_config() if effective else load_global_config()
    info(f"Config directory: {get_config_dir()}")
    print_json(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key, e.g. 'default_format'."),
    value: str = typer.Argument(help="Value to set. Use 'none' to clear optional keys."),
) -> None:
    """Set a configuration value.

    The value is validated against :class:`~monitorkey.models.GlobalConfig`
    before saving. Output format names are checked against the known
    formats.

    Raises:
        typer.Exit: With code 2 if the key is unknown or the value invalid.

    Example::

        monitorkey config set default_format Shell
        monitorkey config set expiration_seconds 604800
    """
    from pydantic import ValidationError

    from monitorkey.config import load_global_config, save_global_config
    from monitorkey.exceptions import UnknownFormatError
    from monitorkey.formats import OutputFormat
    from monitorkey.models import GlobalConfig

    config = load_global_config()
    data = config.model_dump(mode="json")

    if key not in data:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    coerced: object = value
    if key == "default_format":
        try:
            coerced = OutputFormat.parse(value).value
        except UnknownFormatError as exc:
            error(str(exc))
            raise typer.Exit(code=2) from None
    elif value.lower() == "none":
        coerced = None

    data[key] = coerced
    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults.

    Example::

        monitorkey config reset --force
    """
    from monitorkey.config import save_global_config
    from monitorkey.models import GlobalConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
