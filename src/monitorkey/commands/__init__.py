"""Built-in CLI commands for monitorkey.

Each module defines either a Typer sub-application or a single command
function that :func:`monitorkey.app.main` registers on the root app:

- :mod:`~monitorkey.commands.generatekey` -- ``generatekey`` command.
- :mod:`~monitorkey.commands.config` -- ``config`` sub-app.
"""
