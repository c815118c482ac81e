"""monitorkey -- Provision API keys for a monitoring service.

This package generates a fresh API key credential for a diagnostics monitor
and prints it together with the server-side settings needed to accept it.
The settings can be rendered as JSON, as plain text, or as environment
variable exports for ``cmd``, PowerShell, or a POSIX shell.

Typical workflow::

    monitorkey generatekey                 # JSON settings (default)
    monitorkey generatekey --output Shell  # export lines for bash/zsh

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for credentials, options, and configuration.
    formats: The closed set of output formats.
    settings: Flattening and JSON serialisation of option trees.
    keys: Key material generation and server-side verification.
    render: Composition of the final text block per output format.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
