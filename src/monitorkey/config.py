"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for monitorkey:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.monitorkey/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~monitorkey.models.GlobalConfig`
  JSON file storing defaults (output format, token lifetime, path
  separator).
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  final effective configuration.

Generated keys are never stored here. All file writes use an atomic
temp-file-then-rename strategy (:func:`atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from monitorkey.exceptions import ConfigError
from monitorkey.models import GlobalConfig

_APP_NAME = "monitorkey"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "monitorkey.json"

ENV_FORMAT = "MONITORKEY_FORMAT"
ENV_EXPIRATION = "MONITORKEY_EXPIRATION"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/monitorkey/`` (default
    ``~/.config/monitorkey/``). On macOS/Windows: ``~/.monitorkey/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/monitorkey/`` (default
    ``~/.local/share/monitorkey/``). On macOS/Windows: ``~/.monitorkey/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.

    Args:
        path: Destination file.
        data: Text to write (UTF-8).
        mode: Optional permission bits applied before the rename, e.g.
            ``0o600`` for files holding secrets.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~monitorkey.models.GlobalConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./monitorkey.json``.

    Project-local config sits between global config and environment
    variables in the precedence chain, so a deployment repository can pin
    its preferred output format.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not a valid JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def _env_expiration() -> Optional[int]:
    raw = os.environ.get(ENV_EXPIRATION)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(
            f"{ENV_EXPIRATION} must be a whole number of seconds, got: {raw}"
        ) from None


def resolve_config(
    cli_format: Optional[str] = None,
    cli_expiration: Optional[int] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_format``, ``cli_expiration``)
        2. Environment variables (``MONITORKEY_FORMAT``, ``MONITORKEY_EXPIRATION``)
        3. Project config (``./monitorkey.json``)
        4. User config (``~/.config/monitorkey/config.json``)
        5. Defaults

    The output format is returned as given; it is validated when the key
    is rendered.

    Returns:
        The effective :class:`~monitorkey.models.GlobalConfig`.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    data = load_global_config().model_dump()

    project = load_project_config()
    if project is not None:
        data.update(project)

    env_format = os.environ.get(ENV_FORMAT)
    if env_format:
        data["default_format"] = env_format
    env_expiration = _env_expiration()
    if env_expiration is not None:
        data["expiration_seconds"] = env_expiration

    if cli_format is not None:
        data["default_format"] = cli_format
    if cli_expiration is not None:
        data["expiration_seconds"] = cli_expiration

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
