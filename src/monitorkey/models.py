"""Canonical Pydantic models shared across all monitorkey modules.

The models fall into three groups:

**Key material** -- :class:`Credential`, the immutable triple produced by
:class:`~monitorkey.keys.generator.KeyMaterialGenerator`.

**Monitor options** -- :class:`RootOptions`, :class:`AuthenticationOptions`,
and :class:`MonitorApiKeyOptions`. Together they mirror the monitor's own
configuration tree, so serialising them by alias yields the exact keys the
server reads (``Authentication:MonitorApiKey:Subject`` and so on). Unset
branches are ``None`` and are dropped on serialisation.

**Tool configuration** -- :class:`GlobalConfig`, serialised as JSON in the
user's config directory.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Key material ---


class Credential(BaseModel):
    """A freshly issued API key and the values the server needs to accept it.

    ``token`` is the secret half and only ever belongs in an
    ``Authorization`` header. ``subject`` and ``public_key`` are safe to
    display and to store in server configuration.

    The token is excluded from ``repr()`` so that it does not leak into
    debug output or tracebacks.
    """

    model_config = ConfigDict(frozen=True)

    token: str = Field(repr=False, description="Bearer token sent by clients")
    subject: str = Field(description="Identifier matched against the token's subject")
    public_key: str = Field(description="Encoded public key used to verify the token")

    @model_validator(mode="after")
    def _token_is_not_public_key(self) -> Credential:
        if self.token == self.public_key:
            raise ValueError("token and public_key must differ")
        return self


# --- Monitor options ---


class MonitorApiKeyOptions(BaseModel):
    """The ``Authentication:MonitorApiKey`` section of the monitor's settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    subject: Optional[str] = Field(default=None, alias="Subject")
    public_key: Optional[str] = Field(default=None, alias="PublicKey")


class AuthenticationOptions(BaseModel):
    """The ``Authentication`` section of the monitor's settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    monitor_api_key: Optional[MonitorApiKeyOptions] = Field(
        default=None, alias="MonitorApiKey"
    )


class RootOptions(BaseModel):
    """Root of the monitor's settings tree.

    Only the branches needed to accept a generated key are modelled; every
    field defaults to ``None`` so that a fragment built by
    :meth:`from_credential` contains nothing but the key settings.

    Example::

        options = RootOptions.from_credential(credential)
        options.model_dump(by_alias=True, exclude_none=True)
        # {"Authentication": {"MonitorApiKey": {"Subject": ..., "PublicKey": ...}}}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    authentication: Optional[AuthenticationOptions] = Field(
        default=None, alias="Authentication"
    )

    @classmethod
    def from_credential(cls, credential: Credential) -> RootOptions:
        """Build the settings fragment the server needs to accept *credential*.

        The token itself is never copied into the fragment.
        """
        return cls(
            authentication=AuthenticationOptions(
                monitor_api_key=MonitorApiKeyOptions(
                    subject=credential.subject,
                    public_key=credential.public_key,
                )
            )
        )


# --- Tool configuration ---


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/monitorkey/config.json``.

    Loaded and saved by :func:`~monitorkey.config.load_global_config` and
    :func:`~monitorkey.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~monitorkey.config.resolve_config`
    for the full precedence chain.
    """

    default_format: str = Field(
        default="Json",
        description="Output format: Json, Text, Cmd, PowerShell, Shell",
    )
    expiration_seconds: Optional[int] = Field(
        default=None,
        gt=0,
        description="Lifetime of generated tokens in seconds (None = no expiry)",
    )
    path_separator: str = Field(
        default=":",
        min_length=1,
        description="Separator joining nested setting names in environment exports",
    )
