"""Generation and verification of monitor API keys.

A monitor API key is a JWT signed with a throwaway ECDSA P-384 key. The
client sends the JWT as a bearer token; the server is configured with the
token's subject and the public half of the signing key, encoded as a
base64url JSON Web Key. The private key is discarded as soon as the token is
signed, so the server can verify tokens but never mint new ones.

See Also:
    :class:`~monitorkey.models.RootOptions` for the server-side settings
    built from the generated :class:`~monitorkey.models.Credential`.
"""

from __future__ import annotations

import base64
import json
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol, Union, runtime_checkable

import jwt
from cryptography.hazmat.primitives.asymmetric import ec
from jwt.algorithms import ECAlgorithm

from monitorkey.exceptions import InvalidApiKeyError
from monitorkey.models import Credential

MONITOR_AUDIENCE = "https://github.com/dotnet/dotnet-monitor"
"""Audience claim the monitor expects on API key tokens."""

MONITOR_ISSUER = "https://github.com/dotnet/dotnet-monitor/generatekey+MonitorApiKey"
"""Issuer claim written by this tool and checked by the monitor."""

SIGNING_ALGORITHM = "ES384"

_CURVE_NAME = "P-384"
_COORDINATE_SIZE = 48


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def encode_public_key(public_key: ec.EllipticCurvePublicKey) -> str:
    """Encode *public_key* as base64url over its compact JSON Web Key."""
    numbers = public_key.public_numbers()
    jwk = {
        "kty": "EC",
        "crv": _CURVE_NAME,
        "x": _b64url(numbers.x.to_bytes(_COORDINATE_SIZE, "big")),
        "y": _b64url(numbers.y.to_bytes(_COORDINATE_SIZE, "big")),
    }
    return _b64url(json.dumps(jwk, separators=(",", ":")).encode("utf-8"))


def decode_public_key(encoded: str) -> ec.EllipticCurvePublicKey:
    """Reverse :func:`encode_public_key`.

    Raises:
        InvalidApiKeyError: If *encoded* is not a base64url EC public JWK.
    """
    try:
        jwk = json.loads(_b64url_decode(encoded).decode("utf-8"))
    except ValueError as exc:
        raise InvalidApiKeyError(f"Public key is not a valid encoded JWK: {exc}") from exc
    if not isinstance(jwk, dict):
        raise InvalidApiKeyError("Public key is not a valid encoded JWK: expected a JSON object")

    try:
        key = ECAlgorithm.from_jwk(jwk)
    except (ValueError, TypeError, jwt.PyJWTError) as exc:
        raise InvalidApiKeyError(f"Public key is not a valid encoded JWK: {exc}") from exc
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise InvalidApiKeyError("Public key must not contain private key material")
    return key


@runtime_checkable
class CredentialSource(Protocol):
    """Anything that can issue a new :class:`~monitorkey.models.Credential`."""

    def generate(self) -> Credential:
        ...


class KeyMaterialGenerator:
    """Issue new monitor API keys.

    Each call to :meth:`generate` creates a new key pair and a new random
    subject, so no two credentials share a token or can be linked to each
    other.

    Args:
        expiration: Optional token lifetime, as a :class:`~datetime.timedelta`
            or a number of seconds. ``None`` issues tokens without ``exp``.
        audience: Value of the ``aud`` claim.
        issuer: Value of the ``iss`` claim.

    Example::

        generator = KeyMaterialGenerator(expiration=timedelta(days=7))
        credential = generator.generate()
    """

    def __init__(
        self,
        expiration: Union[timedelta, float, None] = None,
        audience: str = MONITOR_AUDIENCE,
        issuer: str = MONITOR_ISSUER,
    ) -> None:
        if isinstance(expiration, (int, float)):
            expiration = timedelta(seconds=expiration)
        self._expiration: Optional[timedelta] = expiration
        self._audience = audience
        self._issuer = issuer

    @property
    def expiration(self) -> Optional[timedelta]:
        """Lifetime applied to issued tokens, or ``None``."""
        return self._expiration

    def generate(self) -> Credential:
        """Create a new signing key, subject, and signed token."""
        private_key = ec.generate_private_key(ec.SECP384R1())
        subject = str(uuid.uuid4())

        claims: dict[str, Any] = {
            "aud": self._audience,
            "iss": self._issuer,
            "sub": subject,
        }
        if self._expiration is not None:
            claims["exp"] = datetime.now(tz=timezone.utc) + self._expiration

        token = jwt.encode(claims, private_key, algorithm=SIGNING_ALGORITHM)
        return Credential(
            token=token,
            subject=subject,
            public_key=encode_public_key(private_key.public_key()),
        )


def verify(
    token: str,
    subject: str,
    public_key: str,
    audience: str = MONITOR_AUDIENCE,
    issuer: str = MONITOR_ISSUER,
) -> dict[str, Any]:
    """Check *token* the way the monitor does for a configured API key.

    Verifies the signature against *public_key*, the audience, the issuer,
    the expiry (when present), and that the token's subject equals
    *subject*.

    Args:
        token: The bearer token presented by a client.
        subject: The configured ``Subject`` setting.
        public_key: The configured ``PublicKey`` setting.
        audience: Expected ``aud`` claim.
        issuer: Expected ``iss`` claim.

    Returns:
        The decoded token claims.

    Raises:
        InvalidApiKeyError: If any check fails.
    """
    key = decode_public_key(public_key)
    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=[SIGNING_ALGORITHM],
            audience=audience,
            issuer=issuer,
        )
    except jwt.PyJWTError as exc:
        raise InvalidApiKeyError(f"Token rejected: {exc}") from exc

    if claims.get("sub") != subject:
        raise InvalidApiKeyError("Token subject does not match the configured subject")
    return claims
