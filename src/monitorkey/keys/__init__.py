"""Key material generation for monitor API keys.

- :class:`KeyMaterialGenerator` -- issues a new
  :class:`~monitorkey.models.Credential` backed by a fresh ES384 key pair.
- :class:`CredentialSource` -- the protocol any generator satisfies, so that
  callers can inject a substitute.
- :func:`verify` -- the server-side check that a token matches a subject and
  public key.

Typical usage::

    from monitorkey.keys import KeyMaterialGenerator, verify

    credential = KeyMaterialGenerator().generate()
    verify(credential.token, credential.subject, credential.public_key)
"""

from monitorkey.keys.generator import (
    CredentialSource,
    KeyMaterialGenerator,
    verify,
)

__all__ = ["CredentialSource", "KeyMaterialGenerator", "verify"]
