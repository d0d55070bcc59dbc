"""Symmetric key derivation from the operator-supplied secret."""

from cryptography.hazmat.primitives import hashes

from rsvp_token.exceptions import ConfigurationError

KEY_LENGTH = 32  # AES-256


def derive_key(secret: str | None) -> bytes:
    """Derive the 256-bit AES key for a token secret.

    Parameters
    ----------
    secret
        The process-wide RSVP token secret

    Returns
    -------
    SHA-256 digest of the UTF-8 encoded secret

    Raises
    ------
    ConfigurationError
        If the secret is missing, empty or not a string
    """
    if not isinstance(secret, str) or not secret:
        raise ConfigurationError

    digest = hashes.Hash(hashes.SHA256())
    digest.update(secret.encode("utf-8"))
    return digest.finalize()
