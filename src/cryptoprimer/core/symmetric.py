"""Fernet symmetric encryption.

Fernet tokens carry a version byte, a timestamp, an IV, the AES-CBC
ciphertext and an HMAC-SHA256 tag. Everything below is a thin layer over
``cryptography.fernet``; it only normalises inputs and error types.
"""

import base64
import binascii
import os

from cryptography.fernet import Fernet, InvalidToken, MultiFernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from cryptoprimer.core.errors import DecryptionError, InvalidKeyError
from cryptoprimer.shared import Logger, load_config

logger = Logger(__name__).get_logger()

config = load_config()

SALT_SIZE = 16


def _fernet(key: str | bytes) -> Fernet:
    try:
        return Fernet(key)
    except (ValueError, TypeError, binascii.Error) as e:
        raise InvalidKeyError(
            "Fernet key must be 32 url-safe base64-encoded bytes"
        ) from e


def generate_key() -> str:
    """Generate a random Fernet key."""
    return Fernet.generate_key().decode()


def derive_key(
    password: str | bytes,
    salt: bytes | None = None,
    iterations: int | None = None,
) -> tuple[str, bytes]:
    """Derive a Fernet key from a password using PBKDF2-HMAC-SHA256.

    Args:
        password: Password string or bytes
        salt: Salt for key derivation, random when omitted
        iterations: PBKDF2 work factor, defaults to the configured value

    Returns:
        The Fernet key and the salt that produced it
    """
    if isinstance(password, str):
        password = password.encode()

    if salt is None:
        salt = os.urandom(SALT_SIZE)

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=iterations or config.crypto.pbkdf2_iterations,
    )
    key = base64.urlsafe_b64encode(kdf.derive(password))
    return key.decode(), salt


def encrypt(plaintext: str | bytes, key: str | bytes) -> str:
    if isinstance(plaintext, str):
        plaintext = plaintext.encode()

    token = _fernet(key).encrypt(plaintext)
    logger.debug("Encrypted %d bytes into a Fernet token", len(plaintext))
    return token.decode()


def decrypt(token: str | bytes, key: str | bytes, ttl: int | None = None) -> str:
    """Decrypt a Fernet token.

    Raises ``DecryptionError`` when the token was tampered with, was made
    with another key, or is older than ``ttl`` seconds.
    """
    if isinstance(token, str):
        token = token.encode()

    fernet = _fernet(key)
    try:
        plaintext = fernet.decrypt(token, ttl=ttl)
    except InvalidToken as e:
        logger.warning("Fernet token rejected")
        raise DecryptionError("Invalid or expired token") from e

    try:
        return plaintext.decode()
    except UnicodeDecodeError as e:
        raise DecryptionError("Decrypted data is not valid UTF-8") from e


def rotate(token: str | bytes, new_key: str | bytes, old_keys: list[str]) -> str:
    """Re-encrypt ``token`` under ``new_key``.

    ``old_keys`` are tried in order to open the token. The original
    timestamp is preserved.
    """
    if isinstance(token, str):
        token = token.encode()

    multi = MultiFernet([_fernet(new_key), *(_fernet(k) for k in old_keys)])
    try:
        rotated = multi.rotate(token)
    except InvalidToken as e:
        logger.warning("Fernet token could not be rotated")
        raise DecryptionError("Token does not decrypt under any supplied key") from e

    logger.info("Rotated token across %d old key(s)", len(old_keys))
    return rotated.decode()
