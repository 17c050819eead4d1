"""RSA key pairs and RSA-OAEP encryption."""

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from cryptoprimer.core.errors import (
    DecryptionError,
    InvalidKeyError,
    PlaintextTooLongError,
)
from cryptoprimer.shared import Logger, load_config
from cryptoprimer.shared.config import ALLOWED_RSA_KEY_SIZES

logger = Logger(__name__).get_logger()

config = load_config()


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def generate_keypair(
    key_size: int | None = None,
    public_exponent: int | None = None,
) -> rsa.RSAPrivateKey:
    key_size = key_size or config.crypto.rsa_key_size
    if key_size not in ALLOWED_RSA_KEY_SIZES:
        raise InvalidKeyError(f"Key size must be one of {ALLOWED_RSA_KEY_SIZES}")

    logger.info("Generating %d-bit RSA key pair", key_size)
    return rsa.generate_private_key(
        public_exponent=public_exponent or config.crypto.rsa_public_exponent,
        key_size=key_size,
    )


def private_key_to_pem(
    private_key: rsa.RSAPrivateKey, password: str | None = None
) -> str:
    if password:
        encryption = serialization.BestAvailableEncryption(password.encode())
    else:
        encryption = serialization.NoEncryption()

    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=encryption,
    ).decode()


def public_key_to_pem(public_key: rsa.RSAPublicKey) -> str:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


def load_public_key(pem: str | bytes) -> rsa.RSAPublicKey:
    if isinstance(pem, str):
        pem = pem.encode()

    try:
        public_key = serialization.load_pem_public_key(pem)
    except (ValueError, TypeError) as e:
        raise InvalidKeyError("Could not parse PEM public key") from e

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise InvalidKeyError("Public key is not an RSA key")
    return public_key


def load_private_key(pem: str | bytes, password: str | None = None) -> rsa.RSAPrivateKey:
    if isinstance(pem, str):
        pem = pem.encode()

    try:
        private_key = serialization.load_pem_private_key(
            pem, password=password.encode() if password else None
        )
    except (ValueError, TypeError) as e:
        # Wrong password, missing password and garbage all land here
        raise InvalidKeyError("Could not load PEM private key") from e

    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise InvalidKeyError("Private key is not an RSA key")
    return private_key


def oaep_max_plaintext_len(public_key: rsa.RSAPublicKey) -> int:
    hash_len = hashes.SHA256.digest_size
    return public_key.key_size // 8 - 2 * hash_len - 2


def oaep_encrypt(public_key: rsa.RSAPublicKey, plaintext: bytes) -> bytes:
    limit = oaep_max_plaintext_len(public_key)
    if len(plaintext) > limit:
        raise PlaintextTooLongError(len(plaintext), limit)

    return public_key.encrypt(plaintext, _oaep())


def oaep_decrypt(private_key: rsa.RSAPrivateKey, ciphertext: bytes) -> bytes:
    try:
        return private_key.decrypt(ciphertext, _oaep())
    except ValueError as e:
        logger.warning("RSA-OAEP decryption failed")
        raise DecryptionError("Decryption failed") from e
