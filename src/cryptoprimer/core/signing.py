from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from cryptoprimer.shared import Logger

logger = Logger(__name__).get_logger()


def _pss() -> padding.PSS:
    return padding.PSS(
        mgf=padding.MGF1(hashes.SHA256()),
        salt_length=padding.PSS.MAX_LENGTH,
    )


def sign(private_key: rsa.RSAPrivateKey, message: bytes) -> bytes:
    return private_key.sign(message, _pss(), hashes.SHA256())


def verify(public_key: rsa.RSAPublicKey, signature: bytes, message: bytes) -> bool:
    """Return True when ``signature`` is a valid RSA-PSS signature of ``message``."""
    try:
        public_key.verify(signature, message, _pss(), hashes.SHA256())
    except InvalidSignature:
        logger.debug("RSA-PSS signature did not verify")
        return False
    return True
