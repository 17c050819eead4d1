import base64
import binascii

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from fastapi import HTTPException

from cryptoprimer.core import signing
from cryptoprimer.shared.logger import Logger

logger = Logger(__name__).get_logger()


def signature_verify(public_key: RSAPublicKey, signature: str, data: str):
    """
    Verifies the RSA-PSS signature of a request payload.
    Raises HTTPException(401) if the signature is missing, malformed or invalid.
    """
    logger.debug("Starting signature verification.")

    try:
        signature_bytes = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning("Signature is not valid base64: %s", e)
        raise HTTPException(status_code=401, detail="Invalid signature") from e

    if not signing.verify(public_key, signature_bytes, data.encode(encoding="UTF-8")):
        logger.warning("Signature verification failed")
        raise HTTPException(status_code=401, detail="Invalid signature")

    logger.info("Signature verification successful.")
