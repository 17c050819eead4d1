from base64 import b64encode

from fastapi import APIRouter, HTTPException, status

from cryptoprimer.core import asymmetric
from cryptoprimer.core.encoding import validate_base64_and_decode
from cryptoprimer.models.requests import (
    GenerateKeyPairRequest,
    KeyPairResponse,
    RsaDecryptRequest,
    RsaDecryptResponse,
    RsaEncryptRequest,
    RsaEncryptResponse,
)
from cryptoprimer.shared import Logger
from cryptoprimer.shared.http import server_error_handler

logger = Logger(__name__).get_logger()

router = APIRouter(prefix="/rsa", tags=["rsa"])


@router.post(
    "/keys",
    status_code=status.HTTP_201_CREATED,
    response_model=KeyPairResponse,
)
def generate_keypair(data: GenerateKeyPairRequest):
    """
    Generate an RSA key pair and hand both halves back to the caller.
    The private key is PKCS8 PEM, encrypted when `password` is given.
    """
    with server_error_handler():
        private_key = asymmetric.generate_keypair(data.key_size)
        response = KeyPairResponse(
            private_key=asymmetric.private_key_to_pem(private_key, data.password),
            public_key=asymmetric.public_key_to_pem(private_key.public_key()),
            key_size=private_key.key_size,
        )

    return response


@router.post("/encrypt", response_model=RsaEncryptResponse)
def encrypt(data: RsaEncryptRequest):
    with server_error_handler():
        public_key = asymmetric.load_public_key(data.public_key)
        ciphertext = asymmetric.oaep_encrypt(public_key, data.plaintext.encode())

    logger.debug("RSA-OAEP encrypted %d bytes", len(data.plaintext))
    return RsaEncryptResponse(ciphertext=b64encode(ciphertext).decode("utf8"))


@router.post("/decrypt", response_model=RsaDecryptResponse)
def decrypt(data: RsaDecryptRequest):
    ciphertext = validate_base64_and_decode(data.ciphertext, "ciphertext")

    with server_error_handler():
        private_key = asymmetric.load_private_key(data.private_key, data.password)
        plaintext = asymmetric.oaep_decrypt(private_key, ciphertext)

    try:
        return RsaDecryptResponse(plaintext=plaintext.decode())
    except UnicodeDecodeError as e:
        raise HTTPException(
            status_code=400, detail="Decrypted data is not valid UTF-8"
        ) from e
