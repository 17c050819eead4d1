from base64 import b64encode

from fastapi import APIRouter, status

from cryptoprimer.core import symmetric
from cryptoprimer.core.encoding import validate_base64_and_decode
from cryptoprimer.models.requests import (
    DeriveKeyRequest,
    DeriveKeyResponse,
    RotateTokenRequest,
    SymmetricDecryptRequest,
    SymmetricDecryptResponse,
    SymmetricEncryptRequest,
    SymmetricEncryptResponse,
    SymmetricKeyResponse,
)
from cryptoprimer.shared import Logger
from cryptoprimer.shared.http import server_error_handler

logger = Logger(__name__).get_logger()

router = APIRouter(prefix="/symmetric", tags=["symmetric"])


@router.post(
    "/keys",
    status_code=status.HTTP_201_CREATED,
    response_model=SymmetricKeyResponse,
)
async def generate_key():
    """Generate a fresh Fernet key. The server keeps no copy."""
    logger.info("Generating Fernet key")
    with server_error_handler():
        return SymmetricKeyResponse(key=symmetric.generate_key())


@router.post("/derive_key", response_model=DeriveKeyResponse)
def derive_key(data: DeriveKeyRequest):
    # Sync on purpose: PBKDF2 blocks, so let the threadpool run it
    salt = None
    if data.salt is not None:
        salt = validate_base64_and_decode(data.salt, "salt", 8)

    with server_error_handler():
        key, salt = symmetric.derive_key(data.password, salt, data.iterations)

    return DeriveKeyResponse(key=key, salt=b64encode(salt).decode("utf8"))


@router.post("/encrypt", response_model=SymmetricEncryptResponse)
async def encrypt(data: SymmetricEncryptRequest):
    with server_error_handler():
        token = symmetric.encrypt(data.plaintext, data.key)
    return SymmetricEncryptResponse(token=token)


@router.post("/decrypt", response_model=SymmetricDecryptResponse)
async def decrypt(data: SymmetricDecryptRequest):
    with server_error_handler():
        plaintext = symmetric.decrypt(data.token, data.key, ttl=data.ttl)
    return SymmetricDecryptResponse(plaintext=plaintext)


@router.post("/rotate", response_model=SymmetricEncryptResponse)
async def rotate(data: RotateTokenRequest):
    with server_error_handler():
        token = symmetric.rotate(data.token, data.new_key, data.old_keys)
    return SymmetricEncryptResponse(token=token)
