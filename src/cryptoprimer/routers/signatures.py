from base64 import b64encode

from fastapi import APIRouter

from cryptoprimer.core import asymmetric, signing
from cryptoprimer.core.encoding import validate_base64_and_decode
from cryptoprimer.models.requests import (
    SignRequest,
    SignResponse,
    VerifyRequest,
    VerifyResponse,
)
from cryptoprimer.shared import Logger
from cryptoprimer.shared.http import server_error_handler

logger = Logger(__name__).get_logger()

router = APIRouter(prefix="/signatures", tags=["signatures"])


@router.post("/sign", response_model=SignResponse)
def sign(data: SignRequest):
    with server_error_handler():
        private_key = asymmetric.load_private_key(data.private_key, data.password)
        signature = signing.sign(private_key, data.message.encode())

    return SignResponse(signature=b64encode(signature).decode("utf8"))


@router.post("/verify", response_model=VerifyResponse)
async def verify(data: VerifyRequest):
    """
    A signature that does not match is a normal answer (`valid: false`),
    not an error. Only undecodable input is a 400.
    """
    signature = validate_base64_and_decode(data.signature, "signature")

    with server_error_handler():
        public_key = asymmetric.load_public_key(data.public_key)
        valid = signing.verify(public_key, signature, data.message.encode())

    logger.info("Signature verification result: %s", valid)
    return VerifyResponse(valid=valid)
