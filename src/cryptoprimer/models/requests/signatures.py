from .serde_base import SerdeBase


class SignRequest(SerdeBase):
    private_key: str
    message: str
    password: str | None = None


class SignResponse(SerdeBase):
    signature: str  # base64


class VerifyRequest(SerdeBase):
    public_key: str
    message: str
    signature: str  # base64


class VerifyResponse(SerdeBase):
    valid: bool
