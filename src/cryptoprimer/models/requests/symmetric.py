from pydantic import Field

from .serde_base import SerdeBase
from .validators import NonEmptyText


class SymmetricKeyResponse(SerdeBase):
    key: str


class DeriveKeyRequest(SerdeBase):
    password: NonEmptyText
    salt: str | None = None  # base64, generated when omitted
    iterations: int | None = Field(default=None, ge=100000, le=10_000_000)


class DeriveKeyResponse(SerdeBase):
    key: str
    salt: str  # base64


class SymmetricEncryptRequest(SerdeBase):
    key: str
    plaintext: str


class SymmetricEncryptResponse(SerdeBase):
    token: str


class SymmetricDecryptRequest(SerdeBase):
    key: str
    token: str
    ttl: int | None = Field(default=None, gt=0)  # seconds


class SymmetricDecryptResponse(SerdeBase):
    plaintext: str


class RotateTokenRequest(SerdeBase):
    token: str
    new_key: str
    old_keys: list[str] = Field(..., min_length=1)
