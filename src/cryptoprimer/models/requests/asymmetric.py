from .serde_base import SerdeBase
from .validators import RsaKeySize


class GenerateKeyPairRequest(SerdeBase):
    key_size: RsaKeySize | None = None
    password: str | None = None  # encrypts the returned private key PEM


class KeyPairResponse(SerdeBase):
    private_key: str
    public_key: str
    key_size: int


class RsaEncryptRequest(SerdeBase):
    public_key: str
    plaintext: str


class RsaEncryptResponse(SerdeBase):
    ciphertext: str  # base64


class RsaDecryptRequest(SerdeBase):
    private_key: str
    ciphertext: str  # base64
    password: str | None = None


class RsaDecryptResponse(SerdeBase):
    plaintext: str
