from .asymmetric import (
    GenerateKeyPairRequest,
    KeyPairResponse,
    RsaDecryptRequest,
    RsaDecryptResponse,
    RsaEncryptRequest,
    RsaEncryptResponse,
)
from .notes import CreateNoteRequest, DeleteNoteRequest, NoteResponse, UpdateNoteRequest
from .register_account import RegisterAccount, RegisterAccountResponse
from .serde_base import SerdeBase
from .signatures import SignRequest, SignResponse, VerifyRequest, VerifyResponse
from .signed_payload import SignedPayload
from .symmetric import (
    DeriveKeyRequest,
    DeriveKeyResponse,
    RotateTokenRequest,
    SymmetricDecryptRequest,
    SymmetricDecryptResponse,
    SymmetricEncryptRequest,
    SymmetricEncryptResponse,
    SymmetricKeyResponse,
)

__all__ = [
    "CreateNoteRequest",
    "DeleteNoteRequest",
    "DeriveKeyRequest",
    "DeriveKeyResponse",
    "GenerateKeyPairRequest",
    "KeyPairResponse",
    "NoteResponse",
    "RegisterAccount",
    "RegisterAccountResponse",
    "RotateTokenRequest",
    "RsaDecryptRequest",
    "RsaDecryptResponse",
    "RsaEncryptRequest",
    "RsaEncryptResponse",
    "SerdeBase",
    "SignRequest",
    "SignResponse",
    "SignedPayload",
    "SymmetricDecryptRequest",
    "SymmetricDecryptResponse",
    "SymmetricEncryptRequest",
    "SymmetricEncryptResponse",
    "SymmetricKeyResponse",
    "UpdateNoteRequest",
    "VerifyRequest",
    "VerifyResponse",
]
