class CryptoError(Exception):
    """Base class for inputs the cryptography library refused."""


class InvalidKeyError(CryptoError):
    pass


class DecryptionError(CryptoError):
    pass


class PlaintextTooLongError(CryptoError):
    def __init__(self, length: int, limit: int):
        super().__init__(
            f"Plaintext is {length} bytes but this key can encrypt at most {limit} bytes"
        )
        self.length = length
        self.limit = limit
