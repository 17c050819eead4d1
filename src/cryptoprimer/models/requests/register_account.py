from .serde_base import SerdeBase
from .validators import Username


class RegisterAccount(SerdeBase):
    username: Username
    public_key: str  # PEM encoded RSA public key


class RegisterAccountResponse(SerdeBase):
    message: str
    user_id: int
