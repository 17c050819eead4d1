import json
from collections.abc import Awaitable, Callable

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from fastapi import HTTPException, Request
from pydantic import BaseModel
from sqlmodel import Session, select

from cryptoprimer.core.asymmetric import load_public_key
from cryptoprimer.core.errors import InvalidKeyError
from cryptoprimer.core.verify import signature_verify
from cryptoprimer.models.schema import Author
from cryptoprimer.shared import Logger
from cryptoprimer.shared.db import engine

logger = Logger(__name__).get_logger()

type UnwrapHandler[T] = Callable[[Request], Awaitable[T]]


class SignedPayload[T: BaseModel](BaseModel):
    payload: str  # JSON string payload (minified)
    signature: str  # Base64-encoded RSA-PSS signature of the payload
    username: str  # Plaintext string of username

    @classmethod
    def unwrap(cls, output_type: type[T]) -> UnwrapHandler[T]:
        """Verify against the registered public key of the envelope's user."""
        return cls._create_handler(output_type, key_field=None)

    @classmethod
    def unwrap_self_signed(
        cls, output_type: type[T], key_field: str = "public_key"
    ) -> UnwrapHandler[T]:
        """Verify against the public key carried inside the payload itself."""
        return cls._create_handler(output_type, key_field=key_field)

    @classmethod
    def _create_handler(
        cls,
        output_type: type[T],
        key_field: str | None,
    ) -> UnwrapHandler[T]:
        logger.debug(
            "Creating unwrap handler for output type: %s (self signed: %s)",
            output_type.__name__,
            key_field is not None,
        )

        async def unwrap_handler(request: Request) -> T:
            logger.debug("Handling unwrap request.")
            try:
                signed_payload = cls.model_validate(await request.json())
                logger.debug("Request JSON body parsed successfully.")

                payload_data = json.loads(signed_payload.payload)
                result = output_type.model_validate(payload_data)

            except (ValueError, json.JSONDecodeError) as e:
                logger.warning("Failed to unwrap payload: %s", e)
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid payload: {e}",
                ) from e

            if key_field is None:
                signed_payload.verify()
            else:
                signed_payload.verify_with(
                    signed_payload.parse_public_key(getattr(result, key_field))
                )

            payload_username = getattr(result, "username", None)
            if payload_username is not None and payload_username != signed_payload.username:
                logger.warning(
                    "Envelope signed by %s carries payload for %s",
                    signed_payload.username,
                    payload_username,
                )
                raise HTTPException(
                    status_code=403,
                    detail="Payload username does not match signer",
                )

            logger.info(
                "Unwrapped payload into %s instance successfully.",
                output_type.__name__,
            )
            return result

        return unwrap_handler

    @staticmethod
    def parse_public_key(pem: str | bytes) -> RSAPublicKey:
        try:
            return load_public_key(pem)
        except InvalidKeyError as e:
            logger.warning("Rejected public key: %s", e)
            raise HTTPException(status_code=400, detail=str(e)) from e

    def verify(self):
        with Session(engine) as session:
            statement = select(Author).where(Author.username == self.username)
            author = session.exec(statement).first()

        if author is None:
            raise HTTPException(
                status_code=404,
                detail="User does not exist",
            )

        self.verify_with(self.parse_public_key(author.public_key))

    def verify_with(self, public_key: RSAPublicKey):
        signature_verify(
            public_key=public_key,
            signature=self.signature,
            data=self.payload,
        )
