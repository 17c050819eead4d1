from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from cryptoprimer.core.asymmetric import public_key_to_pem
from cryptoprimer.models.requests import (
    RegisterAccount,
    RegisterAccountResponse,
    SignedPayload,
)
from cryptoprimer.models.schema import Author
from cryptoprimer.shared import Logger
from cryptoprimer.shared.db import engine

logger = Logger(__name__).get_logger()

router = APIRouter(tags=["auth"])


@router.post(
    "/auth/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterAccountResponse,
)
async def register(
    data: Annotated[
        RegisterAccount, Depends(SignedPayload.unwrap_self_signed(RegisterAccount))
    ],
):
    """
    Register an author by their RSA public key.

    The envelope must be signed with the private half of `public_key`,
    which proves possession before the key is stored.
    ==========================
    verify signature against the submitted key
    check if username is unique -> reject if not 403
    persist normalised PEM to db
    """
    logger.info("Registering author: %s", data.username)

    # Store a canonical PEM regardless of how the client formatted it
    public_key = SignedPayload.parse_public_key(data.public_key)
    public_key_pem = public_key_to_pem(public_key).encode()

    with Session(engine) as session:
        existing_author = session.exec(
            select(Author).where(Author.username == data.username)
        ).first()
        if existing_author:
            logger.warning("Username already taken: %s", data.username)
            raise HTTPException(status_code=403, detail="Username already exists")

        new_author = Author(username=data.username, public_key=public_key_pem)
        session.add(new_author)
        try:
            session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name
            session.rollback()
            logger.warning("Username already taken: %s", data.username)
            raise HTTPException(status_code=403, detail="Username already exists") from e
        session.refresh(new_author)

    return RegisterAccountResponse(
        message="User registered successfully", user_id=new_author.id
    )
