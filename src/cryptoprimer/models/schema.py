from datetime import UTC, datetime

from sqlmodel import Field, Relationship, SQLModel


def utcnow() -> datetime:
    return datetime.now(UTC)


class Author(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(..., unique=True, index=True, description="Unique username")
    public_key: bytes = Field(..., description="Author's RSA public key (PEM)")

    # Relationships
    notes: list["Note"] = Relationship(back_populates="author")


class Note(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(..., description="Short title of the note")
    body: str = Field(..., description="Note contents")
    author_username: str = Field(
        ..., foreign_key="author.username", index=True, description="Username of the author"
    )
    created_at: datetime = Field(
        default_factory=utcnow, description="Timestamp when the note was created"
    )
    updated_at: datetime = Field(
        default_factory=utcnow, description="Timestamp of the last modification"
    )

    # Relationships
    author: Author | None = Relationship(back_populates="notes")
