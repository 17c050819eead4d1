from datetime import datetime

from pydantic import Field

from .serde_base import SerdeBase
from .validators import Username


class CreateNoteRequest(SerdeBase):
    username: Username
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., max_length=10000)


class UpdateNoteRequest(SerdeBase):
    username: Username
    note_id: int  # must match the path, binds the signature to one note
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., max_length=10000)


class DeleteNoteRequest(SerdeBase):
    username: Username
    note_id: int  # must match the path, binds the signature to one note


class NoteResponse(SerdeBase):
    id: int
    title: str
    body: str
    author_username: str
    created_at: datetime
    updated_at: datetime
