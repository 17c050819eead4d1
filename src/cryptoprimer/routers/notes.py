from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session, select

from cryptoprimer.models.requests import (
    CreateNoteRequest,
    DeleteNoteRequest,
    NoteResponse,
    SignedPayload,
    UpdateNoteRequest,
)
from cryptoprimer.models.schema import Author, Note, utcnow
from cryptoprimer.shared import Logger
from cryptoprimer.shared.db import engine

logger = Logger(__name__).get_logger()

router = APIRouter(prefix="/notes", tags=["notes"])


def get_note_or_404(session: Session, note_id: int) -> Note:
    note = session.get(Note, note_id)
    if note is None:
        logger.info("Note not found: %s", note_id)
        raise HTTPException(status_code=404, detail=f"Note {note_id} not found")
    return note


def ensure_same_note(note_id: int, signed_note_id: int):
    if note_id != signed_note_id:
        logger.warning("Envelope signed for note %s sent to note %s", signed_note_id, note_id)
        raise HTTPException(
            status_code=400,
            detail=f"Payload note_id {signed_note_id} does not match path note_id {note_id}",
        )


def ensure_author(note: Note, username: str):
    if note.author_username != username:
        logger.warning("Access denied: %s is not the author of note %s", username, note.id)
        raise HTTPException(
            status_code=403,
            detail=f"User {username} is not the author of note {note.id}",
        )


@router.get("", response_model=list[NoteResponse])
async def list_notes(author: str | None = None):
    with Session(engine) as session:
        statement = select(Note).order_by(Note.id)
        if author is not None:
            statement = statement.where(Note.author_username == author)
        notes = session.exec(statement).all()

        return [NoteResponse.model_validate(note, from_attributes=True) for note in notes]


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: int):
    with Session(engine) as session:
        note = get_note_or_404(session, note_id)
        return NoteResponse.model_validate(note, from_attributes=True)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=NoteResponse)
async def create_note(
    data: Annotated[CreateNoteRequest, Depends(SignedPayload.unwrap(CreateNoteRequest))],
    response: Response,
):
    logger.debug("Creating note %r for %s", data.title, data.username)

    with Session(engine) as session:
        # The envelope check already looked the author up, this guards a race
        author = session.exec(select(Author).where(Author.username == data.username)).first()
        if author is None:
            raise HTTPException(status_code=404, detail=f"User {data.username} not found")

        note = Note(title=data.title, body=data.body, author_username=data.username)
        session.add(note)
        session.commit()
        session.refresh(note)

        logger.info("Note %s created by %s", note.id, data.username)
        response.headers["Location"] = f"/notes/{note.id}"
        return NoteResponse.model_validate(note, from_attributes=True)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    data: Annotated[UpdateNoteRequest, Depends(SignedPayload.unwrap(UpdateNoteRequest))],
):
    ensure_same_note(note_id, data.note_id)

    with Session(engine) as session:
        note = get_note_or_404(session, note_id)
        ensure_author(note, data.username)

        note.title = data.title
        note.body = data.body
        note.updated_at = utcnow()
        session.add(note)
        session.commit()
        session.refresh(note)

        logger.info("Note %s updated by %s", note_id, data.username)
        return NoteResponse.model_validate(note, from_attributes=True)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: int,
    data: Annotated[DeleteNoteRequest, Depends(SignedPayload.unwrap(DeleteNoteRequest))],
):
    ensure_same_note(note_id, data.note_id)

    with Session(engine) as session:
        note = get_note_or_404(session, note_id)
        ensure_author(note, data.username)

        session.delete(note)
        session.commit()

    logger.info("Note %s deleted by %s", note_id, data.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
