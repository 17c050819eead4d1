from sqlalchemy import Engine
from sqlmodel import Session, select

from cryptoprimer.models.schema import Author, Note
from cryptoprimer.shared.db import build_engine, engine


def test_db_engine_exists():
    """
    Test that the database engine is created.
    """
    assert engine is not None
    assert isinstance(engine, Engine)


def test_db_schema():
    test_engine = build_engine("sqlite://")

    with Session(test_engine) as session:
        session.add(Author(username="bob_dylan", public_key=b"-----BEGIN PUBLIC KEY-----"))
        session.add(Note(title="Blowin'", body="in the wind", author_username="bob_dylan"))
        session.commit()

        note = session.exec(select(Note)).one()
        assert note.author.username == "bob_dylan"
        assert note.created_at is not None
