from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from cryptoprimer.models.schema import *  # noqa: F403 # SQLModel subclasses need to be in memory
from cryptoprimer.shared import Logger, load_config

logger = Logger(__name__).get_logger()

config = load_config()

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(database_url: str) -> Engine:
    kwargs = {}
    if database_url.startswith("sqlite"):
        # Request handlers run in a worker thread
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in IN_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool

    new_engine = create_engine(database_url, **kwargs)
    SQLModel.metadata.create_all(new_engine)
    logger.debug("Database ready at %s", database_url)
    return new_engine


engine: Engine = build_engine(config.database.path)
