from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy import create_engine
from contextlib import contextmanager
from typing import Generator

from app_constants.log_module import logger

Base = declarative_base()


class DatabaseUtil:
    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        logger.info(f"Creating db connection: {self.database_url}")
        engine_options = {"echo": echo}
        if self.is_in_memory(database_url):
            # one shared connection, otherwise every session gets its own empty database
            engine_options.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
        self.engine = create_engine(self.database_url, **engine_options)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False,
                                         bind=self.engine)
        self.Base = Base

    @staticmethod
    def is_in_memory(database_url: str) -> bool:
        return database_url in ("sqlite://", "sqlite:///:memory:")

    def create_tables(self) -> None:
        self.Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        self.Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def get_db_context(self) -> Generator:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()
