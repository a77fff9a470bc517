import threading
from typing import Generator

from app_constants.app_configurations import Database
from scripts.utils.db_util import DatabaseUtil, Base
from scripts.utils.storage_util import BaseStorage, SQLStorage

db_util = DatabaseUtil(Database.URL, echo=Database.ECHO)

# one request at a time touches the store
store_lock = threading.Lock()


def get_storage() -> Generator[BaseStorage, None, None]:
    """FastAPI dependency handing each request its own storage"""
    with store_lock, db_util.get_db_context() as db:
        yield SQLStorage(db)
