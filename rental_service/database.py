import asyncio
import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, declarative_base

from .exceptions import StoreError

logger = logging.getLogger("rental_service")

Base = declarative_base()


class Store:
    """
    Owns the database engine and session factory for the lifetime of the process.
    Created once at startup and shared by every request.
    """

    def __init__(self, database_url: str):
        connect_args = {}
        if database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    async def connect(self, max_retries: int = 5, retry_delay: float = 2.0, create_tables: bool = True):
        """
        Verifies the database is reachable, retrying the initial connect.
        Raises StoreError once every attempt has failed.
        """
        retries = 0
        while True:
            try:
                await asyncio.to_thread(self._ping)
                logger.info(f"Connected to the database on attempt {retries + 1}.")
                break
            except OperationalError as e:
                retries += 1
                if retries >= max_retries:
                    logger.error(f"Failed to connect to the database after {retries} attempts: {e}")
                    raise StoreError("Database is unavailable.") from e
                logger.warning(
                    f"Database connection attempt {retries}/{max_retries} failed: {e}. "
                    f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)

        if create_tables:
            # Imported here so every model is registered on Base first
            from . import models  # noqa: F401
            await asyncio.to_thread(Base.metadata.create_all, bind=self.engine)

    def _ping(self):
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def session(self):
        return self.SessionLocal()

    def dispose(self):
        logger.info("Closing database connections...")
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.store.session()
    try:
        yield db
    finally:
        db.close()
