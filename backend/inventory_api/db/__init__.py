import threading
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from inventory_api.log import get_logger

Base = declarative_base()

log = get_logger("db")


class Database:
    """
    Owns the process-wide engine and session factory.

    The engine is created lazily on first use; concurrent first calls are
    serialized by a lock so only one engine is ever built. `dispose()` is the
    teardown path and leaves the object ready to reconnect.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        return self.connect()

    def connect(self) -> Engine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    connect_args = {}
                    if self.url.startswith("sqlite"):
                        connect_args["check_same_thread"] = False
                    engine = create_engine(
                        self.url, future=True, echo=self.echo, connect_args=connect_args
                    )
                    self._sessionmaker = sessionmaker(
                        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
                    )
                    self._engine = engine
                    log.info("engine created for %s", engine.url.render_as_string(hide_password=True))
        return self._engine

    def session(self) -> Session:
        self.connect()
        return self._sessionmaker()

    def init_schema(self, reset: bool = False):
        """
        Create the tables for every mapped model.
        With reset=True existing tables are dropped first.
        """
        # populate Base.metadata
        from inventory_api.models import product  # noqa: F401

        if reset:
            log.info("dropping existing tables")
            Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        log.info("database schema ready")

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self):
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                log.info("engine disposed")
            self._engine = None
            self._sessionmaker = None
