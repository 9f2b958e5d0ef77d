import logging
import sqlite3
import threading
from pathlib import Path
from typing import Callable, Iterable

from db.models import SCHEMA_SQL, SCHEMA_VERSION

logger = logging.getLogger(__name__)


class SchemaVersionError(RuntimeError):
    """The store on disk was created with a schema this build cannot open."""


class Database:
    def __init__(self, db_path: Path, on_create: Callable[["Database"], None] | None = None):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._local = threading.local()
        self._conns: list[sqlite3.Connection] = []
        self._conns_lock = threading.Lock()
        # Held across commit + notification so snapshots go out in commit order
        self._write_lock = threading.RLock()
        self._listeners: list[tuple[frozenset, Callable[[], None]]] = []
        self._listeners_lock = threading.Lock()

        created = self._init_schema()
        if created and on_create is not None:
            on_create(self)

    def _get_conn(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is None:
            conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            self._local.conn = conn
            with self._conns_lock:
                self._conns.append(conn)
        return conn

    def _init_schema(self) -> bool:
        conn = self._get_conn()
        version = conn.execute("PRAGMA user_version").fetchone()[0]
        if version == SCHEMA_VERSION:
            return False
        if version != 0:
            raise SchemaVersionError(
                f"{self.db_path} tiene version de esquema {version}, se esperaba {SCHEMA_VERSION}"
            )
        conn.executescript(SCHEMA_SQL)
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        conn.commit()
        logger.info("Base de datos creada: %s", self.db_path)
        return True

    # -- Invalidation --

    def add_invalidation_listener(self, tables: Iterable[str], listener: Callable[[], None]):
        with self._listeners_lock:
            self._listeners.append((frozenset(tables), listener))

    def remove_invalidation_listener(self, listener: Callable[[], None]):
        with self._listeners_lock:
            self._listeners = [(t, fn) for t, fn in self._listeners if fn != listener]

    def _notify(self, tables: Iterable[str]):
        changed = set(tables)
        with self._listeners_lock:
            targets = [fn for t, fn in self._listeners if t & changed]
        for listener in targets:
            try:
                listener()
            except Exception:
                logger.exception("Error notificando cambios en %s", ", ".join(sorted(changed)))

    # -- Queries --

    def execute(self, sql: str, params: tuple = (), *, invalidates: Iterable[str] = ()) -> sqlite3.Cursor:
        with self._write_lock:
            conn = self._get_conn()
            cursor = conn.execute(sql, params)
            conn.commit()
            if invalidates and cursor.rowcount > 0:
                self._notify(invalidates)
        return cursor

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict]:
        cursor = self._get_conn().execute(sql, params)
        return [dict(row) for row in cursor.fetchall()]

    def schema_version(self) -> int:
        return self.fetchall("PRAGMA user_version")[0]["user_version"]

    def close(self):
        with self._conns_lock:
            conns, self._conns = self._conns, []
        for conn in conns:
            conn.close()
        self._local = threading.local()
