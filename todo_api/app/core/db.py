"""
Embedded document store on top of SQLite.

Documents are JSON objects kept in a single ``documents`` table keyed by
``(collection, id)``.  This module provides connection helpers
(``get_connection``, ``get_cursor``), schema setup on application start
(``init_db``) and the ``Collection`` class which implements the handful
of document operations the API needs: insert, find with tag/field
matching and sorting, field-level updates, set-like array updates and
removal.

Queries run through SQLite's JSON1 functions, so filtering and sorting
happen inside the database rather than in Python.  SQLite errors are not
caught here; they propagate to the API layer and are reported as
server errors.
"""

import json
import logging
import os
import re
import secrets
import sqlite3
import string
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .config import settings


logger = logging.getLogger(__name__)

# Shared-cache URI used when ``DATABASE_URL`` is ``:memory:``.  A plain
# ``:memory:`` database would be private to each connection.
MEMORY_URI = "file:todo_api?mode=memory&cache=shared"

ID_ALPHABET = string.ascii_letters + string.digits
ID_LENGTH = 16

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# The in-memory database lives only while at least one connection is
# open, so ``init_db`` parks one here.
_memory_keeper: Optional[sqlite3.Connection] = None


class StoreError(Exception):
    """Raised when a stored document cannot be decoded."""


def get_database_path() -> str:
    """Compute the location of the SQLite database.

    Absolute paths are used as given; relative paths are resolved
    against the project root.  ``:memory:`` maps to a shared in-memory
    database.
    """
    db_url = settings.database_url
    if db_url == ":memory:":
        return MEMORY_URI
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection with name-addressable rows."""
    db_path = get_database_path()
    conn = sqlite3.connect(db_path, uri=db_path.startswith("file:"))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


MIGRATIONS: List[tuple] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS documents (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            body TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (collection, id)
        );
        """,
    ),
    (
        2,
        "CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents (collection);",
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies newer entries of ``MIGRATIONS``
    in order.  Safe to call repeatedly.
    """
    global _memory_keeper
    db_path = get_database_path()
    if db_path == MEMORY_URI and _memory_keeper is None:
        _memory_keeper = get_connection()

    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY, applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP)"
        )
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current = row["version"] or 0
        for version, script in MIGRATIONS:
            if version <= current:
                continue
            cursor.executescript(script)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            logger.info("Applied migration %s", version)
    logger.info("Document store ready at %s", db_path)


def close_db() -> None:
    """Release the in-memory database, if one is held open."""
    global _memory_keeper
    if _memory_keeper is not None:
        _memory_keeper.close()
        _memory_keeper = None


def generate_id() -> str:
    """Return a random 16 character alphanumeric document id."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def _json_path(field_name: str) -> str:
    if not _FIELD_RE.match(field_name):
        raise ValueError(f"Invalid field name: {field_name!r}")
    return f"$.{field_name}"


class Collection:
    """A named set of JSON documents in the embedded store.

    Every document returned carries its identifier under ``_id``.
    Query dictionaries map field names to values; a document matches
    when the field equals the value or, for array fields, when the array
    contains it.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    def _decode(self, row: sqlite3.Row) -> Dict[str, Any]:
        try:
            body = json.loads(row["body"])
        except json.JSONDecodeError as exc:
            raise StoreError(f"Corrupt document '{row['id']}' in collection '{self.name}': {exc}") from exc
        return {"_id": row["id"], **body}

    @staticmethod
    def _encode(doc: Dict[str, Any]) -> str:
        return json.dumps({k: v for k, v in doc.items() if k != "_id"})

    def _where(self, query: Optional[Dict[str, Any]]) -> tuple:
        clauses = ["collection = ?"]
        params: List[Any] = [self.name]
        for field_name, value in (query or {}).items():
            # json_each yields the value itself for scalars and the
            # elements for arrays, which gives equality-or-membership.
            clauses.append("EXISTS (SELECT 1 FROM json_each(body, ?) WHERE json_each.value = ?)")
            params.extend([_json_path(field_name), value])
        return " AND ".join(clauses), params

    def _fetch(self, cursor: sqlite3.Cursor, doc_id: str) -> Optional[Dict[str, Any]]:
        row = cursor.execute(
            "SELECT id, body FROM documents WHERE collection = ? AND id = ?",
            (self.name, doc_id),
        ).fetchone()
        return self._decode(row) if row else None

    def _write(self, cursor: sqlite3.Cursor, doc: Dict[str, Any]) -> None:
        cursor.execute(
            "UPDATE documents SET body = ? WHERE collection = ? AND id = ?",
            (self._encode(doc), self.name, doc["_id"]),
        )

    def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Store ``doc`` under a fresh id and return the stored document."""
        stored = {"_id": generate_id(), **{k: v for k, v in doc.items() if k != "_id"}}
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO documents (collection, id, body) VALUES (?, ?, ?)",
                (self.name, stored["_id"], self._encode(stored)),
            )
        return stored

    def find(
        self,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return matching documents, in insertion order unless ``sort`` names a field."""
        where, params = self._where(query)
        order_by = "rowid"
        if sort is not None:
            order_by = "json_extract(body, ?), rowid"
            params.append(_json_path(sort))
        with get_cursor() as cursor:
            rows = cursor.execute(
                f"SELECT id, body FROM documents WHERE {where} ORDER BY {order_by}",
                params,
            ).fetchall()
        return [self._decode(row) for row in rows]

    def find_one(self, doc_id: str) -> Optional[Dict[str, Any]]:
        with get_cursor() as cursor:
            return self._fetch(cursor, doc_id)

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        where, params = self._where(query)
        with get_cursor() as cursor:
            row = cursor.execute(f"SELECT COUNT(*) AS n FROM documents WHERE {where}", params).fetchone()
        return row["n"]

    def update(self, doc_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace the given fields of a document.

        Returns the updated document, or ``None`` if ``doc_id`` does not
        exist.  ``_id`` cannot be changed.
        """
        with get_cursor() as cursor:
            doc = self._fetch(cursor, doc_id)
            if doc is None:
                return None
            doc.update({k: v for k, v in changes.items() if k != "_id"})
            self._write(cursor, doc)
        return doc

    def add_to_set(self, doc_id: str, field_name: str, value: Any) -> Optional[Dict[str, Any]]:
        """Append ``value`` to an array field unless it is already present."""
        with get_cursor() as cursor:
            doc = self._fetch(cursor, doc_id)
            if doc is None:
                return None
            items = list(doc.get(field_name) or [])
            if value not in items:
                items.append(value)
                doc[field_name] = items
                self._write(cursor, doc)
        return doc

    def pull(self, doc_id: str, field_name: str, value: Any) -> Optional[Dict[str, Any]]:
        """Remove every occurrence of ``value`` from an array field."""
        with get_cursor() as cursor:
            doc = self._fetch(cursor, doc_id)
            if doc is None:
                return None
            items = list(doc.get(field_name) or [])
            if value in items:
                doc[field_name] = [item for item in items if item != value]
                self._write(cursor, doc)
        return doc

    def remove(self, doc_id: str) -> int:
        """Delete one document; returns the number of documents removed."""
        with get_cursor() as cursor:
            cursor.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (self.name, doc_id),
            )
            return cursor.rowcount

    def remove_all(self) -> int:
        with get_cursor() as cursor:
            cursor.execute("DELETE FROM documents WHERE collection = ?", (self.name,))
            return cursor.rowcount
