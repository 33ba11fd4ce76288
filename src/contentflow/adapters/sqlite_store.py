import logging
import sqlite3
from datetime import datetime
from typing import Any

from contentflow.domain.entities import Content, FileRef
from contentflow.domain.errors import NotFound, StorageError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS contents (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    file_path TEXT NOT NULL,
    file_mime_type TEXT,
    file_size_bytes INTEGER,
    published INTEGER NOT NULL DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'draft',
    published_at TEXT,
    updated_at TEXT NOT NULL
);
"""


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteContentStore:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            logger.error("Opening database %s failed: %s", self.db_path, e)
            raise StorageError(f"Could not open database {self.db_path}: {e}") from e
        conn.row_factory = dict_factory
        return conn

    def ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Could not create schema in {self.db_path}: {e}") from e
        finally:
            conn.close()

    def save(self, content: Content) -> Content:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO contents (
                    id, title, file_path, file_mime_type, file_size_bytes,
                    published, status, published_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title=excluded.title,
                    file_path=excluded.file_path,
                    file_mime_type=excluded.file_mime_type,
                    file_size_bytes=excluded.file_size_bytes,
                    published=excluded.published,
                    status=excluded.status,
                    published_at=excluded.published_at,
                    updated_at=excluded.updated_at
            """,
                (
                    content.id,
                    content.title,
                    content.file.path,
                    content.file.mime_type,
                    content.file.size_bytes,
                    1 if content.published else 0,
                    content.status,
                    content.published_at.isoformat() if content.published_at else None,
                    content.updated_at.isoformat(),
                ),
            )
            conn.commit()
            return content
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Saving content %s failed: %s", content.id, e)
            raise StorageError(f"Could not save content {content.id}: {e}") from e
        finally:
            conn.close()

    def load(self, content_id: str) -> Content:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM contents WHERE id = ?", (content_id,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Could not load content {content_id}: {e}") from e
        finally:
            conn.close()

        if not row:
            raise NotFound(content_id)
        return self._row_to_content(row)

    def _row_to_content(self, row: dict[str, Any]) -> Content:
        return Content(
            id=row["id"],
            title=row["title"],
            file=FileRef(
                path=row["file_path"],
                mime_type=row["file_mime_type"],
                size_bytes=row["file_size_bytes"],
            ),
            published=bool(row["published"]),
            status=row["status"],
            published_at=(
                datetime.fromisoformat(row["published_at"]) if row["published_at"] else None
            ),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
