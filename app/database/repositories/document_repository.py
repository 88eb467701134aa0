from typing import Any

from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import DocumentRecord
from app.processor.exceptions import DocumentNotFoundError, MissingOwnerError

_COLUMNS = "id, user_id, name, url, storage_key, text, created_at"


class DocumentRepository:
    """Database operations for the ocr_documents table.

    Every read and write is scoped by user_id: a record owned by someone else
    behaves exactly like a record that does not exist.
    """

    def create(
        self,
        user_id: str,
        name: str,
        url: str,
        storage_key: str,
        text: str | None = None,
    ) -> DocumentRecord:
        """Insert a new record and return it with its generated id and timestamp.

        Raises:
            MissingOwnerError: if user_id is empty.
        """
        _require_owner(user_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO ocr_documents (user_id, name, url, storage_key, text)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (user_id, name, url, storage_key, text),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO ocr_documents returned no row")
        return _to_record(row)

    def list_by_owner(self, user_id: str) -> list[DocumentRecord]:
        """Return all records of user_id, newest first.

        Raises:
            MissingOwnerError: if user_id is empty.
        """
        _require_owner(user_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM ocr_documents
                    WHERE user_id = %s
                    ORDER BY created_at DESC, id DESC
                    """,
                    (user_id,),
                )
                rows = cur.fetchall()

        return [_to_record(row) for row in rows]

    def rename(self, document_id: int, user_id: str, name: str) -> DocumentRecord:
        """Change the display name of a record owned by user_id.

        Raises:
            DocumentNotFoundError: if no such record is owned by user_id.
        """
        _require_owner(user_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE ocr_documents
                    SET name = %s
                    WHERE id = %s AND user_id = %s
                    RETURNING {_COLUMNS}
                    """,
                    (name, document_id, user_id),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_record(row)

    def delete(self, document_id: int, user_id: str) -> DocumentRecord:
        """Delete a record owned by user_id and return what was removed.

        Raises:
            DocumentNotFoundError: if no such record is owned by user_id.
        """
        _require_owner(user_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    DELETE FROM ocr_documents
                    WHERE id = %s AND user_id = %s
                    RETURNING {_COLUMNS}
                    """,
                    (document_id, user_id),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_record(row)


def _require_owner(user_id: str) -> None:
    if not user_id:
        raise MissingOwnerError("Missing userId")


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        url=row["url"],
        storage_key=row["storage_key"],
        text=row["text"],
        created_at=row["created_at"],
    )
