from app.database.connection import get_connection
from app.logging.logger import Log

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS ocr_documents (
        id BIGSERIAL PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        url TEXT NOT NULL,
        storage_key TEXT NOT NULL UNIQUE,
        text TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ocr_documents_user_created_idx
    ON ocr_documents (user_id, created_at DESC)
    """,
)


def ensure_schema() -> None:
    """Create the ocr_documents table and its index if they are missing."""
    with get_connection() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(statement)
        conn.commit()
    Log.info("Database schema is up to date")
