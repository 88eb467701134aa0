from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DocumentRecord:
    """Represents a row from the ocr_documents table."""

    id: int
    user_id: str
    name: str
    url: str
    storage_key: str
    text: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
