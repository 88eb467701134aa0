from dataclasses import dataclass

from app.database.models import DocumentRecord


@dataclass(frozen=True)
class ProcessorResult:
    """What the upload pipeline hands back to the API layer."""

    text: str
    docx_url: str
    record: DocumentRecord
