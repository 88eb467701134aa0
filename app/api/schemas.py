from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.database.models import DocumentRecord


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentOut(CamelModel):
    id: int
    user_id: str
    name: str
    url: str
    text: str | None = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentOut":
        return cls(
            id=record.id,
            user_id=record.user_id,
            name=record.name,
            url=record.url,
            text=record.text,
            created_at=record.created_at,
        )


class OcrResponse(CamelModel):
    text: str
    docx_url: str
    document: DocumentOut


class RenameRequest(CamelModel):
    user_id: str | None = None
    name: str | None = None


class DeleteRequest(CamelModel):
    user_id: str | None = None
