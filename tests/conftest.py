import io
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from PIL import Image

from app.database.models import DocumentRecord
from app.ocr.models import DetectedLanguage, OcrPage, OcrParagraph, OcrResult, TextSegment
from app.processor.exceptions import DocumentNotFoundError, MissingOwnerError

_EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


class InMemoryDocumentRepository:
    """DocumentRepository stand-in with the same ownership rules, kept in a dict."""

    def __init__(self) -> None:
        self.records: dict[int, DocumentRecord] = {}
        self._next_id = 1

    def create(
        self,
        user_id: str,
        name: str,
        url: str,
        storage_key: str,
        text: str | None = None,
    ) -> DocumentRecord:
        if not user_id:
            raise MissingOwnerError("Missing userId")
        record = DocumentRecord(
            id=self._next_id,
            user_id=user_id,
            name=name,
            url=url,
            storage_key=storage_key,
            text=text,
            created_at=_EPOCH + timedelta(minutes=self._next_id),
        )
        self.records[record.id] = record
        self._next_id += 1
        return record

    def list_by_owner(self, user_id: str) -> list[DocumentRecord]:
        if not user_id:
            raise MissingOwnerError("Missing userId")
        owned = [r for r in self.records.values() if r.user_id == user_id]
        return sorted(owned, key=lambda r: (r.created_at, r.id), reverse=True)

    def _owned(self, document_id: int, user_id: str) -> DocumentRecord:
        record = self.records.get(document_id)
        if record is None or record.user_id != user_id:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return record

    def rename(self, document_id: int, user_id: str, name: str) -> DocumentRecord:
        record = self._owned(document_id, user_id)
        record.name = name
        return record

    def delete(self, document_id: int, user_id: str) -> DocumentRecord:
        record = self._owned(document_id, user_id)
        del self.records[document_id]
        return record


@pytest.fixture()
def memory_repo() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture()
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """Write a solid-color image in the given format and return its path."""

    def _make(
        name: str,
        image_format: str,
        size: tuple[int, int] = (64, 32),
        mode: str = "RGB",
    ) -> Path:
        path = tmp_path / name
        Image.new(mode, size, color=(200, 30, 30) if mode == "RGB" else 128).save(
            path, image_format
        )
        return path

    return _make


@pytest.fixture()
def jpeg_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), color=(255, 255, 255)).save(buf, "JPEG")
    return buf.getvalue()


@pytest.fixture()
def two_page_result() -> OcrResult:
    """Two pages, one paragraph each, two segments per paragraph."""
    text = "Hello world foo_bar baz"
    return OcrResult(
        text=text,
        pages=[
            OcrPage(
                paragraphs=[
                    OcrParagraph(
                        text_segments=[TextSegment(0, 5), TextSegment(6, 11)],
                        detected_languages=[DetectedLanguage("en", 0.95)],
                    )
                ]
            ),
            OcrPage(
                paragraphs=[
                    OcrParagraph(
                        text_segments=[TextSegment(12, 19), TextSegment(20, 23)],
                        detected_languages=[DetectedLanguage("en", 0.4)],
                    )
                ]
            ),
        ],
    )
