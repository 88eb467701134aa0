from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from app.database.models import DocumentRecord
from app.ocr.models import OcrResult


@dataclass(slots=True)
class PipelineContext:
    user_id: str
    upload_path: Path
    current_path: Path
    temp_files: list[Path] = field(default_factory=list)
    ocr_result: OcrResult | None = None
    docx_bytes: bytes = b""
    storage_key: str = ""
    stored_path: Path | None = None
    docx_url: str = ""
    record: DocumentRecord | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
