import uuid
from collections.abc import Callable
from datetime import date
from pathlib import Path

from app.database.repositories.document_repository import DocumentRepository
from app.document.docx_builder import DocxBuilder, display_name
from app.imaging.base import BaseImageNormalizer
from app.logging.logger import Log
from app.ocr.base import BaseOcrClient
from app.processor.pipeline import PipelineContext, PipelineStep


class NormalizeImageStep(PipelineStep):
    def __init__(self, image_normalizer: BaseImageNormalizer) -> None:
        self._image_normalizer = image_normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        normalized = self._image_normalizer.normalize(context.current_path)
        context.temp_files.extend(normalized.derived_files)
        context.current_path = normalized.path
        return context


class RecognizeTextStep(PipelineStep):
    def __init__(self, ocr_client: BaseOcrClient) -> None:
        self._ocr_client = ocr_client

    def run(self, context: PipelineContext) -> PipelineContext:
        raw_bytes = context.current_path.read_bytes()
        context.ocr_result = self._ocr_client.process(raw_bytes)
        Log.info(
            f"Recognized {len(context.ocr_result.text)} chars on "
            f"{len(context.ocr_result.pages)} pages for user {context.user_id}"
        )
        return context


class BuildDocumentStep(PipelineStep):
    def __init__(self, docx_builder: DocxBuilder) -> None:
        self._docx_builder = docx_builder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.ocr_result is None:
            raise ValueError("PipelineContext.ocr_result must be set before building")
        context.docx_bytes = self._docx_builder.build(context.ocr_result)
        return context


class StoreDocumentStep(PipelineStep):
    def __init__(self, storage_dir: Path, server_url: str) -> None:
        self._storage_dir = storage_dir
        self._server_url = server_url.rstrip("/")

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.docx_bytes:
            raise ValueError("PipelineContext.docx_bytes must be set before storing")
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        context.storage_key = f"{uuid.uuid4().hex}.docx"
        path = self._storage_dir / context.storage_key
        path.write_bytes(context.docx_bytes)
        context.stored_path = path
        context.docx_url = f"{self._server_url}/{context.storage_key}"
        Log.info(f"Stored {len(context.docx_bytes)} bytes at {path}")
        return context


class PersistRecordStep(PipelineStep):
    def __init__(
        self,
        doc_repo: DocumentRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._doc_repo = doc_repo
        self._today = today

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.ocr_result is None or not context.storage_key:
            raise ValueError("PipelineContext must hold an OCR result and storage key")
        context.record = self._doc_repo.create(
            user_id=context.user_id,
            name=display_name(self._today()),
            url=context.docx_url,
            storage_key=context.storage_key,
            text=context.ocr_result.text,
        )
        Log.info(f"Created document {context.record.id} for user {context.user_id}")
        return context
