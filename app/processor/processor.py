from pathlib import Path

from app.config.settings import Settings
from app.database.repositories.document_repository import DocumentRepository
from app.document.docx_builder import DocxBuilder
from app.imaging.pillow_normalizer import PillowImageNormalizer
from app.logging.logger import Log
from app.ocr.factory import OcrClientFactory
from app.processor.exceptions import MissingOwnerError
from app.processor.models import ProcessorResult
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    BuildDocumentStep,
    NormalizeImageStep,
    PersistRecordStep,
    RecognizeTextStep,
    StoreDocumentStep,
)


class Processor:
    """Runs the upload pipeline for one request.

    Pipeline: normalize -> recognize -> build -> store -> persist.

    The uploaded file and every derived temp file are removed on every exit
    path. If a step fails after the output document was written, the output
    is removed as well so no file is left without a record.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(self, upload_path: Path, user_id: str) -> ProcessorResult:
        context = PipelineContext(
            user_id=user_id,
            upload_path=upload_path,
            current_path=upload_path,
            temp_files=[upload_path],
        )
        try:
            if not user_id:
                raise MissingOwnerError("Missing userId")
            Log.info(f"Processing upload {upload_path.name} for user {user_id}")
            for step in self._steps:
                context = step.run(context)
        except Exception:
            self._discard_output(context)
            raise
        finally:
            self._cleanup(context)

        if context.record is None or context.ocr_result is None:
            raise RuntimeError("Pipeline finished without producing a record")
        return ProcessorResult(
            text=context.ocr_result.text,
            docx_url=context.docx_url,
            record=context.record,
        )

    @staticmethod
    def _cleanup(context: PipelineContext) -> None:
        for path in context.temp_files:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                Log.warning(f"Failed to remove temp file {path}: {exc}")

    @staticmethod
    def _discard_output(context: PipelineContext) -> None:
        if context.stored_path is None or context.record is not None:
            return
        try:
            context.stored_path.unlink(missing_ok=True)
        except OSError as exc:
            Log.warning(f"Failed to remove orphaned output {context.stored_path}: {exc}")


def build_processor(
    settings: Settings,
    doc_repo: DocumentRepository,
    credentials_file: Path | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    image_normalizer = PillowImageNormalizer(
        max_bytes=settings.image_max_bytes,
        max_width=settings.image_max_width,
        quality=settings.jpeg_quality,
    )
    ocr_client = OcrClientFactory.create(settings, credentials_file=credentials_file)
    steps: list[PipelineStep] = [
        NormalizeImageStep(image_normalizer=image_normalizer),
        RecognizeTextStep(ocr_client=ocr_client),
        BuildDocumentStep(docx_builder=DocxBuilder()),
        StoreDocumentStep(storage_dir=settings.storage_dir, server_url=settings.server_url),
        PersistRecordStep(doc_repo=doc_repo),
    ]
    return Processor(steps=steps)
