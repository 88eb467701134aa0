from pathlib import Path

from app.config.settings import Settings
from app.ocr.base import BaseOcrClient
from app.ocr.documentai_adapter import DocumentAiClientAdapter
from app.ocr.example_client_adapter import ExampleOcrClientAdapter


class OcrClientFactory:
    """Creates the configured OCR client adapter."""

    PROVIDERS: tuple[str, ...] = ("documentai", "example")

    @classmethod
    def create(
        cls,
        settings: Settings,
        credentials_file: Path | None = None,
    ) -> BaseOcrClient:
        """Create an OCR client from application settings."""
        provider = settings.ocr_provider.lower()
        if provider == "example":
            return ExampleOcrClientAdapter()
        if provider == "documentai":
            cls._require_documentai_ids(settings)
            return DocumentAiClientAdapter(
                project_id=settings.documentai_project_id,
                location=settings.documentai_location,
                processor_id=settings.documentai_processor_id,
                api_endpoint=settings.resolved_documentai_endpoint,
                credentials_file=credentials_file,
            )
        raise ValueError(
            f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @staticmethod
    def _require_documentai_ids(settings: Settings) -> None:
        missing = [
            name
            for name, value in (
                ("documentai_project_id", settings.documentai_project_id),
                ("documentai_processor_id", settings.documentai_processor_id),
            )
            if not value.strip()
        ]
        if missing:
            raise ValueError(
                f"{', '.join(missing)} required for ocr_provider=documentai"
            )
