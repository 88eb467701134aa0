from abc import ABC, abstractmethod

from app.ocr.models import OcrResult


class BaseOcrClient(ABC):
    """Contract for all OCR provider adapters."""

    MIME_TYPE = "image/jpeg"

    @abstractmethod
    def process(self, content: bytes) -> OcrResult:
        """Recognize text in a (normalized) image.

        Args:
            content: Raw file bytes, sent as image/jpeg.

        Returns:
            OcrResult exactly as reported by the provider, without filtering.

        Raises:
            OcrServiceError: if the provider call fails for any reason.
        """
