from pathlib import Path
from typing import Any

from google.api_core.client_options import ClientOptions
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import documentai
from google.oauth2 import service_account

from app.logging.logger import Log
from app.ocr.base import BaseOcrClient
from app.ocr.exceptions import OcrServiceError
from app.ocr.models import DetectedLanguage, OcrPage, OcrParagraph, OcrResult, TextSegment


class DocumentAiClientAdapter(BaseOcrClient):
    """OCR adapter built on Google Cloud Document AI (synchronous processing)."""

    def __init__(
        self,
        *,
        project_id: str,
        location: str,
        processor_id: str,
        api_endpoint: str,
        credentials_file: Path | None = None,
    ) -> None:
        credentials = (
            service_account.Credentials.from_service_account_file(str(credentials_file))
            if credentials_file is not None
            else None
        )
        self._client = documentai.DocumentProcessorServiceClient(
            credentials=credentials,
            client_options=ClientOptions(api_endpoint=api_endpoint),
        )
        self._processor_name = self._client.processor_path(
            project_id, location, processor_id
        )

    def process(self, content: bytes) -> OcrResult:
        Log.info(f"Sending file to Document AI. Size (bytes): {len(content)}")
        request = documentai.ProcessRequest(
            name=self._processor_name,
            raw_document=documentai.RawDocument(
                content=content,
                mime_type=self.MIME_TYPE,
            ),
        )
        try:
            response = self._client.process_document(request=request)
        except (GoogleAPIError, GoogleAuthError) as exc:
            raise OcrServiceError(str(exc)) from exc

        return to_ocr_result(response.document)


def to_ocr_result(document: Any) -> OcrResult:
    """Map a documentai.Document onto the provider-neutral OcrResult."""
    if document is None:
        return OcrResult()
    return OcrResult(
        text=document.text or "",
        pages=[_to_page(page) for page in document.pages],
    )


def _to_page(page: Any) -> OcrPage:
    return OcrPage(paragraphs=[_to_paragraph(p) for p in page.paragraphs])


def _to_paragraph(paragraph: Any) -> OcrParagraph:
    segments = paragraph.layout.text_anchor.text_segments
    return OcrParagraph(
        text_segments=[
            TextSegment(
                start_index=int(segment.start_index or 0),
                end_index=int(segment.end_index or 0),
            )
            for segment in segments
        ],
        detected_languages=[
            DetectedLanguage(
                language_code=language.language_code,
                confidence=float(language.confidence),
            )
            for language in paragraph.detected_languages
        ],
    )
