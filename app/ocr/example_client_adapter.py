"""Example OCR client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseOcrClient and register the provider in OcrClientFactory.
"""

from typing import ClassVar

from app.ocr.base import BaseOcrClient
from app.ocr.models import DetectedLanguage, OcrPage, OcrParagraph, OcrResult, TextSegment


class ExampleOcrClientAdapter(BaseOcrClient):
    """Example adapter that returns a fixed recognition result.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_TEXT: ClassVar[str] = "Example heading\nrecognized_text body"

    def process(self, content: bytes) -> OcrResult:
        _ = content
        text = self.DEFAULT_TEXT
        heading_end = text.index("\n")
        return OcrResult(
            text=text,
            pages=[
                OcrPage(
                    paragraphs=[
                        OcrParagraph(
                            text_segments=[TextSegment(0, heading_end)],
                            detected_languages=[DetectedLanguage("en", 0.95)],
                        ),
                        OcrParagraph(
                            text_segments=[TextSegment(heading_end + 1, len(text))],
                            detected_languages=[DetectedLanguage("en", 0.5)],
                        ),
                    ]
                )
            ],
        )
