import io
from datetime import date

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, Twips
from docx.text.paragraph import Paragraph

from app.document.exceptions import DocumentBuildError
from app.ocr.models import OcrParagraph, OcrResult, TextSegment

FONT_NAME = "Times New Roman"
FONT_SIZE = Pt(12)
SPACE_AFTER = Twips(200)
BOLD_CONFIDENCE_THRESHOLD = 0.9


def display_name(today: date) -> str:
    """Human-facing file name, e.g. document_07.03.25.docx."""
    return f"document_{today:%d.%m.%y}.docx"


class DocxBuilder:
    """Lays out OCR paragraphs as centered runs in a single-section .docx."""

    def build(self, result: OcrResult) -> bytes:
        """Render result as .docx bytes.

        Raises:
            DocumentBuildError: if python-docx fails to produce the file.
        """
        try:
            document = Document()
            for page in result.pages:
                for ocr_paragraph in page.paragraphs:
                    self._add_paragraph(document.add_paragraph(), ocr_paragraph, result.text)
            buffer = io.BytesIO()
            document.save(buffer)
        except Exception as exc:
            raise DocumentBuildError(f"docx generation failed: {exc}") from exc
        return buffer.getvalue()

    def _add_paragraph(self, paragraph: Paragraph, source: OcrParagraph, text: str) -> None:
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        paragraph.paragraph_format.space_after = SPACE_AFTER

        bold = _is_confident(source)
        for segment in source.text_segments:
            word = _slice(text, segment)
            run = paragraph.add_run(word + " ")
            run.bold = bold
            run.italic = "_" in word
            run.font.name = FONT_NAME
            run.font.size = FONT_SIZE


def _slice(text: str, segment: TextSegment) -> str:
    return text[segment.start_index : segment.end_index]


def _is_confident(paragraph: OcrParagraph) -> bool:
    if not paragraph.detected_languages:
        return False
    return paragraph.detected_languages[0].confidence > BOLD_CONFIDENCE_THRESHOLD
