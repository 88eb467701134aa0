from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextSegment:
    """Character range [start_index, end_index) into OcrResult.text."""

    start_index: int = 0
    end_index: int = 0


@dataclass(frozen=True)
class DetectedLanguage:
    """Language guess attached to a paragraph."""

    language_code: str = ""
    confidence: float = 0.0


@dataclass(frozen=True)
class OcrParagraph:
    """A paragraph as located by the OCR service."""

    text_segments: list[TextSegment] = field(default_factory=list)
    detected_languages: list[DetectedLanguage] = field(default_factory=list)


@dataclass(frozen=True)
class OcrPage:
    """A single recognized page."""

    paragraphs: list[OcrParagraph] = field(default_factory=list)


@dataclass(frozen=True)
class OcrResult:
    """Full recognized text plus the page -> paragraph -> segment hierarchy."""

    text: str = ""
    pages: list[OcrPage] = field(default_factory=list)
