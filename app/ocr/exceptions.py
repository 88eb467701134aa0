class OcrError(Exception):
    """Raised when text recognition fails."""


class OcrServiceError(OcrError):
    """Raised when the OCR provider call fails (auth, quota, payload, network)."""
