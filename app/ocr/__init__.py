from app.ocr.base import BaseOcrClient
from app.ocr.factory import OcrClientFactory
from app.ocr.models import OcrResult

__all__ = ["BaseOcrClient", "OcrClientFactory", "OcrResult"]
