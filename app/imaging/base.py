from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class NormalizedImage:
    """Outcome of normalization: the file to send to OCR and what was created."""

    path: Path
    derived_files: list[Path] = field(default_factory=list)


class BaseImageNormalizer(ABC):
    """Contract for all image normalization adapters."""

    @abstractmethod
    def normalize(self, path: Path) -> NormalizedImage:
        """Bring an uploaded file into a shape the OCR service accepts.

        Args:
            path: Uploaded file on disk. Never modified.

        Returns:
            NormalizedImage whose path is either the input path or a derived
            JPEG written next to it. derived_files lists every file written.

        Raises:
            ImageNormalizationError: if conversion or resizing fails.
        """
