from pathlib import Path
from typing import ClassVar

from PIL import Image
from pillow_heif import register_heif_opener

from app.imaging.base import BaseImageNormalizer, NormalizedImage
from app.imaging.exceptions import ImageNormalizationError
from app.logging.logger import Log

register_heif_opener()


class PillowImageNormalizer(BaseImageNormalizer):
    """Converts non-JPEG images to JPEG and shrinks oversized files with Pillow."""

    CONVERTIBLE_EXTENSIONS: ClassVar[frozenset[str]] = frozenset(
        {".heic", ".heif", ".png", ".tiff", ".tif", ".gif"}
    )
    DEFAULT_MAX_BYTES: ClassVar[int] = 20 * 1024 * 1024
    DEFAULT_MAX_WIDTH: ClassVar[int] = 2000
    DEFAULT_QUALITY: ClassVar[int] = 90

    def __init__(
        self,
        max_bytes: int = DEFAULT_MAX_BYTES,
        max_width: int = DEFAULT_MAX_WIDTH,
        quality: int = DEFAULT_QUALITY,
    ) -> None:
        self._max_bytes = max_bytes
        self._max_width = max_width
        self._quality = quality

    def normalize(self, path: Path) -> NormalizedImage:
        derived: list[Path] = []

        converted = self.convert_to_jpeg(path)
        if converted != path:
            derived.append(converted)

        resized = self.downscale(converted)
        if resized != converted:
            derived.append(resized)

        return NormalizedImage(path=resized, derived_files=derived)

    def convert_to_jpeg(self, path: Path) -> Path:
        """Write a JPEG copy of HEIC/PNG/TIFF/GIF input; other files pass through."""
        if path.suffix.lower() not in self.CONVERTIBLE_EXTENSIONS:
            return path

        output = path.with_name(f"{path.stem}_converted.jpg")
        try:
            with Image.open(path) as img:
                img.convert("RGB").save(output, "JPEG", quality=self._quality)
        except Exception as exc:
            output.unlink(missing_ok=True)
            raise ImageNormalizationError(f"JPEG conversion failed: {exc}") from exc

        Log.info(f"Converted {path.name} to JPEG")
        return output

    def downscale(self, path: Path) -> Path:
        """Write a copy at most max_width wide when the file exceeds max_bytes."""
        size = path.stat().st_size
        if size <= self._max_bytes:
            return path

        output = path.with_name(f"{path.stem}_resized.jpg")
        try:
            with Image.open(path) as img:
                resized = self._fit_width(img)
                resized.convert("RGB").save(output, "JPEG", quality=self._quality)
        except Exception as exc:
            output.unlink(missing_ok=True)
            raise ImageNormalizationError(f"Image downscale failed: {exc}") from exc

        Log.info(f"Downscaled {path.name} ({size} bytes) to width <= {self._max_width}px")
        return output

    def _fit_width(self, img: Image.Image) -> Image.Image:
        width, height = img.size
        if width <= self._max_width:
            return img
        new_height = max(1, round(height * self._max_width / width))
        return img.resize((self._max_width, new_height), Image.Resampling.LANCZOS)
