import re
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO

from app.processor.exceptions import UploadError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    """Strip directories and characters that do not belong in a file name.

    The extension is sanitized apart from the stem so it always survives.
    """
    path = Path(Path(filename.replace("\\", "/")).name)
    stem = _UNSAFE_CHARS.sub("_", path.stem).strip("._") or "upload"
    return stem + _UNSAFE_CHARS.sub("_", path.suffix.lower()).rstrip(".")


class UploadReceiver:
    """Writes multipart uploads to the temp directory for one request."""

    def __init__(self, temp_dir: Path) -> None:
        self._temp_dir = temp_dir

    def save(self, stream: BinaryIO, filename: str) -> Path:
        """Copy stream to {temp_dir}/{uuid}_{safe name} and return the path.

        Raises:
            UploadError: if the file cannot be written; nothing is left behind.
        """
        self._temp_dir.mkdir(parents=True, exist_ok=True)
        path = self._temp_dir / f"{uuid.uuid4().hex}_{safe_filename(filename)}"
        try:
            with path.open("wb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise UploadError(f"Failed to store upload: {exc}") from exc
        return path
