import io
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from app.imaging.pillow_normalizer import PillowImageNormalizer
from app.processor.exceptions import UploadError
from app.processor.upload_receiver import UploadReceiver, safe_filename


class TestSafeFilename:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("scan.jpg", "scan.jpg"),
            ("../../etc/passwd", "passwd"),
            ("C:\\Users\\me\\photo 1.png", "photo_1.png"),
            ("résumé.heic", "r_sum.heic"),
            ("σελίδα.png", "upload.png"),
            ("страница 2.HEIC", "2.heic"),
            ("_.png", "upload.png"),
            ("Scan.TIFF", "Scan.tiff"),
            ("...", "upload"),
            ("", "upload"),
        ],
    )
    def test_sanitizes(self, raw: str, expected: str) -> None:
        assert safe_filename(raw) == expected


class TestSave:
    def test_writes_stream_into_temp_dir(self, tmp_path: Path) -> None:
        receiver = UploadReceiver(tmp_path / "tmp")

        path = receiver.save(io.BytesIO(b"image-bytes"), "scan.png")

        assert path.parent == tmp_path / "tmp"
        assert path.name.endswith("_scan.png")
        assert path.suffix == ".png"
        assert path.read_bytes() == b"image-bytes"

    def test_same_name_never_collides(self, tmp_path: Path) -> None:
        receiver = UploadReceiver(tmp_path)

        first = receiver.save(io.BytesIO(b"a"), "scan.jpg")
        second = receiver.save(io.BytesIO(b"b"), "scan.jpg")

        assert first != second
        assert first.read_bytes() == b"a"
        assert second.read_bytes() == b"b"

    def test_failed_write_leaves_nothing_behind(self, tmp_path: Path) -> None:
        receiver = UploadReceiver(tmp_path)

        with (
            patch(
                "app.processor.upload_receiver.shutil.copyfileobj",
                side_effect=OSError("no space left"),
            ),
            pytest.raises(UploadError, match="no space left"),
        ):
            receiver.save(io.BytesIO(b"a"), "scan.jpg")

        assert list(tmp_path.iterdir()) == []

    def test_non_ascii_name_keeps_extension_for_conversion(
        self, tmp_path: Path, make_image: Callable[..., Path]
    ) -> None:
        png = make_image("source.png", "PNG")
        receiver = UploadReceiver(tmp_path / "tmp")

        saved = receiver.save(io.BytesIO(png.read_bytes()), "σελίδα.png")
        normalized = PillowImageNormalizer().normalize(saved)

        assert saved.suffix == ".png"
        assert normalized.path.suffix == ".jpg"
        assert normalized.path.read_bytes()[:2] == b"\xff\xd8"
