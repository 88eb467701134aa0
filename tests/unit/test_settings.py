from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in Settings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_port(self) -> None:
        s = Settings()
        assert s.port == 3000

    def test_default_server_url(self) -> None:
        s = Settings()
        assert s.server_url == "http://localhost:3000"

    def test_default_ocr_provider(self) -> None:
        s = Settings()
        assert s.ocr_provider == "documentai"

    def test_default_image_limits(self) -> None:
        s = Settings()
        assert s.image_max_bytes == 20 * 1024 * 1024
        assert s.image_max_width == 2000
        assert s.jpeg_quality == 90

    def test_default_storage_dir(self) -> None:
        s = Settings()
        assert s.storage_dir == Path("uploads")

    def test_default_temp_dir_is_outside_served_storage(self) -> None:
        s = Settings()
        assert s.temp_dir == Path("tmp/uploads")
        assert s.storage_dir not in s.temp_dir.parents

    def test_endpoint_derived_from_location(self) -> None:
        s = Settings()
        assert s.resolved_documentai_endpoint == "eu-documentai.googleapis.com"


class TestSettingsFromEnv:
    def test_loads_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        s = Settings()
        assert s.port == 8080

    def test_loads_server_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVER_URL", "https://ocr.example.com")
        s = Settings()
        assert s.server_url == "https://ocr.example.com"

    def test_loads_database_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/docs")
        s = Settings()
        assert s.database_url == "postgresql://u:p@db:5432/docs"

    def test_loads_documentai_ids(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCUMENTAI_PROJECT_ID", "proj")
        monkeypatch.setenv("DOCUMENTAI_LOCATION", "us")
        monkeypatch.setenv("DOCUMENTAI_PROCESSOR_ID", "proc")
        s = Settings()
        assert s.documentai_project_id == "proj"
        assert s.documentai_processor_id == "proc"
        assert s.resolved_documentai_endpoint == "us-documentai.googleapis.com"

    def test_explicit_endpoint_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCUMENTAI_API_ENDPOINT", "localhost:9000")
        s = Settings()
        assert s.resolved_documentai_endpoint == "localhost:9000"


class TestSettingsValidation:
    def test_invalid_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_image_max_bytes_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMAGE_MAX_BYTES", "big")
        with pytest.raises(ValidationError):
            Settings()
