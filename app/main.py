from pathlib import Path

import uvicorn

from app.api.app import create_app
from app.config.credentials import materialize_credentials
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.document_repository import DocumentRepository
from app.database.schema import ensure_schema
from app.logging.logger import Log
from app.processor.processor import build_processor


def log_startup(settings: Settings, env_file: Path = Path(".env")) -> None:
    """Report where configuration came from and which OCR processor is used."""
    if env_file.exists():
        Log.info(f"Loading {env_file} file")
    else:
        Log.info(f"{env_file} file not found, using defaults")
    Log.info(
        f"OCR provider: {settings.ocr_provider}, "
        f"project: {settings.documentai_project_id}, "
        f"location: {settings.documentai_location}, "
        f"processor: {settings.documentai_processor_id}"
    )


def main() -> None:
    """Entry point: settings -> credentials -> pool -> dependencies -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    log_startup(settings)
    credentials_file = materialize_credentials(settings)
    init_pool(settings)

    try:
        ensure_schema()
        doc_repo = DocumentRepository()
        processor = build_processor(settings, doc_repo, credentials_file=credentials_file)
        app = create_app(settings, processor, doc_repo)
        Log.info(f"OCR server running at {settings.server_url}")
        uvicorn.run(app, host=settings.host, port=settings.port)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
