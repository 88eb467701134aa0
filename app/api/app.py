from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.routes import router
from app.config.settings import Settings
from app.database.repositories.document_repository import DocumentRepository
from app.processor.processor import Processor
from app.processor.upload_receiver import UploadReceiver


def create_app(
    settings: Settings,
    processor: Processor,
    doc_repo: DocumentRepository,
    upload_receiver: UploadReceiver | None = None,
) -> FastAPI:
    """Assemble the HTTP application around already-built dependencies.

    Generated documents are served from storage_dir at the site root, after
    the API routes so that /, /ocr and /documents always win.
    """
    app = FastAPI(title="OCR document service")
    app.state.settings = settings
    app.state.processor = processor
    app.state.doc_repo = doc_repo
    app.state.upload_receiver = upload_receiver or UploadReceiver(settings.temp_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    settings.storage_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/", StaticFiles(directory=settings.storage_dir), name="documents")
    return app
