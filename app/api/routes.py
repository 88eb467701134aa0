from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.api.dependencies import (
    get_doc_repo,
    get_processor,
    get_settings,
    get_upload_receiver,
)
from app.api.schemas import DeleteRequest, DocumentOut, OcrResponse, RenameRequest
from app.config.settings import Settings
from app.database.repositories.document_repository import DocumentRepository
from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError, MissingOwnerError
from app.processor.processor import Processor
from app.processor.upload_receiver import UploadReceiver

router = APIRouter()

_MAX_DOCUMENT_ID = 2**63 - 1


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _missing_user() -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, "Missing userId")


def _not_found() -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "Document not found")


def _parse_id(document_id: str) -> int | None:
    """Ids that are not BIGSERIAL values can never match a record."""
    if not document_id.isdecimal():
        return None
    value = int(document_id)
    return value if value <= _MAX_DOCUMENT_ID else None


@router.get("/", response_class=PlainTextResponse)
def health() -> str:
    return "OCR server running"


@router.post("/ocr", response_model=OcrResponse, status_code=status.HTTP_201_CREATED)
def recognize(
    file: UploadFile | None = File(None),
    user_id: str | None = Form(None, alias="userId"),
    processor: Processor = Depends(get_processor),
    upload_receiver: UploadReceiver = Depends(get_upload_receiver),
) -> OcrResponse | JSONResponse:
    if file is None:
        return _error(status.HTTP_400_BAD_REQUEST, "No file uploaded")
    if not user_id:
        return _missing_user()

    try:
        upload_path = upload_receiver.save(file.file, file.filename or "upload")
        result = processor.process(upload_path, user_id)
    except Exception as exc:
        Log.exception(f"OCR pipeline failed for user {user_id}: {exc}", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    return OcrResponse(
        text=result.text,
        docx_url=result.docx_url,
        document=DocumentOut.from_record(result.record),
    )


@router.get("/documents", response_model=list[DocumentOut])
def list_documents(
    user_id: str | None = Query(None, alias="userId"),
    doc_repo: DocumentRepository = Depends(get_doc_repo),
) -> list[DocumentOut] | JSONResponse:
    if not user_id:
        return _missing_user()
    try:
        records = doc_repo.list_by_owner(user_id)
    except Exception as exc:
        Log.exception(f"Error fetching documents for user {user_id}: {exc}", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    return [DocumentOut.from_record(record) for record in records]


@router.patch("/documents/{document_id}", response_model=DocumentOut)
def rename_document(
    document_id: str,
    payload: RenameRequest | None = None,
    doc_repo: DocumentRepository = Depends(get_doc_repo),
) -> DocumentOut | JSONResponse:
    payload = payload or RenameRequest()
    if not payload.user_id:
        return _missing_user()
    if not payload.name:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing name")
    record_id = _parse_id(document_id)
    if record_id is None:
        return _not_found()
    try:
        record = doc_repo.rename(record_id, payload.user_id, payload.name)
    except (DocumentNotFoundError, MissingOwnerError):
        return _not_found()
    except Exception as exc:
        Log.exception(f"Error renaming document {document_id}: {exc}", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    return DocumentOut.from_record(record)


@router.delete("/documents/{document_id}")
def delete_document(
    document_id: str,
    payload: DeleteRequest | None = None,
    doc_repo: DocumentRepository = Depends(get_doc_repo),
    settings: Settings = Depends(get_settings),
) -> Response:
    payload = payload or DeleteRequest()
    if not payload.user_id:
        return _missing_user()
    record_id = _parse_id(document_id)
    if record_id is None:
        return _not_found()
    try:
        record = doc_repo.delete(record_id, payload.user_id)
    except (DocumentNotFoundError, MissingOwnerError):
        return _not_found()
    except Exception as exc:
        Log.exception(f"Error deleting document {document_id}: {exc}", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    stored = settings.storage_dir / record.storage_key
    try:
        stored.unlink(missing_ok=True)
    except OSError as exc:
        Log.warning(f"Document {document_id} deleted but {stored} was not removed: {exc}")
    Log.info(f"Deleted document {document_id} for user {payload.user_id}")
    return Response(status_code=status.HTTP_200_OK)
