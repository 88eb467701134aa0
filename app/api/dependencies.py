from fastapi import Request

from app.config.settings import Settings
from app.database.repositories.document_repository import DocumentRepository
from app.processor.processor import Processor
from app.processor.upload_receiver import UploadReceiver


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_processor(request: Request) -> Processor:
    return request.app.state.processor


def get_doc_repo(request: Request) -> DocumentRepository:
    return request.app.state.doc_repo


def get_upload_receiver(request: Request) -> UploadReceiver:
    return request.app.state.upload_receiver
