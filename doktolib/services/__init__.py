from .file_classifier import (
    FileCategory,
    FileClassification,
    FileType,
    categorize_file,
    classify_file,
    resolve_file_type,
)

from .object_store import ObjectStore, build_s3_client, build_storage_key

from .medical_file_service import FileUpload, MedicalFileService

__all__ = [
    # Classification
    "FileCategory",
    "FileClassification",
    "FileType",
    "categorize_file",
    "classify_file",
    "resolve_file_type",
    # Object store
    "ObjectStore",
    "build_s3_client",
    "build_storage_key",
    # Medical files
    "FileUpload",
    "MedicalFileService",
]
