"""
Medical File Service
Upload, listing and deletion of patient files across the object store and
the medical_files table.

The two systems are not written atomically:
- a failed metadata insert after a successful upload triggers a best-effort
  delete of the uploaded object
- a failed object delete is logged and the metadata row is removed anyway,
  which can leave an orphaned object in the bucket
"""
import logging
import os
from dataclasses import dataclass
from typing import IO, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from doktolib.errors import FileTooLarge, NotFound, PersistenceError, StorageError
from doktolib.models import MedicalFile
from doktolib.services.file_classifier import FileCategory, classify_file
from doktolib.services.object_store import ObjectStore

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
LINK_TTL_SECONDS = 3600


@dataclass
class FileUpload:
    """An uploaded file not yet read into memory."""
    filename: str
    stream: IO[bytes]

    @property
    def size(self) -> int:
        """Byte length, measured by seeking the stream so nothing is read."""
        position = self.stream.tell()
        self.stream.seek(0, os.SEEK_END)
        size = self.stream.tell()
        self.stream.seek(position)
        return size


class MedicalFileService:
    """
    Medical file lifecycle. The database session and the object store are
    passed in so each request works against the app's shared instances.
    """

    def __init__(self, session, store: ObjectStore,
                 max_file_size: int = MAX_FILE_SIZE,
                 link_ttl: int = LINK_TTL_SECONDS):
        self.session = session
        self.store = store
        self.max_file_size = max_file_size
        self.link_ttl = link_ttl

    def upload(self, patient_id: str, patient_name: str, upload: FileUpload) -> MedicalFile:
        """
        Validate, classify, store and record one file.

        Raises:
            FileTooLarge: size above max_file_size, nothing read or stored
            UnsupportedFileType: extension not on the allow-list
            StorageError: gateway unconfigured or upload failed
            PersistenceError: metadata insert failed (object already removed)
        """
        size = upload.size
        if size > self.max_file_size:
            raise FileTooLarge()

        classification = classify_file(upload.filename)
        data = upload.stream.read()

        key = self.store.upload(
            data,
            upload.filename,
            classification.content_type,
            patient_id,
            classification.category,
        )

        medical_file = MedicalFile(
            patient_id=patient_id,
            patient_name=patient_name,
            file_name=upload.filename,
            file_type=classification.content_type,
            file_size=size,
            s3_key=key,
            category=classification.category.value,
        )
        try:
            self.session.add(medical_file)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            self._discard_object(key)
            raise PersistenceError('Failed to save file metadata') from e

        logger.info(
            f"File {medical_file.id} ({classification.category.value}) uploaded for patient {patient_id}"
        )
        return medical_file

    def list_files(self, patient_id: Optional[str] = None,
                   category: Optional[FileCategory] = None) -> List[Tuple[MedicalFile, Optional[str]]]:
        """
        Files matching the filters, newest first, each paired with a fresh
        temporary link (None when the link could not be generated).
        """
        query = self.session.query(MedicalFile)
        if patient_id:
            query = query.filter(MedicalFile.patient_id == patient_id)
        if category:
            query = query.filter(MedicalFile.category == FileCategory(category).value)

        try:
            files = query.order_by(MedicalFile.uploaded_at.desc()).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError('Failed to fetch medical files') from e

        return [(f, self.temporary_link(f)) for f in files]

    def temporary_link(self, medical_file: MedicalFile) -> Optional[str]:
        try:
            return self.store.generate_temporary_link(medical_file.s3_key, self.link_ttl)
        except StorageError as e:
            logger.warning(
                "Failed to generate presigned URL for %s: %s", medical_file.s3_key, e.__cause__ or e
            )
            return None

    def delete(self, file_id: str) -> str:
        """
        Remove the stored object (best effort) and then the metadata row.

        Raises:
            NotFound: no file with this id
            PersistenceError: the metadata row could not be deleted
        """
        try:
            medical_file = self.session.get(MedicalFile, file_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError('Failed to fetch file info') from e
        if medical_file is None:
            raise NotFound('File not found')

        patient_id = medical_file.patient_id
        self._discard_object(medical_file.s3_key)

        try:
            self.session.delete(medical_file)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError('Failed to delete file from database') from e

        logger.info(f"File {file_id} deleted for patient {patient_id}")
        return file_id

    def _discard_object(self, key: str) -> None:
        try:
            self.store.delete(key)
        except StorageError as e:
            logger.warning("Failed to delete file from S3 (%s): %s", key, e.__cause__ or e)
