"""
Filename classification for medical file uploads.

The content type comes from an extension allow-list. The category is a
best-effort guess from keywords in the filename, it never looks at the
file content and can be wrong (e.g. "contest.pdf" is filed as lab results).
"""
import os
from dataclasses import dataclass
from enum import Enum

from doktolib.errors import UnsupportedFileType


class FileType(Enum):
    """Allowed upload content types."""
    PDF = 'application/pdf'
    JPEG = 'image/jpeg'
    PNG = 'image/png'
    GIF = 'image/gif'
    DOC = 'application/msword'
    DOCX = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
    TXT = 'text/plain'

    @property
    def content_type(self) -> str:
        return self.value


class FileCategory(str, Enum):
    LAB_RESULTS = 'lab_results'
    INSURANCE = 'insurance'
    PRESCRIPTION = 'prescription'
    MEDICAL_RECORDS = 'medical_records'
    OTHER = 'other'

    @classmethod
    def parse(cls, value: str) -> 'FileCategory':
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown category '{value}'. Expected one of: "
                + ", ".join(c.value for c in cls)
            ) from None


ALLOWED_EXTENSIONS = {
    '.pdf': FileType.PDF,
    '.jpg': FileType.JPEG,
    '.jpeg': FileType.JPEG,
    '.png': FileType.PNG,
    '.gif': FileType.GIF,
    '.doc': FileType.DOC,
    '.docx': FileType.DOCX,
    '.txt': FileType.TXT,
}

# Checked in order, first match wins
CATEGORY_KEYWORDS = (
    (FileCategory.LAB_RESULTS, ('lab', 'test', 'result')),
    (FileCategory.INSURANCE, ('insurance', 'card', 'coverage')),
    (FileCategory.PRESCRIPTION, ('prescription', 'rx', 'medication')),
    (FileCategory.MEDICAL_RECORDS, ('medical', 'history', 'record')),
)


@dataclass(frozen=True)
class FileClassification:
    file_type: FileType
    category: FileCategory

    @property
    def content_type(self) -> str:
        return self.file_type.content_type


def file_extension(filename: str) -> str:
    """Extension of filename including the dot, as written ('' if none)."""
    return os.path.splitext(filename)[1]


def resolve_file_type(filename: str) -> FileType:
    """
    Map filename to its allowed FileType by extension (case-insensitive).

    Raises:
        UnsupportedFileType: extension is not on the allow-list
    """
    file_type = ALLOWED_EXTENSIONS.get(file_extension(filename).lower())
    if file_type is None:
        raise UnsupportedFileType()
    return file_type


def categorize_file(filename: str) -> FileCategory:
    name = filename.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return FileCategory.OTHER


def classify_file(filename: str) -> FileClassification:
    return FileClassification(
        file_type=resolve_file_type(filename),
        category=categorize_file(filename),
    )
