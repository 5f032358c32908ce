"""
Local disk storage for uploaded resumes and company logos
"""
import mimetypes
import os
import uuid
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile
import structlog

from jobboard.core.config import settings
from jobboard.core.exceptions import StorageError

logger = structlog.get_logger()

RESUMES = "resumes"
LOGOS = "logos"

_CONTENT_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class LocalFileStorage:
    """Stores uploads below a root directory, one folder per kind"""

    def __init__(self, root: str, max_size_bytes: int):
        self.root = Path(root)
        self.max_size_bytes = max_size_bytes

    def ensure_dirs(self):
        for kind in (RESUMES, LOGOS):
            os.makedirs(self.root / kind, exist_ok=True)

    def save_resume(self, file: UploadFile) -> str:
        ext = self._extension(file)
        if ext not in settings.ALLOWED_RESUME_EXTENSIONS or (
            file.content_type and file.content_type not in settings.ALLOWED_RESUME_CONTENT_TYPES
        ):
            raise StorageError("Invalid file type. Only PDF, DOC, and DOCX are allowed.")
        return self._write(RESUMES, ext, file)

    def save_logo(self, file: UploadFile) -> str:
        """Any image/* upload; a missing or non-image suffix is derived from the content type"""
        ext = self._extension(file)
        content_type = (file.content_type or "").split(";")[0].strip().lower()
        if not content_type.startswith("image/"):
            raise StorageError("Invalid file type. Only images are allowed for logos.")
        if not (mimetypes.guess_type(f"logo.{ext}")[0] or "").startswith("image/"):
            ext = (mimetypes.guess_extension(content_type) or ".img").lstrip(".")
        return self._write(LOGOS, ext, file)

    def path_for(self, stored: str) -> Path:
        """Absolute path for a stored reference such as ``resumes/abc.pdf``"""
        # Only the basename is trusted, the folder comes from the reference kind
        kind, _, name = stored.strip("/").partition("/")
        return self.root / kind / Path(name).name

    def exists(self, stored: Optional[str]) -> bool:
        return bool(stored) and self.path_for(stored).is_file()

    def delete(self, stored: Optional[str]):
        if not stored:
            return
        path = self.path_for(stored)
        try:
            if path.is_file():
                path.unlink()
        except OSError as e:
            logger.error("file_delete_failed", path=str(path), error=str(e))

    def delete_many(self, stored: Iterable[Optional[str]]):
        for item in stored:
            self.delete(item)

    @staticmethod
    def content_type_for(stored: str) -> str:
        ext = Path(stored).suffix.lower().lstrip(".")
        return _CONTENT_TYPES.get(ext) or mimetypes.guess_type(stored)[0] or "application/octet-stream"

    @staticmethod
    def _extension(file: UploadFile) -> str:
        if not file.filename:
            raise StorageError("No file uploaded")
        return Path(file.filename).suffix.lower().lstrip(".")

    def _write(self, kind: str, ext: str, file: UploadFile) -> str:
        content = file.file.read(self.max_size_bytes + 1)
        if not content:
            raise StorageError("No file uploaded")
        if len(content) > self.max_size_bytes:
            raise StorageError(
                f"File size exceeds maximum allowed size of {settings.MAX_UPLOAD_SIZE_MB}MB"
            )

        file_name = f"{uuid.uuid4()}.{ext}"
        os.makedirs(self.root / kind, exist_ok=True)
        with open(self.root / kind / file_name, "wb") as f:
            f.write(content)

        logger.info("file_stored", kind=kind, file_name=file_name, size=len(content))
        return f"{kind}/{file_name}"


storage = LocalFileStorage(settings.UPLOAD_DIR, settings.max_upload_size_bytes)


def get_storage() -> LocalFileStorage:
    """Dependency returning the process-wide storage"""
    return storage
