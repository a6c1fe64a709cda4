import logging
import shutil
import time
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class UploadStorage:
    """Profile images on local disk, served back under ``url_prefix``."""

    def __init__(self, uploads_dir: str, url_prefix: str = "/uploads"):
        self.root = Path(uploads_dir).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    @staticmethod
    def new_filename(original: Optional[str]) -> str:
        # millisecond timestamp + random suffix, original extension kept
        ext = Path(original or "").suffix.lower()
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"

    def save(self, upload: UploadFile) -> str:
        filename = self.new_filename(upload.filename)
        path = self.root / filename
        try:
            with path.open("wb") as buffer:
                shutil.copyfileobj(upload.file, buffer)
        except OSError as e:
            logger.error("Saving upload %s failed: %s", filename, e)
            path.unlink(missing_ok=True)
            raise StorageError("Could not store profile image") from e
        logger.info("Stored profile image → %s", path)
        return f"{self.url_prefix}/{filename}"

    def path_for(self, reference: str) -> Path:
        name = Path(reference).name
        return self.root / name

    def discard(self, reference: Optional[str]) -> None:
        if not reference:
            return
        try:
            self.path_for(reference).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove upload %s: %s", reference, e)
