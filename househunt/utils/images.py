"""
utils/images.py

Property image ingestion: validate an upload, downscale + re-encode it
with Pillow, and store it under the static upload directory.

If Pillow cannot process the file, the original bytes are kept instead
of failing the request.
"""

import io
import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from PIL import Image, UnidentifiedImageError

from househunt.core.config import Settings
from househunt.core.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png"}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png"}


def _optimise(contents: bytes, max_width: int, quality: int) -> bytes:
    with Image.open(io.BytesIO(contents)) as img:
        img.load()
        if img.width > max_width:
            height = round(img.height * max_width / img.width)
            img = img.resize((max_width, height), Image.Resampling.LANCZOS)
        if img.mode != "RGB":
            img = img.convert("RGB")
        out = io.BytesIO()
        img.save(out, format="JPEG", quality=quality)
        return out.getvalue()


class ImageStore:
    def __init__(
        self,
        upload_dir: Path,
        url_prefix: str = "/uploads",
        max_bytes: int = 5 * 1024 * 1024,
        max_width: int = 1200,
        jpeg_quality: int = 80,
    ):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes
        self.max_width = max_width
        self.jpeg_quality = jpeg_quality

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStore":
        return cls(
            upload_dir=Path(settings.STATIC_UPLOAD_DIR),
            url_prefix=settings.STATIC_URL_PREFIX,
            max_bytes=settings.MAX_IMAGE_SIZE_MB * 1024 * 1024,
            max_width=settings.IMAGE_MAX_WIDTH,
            jpeg_quality=settings.IMAGE_JPEG_QUALITY,
        )

    def ensure_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def validate(filename: str, content_type: Optional[str]) -> str:
        """Return the lowercased extension, or raise ValidationError."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS or (content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
            raise ValidationError("Only .jpg, .jpeg & .png allowed")
        return ext

    async def _write(self, name: str, contents: bytes) -> str:
        async with aiofiles.open(self.upload_dir / name, "wb") as out:
            await out.write(contents)
        return f"{self.url_prefix}/{name}"

    async def save(self, file: Optional[UploadFile]) -> str:
        """
        Store an uploaded image and return its public path, e.g.
        '/uploads/<uuid>.jpg'. No file (or no filename) -> "".
        """
        if file is None or not file.filename:
            return ""

        ext = self.validate(file.filename, file.content_type)

        contents = await file.read(self.max_bytes + 1)
        if len(contents) > self.max_bytes:
            raise ValidationError(
                f"Image exceeds {self.max_bytes // (1024 * 1024)}MB limit."
            )

        self.ensure_dir()
        image_id = uuid.uuid4().hex
        try:
            optimised = await run_in_threadpool(
                _optimise, contents, self.max_width, self.jpeg_quality
            )
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.warning("image processing failed, keeping original: %s", e)
            return await self._write(f"{image_id}{ext}", contents)
        return await self._write(f"{image_id}.jpg", optimised)
