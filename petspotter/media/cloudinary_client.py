"""
Cloudinary client - delegates pet image hosting to Cloudinary through its SDK.
Credentials are passed per call; the SDK signs the request and the secret never leaves the process.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import PurePath

import cloudinary.exceptions
import cloudinary.uploader
from fastapi.concurrency import run_in_threadpool

from petspotter.config import Settings
from petspotter.core.errors import BadRequestError, ServiceUnavailableError

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ["jpg", "png"]
# Cap uploads at 500x500, keeping aspect ratio
DEFAULT_TRANSFORMATION = [{"width": 500, "height": 500, "crop": "limit"}]


@dataclass(frozen=True)
class UploadedImage:
    image_url: str
    image_id: str


def image_format(filename: str | None) -> str | None:
    suffix = PurePath(filename or "").suffix.lower().lstrip(".")
    if suffix == "jpeg":
        suffix = "jpg"
    return suffix if suffix in ALLOWED_FORMATS else None


class CloudinaryClient:
    """Async facade over cloudinary.uploader.upload (blocking, so run in the threadpool)."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str | None,
        api_secret: str | None,
        *,
        folder: str = "pet-images",
        transformation: list[dict] | None = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.transformation = transformation or DEFAULT_TRANSFORMATION

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryClient":
        return cls(
            settings.cloudinary_cloud_name,
            settings.cloudinary_api_key,
            settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.api_secret)

    async def upload(self, filename: str | None, content: bytes) -> UploadedImage:
        """Upload one image. Raises BadRequestError on bad input or upstream rejection."""
        if not self.configured:
            raise ServiceUnavailableError("Image upload not configured")
        if image_format(filename) is None:
            raise BadRequestError(f"Only {', '.join(ALLOWED_FORMATS)} images are accepted")
        if not content:
            raise BadRequestError("Empty image")

        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                filename=filename,
                folder=self.folder,
                allowed_formats=ALLOWED_FORMATS,
                transformation=self.transformation,
                resource_type="image",
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
            return UploadedImage(image_url=result["secure_url"], image_id=result["public_id"])
        except (cloudinary.exceptions.Error, KeyError) as e:
            logger.warning("Cloudinary upload failed: file=%s error=%s", filename, e)
            raise BadRequestError("Image upload failed") from None
