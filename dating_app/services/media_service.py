"""
Media upload relay - forwards images to Cloudinary and returns the public URL
"""
import io
import logging
from typing import Any, Dict, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi.concurrency import run_in_threadpool

from dating_app.core.config import Settings, settings
from dating_app.core.exceptions import UnsupportedType, UpstreamFailure, ValidationError

logger = logging.getLogger(__name__)


def configure_cloudinary(config: Settings) -> None:
    """Apply the Cloudinary credentials from settings to the SDK"""
    cloudinary.config(
        cloud_name=config.CLOUDINARY_CLOUD_NAME,
        api_key=config.CLOUDINARY_API_KEY,
        api_secret=config.CLOUDINARY_API_SECRET,
        secure=True,
    )


class MediaRelay:
    """Uploads image payloads to Cloudinary"""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings
        if self.config.cloudinary_configured:
            configure_cloudinary(self.config)

    def check_payload(self, payload: bytes, mime_type: Optional[str]) -> None:
        """
        Raises:
            UnsupportedType: If the mime type is not an image type
            ValidationError: If the payload is empty or over the size limit
        """
        if not mime_type or not mime_type.startswith("image/"):
            raise UnsupportedType()
        if not payload:
            raise ValidationError("No image file uploaded.")
        if len(payload) > self.config.UPLOAD_MAX_BYTES:
            raise ValidationError(
                f"Image exceeds the {self.config.UPLOAD_MAX_BYTES // (1024 * 1024)}MB size limit."
            )

    def _upload_sync(self, payload: bytes, filename: str) -> Dict[str, Any]:
        return cloudinary.uploader.upload(
            io.BytesIO(payload),
            filename=filename,
            folder=self.config.CLOUDINARY_FOLDER,
            resource_type="auto",
            timeout=self.config.MEDIA_UPLOAD_TIMEOUT_SECONDS,
        )

    async def upload(self, payload: bytes, mime_type: Optional[str], filename: str = "image") -> str:
        """
        Upload an image and return its public HTTPS URL.

        The SDK call is blocking, so it runs in the threadpool.

        Raises:
            UnsupportedType: If the mime type is not an image type
            ValidationError: If the payload is empty or too large
            UpstreamFailure: If Cloudinary is not configured or the upload fails
        """
        self.check_payload(payload, mime_type)

        if not self.config.cloudinary_configured:
            logger.error("Cloudinary credentials are not configured")
            raise UpstreamFailure("Image hosting is not configured.")

        try:
            result = await run_in_threadpool(self._upload_sync, payload, filename)
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise UpstreamFailure(f"Cloudinary upload failed: {e}")

        secure_url = result.get("secure_url") if isinstance(result, dict) else None
        if not secure_url:
            logger.error("Cloudinary upload response was incomplete")
            raise UpstreamFailure("Cloudinary upload failed: Missing secure_url in response.")

        logger.info(f"Uploaded image {filename} ({len(payload)} bytes)")
        return secure_url


media_relay = MediaRelay()


def get_media_relay() -> MediaRelay:
    """Dependency returning the shared relay (overridable in tests)"""
    return media_relay
