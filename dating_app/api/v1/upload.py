"""
Image upload endpoint - relays images to the hosting service
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile

from dating_app.core.exceptions import ValidationError
from dating_app.schemas.upload import ImageUploadResponse
from dating_app.services.media_service import MediaRelay, get_media_relay

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/image", response_model=ImageUploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    relay: MediaRelay = Depends(get_media_relay)
):
    """
    Upload an image and get back its public URL

    Public on purpose: clients upload profile and swipe images before registering.
    Expects multipart/form-data with the file in the **image** field.
    """
    if image is None:
        raise ValidationError("No image file uploaded.")

    payload = await image.read()
    logger.info(
        f"Received file for upload: {image.filename} ({image.content_type}, {len(payload)} bytes)"
    )
    image_url = await relay.upload(payload, image.content_type, image.filename or "image")
    return ImageUploadResponse(message="Image uploaded successfully!", image_url=image_url)
