"""
Image upload endpoint - hands the file to the media host and returns its URL.
The URL is then sent as imageUrl when creating a pet post.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from petspotter.core.dependencies import AppSettings, CurrentUser
from petspotter.media.cloudinary_client import CloudinaryClient
from petspotter.schemas.pet_post import ImageUploadResponse

router = APIRouter()


def get_media_host(settings: AppSettings) -> CloudinaryClient:
    return CloudinaryClient.from_settings(settings)


MediaHost = Annotated[CloudinaryClient, Depends(get_media_host)]


@router.post("", response_model=ImageUploadResponse)
async def upload_image(user: CurrentUser, media_host: MediaHost, image: UploadFile = File(...)):
    content = await image.read()
    uploaded = await media_host.upload(image.filename, content)
    return ImageUploadResponse(imageUrl=uploaded.image_url, imageId=uploaded.image_id)
