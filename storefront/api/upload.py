"""Image upload endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from storefront.api.auth import get_current_admin
from storefront.config import settings
from storefront.core.uploads import UploadStorage

router = APIRouter()


def get_upload_storage() -> UploadStorage:
    """Upload storage rooted at the configured directory."""
    return UploadStorage(
        settings.upload_dir,
        max_file_size=settings.max_file_size,
        allowed_types=settings.allowed_image_types,
    )


def _store_image(image: Optional[UploadFile], storage: UploadStorage) -> str:
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No image file provided")
    # ValidationError from the storage is rendered as a 400 by the app handlers.
    return storage.save_image("image", image.filename, image.content_type, image.file)


@router.post("/image")
def upload_image(
    image: Optional[UploadFile] = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
    current_admin=Depends(get_current_admin),
):
    """Upload a single image for use in settings, banners or products."""
    filename = _store_image(image, storage)
    return {
        "success": True,
        "message": "Image uploaded successfully",
        "data": {
            "filename": filename,
            "url": storage.public_url(filename),
        },
    }


@router.post("/quill-image")
def upload_quill_image(
    image: Optional[UploadFile] = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
    current_admin=Depends(get_current_admin),
):
    """Upload an image embedded by the rich text editor; returns an absolute URL."""
    filename = _store_image(image, storage)
    return {
        "success": True,
        "url": f"{settings.public_base_url.rstrip('/')}{storage.public_url(filename)}",
    }
