# canteen/utils/images.py
import logging
import os
import uuid
from typing import Optional

from fastapi import UploadFile

from canteen.core.constants import ALLOWED_IMAGE_EXTS, IMAGE_URL_PREFIX, UPLOAD_DIR
from canteen.core.errors import ValidationError

log = logging.getLogger(__name__)


def _ensure_upload_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


async def save_uploaded_photo(photo: UploadFile, upload_dir: Optional[str] = None) -> str:
    """
    Saves a menu photo to the local upload directory and returns the URL
    it will be served under.
    """
    upload_dir = upload_dir or UPLOAD_DIR
    ext = os.path.splitext(photo.filename or "")[1].lower()
    if ext not in ALLOWED_IMAGE_EXTS:
        raise ValidationError("Invalid image type. Allowed: jpg, jpeg, png, webp")

    _ensure_upload_dir(upload_dir)
    filename = f"{uuid.uuid4().hex}{ext}"

    # Write bytes
    content = await photo.read()
    with open(os.path.join(upload_dir, filename), "wb") as f:
        f.write(content)

    log.info("saved menu photo %s (%s bytes)", filename, len(content))
    return f"{IMAGE_URL_PREFIX}{filename}"


def delete_image(image_url: Optional[str], upload_dir: Optional[str] = None) -> bool:
    """
    Removes an uploaded photo. URLs that were not produced by
    save_uploaded_photo (seeded assets, external links) are left alone.
    """
    if not image_url or not image_url.startswith(IMAGE_URL_PREFIX):
        return False

    filename = image_url[len(IMAGE_URL_PREFIX):]
    if not filename or os.path.basename(filename) != filename or filename in (".", ".."):
        log.warning("refusing to delete suspicious image path: %s", image_url)
        return False

    path = os.path.join(upload_dir or UPLOAD_DIR, filename)
    try:
        os.remove(path)
    except FileNotFoundError:
        return False

    log.info("deleted orphaned menu photo %s", filename)
    return True
