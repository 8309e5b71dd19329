import logging
import os
import random
import shutil
import time
from typing import Optional
from fastapi import UploadFile

from src.config import settings
from src.utils.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

def unique_filename(original_name: Optional[str]) -> str:
    """`<epoch millis>-<random suffix><ext>`, keeps concurrent uploads from colliding"""
    _, ext = os.path.splitext(original_name or "")
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"

def file_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size

def validate_permission_letter(upload: Optional[UploadFile]) -> UploadFile:
    if upload is None or not upload.filename:
        raise InvalidArgumentError("No file uploaded")
    if upload.content_type != PDF_CONTENT_TYPE:
        raise InvalidArgumentError("Only PDF files are allowed")
    if file_size(upload) > settings.max_upload_bytes:
        raise InvalidArgumentError(f"File too large, the limit is {settings.max_upload_bytes} bytes")
    return upload

def store_permission_letter(upload: UploadFile, upload_dir: Optional[str] = None) -> str:
    """
    Writes a validated permission letter to the upload directory.

    Returns the public path the file is served under.
    """
    upload_dir = upload_dir or settings.upload_dir
    os.makedirs(upload_dir, exist_ok=True)

    filename = unique_filename(upload.filename)
    upload.file.seek(0)
    with open(os.path.join(upload_dir, filename), "wb") as destination:
        shutil.copyfileobj(upload.file, destination)

    logger.info("Stored permission letter %s (%s)", filename, upload.filename)
    return f"{settings.uploads_url_prefix}/{filename}"
