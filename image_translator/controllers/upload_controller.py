"""
/**
 * @file image_translator/controllers/upload_controller.py
 * @description 图片上传控制器。
 */
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from image_translator.config import Settings
from image_translator.controllers.deps import error_message, error_response, get_namer, get_settings
from image_translator.models import UploadResponse
from image_translator.services import IncomingFile, save_uploads
from image_translator.utils import TimestampNamer


logger = logging.getLogger("upload_controller")

router = APIRouter()


@router.post("/api/upload", response_model=UploadResponse)
def upload(
    images: Optional[List[UploadFile]] = File(None),
    settings: Settings = Depends(get_settings),
    namer: TimestampNamer = Depends(get_namer),
):
    incoming = [IncomingFile(original_name=f.filename or "", stream=f.file) for f in images or []]
    try:
        stored = save_uploads(incoming, settings.upload_dir, namer=namer)
    except Exception as e:
        logger.exception("Upload failed")
        return error_response(500, error_message(e))
    return UploadResponse(files=stored)
