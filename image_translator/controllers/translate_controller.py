"""
/**
 * @file image_translator/controllers/translate_controller.py
 * @description 图片翻译控制器。
 */
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from image_translator.controllers.deps import error_message, error_response, get_translator
from image_translator.models import TranslateRequest, TranslateResponse
from image_translator.services import AlimtClient, translate_image


logger = logging.getLogger("translate_controller")

router = APIRouter()


@router.post("/api/translate", response_model=TranslateResponse)
def translate(req: TranslateRequest, translator: AlimtClient = Depends(get_translator)):
    try:
        result = translate_image(req, client=translator)
    except Exception as e:
        logger.exception("Translation failed")
        return error_response(500, error_message(e))
    return TranslateResponse(result=result)
