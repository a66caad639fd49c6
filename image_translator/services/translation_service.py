"""
/**
 * @file image_translator/services/translation_service.py
 * @description 图片翻译服务：读取上传文件，Base64 编码后转发至阿里云机器翻译。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from image_translator.models import TranslateRequest
from image_translator.services.alimt_client_service import AlimtClient
from image_translator.utils import file_to_base64


logger = logging.getLogger("translation_service")


def translate_image(req: TranslateRequest, client: Optional[AlimtClient] = None) -> Dict[str, Any]:
    h = client or AlimtClient()
    logger.info(
        f"Start translating image: {req.image_path}, source: {req.source_language}, target: {req.target_language}"
    )
    # 先读文件，文件不存在时不会访问外部服务
    image_base64 = file_to_base64(req.image_path)
    logger.info("Image converted to Base64")
    result = h.translate_image(
        image_base64,
        source_language=req.source_language,
        target_language=req.target_language,
    )
    logger.info("Translation finished")
    return result
