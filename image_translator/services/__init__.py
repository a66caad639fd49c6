"""
/**
 * @file image_translator/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .alimt_client_service import AlimtClient
from .translation_service import translate_image
from .upload_service import IncomingFile, save_uploads

__all__ = [
    "AlimtClient",
    "IncomingFile",
    "save_uploads",
    "translate_image",
]
