"""
/**
 * @file image_translator/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .translate_request_model import TranslateRequest, TranslateResponse
from .upload_model import ErrorResponse, UploadedFile, UploadResponse

__all__ = ["ErrorResponse", "TranslateRequest", "TranslateResponse", "UploadedFile", "UploadResponse"]
